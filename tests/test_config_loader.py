"""Tests for YAML configuration and seed loading."""

import pytest
import yaml

from labclient.config.loader import (
    get_simulation_settings,
    get_transport_settings,
    load_config,
    load_seed_config,
    validate_seed,
)


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_load_config_and_transport_defaults(tmp_path):
    path = _write(
        tmp_path,
        "labclient.config.yaml",
        {"transport": {"base_url": "https://lab.test/api/v4", "retry": {"max_attempts": 2}}},
    )
    settings = get_transport_settings(load_config(path))

    assert settings["base_url"] == "https://lab.test/api/v4"
    assert settings["retry"] == {"max_attempts": 2, "delay_seconds": 1.0}
    assert settings["keyset_pagination"] is True
    assert settings["timeout_seconds"] == 20


def test_transport_defaults_are_not_shared():
    first = get_transport_settings({"transport": {"retry": {"max_attempts": 5}}})
    second = get_transport_settings()
    assert first["retry"]["max_attempts"] == 5
    assert second["retry"]["max_attempts"] == 10


def test_invalid_retry_settings():
    with pytest.raises(ValueError):
        get_transport_settings({"transport": {"retry": {"max_attempts": 0}}})
    with pytest.raises(ValueError):
        get_transport_settings({"transport": {"retry": {"delay_seconds": -1}}})


def test_section_must_be_mapping(tmp_path):
    path = _write(tmp_path, "bad.yaml", {"transport": ["not", "a", "dict"]})
    with pytest.raises(ValueError):
        load_config(path)


def test_simulation_settings():
    assert get_simulation_settings()["touch_project_on_mutation"] is False
    assert get_simulation_settings({"simulation": {"touch_project_on_mutation": True}})["touch_project_on_mutation"] is True


def test_seed_requires_version():
    with pytest.raises(ValueError):
        validate_seed({"users": []})


def test_seed_rejects_unknown_references():
    with pytest.raises(ValueError, match="unknown owner"):
        validate_seed({"version": 1, "users": [], "projects": [{"name": "p", "owner": "ghost"}]})
    with pytest.raises(ValueError, match="unknown pipeline user"):
        validate_seed(
            {
                "version": 1,
                "users": [{"username": "a"}],
                "projects": [{"name": "p", "pipelines": [{"ref": "main", "user": "ghost"}]}],
            }
        )


def test_seed_rejects_unknown_enum_values():
    with pytest.raises(ValueError, match="VisibilityLevel"):
        validate_seed({"version": 1, "projects": [{"name": "p", "visibility": "secret"}]})


def test_load_seed_config(tmp_path):
    path = _write(
        tmp_path,
        "seed.yaml",
        {"version": 1, "users": [{"username": "a"}], "projects": [{"name": "p", "owner": "a"}]},
    )
    seed = load_seed_config(path)
    assert seed["projects"][0]["name"] == "p"
