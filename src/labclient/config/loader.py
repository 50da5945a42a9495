from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List

import yaml

from ..models import AccessLevel, PipelineStatus, VisibilityLevel

DEFAULT_CONFIG_PATH = Path("labclient.config.yaml")
DEFAULT_SEED_PATH = Path("config/seed.yaml")

TRANSPORT_DEFAULTS: Dict[str, Any] = {
    "base_url": None,
    "token": None,
    "timeout_seconds": 20,
    "user_agent": "labclient/0.3",
    "per_page": 100,
    "keyset_pagination": True,
    "retry": {
        "max_attempts": 10,
        "delay_seconds": 1.0,
    },
}

SIMULATION_DEFAULTS: Dict[str, Any] = {
    "touch_project_on_mutation": False,
    "web_url": "https://lab.example.com",
}


def _read_yaml(cfg_path: Path, label: str) -> Any:
    if not cfg_path.exists():
        raise FileNotFoundError(f"{label} file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load client configuration from YAML file.

    Args:
        path: Optional path to the config file. Defaults to labclient.config.yaml

    Returns:
        Dictionary with "transport" and "simulation" sections (either may be absent)

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config structure is invalid
    """
    config = _read_yaml(path or DEFAULT_CONFIG_PATH, "Config") or {}
    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")
    for section in ("transport", "simulation"):
        if section in config and not isinstance(config[section], dict):
            raise ValueError(f"Config '{section}' must be a dictionary if provided")
    return config


def get_transport_settings(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """
    Transport settings with defaults applied.

    Defaults:
    - timeout_seconds: 20
    - per_page: 100
    - keyset_pagination: True
    - retry: 10 attempts, 1 second apart
    """
    user = (config or {}).get("transport") or {}
    settings = deepcopy(TRANSPORT_DEFAULTS)
    settings.update({k: v for k, v in user.items() if k != "retry"})
    settings["retry"].update(user.get("retry") or {})

    if int(settings["retry"]["max_attempts"]) < 1:
        raise ValueError("transport.retry.max_attempts must be at least 1")
    if float(settings["retry"]["delay_seconds"]) < 0:
        raise ValueError("transport.retry.delay_seconds must not be negative")
    return settings


def get_simulation_settings(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Simulation settings with defaults applied."""
    user = (config or {}).get("simulation") or {}
    return {**SIMULATION_DEFAULTS, **user}


def _require_list(container: Dict[str, Any], key: str, where: str) -> List[Any]:
    value = container.get(key) or []
    if not isinstance(value, list):
        raise ValueError(f"{where} '{key}' must be a list")
    return value


def _require_fields(entry: Any, fields: List[str], where: str) -> None:
    if not isinstance(entry, dict):
        raise ValueError(f"Entry in {where} must be a dictionary")
    for field in fields:
        if field not in entry:
            raise ValueError(f"Entry in {where} missing required field: {field}")


def _check_enum(value: Any, enum_type, where: str) -> None:
    names = {m.name.lower() for m in enum_type} | {str(getattr(m, "value", "")).lower() for m in enum_type}
    if str(value).lower() not in names:
        raise ValueError(f"{where}: unknown {enum_type.__name__} '{value}'")


def validate_seed(config: Any) -> Dict[str, Any]:
    """
    Check seed structure; returns the config with list sections normalized.

    Raises:
        ValueError: If the seed structure is invalid
    """
    if not isinstance(config, dict):
        raise ValueError("Seed config must be a dictionary")
    if "version" not in config:
        raise ValueError("Seed config must have 'version' field")

    users = _require_list(config, "users", "Seed config")
    for user in users:
        _require_fields(user, ["username"], "users")
    known_users = {u["username"] for u in users}

    projects = _require_list(config, "projects", "Seed config")
    for project in projects:
        _require_fields(project, ["name"], "projects")
        where = f"project '{project['name']}'"
        if "visibility" in project:
            _check_enum(project["visibility"], VisibilityLevel, where)
        owner = project.get("owner")
        if owner is not None and owner not in known_users:
            raise ValueError(f"{where}: unknown owner '{owner}'")
        for member in _require_list(project, "members", where):
            _require_fields(member, ["username", "access_level"], f"{where} members")
            if member["username"] not in known_users:
                raise ValueError(f"{where}: unknown member '{member['username']}'")
            _check_enum(member["access_level"], AccessLevel, where)
        for pipeline in _require_list(project, "pipelines", where):
            _require_fields(pipeline, ["ref", "user"], f"{where} pipelines")
            if pipeline["user"] not in known_users:
                raise ValueError(f"{where}: unknown pipeline user '{pipeline['user']}'")
            if "status" in pipeline:
                _check_enum(pipeline["status"], PipelineStatus, where)
            for job in _require_list(pipeline, "jobs", f"{where} pipeline"):
                _require_fields(job, ["name"], f"{where} jobs")
        for variable in _require_list(project, "variables", where):
            _require_fields(variable, ["key", "value"], f"{where} variables")

    config["users"] = users
    config["projects"] = projects
    return config


def load_seed_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load a simulation seed (users, projects, pipelines...) from YAML file.

    Args:
        path: Optional path to seed file. Defaults to config/seed.yaml

    Raises:
        FileNotFoundError: If seed file doesn't exist
        ValueError: If seed structure is invalid
    """
    return validate_seed(_read_yaml(path or DEFAULT_SEED_PATH, "Seed config"))
