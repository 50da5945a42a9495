"""Tests for the HTTP pipeline client URL construction."""

from datetime import datetime, timezone

import pytest

from labclient.impl.pipeline_client import PipelineClient, build_search_url
from labclient.models import PipelineOrderBy, PipelineQuery, PipelineSort, PipelineStatus


class RecordingTransport:
    def __init__(self, settings=None, pages=None, payload=None):
        self.settings = {"keyset_pagination": True, "per_page": 100, **(settings or {})}
        self.pages = pages or []
        self.payload = payload
        self.urls = []

    def get(self, url):
        self.urls.append(("GET", url))
        return self.payload

    def post(self, url, payload=None):
        self.urls.append(("POST", url))
        return self.payload

    def delete(self, url):
        self.urls.append(("DELETE", url))

    def get_all(self, url):
        self.urls.append(("GET", url))
        return iter(self.pages)


PIPELINE_JSON = {
    "id": 7,
    "project_id": 3,
    "status": "running",
    "ref": "main",
    "sha": "a" * 40,
    "created_at": "2025-01-01T00:00:00Z",
    "updated_at": "2025-01-01T00:01:00Z",
    "web_url": "https://lab.test/g/p/-/pipelines/7",
    "user": {"id": 1, "username": "alice", "name": "Alice"},
    "unknown_field": "ignored",
}


def test_search_url_encodes_set_fields_only():
    query = PipelineQuery(
        status=PipelineStatus.SUCCESS,
        ref="feature/x",
        yaml_errors=True,
        username="alice",
        order_by=PipelineOrderBy.UPDATED_AT,
        sort=PipelineSort.ASC,
    )
    assert build_search_url("projects/3/pipelines", query) == (
        "projects/3/pipelines?status=success&ref=feature%2Fx&yaml_errors=true"
        "&username=alice&order_by=updated_at&sort=asc"
    )


def test_empty_search_has_no_parameters():
    assert build_search_url("projects/3/pipelines", PipelineQuery()) == "projects/3/pipelines"


def test_search_url_encodes_dates():
    query = PipelineQuery(updated_after=datetime(2025, 1, 2, tzinfo=timezone.utc))
    assert build_search_url("p", query) == "p?updated_after=2025-01-02T00%3A00%3A00Z"


def test_all_uses_keyset_pagination():
    transport = RecordingTransport(pages=[PIPELINE_JSON])
    listed = PipelineClient(transport, 3).all

    assert [p.id for p in listed] == [7]
    assert transport.urls == [("GET", "projects/3/pipelines?order_by=id&pagination=keyset&per_page=100")]


def test_all_without_keyset_support():
    transport = RecordingTransport(settings={"keyset_pagination": False, "per_page": 20})
    PipelineClient(transport, 3).all
    assert transport.urls == [("GET", "projects/3/pipelines?per_page=20")]


def test_get_create_delete_and_jobs():
    transport = RecordingTransport(payload=PIPELINE_JSON)
    client = PipelineClient(transport, 3)

    pipeline = client[7]
    assert pipeline.status == PipelineStatus.RUNNING
    assert pipeline.user.username == "alice"
    client.create("release 1")
    client.delete(7)
    client.get_jobs(7, ["failed", "success"])

    assert transport.urls == [
        ("GET", "projects/3/pipelines/7"),
        ("POST", "projects/3/pipeline?ref=release+1"),
        ("DELETE", "projects/3/pipelines/7"),
        ("GET", "projects/3/pipelines/7/jobs?scope[]=failed&scope[]=success"),
    ]


@pytest.mark.parametrize("status", list(PipelineStatus))
def test_every_status_round_trips_through_wire_name(status):
    url = build_search_url("p", PipelineQuery(status=status))
    assert url == f"p?status={status.value}"
