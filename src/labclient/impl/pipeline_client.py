"""HTTP pipeline client. Same surface as the simulated one, over the wire."""

from typing import List, Optional

from ..models import Job, Pipeline, PipelineBasic, PipelineQuery
from . import params
from .transport import HttpTransport


class PipelineClient:
    def __init__(self, transport: HttpTransport, project_id: int):
        self._transport = transport
        self._pipelines_path = f"projects/{project_id}/pipelines"
        self._project_path = f"projects/{project_id}"

    def get(self, pipeline_id: int) -> Pipeline:
        return Pipeline.model_validate(self._transport.get(f"{self._pipelines_path}/{pipeline_id}"))

    def __getitem__(self, pipeline_id: int) -> Pipeline:
        return self.get(pipeline_id)

    @property
    def all(self) -> List[PipelineBasic]:
        url = params.add_order_by(
            self._pipelines_path,
            support_keyset_pagination=self._transport.settings["keyset_pagination"],
        )
        url = params.add_page_params(url, per_page=self._transport.settings["per_page"])
        return [PipelineBasic.model_validate(item) for item in self._transport.get_all(url)]

    def create(self, ref: str) -> Pipeline:
        url = params.add_parameter(f"{self._project_path}/pipeline", "ref", ref)
        return Pipeline.model_validate(self._transport.post(url))

    def delete(self, pipeline_id: int) -> None:
        self._transport.delete(f"{self._pipelines_path}/{pipeline_id}")

    def get_jobs(self, pipeline_id: int, scopes: Optional[List[str]] = None) -> List[Job]:
        url = params.add_array_parameter(f"{self._pipelines_path}/{pipeline_id}/jobs", "scope", scopes)
        return [Job.model_validate(item) for item in self._transport.get_all(url)]

    def search(self, query: PipelineQuery) -> List[PipelineBasic]:
        url = build_search_url(self._pipelines_path, query)
        return [PipelineBasic.model_validate(item) for item in self._transport.get_all(url)]


def build_search_url(base_url: str, query: PipelineQuery) -> str:
    """Encode every set field of the query as a query-string parameter."""
    url = params.add_parameter(base_url, "scope", query.scope)
    url = params.add_parameter(url, "status", query.status)
    url = params.add_parameter(url, "ref", query.ref)
    url = params.add_parameter(url, "sha", query.sha)
    url = params.add_parameter(url, "yaml_errors", query.yaml_errors)
    url = params.add_parameter(url, "name", query.name)
    url = params.add_parameter(url, "username", query.username)
    url = params.add_parameter(url, "updated_after", query.updated_after)
    url = params.add_parameter(url, "updated_before", query.updated_before)
    url = params.add_parameter(url, "order_by", query.order_by)
    return params.add_parameter(url, "sort", query.sort)
