"""Workflow control operations on the Actions API."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import quote

from workflow_control.errors import ApiError
from workflow_control.models.repository import RepositoryCoordinate
from workflow_control.models.request import DispatchRequest
from workflow_control.models.result import (
    Disabled,
    Dispatched,
    Enabled,
    Listed,
    Status,
)
from workflow_control.models.workflow import Workflow, WorkflowsResponse
from workflow_control.transport import HttpTransport

log = logging.getLogger(__name__)

PAGE_SIZE = 100


@dataclass(frozen=True, kw_only=True)
class WorkflowOperations:
    """Stateless operations on the workflows of one repository.

    Workflows are referenced by file name (``codeql.yml``) or numeric id.
    """

    transport: HttpTransport
    repository: RepositoryCoordinate

    def workflow_path(self, workflow: str) -> str:
        """Return the API path of a workflow."""
        return (
            f"{self.repository.api_path}/actions/workflows/{quote(workflow, safe='')}"
        )

    async def dispatch(self, workflow: str, request: DispatchRequest) -> Dispatched:
        """Trigger a manual run of ``workflow``.

        Only 204 means the dispatch was accepted; any other status, even 2xx,
        is raised as ``ApiError``.
        """
        log.info(
            "Dispatching workflow: repository=%s, workflow=%s, ref=%s, inputs=%s",
            self.repository.full_name,
            workflow,
            request.ref,
            dict(request.inputs),
        )
        response = await self.transport.request(
            "POST",
            f"{self.workflow_path(workflow)}/dispatches",
            body={"ref": request.ref, "inputs": dict(request.inputs)},
        )
        if response.status != 204:
            raise ApiError(
                response.status,
                "Unexpected response to workflow dispatch, expected 204",
                response.text,
            )

        return Dispatched(workflow=workflow, ref=request.ref, inputs=request.inputs)

    async def enable(self, workflow: str) -> Enabled:
        """Enable ``workflow``. Enabling an active workflow is not an error."""
        log.info("Enabling workflow: %s", workflow)
        await self.transport.request("PUT", f"{self.workflow_path(workflow)}/enable")
        return Enabled(workflow=workflow)

    async def disable(self, workflow: str) -> Disabled:
        """Disable ``workflow``. Disabling twice is not an error."""
        log.info("Disabling workflow: %s", workflow)
        await self.transport.request("PUT", f"{self.workflow_path(workflow)}/disable")
        return Disabled(workflow=workflow)

    async def status(self, workflow: str) -> Status:
        """Fetch the metadata of ``workflow``."""
        log.info("Getting status for workflow: %s", workflow)
        response = await self.transport.request("GET", self.workflow_path(workflow))
        return Status(workflow=response.validate(Workflow))

    async def list(self) -> Listed:
        """List every workflow of the repository.

        Pages through the collection until a short page or ``total_count``
        is reached, keeping the API order.
        """
        log.info("Listing workflows of %s", self.repository.full_name)
        return Listed(workflows=await self.fetch_all_workflows())

    async def fetch_all_workflows(self) -> Sequence[Workflow]:
        """Collect workflows across every page of the collection."""
        url = f"{self.repository.api_path}/actions/workflows"
        workflows: list[Workflow] = []
        page = 1

        while True:
            params = {"per_page": str(PAGE_SIZE), "page": str(page)}
            response = await self.transport.request("GET", url, params=params)
            page_response = response.validate(WorkflowsResponse)
            workflows.extend(page_response.workflows)

            if (
                len(page_response.workflows) < PAGE_SIZE
                or len(workflows) >= page_response.total_count
            ):
                break

            page += 1

        return workflows
