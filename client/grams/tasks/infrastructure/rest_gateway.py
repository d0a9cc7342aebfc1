from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from api.connection import ApiConnector
from api.endpoints import build_url
from grams.resource_requests.domain.errors import GatewayError
from grams.tasks.application.ports import TaskGateway
from grams.tasks.domain.models import TaskSummary, UploadFile

GROUP = "engineers"


class BudgetSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    allocated: Optional[float] = None


class TaskSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str = ""
    tracking_id: Optional[str] = Field(None, alias="trackingId")
    status: Optional[str] = None
    budget: Optional[BudgetSchema] = None


class RestTaskGateway(TaskGateway):
    def __init__(self, connector: ApiConnector) -> None:
        self._connector = connector

    def _url(self, name: str, **params: str) -> str:
        return build_url(self._connector.base_url, GROUP, name, **params)

    async def get_task(self, grievance_id: str) -> TaskSummary:
        response = await self._connector.call(
            "GET", self._url("grievance", id=grievance_id),
            fallback="Failed to fetch grievance details",
        )
        try:
            task = TaskSchema.model_validate(response.get("data"))
        except ValidationError as e:
            raise GatewayError(f"Unexpected grievance payload: {e.error_count()} errors") from e
        allocated = task.budget.allocated if task.budget else None
        return TaskSummary(
            grievance_id=task.id,
            title=task.title,
            allocated_budget=allocated or 0.0,
            tracking_id=task.tracking_id,
            status=task.status,
        )

    async def upload_file(self, upload: UploadFile) -> str:
        response = await self._connector.call(
            "POST", self._url("upload"),
            files={"file": (upload.filename, upload.content, upload.content_type)},
            fallback="Upload failed",
        )
        url = response.get("url")
        if not isinstance(url, str) or not url:
            raise GatewayError(response.get("message") or "Upload failed")
        return url

    async def complete_task(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._connector.call(
            "POST", self._url("complete_task"), body=payload,
            fallback="Failed to complete task",
        )
        return response.get("data") or {}
