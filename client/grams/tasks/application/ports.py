from typing import Any, Dict, Protocol

from grams.tasks.domain.models import TaskSummary, UploadFile


class TaskGateway(Protocol):
    async def get_task(self, grievance_id: str) -> TaskSummary:
        ...

    async def upload_file(self, upload: UploadFile) -> str:
        ...

    async def complete_task(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        ...
