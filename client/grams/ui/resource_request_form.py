from dataclasses import replace
from typing import Awaitable, Callable, List, Optional

from grams.resource_requests.application.ports import Notifier, ResourceRequestGateway
from grams.resource_requests.application.use_cases import CreateResourceRequestUseCase
from grams.resource_requests.domain.models import ResourceDraft, ResourceRequestDraft
from grams.ui.state import ViewModel, ViewState


class ResourceRequestFormView(ViewModel):
    """Create-request form.

    Backs both the per-task modal (grievance fixed up front) and the
    standalone form (grievance picked from a list); the two share one
    validator and one payload builder through the use case.
    """

    def __init__(
        self,
        gateway: ResourceRequestGateway,
        notifier: Notifier,
        grievance_id: Optional[str] = None,
        on_success: Optional[Callable[[], Awaitable[object]]] = None,
    ) -> None:
        super().__init__(notifier)
        self._create = CreateResourceRequestUseCase(gateway)
        self._fixed_grievance = grievance_id
        self._on_success = on_success
        self.reset()

    def reset(self) -> None:
        self.grievance_id = self._fixed_grievance
        self.fund_required: object = ""
        self.resources: List[ResourceDraft] = []
        self.description = ""
        self.priority = "medium"

    def add_resource(self) -> None:
        self.resources.append(ResourceDraft())

    def remove_resource(self, index: int) -> None:
        del self.resources[index]

    def update_resource(self, index: int, field: str, value: str) -> None:
        if field not in ("name", "reason"):
            raise ValueError(f"Unknown resource field: {field}")
        self.resources[index] = replace(self.resources[index], **{field: value})

    def draft(self) -> ResourceRequestDraft:
        return ResourceRequestDraft(
            grievance_id=self.grievance_id,
            fund_required=self.fund_required,
            resources=list(self.resources),
            description=self.description,
            priority=self.priority,
        )

    async def submit(self) -> ViewState:
        draft = self.draft()
        state = await self.run(
            "submit",
            lambda: self._create.execute(draft),
            success_message="Resource request submitted successfully!",
        )
        if state.ok:
            self.reset()
            if self._on_success is not None:
                await self._on_success()
        return state
