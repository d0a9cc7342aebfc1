from typing import Awaitable, Callable, List, Optional

from grams.resource_requests.application.ports import Notifier
from grams.resource_requests.domain.errors import InvalidRequest
from grams.tasks.application.ports import TaskGateway
from grams.tasks.application.use_cases import (
    CompleteTaskCommand,
    CompleteTaskUseCase,
    LoadTaskUseCase,
    UploadEvidenceUseCase,
)
from grams.tasks.domain.expenses import BudgetLedger, ExpenseSheet
from grams.tasks.domain.models import TaskSummary, UploadFile
from grams.tasks.domain.validation import MAX_IMAGE_BYTES, validate_upload
from grams.ui.state import ViewModel, ViewState


class TaskCompletionView(ViewModel):
    """Engineer completion form: evidence uploads, expenses, submit."""

    def __init__(
        self,
        gateway: TaskGateway,
        notifier: Notifier,
        max_upload_bytes: int = MAX_IMAGE_BYTES,
        on_complete: Optional[Callable[[], Awaitable[object]]] = None,
    ) -> None:
        super().__init__(notifier)
        self._load = LoadTaskUseCase(gateway)
        self._upload = UploadEvidenceUseCase(gateway, max_upload_bytes)
        self._complete = CompleteTaskUseCase(gateway)
        self._max_upload_bytes = max_upload_bytes
        self._on_complete = on_complete

        self.task: Optional[TaskSummary] = None
        self.sheet = ExpenseSheet(0.0)
        self._open_form()

    def _open_form(self) -> None:
        self.completion_notes = ""
        self.days_to_complete: object = ""
        self.selected_image: Optional[UploadFile] = None
        self.completion_image_url = ""
        self.selected_bills: List[UploadFile] = []
        self.bill_image_urls: List[str] = []
        self.sheet.reset()

    @property
    def ledger(self) -> BudgetLedger:
        return self.sheet.ledger

    async def open(self, grievance_id: str) -> ViewState:
        state = await self.run("load", lambda: self._load.execute(grievance_id))
        if state.ok:
            self.task = state.data
            self.sheet = ExpenseSheet(self.task.allocated_budget)
            self._open_form()
        return state

    def edit_expense(self, entry_id: int, field: str, value: object) -> bool:
        try:
            self.sheet.update(entry_id, field, value)
        except InvalidRequest as e:
            self.fail("expense", e.message)
            return False
        return True

    def add_expense(self) -> None:
        self.sheet.add()

    def remove_expense(self, entry_id: int) -> bool:
        try:
            self.sheet.remove(entry_id)
        except InvalidRequest as e:
            self.fail("expense", e.message)
            return False
        return True

    def select_image(self, upload: UploadFile) -> bool:
        try:
            validate_upload(upload, self._max_upload_bytes)
        except InvalidRequest as e:
            self.fail("image", e.message)
            return False
        self.selected_image = upload
        return True

    def select_bills(self, uploads: List[UploadFile]) -> int:
        accepted = []
        for upload in uploads:
            try:
                validate_upload(upload, self._max_upload_bytes)
            except InvalidRequest:
                continue
            accepted.append(upload)
        skipped = len(uploads) - len(accepted)
        if skipped:
            self.fail("bills", f"{skipped} file(s) skipped (invalid or too large)")
        self.selected_bills.extend(accepted)
        return len(accepted)

    async def upload_image(self) -> ViewState:
        if self.selected_image is None:
            return self.fail("upload_image", "Please select an image first")
        image = self.selected_image
        state = await self.run(
            "upload_image",
            lambda: self._upload.execute(image),
            success_message="Image uploaded successfully!",
        )
        if state.ok:
            self.completion_image_url = state.data
            self.selected_image = None
        return state

    async def upload_bills(self) -> ViewState:
        if not self.selected_bills:
            return self.fail("upload_bills", "Please select bill images first")
        bills = list(self.selected_bills)
        state = await self.run(
            "upload_bills",
            lambda: self._upload.execute_many(bills),
            success_message=f"All {len(bills)} bills uploaded successfully!",
        )
        if state.ok:
            self.bill_image_urls.extend(state.data)
            self.selected_bills = []
        return state

    async def submit(self) -> ViewState:
        if self.task is None:
            return self.fail("submit", "No task loaded")
        command = CompleteTaskCommand(
            grievance_id=self.task.grievance_id,
            completion_image_url=self.completion_image_url,
            days_to_complete=self.days_to_complete,
            completion_notes=self.completion_notes,
            bill_image_urls=list(self.bill_image_urls),
        )
        state = await self.run(
            "submit",
            lambda: self._complete.execute(command, self.sheet),
            success_message="Task completed successfully!",
        )
        if state.ok and self._on_complete is not None:
            await self._on_complete()
        return state
