"""
GRAMS client core - composition root
Builds settings, auth context, HTTP connection, gateways and views once
"""
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

from dotenv import load_dotenv

from api import ApiConnector, ApiSettings, AuthContext, create_http_session
from grams.resource_requests.application.ports import Notifier
from grams.resource_requests.infrastructure.rest_gateway import RestResourceRequestGateway
from grams.tasks.infrastructure.rest_gateway import RestTaskGateway
from grams.ui.my_requests import MyRequestsView
from grams.ui.notifications import LoggingNotifier
from grams.ui.resource_approval import ResourceApprovalView
from grams.ui.resource_request_form import ResourceRequestFormView
from grams.ui.task_completion import TaskCompletionView

# Load environment variables
ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / ".env")

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class GramsClient:
    def __init__(
        self,
        settings: Optional[ApiSettings] = None,
        token: Optional[str] = None,
        session: Any = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self.settings = settings or ApiSettings()
        self.auth = AuthContext(token)
        self.notifier = notifier or LoggingNotifier()
        self.connector = ApiConnector(
            session if session is not None else create_http_session(),
            self.auth,
            self.settings,
        )
        self.resource_requests = RestResourceRequestGateway(self.connector)
        self.tasks = RestTaskGateway(self.connector)
        logger.info(f"🚀 GRAMS client ready for {self.settings.base_url}")

    def resource_approval_view(self) -> ResourceApprovalView:
        return ResourceApprovalView(self.resource_requests, self.notifier)

    def my_requests_view(self, poll: bool = False) -> MyRequestsView:
        interval = self.settings.refresh_interval if poll else None
        return MyRequestsView(self.resource_requests, self.notifier, refresh_interval=interval)

    def resource_request_form(
        self,
        grievance_id: Optional[str] = None,
        on_success: Optional[Callable[[], Awaitable[object]]] = None,
    ) -> ResourceRequestFormView:
        return ResourceRequestFormView(
            self.resource_requests, self.notifier, grievance_id=grievance_id, on_success=on_success
        )

    def task_completion_view(
        self, on_complete: Optional[Callable[[], Awaitable[object]]] = None
    ) -> TaskCompletionView:
        return TaskCompletionView(
            self.tasks,
            self.notifier,
            max_upload_bytes=self.settings.max_upload_bytes,
            on_complete=on_complete,
        )

    def close(self) -> None:
        logger.info("🛑 Shutting down...")
        self.connector.close()

    def __enter__(self) -> "GramsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_client(token: Optional[str] = None, **kwargs) -> GramsClient:
    settings = kwargs.pop("settings", None) or ApiSettings()
    configure_logging(settings.log_level)
    return GramsClient(settings=settings, token=token, **kwargs)
