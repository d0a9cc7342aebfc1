"""
View state machine shared by every screen.

Each control that triggers backend work owns a slot that moves
``idle -> loading -> success | error``. While a slot is loading, the same
action is refused, which is how a double click turns into a single request.
After ``dispose()`` late completions are dropped on the floor instead of
touching a view nobody is looking at.
"""
import enum
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from grams.resource_requests.application.ports import Notifier
from grams.resource_requests.domain.errors import DomainError

logger = logging.getLogger(__name__)


class ViewStatus(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ViewState:
    status: ViewStatus = ViewStatus.IDLE
    data: Any = None
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status is ViewStatus.LOADING

    @property
    def ok(self) -> bool:
        return self.status is ViewStatus.SUCCESS


IDLE = ViewState()

UNEXPECTED_ERROR = "Something went wrong. Please try again."


class ViewModel:
    def __init__(self, notifier: Notifier) -> None:
        self._notifier = notifier
        self._slots: Dict[str, ViewState] = {}
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def state(self, action: str) -> ViewState:
        return self._slots.get(action, IDLE)

    def is_busy(self, action: str) -> bool:
        return self.state(action).is_loading

    def dispose(self) -> None:
        self._disposed = True

    def fail(self, action: str, message: str) -> ViewState:
        """Record a local failure that never reached the backend."""
        state = ViewState(ViewStatus.ERROR, error=message)
        self._slots[action] = state
        self._notifier.error(message)
        return state

    async def run(
        self,
        action: str,
        operation: Callable[[], Awaitable[Any]],
        success_message: Optional[str] = None,
    ) -> ViewState:
        if self._disposed:
            return self.state(action)
        if self.is_busy(action):
            logger.debug("Ignoring %s while a previous one is in flight", action)
            return self.state(action)

        self._slots[action] = ViewState(ViewStatus.LOADING)
        try:
            result = await operation()
        except DomainError as e:
            if self._disposed:
                logger.debug("Dropping %s failure for a disposed view", action)
                return self.state(action)
            return self.fail(action, e.message)
        except Exception as e:
            logger.error(f"Unexpected failure in {action}: {e!r}")
            # Never leave the slot loading.
            if self._disposed:
                self._slots.pop(action, None)
            else:
                self.fail(action, UNEXPECTED_ERROR)
            raise

        if self._disposed:
            logger.debug("Dropping %s result for a disposed view", action)
            return self.state(action)
        state = ViewState(ViewStatus.SUCCESS, data=result)
        self._slots[action] = state
        if success_message:
            self._notifier.success(success_message)
        return state
