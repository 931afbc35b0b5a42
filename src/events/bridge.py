"""
Event Bridge
Server-bound component events and the dispatch capability that sends them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from core import get_logger

logger = get_logger(__name__)

# Domain property keys that bind events instead of values
EVENT_KEYS = frozenset({"click", "change", "submit", "focus", "blur", "hover", "select"})


class ServerEvent(BaseModel):
    """Outbound component event"""

    model_config = ConfigDict(frozen=True)

    event_type: str
    component_type: str
    component_name: Optional[str] = None
    form_name: Optional[str] = None
    event_data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def key(self) -> Tuple[str, str, Optional[str], Optional[str]]:
        """Dispatch key (event, component type, component name, form)"""
        return (self.event_type, self.component_type, self.component_name, self.form_name)


class EventDispatcher(ABC):
    """
    Sends component events towards the application server.
    Transport implementations live outside the compiler.
    """

    @abstractmethod
    def dispatch(
        self,
        event_type: str,
        component_type: str,
        component_name: Optional[str] = None,
        form_name: Optional[str] = None,
        event_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one event; returns whatever the transport returns"""
        pass


class QueuedEventBridge(EventDispatcher):
    """
    In-memory dispatcher.
    Records every outbound event and hands it to an optional sink.
    """

    def __init__(self, sink: Optional[Callable[[ServerEvent], Any]] = None):
        self.sink = sink
        self.sent: List[ServerEvent] = []

    def dispatch(
        self,
        event_type: str,
        component_type: str,
        component_name: Optional[str] = None,
        form_name: Optional[str] = None,
        event_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        event = ServerEvent(
            event_type=event_type,
            component_type=component_type,
            component_name=component_name,
            form_name=form_name,
            event_data=event_data or {},
        )
        self.sent.append(event)
        logger.debug(
            "event_dispatched",
            event_type=event_type,
            component_type=component_type,
            component_name=component_name,
            form_name=form_name,
        )
        if self.sink is not None:
            return self.sink(event)
        return event

    def clear(self) -> None:
        self.sent.clear()


@dataclass(frozen=True)
class EventSubscription:
    """
    Callable bound to a component event.
    The renderer invokes it when the user triggers the event.
    """

    event_type: str
    component_type: str
    component_name: Optional[str]
    form_name: Optional[str]
    dispatcher: EventDispatcher

    def __call__(self, event_data: Optional[Dict[str, Any]] = None) -> Any:
        try:
            return self.dispatcher.dispatch(
                self.event_type,
                self.component_type,
                self.component_name,
                self.form_name,
                event_data,
            )
        except Exception as e:
            logger.error(
                "event_dispatch_failed",
                event_type=self.event_type,
                component_type=self.component_type,
                component_name=self.component_name,
                error=str(e),
                exc_info=True,
            )
            return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event": self.event_type,
            "component_type": self.component_type,
            "component_name": self.component_name,
            "form_name": self.form_name,
        }
