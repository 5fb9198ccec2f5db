from typing import Any

from care_relay.exceptions import MalformedEventError
from care_relay.logging import logger
from care_relay.relay.binder import SessionBinder
from care_relay.relay.router import MessageRouter, RouteResult
from care_relay.schemas.events import LoginEvent, parse_event
from care_relay.utils.metrics import MetricsCollector


class EventDispatcher:
    """
    Inbound boundary of the relay.

    Turns raw frames into typed events and hands each one to the component
    responsible for it. A frame that cannot be parsed is logged and
    discarded; it never affects the connection it came from or any other.
    """

    def __init__(self, binder: SessionBinder, router: MessageRouter) -> None:
        self.binder = binder
        self.router = router

    async def dispatch(
        self, connection_id: str, raw: str | bytes | dict[str, Any]
    ) -> RouteResult | None:
        """
        Handle one inbound frame.

        Args:
            connection_id: Connection the frame arrived on.
            raw: Frame text, bytes, or decoded JSON object.

        Returns:
            RouteResult for chat and profile-disclosure events, None for
            logins and discarded frames.
        """
        try:
            event = parse_event(raw)
        except MalformedEventError as ex:
            logger.warning(
                f"Discarding malformed event from {connection_id}: {ex.reason}"
            )
            MetricsCollector.record_malformed_event()
            return None

        if isinstance(event, LoginEvent):
            self.binder.on_login(
                connection_id, event.data.role, event.data.identity_id
            )
            return None

        return await self.router.route(event.data)
