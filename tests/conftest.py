"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for the connection registry, relay
components, fake transports and the FastAPI application.
"""

import time
from typing import Callable

import pytest

from tests.mocks.websocket_mocks import (
    RecordingTransport,
    create_mock_transport,
    create_mock_websocket,
)


@pytest.fixture
def registry():
    """
    Provides an empty ConnectionRegistry.

    Returns:
        ConnectionRegistry: Fresh registry instance
    """
    from care_relay.relay.registry import ConnectionRegistry

    return ConnectionRegistry()


@pytest.fixture
def mock_transport():
    """
    Provides a mock TransportGateway with an async `deliver`.

    Returns:
        MagicMock: Mocked transport
    """
    return create_mock_transport()


@pytest.fixture
def recording_transport():
    """
    Provides a transport that records every delivery.

    Returns:
        RecordingTransport: Transport with a `deliveries` list
    """
    return RecordingTransport()


@pytest.fixture
def relay(registry, mock_transport):
    """
    Provides a RelayService wired to the registry and mock transport.

    Args:
        registry: Fixture providing an empty registry
        mock_transport: Fixture providing a mock transport

    Returns:
        RelayService: Relay components sharing one registry
    """
    from care_relay.relay.service import RelayService

    return RelayService(transport=mock_transport, registry=registry)


@pytest.fixture
def mock_websocket():
    """
    Provides a mock WebSocket connection for testing.

    Returns:
        MagicMock: Mocked WebSocket instance
    """
    return create_mock_websocket()


@pytest.fixture
def relay_app():
    """
    Provides the FastAPI application with clean relay state.

    The relay singletons are process-wide, so bindings and sockets are
    cleared before and after each test.

    Yields:
        FastAPI: Application instance
    """
    from care_relay import application
    from care_relay.managers.websocket_connection_manager import (
        websocket_gateway,
    )
    from care_relay.relay.service import relay_service

    relay_service.registry.clear()
    websocket_gateway.connections.clear()

    yield application()

    relay_service.registry.clear()
    websocket_gateway.connections.clear()


@pytest.fixture
def wait_until() -> Callable[..., None]:
    """
    Provides a helper that polls a predicate until it holds.

    Socket frames are handled on the test client's event loop thread, so
    tests wait for their effects instead of assuming ordering.

    Returns:
        Callable: wait_until(predicate, timeout=2.0)
    """

    def _wait_until(predicate: Callable[[], bool], timeout: float = 2.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return
            time.sleep(0.01)
        raise AssertionError("Condition not met before timeout")

    return _wait_until


# Fixture Factories
def login_frame(role: str, identity_id: str) -> dict:
    """
    Factory function to create login frames.

    Args:
        role: "seeker" or "provider"
        identity_id: Asserted identity id

    Returns:
        dict: Inbound login frame
    """
    return {"event": "login", "data": {"role": role, "identityId": identity_id}}


def chat_frame(
    recipient_identity: str,
    recipient_role: str,
    text: str,
    sender_identity: str = "s1",
    sender_display_name: str = "Ana",
) -> dict:
    """
    Factory function to create chat-message frames.

    Returns:
        dict: Inbound chat-message frame
    """
    return {
        "event": "chat-message",
        "data": {
            "recipientIdentity": recipient_identity,
            "recipientRole": recipient_role,
            "text": text,
            "senderIdentity": sender_identity,
            "senderDisplayName": sender_display_name,
        },
    }


def profile_frame(
    recipient_identity: str,
    payload: dict,
    sender_identity: str = "p7",
    sender_display_name: str = "Nurse Bia",
) -> dict:
    """
    Factory function to create profile-disclosure frames.

    Returns:
        dict: Inbound profile-disclosure frame
    """
    return {
        "event": "profile-disclosure",
        "data": {
            "recipientIdentity": recipient_identity,
            "payload": payload,
            "senderIdentity": sender_identity,
            "senderDisplayName": sender_display_name,
        },
    }
