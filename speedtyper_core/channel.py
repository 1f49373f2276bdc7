"""Real-time channel to the relay server.

The session only needs two capabilities from a channel: send an outbound event
and register a handler for an inbound one. Anything with that shape works;
SocketIOChannel is the production adapter over a python-socketio client.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Protocol

import socketio

from .events import InboundEvent, OutboundEvent
from .types import ScorePayload

logger = logging.getLogger(__name__)

InboundHandler = Callable[[Optional[Dict[str, Any]]], None]


class Channel(Protocol):
    def open(self) -> bool:
        ...

    def send(self, event: OutboundEvent, payload: ScorePayload) -> None:
        ...

    def on_event(self, event: InboundEvent, handler: InboundHandler) -> None:
        ...

    def close(self) -> None:
        ...


class SocketIOChannel:
    """Channel backed by a ``socketio.Client``.

    Failure to connect is logged and otherwise silent: the session just never
    receives events. Sending while disconnected is dropped the same way.
    """

    def __init__(
        self,
        url: str,
        namespace: str = "/",
        client: socketio.Client | None = None,
    ) -> None:
        self.url = url
        self.namespace = namespace
        self.client = client if client is not None else socketio.Client()
        self.client.on("connect", self._handle_connect, namespace=namespace)
        self.client.on("disconnect", self._handle_disconnect, namespace=namespace)

    def _handle_connect(self) -> None:
        logger.info("Connected!")

    def _handle_disconnect(self, *args: Any) -> None:
        logger.info(f"Disconnected from {self.url}")

    def open(self) -> bool:
        try:
            self.client.connect(self.url, namespaces=[self.namespace])
        except socketio.exceptions.ConnectionError as exc:
            logger.warning(f"Could not connect to {self.url}: {exc}")
            return False
        return True

    def send(self, event: OutboundEvent, payload: ScorePayload) -> None:
        try:
            self.client.emit(event.value, payload, namespace=self.namespace)
        except socketio.exceptions.BadNamespaceError as exc:
            logger.warning(f"Dropping outbound {event.value} {payload}: {exc}")

    def on_event(self, event: InboundEvent, handler: InboundHandler) -> None:
        # Events without data arrive as a call with no arguments
        def _handler(data: Optional[Dict[str, Any]] = None) -> None:
            handler(data)

        self.client.on(event.value, _handler, namespace=self.namespace)

    def close(self) -> None:
        if self.client.connected:
            self.client.disconnect()
