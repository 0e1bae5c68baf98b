"""Transport layer implementations."""

from .base import (
    Transport,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    ProtocolError,
)
from .websocket import WebSocketTransport
