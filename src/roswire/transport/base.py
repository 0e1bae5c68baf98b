"""Transport interface.

This is the (small) contract that transport implementations should follow.
A transport moves text frames and reports what happens to the socket; it
knows nothing about envelopes, topics or services.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, Union


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for errors raised by a transport, and for frames it
    delivers that cannot be used."""


class TransportTimeout(TransportError):
    """A request did not receive a timely response."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class ProtocolError(TransportError, ValueError):
    """An inbound frame could not be decoded into an envelope."""


Frame = Union[str, bytes]


class Transport(ABC):
    """Minimal contract for a wire-level transport.

    The owner supplies four callbacks when the transport is created:

    - *on_open()* once the socket is ready for :meth:`send`
    - *on_message(frame)* for every inbound frame, in arrival order
    - *on_error(exception)* when the socket fails
    - *on_close()* exactly once, when the socket is gone for good

    All four are invoked from the same thread, which is the single
    inbound dispatch path for the connection.
    """

    def __init__(
        self,
        url: str,
        on_open: Callable[[], None],
        on_message: Callable[[Frame], None],
        on_close: Callable[[], None],
        on_error: Callable[[Exception], None],
    ):
        self.url = url
        self.on_open = on_open
        self.on_message = on_message
        self.on_close = on_close
        self.on_error = on_error

    @abstractmethod
    def open(self) -> None:
        """Begin establishing the connection; must not block the caller."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection/socket."""

    @abstractmethod
    def send(self, frame: str) -> None:
        """Send one text frame; only valid after *on_open* has fired."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False
