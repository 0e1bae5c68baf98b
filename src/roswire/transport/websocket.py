"""WebSocket transport, using the threaded client from :mod:`websockets`.

One daemon thread is started per socket. It performs the opening
handshake, then receives frames until the socket closes, invoking the
owner's callbacks along the way. Sends happen on the caller's thread;
the websockets connection serializes concurrent writers internally.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, InvalidURI, WebSocketException
from websockets.sync.client import ClientConnection, connect

from .. import config
from .base import Transport, TransportConnectionError

logger = logging.getLogger(__name__)


class WebSocketTransport(Transport):
    """Text-frame transport over a single WebSocket."""

    def __init__(self, url, on_open, on_message, on_close, on_error, open_timeout: Optional[float] = None):
        super().__init__(url, on_open, on_message, on_close, on_error)

        if open_timeout is None:
            open_timeout = config.open_timeout

        self.open_timeout = open_timeout
        self.socket: Optional[ClientConnection] = None
        self.shutdown = False
        self._thread: Optional[threading.Thread] = None
        self._socket_lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self.socket is not None and not self.shutdown

    def open(self) -> None:
        if self._thread is not None:
            raise RuntimeError("a transport can only be opened once")

        self._thread = threading.Thread(target=self.run, name=f"roswire:{self.url}", daemon=True)
        self._thread.start()

    def close(self) -> None:
        self.shutdown = True

        with self._socket_lock:
            socket = self.socket

        if socket is not None:
            socket.close()

    def send(self, frame: str) -> None:
        socket = self.socket

        if socket is None:
            raise TransportConnectionError("websocket is not open", url=self.url)

        try:
            socket.send(frame)
        except ConnectionClosed as e:
            # The reader thread sees the same closure and reports it.
            raise TransportConnectionError(f"websocket closed during send: {e}", url=self.url) from e

    def run(self) -> None:
        try:
            with connect(self.url, open_timeout=self.open_timeout) as socket:
                self._receive(socket)
        except (InvalidURI, WebSocketException, OSError, TimeoutError) as e:
            if not self.shutdown:
                error = TransportConnectionError(f"cannot connect to {self.url}: {e}", url=self.url)
                error.__cause__ = e
                self.on_error(error)
        finally:
            self.socket = None
            self.shutdown = True
            self.on_close()

    def _receive(self, socket: ClientConnection) -> None:
        with self._socket_lock:
            self.socket = socket
            abandoned = self.shutdown

        if abandoned:
            # close() was called while the handshake was still in flight;
            # leaving the with block closes the socket.
            return

        self.on_open()

        try:
            for frame in socket:
                self.on_message(frame)
        except ConnectionClosedOK:
            pass
        except ConnectionClosed as e:
            if not self.shutdown:
                error = TransportConnectionError(f"connection to {self.url} lost: {e}", url=self.url)
                error.__cause__ = e
                self.on_error(error)
