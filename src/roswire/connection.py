""" The :class:`Ros` connection manager owns the WebSocket to rosbridge. It
    hands outbound calls to the socket (deferring them until the socket is
    open, if need be), and feeds every inbound frame through the envelope
    codec into the correlation router.
"""

import enum
import logging
import threading

from . import compression
from . import config
from .events import Events
from .protocol import codec
from .protocol.message import IdGenerator, ServiceRequest
from .router import Router
from .service import Service
from .transport.base import ProtocolError, TransportConnectionError
from .transport.websocket import WebSocketTransport

logger = logging.getLogger(__name__)


class State(enum.Enum):
    """ Connection state. Transitions are driven solely by socket events.
    """

    DISCONNECTED = 'disconnected'
    CONNECTING = 'connecting'
    OPEN = 'open'
    CLOSED = 'closed'


class Ros:
    """ A connection to a rosbridge server at *url*. If the *url* is given
        here the connection is started immediately; otherwise call
        :func:`connect` later.

        Topics, services, parameters and action clients are created against
        a :class:`Ros` instance, and share its router and its call
        identifier generator.

        Events, registered via :func:`on` or :func:`once`:

        * ``connection`` -- the socket is open
        * ``close`` -- the socket is gone
        * ``error`` -- with the exception describing a transport failure
          or an inbound frame that could not be decoded

        The *transport* argument is a factory with the same signature as
        :class:`roswire.transport.WebSocketTransport`; *decompress* is the
        collaborator used to unpack PNG compressed frames.

        :ivar ids: The :class:`roswire.protocol.message.IdGenerator`.
        :ivar router: The :class:`roswire.router.Router`.
        :ivar state: The current :class:`State`.
    """

    def __init__(self, url=None, transport=WebSocketTransport, decompress=compression.decompress):

        self.url = url
        self.transport_factory = transport
        self.decompress = decompress

        self.ids = IdGenerator()
        self.router = Router()
        self.events = Events('connection', 'close', 'error')
        self.state = State.DISCONNECTED
        self.socket = None

        # Guards the state together with the send-or-defer decision in
        # send(), so no call can slip between a state check and the
        # 'connection' event.
        self._lock = threading.RLock()

        if url:
            self.connect(url)


    def on(self, name, callback):
        self.events.on(name, callback)


    def once(self, name, callback):
        self.events.once(name, callback)


    def off(self, name, callback=None):
        self.events.off(name, callback)


    @property
    def is_connected(self):
        return self.state == State.OPEN


    def connect(self, url=None):
        """ Open a socket to *url*, replacing the current socket if there is
            one. This returns immediately; the ``connection`` event signals
            that the socket is open. If no *url* is given, the one from the
            constructor or :data:`roswire.config.url` is used.
        """

        if url is None:
            url = self.url or config.url

        if not url:
            raise ValueError('a rosbridge URL is required')

        with self._lock:
            previous = self.socket

            self.url = url
            self.socket = None

            if previous is not None:
                previous.close()

            socket = self.transport_factory(
                url,
                on_open=lambda: self._on_open(socket),
                on_message=lambda frame: self._on_message(socket, frame),
                on_close=lambda: self._on_close(socket),
                on_error=lambda error: self._on_error(socket, error),
            )

            self.socket = socket
            self.state = State.CONNECTING

        logger.info("connecting to %s", url)
        socket.open()


    def close(self):
        """ Close the current socket, if there is one. The ``close`` event is
            emitted once the socket is actually gone.
        """

        socket = self.socket

        if socket is not None:
            socket.close()


    def send(self, call):
        """ Encode the *call* dictionary and send it. If the socket is not
            open yet, the send is deferred until the next ``connection``
            event; deferred sends go out in the order they were made. A
            deferred send is not carried over to any later reconnection.
        """

        frame = codec.encode(call)

        with self._lock:
            if self.state == State.OPEN:
                self._write(frame)
            else:
                self.events.once('connection', lambda: self._write(frame))


    def _write(self, frame):

        socket = self.socket

        if socket is None:
            logger.warning("dropped outbound frame: no socket")
            return

        try:
            socket.send(frame)
        except TransportConnectionError as e:
            # The socket went away under us; the close path reports it.
            logger.warning("dropped outbound frame: %s", e)


    def _on_open(self, socket):

        with self._lock:
            if socket is not self.socket:
                return

            self.state = State.OPEN
            logger.info("connected to %s", self.url)
            self.events.emit('connection')


    def _on_message(self, socket, frame):

        if socket is not self.socket:
            return

        try:
            envelope = codec.decode(frame, self.decompress)
        except ProtocolError as e:
            logger.warning("dropping inbound frame: %s", e)
            self.events.emit('error', e)
            return

        # Nothing raised here may reach the transport's receive loop.
        try:
            self.router.dispatch(envelope)
        except Exception as e:
            logger.exception("failed to dispatch inbound %s envelope", repr(envelope.get('op')))
            self.events.emit('error', e)


    def _on_close(self, socket):

        with self._lock:
            if socket is not self.socket:
                return

            self.state = State.CLOSED

        logger.info("connection to %s closed", self.url)
        self.events.emit('close')


    def _on_error(self, socket, error):

        if socket is not self.socket:
            return

        logger.error("%s", error)
        self.events.emit('error', error)


    def call_rosapi(self, name, service_type, field, callback):
        """ Call a parameterless rosapi *name* service and hand the *field*
            of its response to *callback*.
        """

        client = Service(self, name, service_type)
        client.call_service(ServiceRequest(), lambda response: callback(response.get(field)))


    def get_topics(self, callback):
        """ Retrieve the list of topic names known to ROS, and pass it to
            *callback*.
        """

        self.call_rosapi('/rosapi/topics', 'rosapi/Topics', 'topics', callback)


    def get_services(self, callback):
        """ Retrieve the list of active service names, and pass it to
            *callback*.
        """

        self.call_rosapi('/rosapi/services', 'rosapi/Services', 'services', callback)


    def get_params(self, callback):
        """ Retrieve the list of parameter names on the parameter server,
            and pass it to *callback*.
        """

        self.call_rosapi('/rosapi/get_param_names', 'rosapi/GetParamNames', 'names', callback)


# end of class Ros


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
