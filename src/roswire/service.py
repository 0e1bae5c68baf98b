""" Service calls and parameter access through rosbridge.
"""

import logging
import threading

from . import config
from . import json
from .events import Events
from .protocol import fields
from .protocol.message import ServiceRequest, ServiceResponse
from .transport.base import TransportTimeout

logger = logging.getLogger(__name__)


class Service:
    """ A client for the ROS service *name*, such as ``/add_two_ints``, of the
        given *service_type*, such as ``rospy_tutorials/AddTwoInts``.

        Events, registered via :func:`on` or :func:`once`:

        * ``timeout`` -- with the call identifier of a call that expired
    """

    def __init__(self, ros, name, service_type=None):

        self.ros = ros
        self.name = name
        self.service_type = service_type
        self.events = Events('timeout')


    def __repr__(self):
        return "Service(%s, %s)" % (repr(self.name), repr(self.service_type))


    def on(self, name, callback):
        self.events.on(name, callback)


    def once(self, name, callback):
        self.events.once(name, callback)


    def off(self, name, callback=None):
        self.events.off(name, callback)


    def call_service(self, request, callback, timeout=None, errback=None):
        """ Call the service with *request*, a :class:`roswire.ServiceRequest`
            or any dictionary of arguments; the values are sent in the order
            of its fields. *callback* is invoked once, with the
            :class:`roswire.ServiceResponse`, when rosbridge answers.

            There is no limit on how long the call may take unless a
            *timeout* in seconds is specified, here or as
            :data:`roswire.config.service_timeout`. When it expires the call
            is forgotten, any later response is ignored, the ``timeout``
            event is emitted, and *errback*, if given, receives a
            :class:`roswire.transport.TransportTimeout`.

            The call identifier is returned.
        """

        if callable(callback):
            pass
        else:
            raise TypeError('callback must be callable')

        if timeout is None:
            timeout = config.service_timeout

        request = ServiceRequest(request)
        names = list(request.keys())
        call_id = self.ros.ids.next(fields.CALL_SERVICE, self.name)
        timer = None

        def respond(values):
            if timer is not None:
                timer.cancel()
            callback(ServiceResponse.from_values(values, names))

        self.ros.router.once(call_id, respond)

        if timeout:
            timer = threading.Timer(timeout, self._expire, args=(call_id, respond, timeout, errback))
            timer.daemon = True
            timer.start()

        call = dict()
        call['op'] = fields.CALL_SERVICE
        call['id'] = call_id
        call['service'] = self.name
        call['args'] = request.args()

        self.ros.send(call)
        return call_id


    def _expire(self, call_id, respond, timeout, errback):

        removed = self.ros.router.off(call_id, respond)

        if removed == 0:
            # The response won the race.
            return

        logger.warning("%s: no response to %s after %.3g seconds", self.name, call_id, timeout)
        self.events.emit('timeout', call_id)

        if errback is not None:
            error = TransportTimeout("%s: no response to %s after %.3g seconds" % (self.name, call_id, timeout))
            try:
                errback(error)
            except Exception:
                logger.exception("errback %r for %s failed", errback, call_id)


# end of class Service



class Param:
    """ A single parameter on the ROS parameter server, accessed through the
        rosapi services. Values are JSON encoded on the way to the server
        and decoded on the way back.
    """

    def __init__(self, ros, name):

        self.ros = ros
        self.name = name


    def __repr__(self):
        return "Param(%s)" % (repr(self.name),)


    def get(self, callback):
        """ Fetch the value of the parameter and pass it to *callback*.
        """

        client = Service(self.ros, '/rosapi/get_param', 'rosapi/GetParam')

        request = ServiceRequest()
        request['name'] = self.name
        request['value'] = json.dumps_text('')

        def decode(response):
            callback(json.loads(response['value']))

        client.call_service(request, decode)


    def set(self, value, callback=None):
        """ Set the parameter to *value*. The server's acknowledgement is
            passed to *callback*, if one is given, and otherwise ignored.
        """

        client = Service(self.ros, '/rosapi/set_param', 'rosapi/SetParam')

        request = ServiceRequest()
        request['name'] = self.name
        request['value'] = json.dumps_text(value)

        if callback is None:
            callback = _ignore

        client.call_service(request, callback)


# end of class Param


def _ignore(response):
    pass


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
