""" Publish and subscribe to ROS topics through rosbridge.
"""

import logging

from .events import Events
from .protocol import fields
from .protocol.message import Message

logger = logging.getLogger(__name__)


class Topic:
    """ A :class:`Topic` is the handle for one named, typed topic on a
        :class:`roswire.Ros` connection, for example ``/cmd_vel`` with the
        *message_type* ``geometry_msgs/Twist``.

        Subscriptions may ask rosbridge for a *compression* mode, either
        'none' or 'png', and for a *throttle_rate* in milliseconds between
        messages. An unsupported compression mode is reported with a
        warning but kept as given; a negative throttle rate is reported and
        replaced with zero.

        Events, registered via :func:`on` or :func:`once`:

        * ``message`` -- with the :class:`roswire.Message` received
        * ``warning`` -- with a description of a configuration problem

        :ivar advertised: True once this client has advertised the topic.
    """

    def __init__(self, ros, name, message_type, compression=fields.COMPRESSION_NONE, throttle_rate=0, node=None):

        self.ros = ros
        self.name = name
        self.message_type = message_type
        self.node = node
        self.advertised = False
        self.compression = compression or fields.COMPRESSION_NONE
        self.throttle_rate = throttle_rate or 0
        self.events = Events('message', 'warning')

        self._routed = False

        if self.compression not in fields.COMPRESSIONS:
            self._warn("%s compression is not supported, no compression will be used" % (repr(self.compression),))

        if self.throttle_rate < 0:
            self._warn("throttle rate %s is not allowed, using 0" % (self.throttle_rate,))
            self.throttle_rate = 0


    def __repr__(self):
        return "Topic(%s, %s)" % (repr(self.name), repr(self.message_type))


    def _warn(self, text):

        logger.warning("%s: %s", self.name, text)
        self.events.emit('warning', text)


    def on(self, name, callback):
        self.events.on(name, callback)


    def once(self, name, callback):
        self.events.once(name, callback)


    def off(self, name, callback=None):
        self.events.off(name, callback)


    def _receive(self, payload):
        """ Router listener for this topic: wrap the raw payload and hand it
            to the local subscribers.
        """

        self.events.emit('message', Message(payload))


    def subscribe(self, callback):
        """ Invoke *callback* with every :class:`roswire.Message` published
            on this topic. Every call sends its own subscribe request to
            rosbridge; local delivery is shared, so each callback sees each
            message once.
        """

        self.events.on('message', callback)

        if self._routed == False:
            self.ros.router.on(self.name, self._receive)
            self._routed = True

        call = dict()
        call['op'] = fields.SUBSCRIBE
        call['id'] = self.ros.ids.next(fields.SUBSCRIBE, self.name)
        call['type'] = self.message_type
        call['topic'] = self.name
        call['compression'] = self.compression
        call['throttle_rate'] = self.throttle_rate

        self.ros.send(call)


    def unsubscribe(self):
        """ Remove every callback registered via :func:`subscribe`, and tell
            rosbridge this client no longer wants the topic.
        """

        self.events.off('message')

        if self._routed == True:
            self.ros.router.off(self.name, self._receive)
            self._routed = False

        call = dict()
        call['op'] = fields.UNSUBSCRIBE
        call['id'] = self.ros.ids.next(fields.UNSUBSCRIBE, self.name)
        call['topic'] = self.name

        self.ros.send(call)


    def advertise(self):
        """ Register as a publisher for this topic. Repeated calls are sent
            every time.
        """

        call = dict()
        call['op'] = fields.ADVERTISE
        call['id'] = self.ros.ids.next(fields.ADVERTISE, self.name)
        call['type'] = self.message_type
        call['topic'] = self.name

        self.ros.send(call)
        self.advertised = True


    def unadvertise(self):
        """ Stop being a publisher for this topic.
        """

        call = dict()
        call['op'] = fields.UNADVERTISE
        call['id'] = self.ros.ids.next(fields.UNADVERTISE, self.name)
        call['topic'] = self.name

        self.ros.send(call)
        self.advertised = False


    def publish(self, message):
        """ Publish *message*, a :class:`roswire.Message` or any dictionary
            of message fields. The topic is advertised first if needed.
        """

        if self.advertised == False:
            self.advertise()

        call = dict()
        call['op'] = fields.PUBLISH
        call['id'] = self.ros.ids.next(fields.PUBLISH, self.name)
        call['topic'] = self.name
        call['msg'] = message

        self.ros.send(call)


# end of class Topic


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
