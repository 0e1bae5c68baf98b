""" The correlation router is the single inbound dispatch point for a
    connection. Listeners are keyed either by a topic name, for published
    messages, or by a call identifier, for service responses.
"""

import logging
import threading

from .protocol import fields

logger = logging.getLogger(__name__)


class Router:
    """ Map each key (topic name or call identifier) to an ordered list of
        listeners. One :class:`Router` is shared by every topic, service and
        action client using the same :class:`roswire.Ros` connection.
    """

    def __init__(self):

        self._listeners = dict()
        self._lock = threading.Lock()


    def on(self, key, callback):
        """ Invoke *callback* with the message payload every time a message
            arrives for *key*.
        """

        self._register(key, callback, False)


    def once(self, key, callback):
        """ Invoke *callback* with the payload of the next message for *key*,
            then forget it.
        """

        self._register(key, callback, True)


    def _register(self, key, callback, once):

        if callable(callback):
            pass
        else:
            raise TypeError('callback must be callable')

        with self._lock:
            try:
                listeners = self._listeners[key]
            except KeyError:
                listeners = list()
                self._listeners[key] = listeners

            listeners.append((callback, once))


    def off(self, key, callback=None):
        """ Remove *callback* from *key*; if no *callback* is specified, all
            listeners for *key* are removed. Returns the number of listeners
            removed.
        """

        with self._lock:
            try:
                listeners = self._listeners[key]
            except KeyError:
                return 0

            if callback is None:
                del self._listeners[key]
                return len(listeners)

            remaining = [entry for entry in listeners if entry[0] != callback]
            removed = len(listeners) - len(remaining)

            if remaining:
                self._listeners[key] = remaining
            else:
                del self._listeners[key]

        return removed


    def count(self, key):
        """ Return the number of listeners registered for *key*.
        """

        with self._lock:
            try:
                return len(self._listeners[key])
            except KeyError:
                return 0


    def _take(self, key):
        """ Return the listeners to notify for *key*, removing any one-shot
            listeners from the table in the same step. The returned list is
            a snapshot; listeners are invoked outside the lock.
        """

        with self._lock:
            try:
                listeners = self._listeners[key]
            except KeyError:
                return ()

            remaining = [entry for entry in listeners if entry[1] == False]

            if remaining:
                self._listeners[key] = remaining
            else:
                del self._listeners[key]

        return listeners


    def _take_one(self, key):
        """ Remove and return the first listener for *key*, or None. This is
            how a service response is consumed: once taken, no later
            response carrying the same identifier can reach it.
        """

        with self._lock:
            try:
                listeners = self._listeners[key]
            except KeyError:
                return None

            callback = listeners.pop(0)[0]

            if not listeners:
                del self._listeners[key]

        return callback


    def _notify(self, key, callback, payload):

        try:
            callback(payload)
        except Exception:
            logger.exception("listener %r for %s failed", callback, key)


    def dispatch(self, envelope):
        """ Route one decoded inbound *envelope*. A publish notifies every
            listener for its topic, in registration order; a service_response
            notifies, once, the listener for its call identifier. Anything
            else is ignored. Returns True if at least one listener was
            notified.
        """

        op = envelope.get('op')

        if op == fields.PUBLISH:
            key = envelope.get('topic')
            listeners = self._take(key)

            for callback, once in listeners:
                self._notify(key, callback, envelope.get('msg'))

            return len(listeners) > 0

        if op == fields.SERVICE_RESPONSE:
            key = envelope.get('id')
            callback = self._take_one(key)

            if callback is None:
                # Unknown or already answered; another client sharing the
                # server may have made the call.
                return False

            self._notify(key, callback, envelope.get('values'))
            return True

        logger.debug("ignoring inbound %s envelope", repr(op))
        return False


# end of class Router


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
