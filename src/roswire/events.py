""" Named event channels. Every roswire object that notifies the application
    of something owns an :class:`Events` instance, declaring up front which
    event names it will ever emit; asking for any other name is an error.
"""

import logging
import threading

logger = logging.getLogger(__name__)


class Events:
    """ A small registry of callbacks, keyed by event name. Callbacks for a
        given name are invoked in the order they were registered. The set of
        valid *names* is fixed when the instance is created.
    """

    def __init__(self, *names):

        self.names = frozenset(names)
        self._callbacks = dict()
        self._lock = threading.Lock()

        for name in names:
            self._callbacks[name] = list()


    def _check(self, name):

        if name not in self.names:
            raise ValueError("unknown event %s, expected one of: %s" % (repr(name), ', '.join(sorted(self.names))))


    def on(self, name, callback):
        """ Invoke *callback* every time the event *name* is emitted.
        """

        self._register(name, callback, False)


    def once(self, name, callback):
        """ Invoke *callback* the next time the event *name* is emitted, and
            never again.
        """

        self._register(name, callback, True)


    def _register(self, name, callback, once):

        self._check(name)

        if callable(callback):
            pass
        else:
            raise TypeError('callback must be callable')

        with self._lock:
            self._callbacks[name].append((callback, once))


    def off(self, name, callback=None):
        """ Remove *callback* from the event *name*. If no *callback* is
            specified, all callbacks for that event are removed.
        """

        self._check(name)

        with self._lock:
            if callback is None:
                self._callbacks[name] = list()
            else:
                remaining = list()
                for registered in self._callbacks[name]:
                    if registered[0] != callback:
                        remaining.append(registered)
                self._callbacks[name] = remaining


    def listeners(self, name):
        """ Return the list of callbacks currently registered for *name*.
        """

        self._check(name)

        with self._lock:
            return [callback for callback, once in self._callbacks[name]]


    def emit(self, name, *args):
        """ Invoke every callback registered for *name* with the supplied
            arguments. One-shot callbacks are removed before any callback is
            invoked, so a callback that re-emits the same event cannot
            trigger them twice. An exception raised by a callback is logged
            and does not prevent the remaining callbacks from running.
        """

        self._check(name)

        with self._lock:
            registered = self._callbacks[name]
            if not registered:
                return
            self._callbacks[name] = [entry for entry in registered if entry[1] == False]

        for callback, once in registered:
            try:
                callback(*args)
            except Exception:
                logger.exception("%s event callback %r failed", name, callback)


# end of class Events


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
