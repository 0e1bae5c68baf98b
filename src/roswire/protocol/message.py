""" Value types carried over the wire, and the per-connection generator of
    call identification strings.
"""

import itertools
import threading


class Message(dict):
    """ A :class:`Message` is what gets published to, or arrives from, a
        topic. It is a plain dictionary of the message fields, with the
        fields also available as attributes for convenience::

            twist = Message({'linear': {'x': 0.5}, 'angular': {'z': 0.1}})
            twist.linear['x']

        All fields of *values* are copied; the original mapping is not
        retained.

        Dictionary methods take precedence over fields of the same name:
        a field called ``values``, ``items``, ``keys``, ``get`` or ``args``
        (on a :class:`ServiceRequest`) must be read as ``message['values']``.
        Assigning such a name as an attribute still sets the field.
    """

    def __init__(self, values=None, **kwargs):

        dict.__init__(self)

        if values:
            for name, value in values.items():
                self[name] = value

        for name, value in kwargs.items():
            self[name] = value


    def __getattr__(self, name):

        try:
            return self[name]
        except KeyError:
            raise AttributeError("%s has no field %s" % (type(self).__name__, repr(name)))


    def __setattr__(self, name, value):
        self[name] = value


    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, dict.__repr__(self))


# end of class Message



class ServiceRequest(Message):
    """ The arguments for a service call. The field order matters: the values
        are sent to rosbridge as a positional list, in the order the fields
        were defined.
    """

    def args(self):
        """ Return the field values as a list, in field order.
        """

        return list(self.values())


# end of class ServiceRequest



class ServiceResponse(Message):
    """ The result of a service call.
    """

    @classmethod
    def from_values(cls, values, names=()):
        """ Build a response from the ``values`` field of a service_response.
            rosbridge normally returns a dictionary, which is copied as-is.
            A positional list is matched up with the field *names* of the
            original request, in order; any values beyond the known names
            are keyed by their position.
        """

        if values is None:
            return cls()

        try:
            values.items
        except AttributeError:
            pass
        else:
            return cls(values)

        names = list(names)
        response = cls()

        for index, value in enumerate(values):
            try:
                name = names[index]
            except IndexError:
                name = str(index)
            response[name] = value

        return response


# end of class ServiceResponse



class IdGenerator:
    """ Generate call identification strings that are unique for the life
        of one connection. Each identifier combines a role prefix, the name
        of the topic or service, and a counter that only ever increases::

            subscribe:/chatter:1
            call_service:/rosapi/topics:2

        One instance is owned by each :class:`roswire.Ros` connection; it is
        safe to use from multiple threads.
    """

    def __init__(self, start=1):

        self._ticker = itertools.count(start)
        self._lock = threading.Lock()
        self.last = None


    def next(self, role, name):
        """ Return the next identifier for the given *role* (the operation,
            such as 'subscribe') and topic or service *name*.
        """

        with self._lock:
            count = next(self._ticker)
            self.last = count

        return "%s:%s:%d" % (role, name, count)


# end of class IdGenerator


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
