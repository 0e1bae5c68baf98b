""" Default settings for :mod:`roswire`, read once from the environment.
    Anything set here can be overridden by passing explicit arguments to
    the relevant constructor or method; these values only apply when the
    caller does not say otherwise.

    * ``ROSWIRE_URL`` sets :data:`url`, default ws://localhost:9090
    * ``ROSWIRE_OPEN_TIMEOUT`` sets :data:`open_timeout`, default 10 seconds
    * ``ROSWIRE_SERVICE_TIMEOUT`` sets :data:`service_timeout`, default None,
      meaning service calls wait for as long as it takes
    * ``ROSWIRE_LOG_LEVEL`` sets :data:`log_level`, default WARNING
"""

import os


def _seconds(variable, default):
    """ Interpret the environment *variable* as a number of seconds. An empty
        or missing variable yields the *default*.
    """

    raw = os.environ.get(variable, '')
    raw = raw.strip()

    if raw == '':
        return default

    try:
        value = float(raw)
    except ValueError:
        raise ValueError("%s must be a number of seconds, not %s" % (variable, repr(raw)))

    if value < 0:
        raise ValueError("%s must not be negative: %s" % (variable, repr(raw)))

    return value


url = os.environ.get('ROSWIRE_URL', 'ws://localhost:9090')
open_timeout = _seconds('ROSWIRE_OPEN_TIMEOUT', 10.0)
service_timeout = _seconds('ROSWIRE_SERVICE_TIMEOUT', None)
log_level = os.environ.get('ROSWIRE_LOG_LEVEL', 'WARNING').upper()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
