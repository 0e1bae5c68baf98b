""" Python client for rosbridge. A single WebSocket connection carries
    topic publish/subscribe, service calls, parameter access and actionlib
    goals, multiplexed as JSON envelopes.

    Typical use::

        ros = roswire.Ros('ws://localhost:9090')
        chatter = roswire.Topic(ros, '/chatter', 'std_msgs/String')
        chatter.subscribe(print)
"""

# Utility components.

from . import json
from . import config
from . import log

# Submodules used by multiple other components.

from . import protocol
from . import transport
from . import compression

# Primary public-facing interfaces.

from .protocol.message import Message, ServiceRequest, ServiceResponse
from .connection import Ros, State
from .topic import Topic
from .service import Service, Param
from .action import ActionClient, Goal

configure_logging = log.configure_logging

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
