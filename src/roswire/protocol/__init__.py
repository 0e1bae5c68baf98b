""" The rosbridge envelope protocol: op names, message value types, and the
    codec between call dictionaries and JSON text frames. Nothing here
    depends on how frames are carried.
"""

from . import fields
from . import message
from . import codec

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
