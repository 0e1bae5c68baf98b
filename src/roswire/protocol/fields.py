"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Operations sent by the client.

SUBSCRIBE = "subscribe"
UNSUBSCRIBE = "unsubscribe"
ADVERTISE = "advertise"
UNADVERTISE = "unadvertise"
PUBLISH = "publish"
CALL_SERVICE = "call_service"

# Operations sent by rosbridge. A publish can travel in either direction.

SERVICE_RESPONSE = "service_response"
PNG = "png"

# Topic compression modes understood by rosbridge.

COMPRESSION_NONE = "none"
COMPRESSION_PNG = "png"
COMPRESSIONS = frozenset((COMPRESSION_NONE, COMPRESSION_PNG))
