''' Wrapper module to select the most performant available library to handle
    the equivalent of :func:`json.loads` and :func:`json.dumps`.
'''

# msgspec is preferred when it is installed; orjson is the declared
# dependency and is always available otherwise.

msgspec = None
orjson = None

try:
    import msgspec
except ImportError:
    import orjson


# The msgspec 'encode' operation returns bytes, as does orjson.dumps. Both
# decoders accept either str or bytes.

if msgspec is not None:
    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()
    dumps = encoder.encode
    loads = decoder.decode
    DecodeError = msgspec.DecodeError
else:
    dumps = orjson.dumps
    loads = orjson.loads
    DecodeError = orjson.JSONDecodeError


def dumps_text(value):
    """ Return the JSON encoding of *value* as a str, which is what goes
        out in a WebSocket text frame.
    """

    return dumps(value).decode('utf-8')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
