import pytest
import roswire

from roswire.protocol import codec
from roswire.transport import ProtocolError


def test_encode_verbatim():

    call = {'op': 'subscribe', 'id': 'subscribe:/chatter:1', 'type': 'std_msgs/String',
            'topic': '/chatter', 'compression': 'none', 'throttle_rate': 0}

    encoded = codec.encode(call)

    assert isinstance(encoded, str)
    assert roswire.json.loads(encoded) == call


def test_encode_message_values():

    call = {'op': 'publish', 'topic': '/chatter', 'msg': roswire.Message(data='ü and ☃')}
    decoded = roswire.json.loads(codec.encode(call))

    assert decoded['msg'] == {'data': 'ü and ☃'}


def test_decode_plain():

    envelope = codec.decode('{"op": "publish", "topic": "/chatter", "msg": {"data": "hi"}}')
    assert envelope == {'op': 'publish', 'topic': '/chatter', 'msg': {'data': 'hi'}}

    envelope = codec.decode(b'{"op": "service_response", "id": "x", "values": [1]}')
    assert envelope['values'] == [1]


@pytest.mark.parametrize('frame', (
    '',
    'not json',
    '{"op": "publish"',
    '"just a string"',
    '[{"op": "publish"}]',
    '{"topic": "/no/op"}',
))
def test_decode_malformed(frame):

    with pytest.raises(ProtocolError):
        codec.decode(frame)


@pytest.mark.parametrize('frame', (
    '{"op": "publish", "topic": ["/a"], "msg": {}}',
    '{"op": "publish", "topic": null, "msg": {}}',
    '{"op": "publish", "topic": "/a", "msg": 7}',
    '{"op": "service_response", "id": 1, "values": {}}',
    '{"op": "service_response", "id": {"a": 1}}',
    '{"op": "png", "data": 5}',
))
def test_decode_wrong_shape(frame):

    with pytest.raises(ProtocolError):
        codec.decode(frame, roswire.compression.decompress)


def test_decode_png_wrong_shape():

    inner = {'op': 'publish', 'topic': {'nested': True}, 'msg': {}}
    data = roswire.compression.compress(roswire.json.dumps_text(inner))

    with pytest.raises(ProtocolError):
        codec.decode(roswire.json.dumps_text({'op': 'png', 'data': data}), roswire.compression.decompress)


def test_decode_failed_service_response():

    # rosbridge reports a failed call with result false and a string.
    envelope = codec.decode('{"op": "service_response", "id": "x", "result": false, "values": "no such service"}')
    assert envelope['values'] == 'no such service'


def test_protocol_error_is_value_error():

    with pytest.raises(ValueError):
        codec.decode('{')


def test_decode_png():

    inner = {'op': 'publish', 'topic': '/map', 'msg': {'data': list(range(50))}}
    data = roswire.compression.compress(roswire.json.dumps_text(inner))

    envelope = codec.decode(roswire.json.dumps_text({'op': 'png', 'data': data}), roswire.compression.decompress)
    assert envelope == inner


def test_decode_png_without_decompressor():

    with pytest.raises(ProtocolError):
        codec.decode('{"op": "png", "data": "AAAA"}')


def test_decode_png_failures():

    with pytest.raises(ProtocolError):
        codec.decode('{"op": "png"}', roswire.compression.decompress)

    with pytest.raises(ProtocolError):
        codec.decode('{"op": "png", "data": "not base64!"}', roswire.compression.decompress)

    def garbage(data):
        return '{"op": '

    with pytest.raises(ProtocolError):
        codec.decode('{"op": "png", "data": ""}', garbage)

    def broken(data):
        raise ValueError('cannot decode')

    with pytest.raises(ProtocolError):
        codec.decode('{"op": "png", "data": ""}', broken)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
