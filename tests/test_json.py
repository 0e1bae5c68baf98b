import json
import roswire


def test_json_encode_and_decode():
    encode_and_decode(json.dumps, json.loads, dump_is_bytes=False)


def test_roswire_encode_and_decode():
    encode_and_decode(roswire.json.dumps, roswire.json.loads)


def test_dumps_text():

    encoded = roswire.json.dumps_text({'data': 'ü'})

    assert isinstance(encoded, str)
    assert roswire.json.loads(encoded) == {'data': 'ü'}


def test_message_subclass():

    message = roswire.Message(linear={'x': 1.0}, angular={'z': -0.5})
    decoded = roswire.json.loads(roswire.json.dumps(message))

    assert decoded == {'linear': {'x': 1.0}, 'angular': {'z': -0.5}}


def encode_and_decode(dumps, loads, dump_is_bytes=True):

    input_dictionary = dict()
    input_dictionary['list'] = [1, 2, 3, 'a', 'b', None, 'c', 'z']
    input_dictionary['dict'] = {'one': 1, 'two': 2}
    input_dictionary['none'] = None
    input_dictionary['true'] = True
    input_dictionary['false'] = False
    input_dictionary['float'] = 0.25

    encoded = dumps(input_dictionary)

    if dump_is_bytes:
        assert isinstance(encoded, bytes)
    else:
        assert isinstance(encoded, str)

    # It won't do to compare the encoded JSON against a pre-set notion of
    # what the encoded output should look like, as there is variance in
    # the handling of whitespace between the different libraries.

    decoded = loads(encoded)
    assert decoded == input_dictionary


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
