""" PNG compression, as used by rosbridge for topics subscribed with
    ``compression='png'``. The JSON text of a message is laid out as the
    pixel data of an RGB image: every pixel carries three consecutive bytes
    of the UTF-8 encoded text, and the last row is padded with newlines,
    which JSON treats as whitespace. The image is then PNG encoded and sent
    as a base64 string.

    The connection only relies on :func:`decompress`; :func:`compress` is
    the inverse, matching what rosbridge produces.
"""

import base64
import binascii
import math

import cv2
import numpy

from .transport.base import ProtocolError


def compress(text):
    """ Encode the JSON *text* (str or bytes) as a base64 PNG string.
    """

    if isinstance(text, str):
        text = text.encode('utf-8')

    length = len(text)

    if length == 0:
        raise ValueError('cannot compress an empty document')

    width = max(int(math.floor(math.sqrt(length / 3.0))), 1)
    height = int(math.ceil((length / 3.0) / width))
    padding = width * height * 3 - length

    pixels = numpy.frombuffer(text + b'\n' * padding, dtype=numpy.uint8)
    pixels = pixels.reshape((height, width, 3))

    # OpenCV works in BGR order.
    pixels = numpy.ascontiguousarray(pixels[:, :, ::-1])

    success, encoded = cv2.imencode('.png', pixels)

    if not success:
        raise ValueError('PNG encoding failed')

    return base64.b64encode(encoded.tobytes()).decode('ascii')


def decompress(data):
    """ Decode the base64 PNG *data* from a ``png`` envelope and return the
        JSON text hidden in its pixels.
    """

    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ProtocolError('png data is not valid base64: ' + str(e)) from e

    buffer = numpy.frombuffer(raw, dtype=numpy.uint8)
    image = None

    if buffer.size > 0:
        image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)

    if image is None:
        raise ProtocolError('png data is not a decodable image')

    # Back from BGR to the RGB byte order the text was written in. Any
    # alpha channel was already dropped by IMREAD_COLOR.
    pixels = numpy.ascontiguousarray(image[:, :, ::-1])
    text = pixels.tobytes()

    try:
        return text.decode('utf-8')
    except UnicodeDecodeError as e:
        raise ProtocolError('png pixels are not UTF-8 text: ' + str(e)) from e


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
