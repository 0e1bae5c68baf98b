"""Envelope codec: call objects <-> rosbridge JSON text frames."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Union

from .. import json
from ..transport.base import ProtocolError
from . import fields


Decompress = Callable[[str], Union[str, bytes]]


def encode(call: Dict[str, Any]) -> str:
    """Return the JSON text for an outbound *call*, verbatim.

    No fields are renamed, added or validated; the call is put on the wire
    exactly as the caller built it.
    """

    return json.dumps_text(call)


def _parse(frame: Union[str, bytes], what: str) -> Dict[str, Any]:

    try:
        envelope = json.loads(frame)
    except json.DecodeError as e:
        raise ProtocolError(f"malformed {what}: {e}") from e

    if not isinstance(envelope, dict):
        raise ProtocolError(f"{what} is not a JSON object: {type(envelope).__name__}")

    if "op" not in envelope:
        raise ProtocolError(f"{what} has no op field")

    return envelope


def _check(envelope: Dict[str, Any], what: str) -> Dict[str, Any]:
    """Reject a publish or service_response with unusable routing fields."""

    op = envelope["op"]

    if op == fields.PUBLISH:
        if not isinstance(envelope.get("topic"), str):
            raise ProtocolError(f"{what} publish has no usable topic: {envelope.get('topic')!r}")
        if not isinstance(envelope.get("msg"), dict):
            raise ProtocolError(f"{what} publish msg is not a JSON object: {type(envelope.get('msg')).__name__}")

    elif op == fields.SERVICE_RESPONSE:
        if not isinstance(envelope.get("id"), str):
            raise ProtocolError(f"{what} service_response has no usable id: {envelope.get('id')!r}")

    return envelope


def decode(frame: Union[str, bytes], decompress: Optional[Decompress] = None) -> Dict[str, Any]:
    """Parse one inbound *frame* into an envelope dictionary.

    A ``png`` envelope is a wrapper: its ``data`` field is handed to
    *decompress*, which returns the JSON text of the real envelope, and
    that is what gets returned. Any failure to produce a usable envelope
    raises :class:`ProtocolError`.
    """

    envelope = _parse(frame, "frame")

    if envelope["op"] != fields.PNG:
        return _check(envelope, "frame")

    if decompress is None:
        raise ProtocolError("received a png compressed frame, but no decompressor is available")

    try:
        data = envelope["data"]
    except KeyError:
        raise ProtocolError("png frame has no data field") from None

    if not isinstance(data, str):
        raise ProtocolError(f"png frame data is not a string: {type(data).__name__}")

    try:
        inner = decompress(data)
    except ProtocolError:
        raise
    except (ValueError, TypeError) as e:
        raise ProtocolError(f"png frame could not be decompressed: {e}") from e

    what = "decompressed png frame"
    return _check(_parse(inner, what), what)
