"""msgpack codec used for bridge headers and inline payloads."""

from __future__ import annotations

from typing import Any, Dict

import msgspec

from ..errors import DecodeError, TypeMismatchError


_any_decoder = msgspec.msgpack.Decoder()
_map_decoder = msgspec.msgpack.Decoder(Dict[str, msgspec.Raw])
_encoder = msgspec.msgpack.Encoder()


def encode(obj: Any) -> bytes:
    """Encode a Python object as msgpack bytes."""

    return _encoder.encode(obj)


def decode(data) -> Any:
    """Decode a complete msgpack document to native Python objects."""

    try:
        return _any_decoder.decode(data)
    except msgspec.DecodeError as exc:
        raise DecodeError(str(exc)) from exc


def decode_map(data) -> Dict[str, msgspec.Raw]:
    """Decode a msgpack map one level deep.

    The values are left encoded as :class:`msgspec.Raw` slices that
    reference *data* rather than copy it; they are decoded on demand.
    """

    try:
        return _map_decoder.decode(data)
    except msgspec.DecodeError as exc:
        raise DecodeError("expected a msgpack map with string keys: " + str(exc)) from exc


def decode_as(data, type: Any) -> Any:
    """Decode *data* strictly as *type*.

    A well-formed document holding another type raises
    :class:`TypeMismatchError`; malformed bytes raise :class:`DecodeError`.
    """

    try:
        return msgspec.msgpack.decode(data, type=type)
    except msgspec.ValidationError as exc:
        raise TypeMismatchError(str(exc)) from exc
    except msgspec.DecodeError as exc:
        raise DecodeError(str(exc)) from exc
