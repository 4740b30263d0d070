from . import fields
from . import codec
from . import value
from . import array
from . import package
from . import decoder
from . import printer

from .array import ArrayView
from .decoder import decode
from .package import DataPackage
from .value import Value, WireType


"""
Bridge Protocol Layer
=====================

This package interprets the frames of a bridge reply. It has no knowledge
of how those frames were received; the transport and session layers hand
it an ordered sequence of bytes-like objects and nothing else.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

User Code
    │
    ▼
Client Session (kbridge.session)
    - next()
    - request()
    - show_message() / show_next()

    │
    ▼
Decoder (decoder.py)
    Groups (header, payload) pairs by source
    - one DataPackage per 'msgpack' header
    - 'array' / 'ImageData' pairs extend the open package

    │
    ▼
Data Model (package.py, value.py, array.py)
    - DataPackage: owns the frames for one source
    - Value: deferred-decode msgpack value
    - ArrayView: zero-copy window over a payload frame

    │
    ▼
Codec (codec.py)
    msgpack via msgspec

Diagnostics (printer.py) sit beside the decoder and read raw frames
directly; they tolerate anything the codec cannot parse.

---------------------------------------------------------------------

Below the Protocol Layer (for context)
--------------------------------------

Transport Layer (kbridge.transport)
    Moves frames
    - ZeroMQ REQ socket

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
