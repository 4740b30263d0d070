"""Transport layer implementations."""

import os

from .base import (
    Transport,
    TransportError,
    TransportConnectionError,
)

_BACKEND = os.environ.get("KBRIDGE_TRANSPORT", "zmq")

if _BACKEND == "zmq":
    from .zmq import request
else:
    raise ImportError(f"unknown KBRIDGE_TRANSPORT backend: {_BACKEND!r}")
