""" Python client for the bridge protocol. A client sends a trigger request
    to a bridge server, and decodes the multipart reply into per-source data
    packages: inline msgpack values, plus zero-copy views of any arrays.
"""

# Utility components.

from . import errors
from . import config

# Submodules used by multiple other components.

from . import protocol
from . import transport

# Primary public-facing interfaces.

from . import session
connect = session.connect

from .session import Client
from .protocol import ArrayView, DataPackage, Value, WireType, decode

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
