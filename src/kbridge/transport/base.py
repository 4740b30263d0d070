"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`kbridge.protocol` so the protocol remains
transport-agnostic: frames go in and out as opaque bytes-like objects.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..errors import BridgeError


# Transport agnostic exceptions

class TransportError(BridgeError):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class Transport(ABC):
    """Minimal contract for a frame-level request/reply transport."""

    @abstractmethod
    def connect(self, endpoint: str) -> None:
        """Establish the underlying connection/socket."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection/socket."""

    @abstractmethod
    def send(self, data: bytes) -> None:
        """Send a single frame."""

    @abstractmethod
    def recv(self):
        """Receive the next frame of the current reply, as a bytes-like object."""

    @property
    @abstractmethod
    def more(self) -> bool:
        """Whether more frames of the current reply are pending."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False
