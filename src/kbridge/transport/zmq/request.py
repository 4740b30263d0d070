"""ZeroMQ request/reply transport.

A bridge server listens on a REP (or ROUTER) socket; the client side is a
plain REQ socket. Frames are received without copying, and handed to the
caller as memoryviews over the ZeroMQ message buffers.
"""

from __future__ import annotations

import atexit
import logging
from typing import Optional

import zmq

from ..base import Transport, TransportConnectionError, TransportError


logger = logging.getLogger(__name__)

zmq_context = zmq.Context()


class Client(Transport):
    """Issue requests via a ZeroMQ REQ socket and receive multipart replies."""

    def __init__(self, linger: int = 0):
        self.endpoint: Optional[str] = None
        self.linger = int(linger)
        self.socket: Optional[zmq.Socket] = None
        self._more = False

    def _socket(self) -> zmq.Socket:
        socket = self.socket
        if socket is None:
            raise TransportConnectionError("not connected")
        return socket

    def connect(self, endpoint: str) -> None:
        if self.socket is not None:
            self.close()

        socket = zmq_context.socket(zmq.REQ)
        socket.setsockopt(zmq.LINGER, self.linger)

        try:
            socket.connect(endpoint)
        except zmq.ZMQError as exc:
            socket.close()
            raise TransportConnectionError(f"cannot connect to {endpoint!r}: {exc}") from exc

        logger.info("connecting to server: %s", endpoint)
        self.endpoint = endpoint
        self.socket = socket
        self._more = False

    def close(self) -> None:
        socket = self.socket
        if socket is None:
            return

        self.socket = None
        self._more = False
        socket.close()

    def send(self, data: bytes) -> None:
        socket = self._socket()
        try:
            socket.send(data)
        except zmq.ZMQError as exc:
            raise TransportError(f"send to {self.endpoint!r} failed: {exc}") from exc

    def recv(self) -> memoryview:
        socket = self._socket()
        try:
            frame = socket.recv(copy=False)
            self._more = bool(socket.getsockopt(zmq.RCVMORE))
        except zmq.ZMQError as exc:
            raise TransportError(f"receive from {self.endpoint!r} failed: {exc}") from exc

        return frame.buffer

    @property
    def more(self) -> bool:
        return self._more

    @property
    def is_open(self) -> bool:
        return self.socket is not None


def _cleanup() -> None:
    try:
        zmq_context.term()
    except zmq.ZMQError:
        pass


atexit.register(_cleanup)
