"""Client session: one synchronous request/reply exchange at a time."""

from __future__ import annotations

import enum
import logging
from typing import Dict, Iterator, List, Optional

from . import config
from .errors import UsageError
from .protocol import decoder, fields, printer
from .protocol.package import DataPackage
from .transport.base import Transport
from .transport.zmq import request as zmq_request


logger = logging.getLogger(__name__)


class State(enum.Enum):
    IDLE = "idle"
    AWAITING_REPLY = "awaiting reply"


class Client:
    """Request data from a bridge server.

    Every call to :meth:`next` sends the trigger request and blocks until
    the full multipart reply has arrived; there is no timeout. A session is
    not safe for concurrent use, callers needing concurrency should use one
    session per thread.

    If *transport* is not specified a ZeroMQ REQ socket is used. If
    *endpoint* is specified the session connects immediately. If
    *check_source* is not specified it is taken from :func:`kbridge.config.get`.
    """

    State = State

    def __init__(self, endpoint: Optional[str] = None, transport: Optional[Transport] = None,
                 check_source: Optional[bool] = None):

        if transport is None:
            transport = zmq_request.Client(linger=config.get().linger)

        if check_source is None:
            check_source = config.get().check_source

        self.transport = transport
        self.check_source = bool(check_source)
        self.state = State.IDLE

        if endpoint is not None:
            self.connect(endpoint)

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __iter__(self) -> Iterator[Dict[str, DataPackage]]:
        while True:
            yield self.next()

    def connect(self, endpoint: str) -> None:
        self.transport.connect(endpoint)
        self.state = State.IDLE

    def close(self) -> None:
        self.transport.close()

    def request(self) -> List:
        """Send the trigger request and return every frame of the reply.

        Only valid while the session is idle; a session left awaiting a
        reply by an earlier failure raises :class:`UsageError`.
        """

        if self.state is not State.IDLE:
            raise UsageError(f"request() called while the session is {self.state.value}")

        self.transport.send(fields.TRIGGER)
        self.state = State.AWAITING_REPLY

        frames = []
        while True:
            frames.append(self.transport.recv())
            if not self.transport.more:
                break

        self.state = State.IDLE
        logger.debug("received %d frames", len(frames))
        return frames

    def next(self) -> Dict[str, DataPackage]:
        """Request and return the next data from the server.

        Returns a dictionary of source name to :class:`DataPackage`.
        """

        return decoder.decode(self.request(), check_source=self.check_source)

    def show_message(self) -> str:
        """Render the structure of the next raw reply, frame by frame.

        This consumes data: the reply is not available to :meth:`next`.
        """

        return printer.format_frames(self.request())

    def show_next(self) -> str:
        """Summarize the structure of the next decoded reply.

        This consumes data: the reply is not available to :meth:`next`.
        """

        return printer.describe(self.next())


def connect(endpoint: Optional[str] = None, **kwargs) -> Client:
    """Return a :class:`Client` connected to *endpoint*, or to the
    configured endpoint if none is given."""

    if endpoint is None:
        endpoint = config.get().endpoint

    return Client(endpoint, **kwargs)
