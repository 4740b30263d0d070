""" Decode the multipart reply of a bridge server into per-source
    :class:`kbridge.protocol.package.DataPackage` instances.

    A reply is a flat sequence of frames, always in (header, payload) pairs.
    Every header is a msgpack map declaring the 'content' of the payload
    that follows it and the 'source' it belongs to. A 'msgpack' payload
    opens a new group for its source; any number of 'array' or 'ImageData'
    payloads may follow, each of which adds one array to the open group.
    The group is closed by the next 'msgpack' header or the end of the reply.
"""

from __future__ import annotations

import logging
from typing import Dict, List, NamedTuple, Optional, Sequence

from . import codec
from . import fields
from .package import DataPackage
from ..errors import FramingError, MissingFieldError, UnknownContentKindError


logger = logging.getLogger(__name__)


class GroupOpen(NamedTuple):
    """Decoder state while a group is being filled."""

    package: DataPackage
    source: str


# The decoder state is either NO_GROUP_OPEN or a GroupOpen instance.
NO_GROUP_OPEN = None


def _field(header: dict, name: str, type, content: Optional[str] = None):
    try:
        raw = header[name]
    except KeyError:
        raise MissingFieldError(name, content) from None

    return codec.decode_as(raw, type)


class Decoder:
    """Incremental decoder for the (header, payload) pairs of one reply.

    Call :meth:`feed` once per pair, in order, then :meth:`finish` to get
    the completed reply. If *check_source* is true, every pair in a group
    must name the same source as the header that opened it.
    """

    def __init__(self, check_source: bool = False):
        self.check_source = check_source
        self.state: Optional[GroupOpen] = NO_GROUP_OPEN
        self.reply: Dict[str, DataPackage] = {}

    def _seal(self) -> None:
        state = self.state
        if state is NO_GROUP_OPEN:
            return

        if state.source in self.reply:
            raise FramingError(f"source {state.source!r} appears in more than one group")

        logger.debug("sealed %s: %d values, %d arrays", state.source,
                     len(state.package.values), len(state.package.arrays))
        self.reply[state.source] = state.package
        self.state = NO_GROUP_OPEN

    def feed(self, header_frame, payload_frame) -> None:
        header = codec.decode_map(header_frame)
        content = _field(header, fields.CONTENT, str)
        source = _field(header, fields.SOURCE, str, content)

        if content == fields.MSGPACK:
            self._seal()

            package = DataPackage(source)
            package.retain(header_frame)
            package.add_values(codec.decode_map(payload_frame))
            package.retain(payload_frame)

            self.state = GroupOpen(package, source)

        elif content in fields.ARRAY_KINDS:
            state = self.state
            if state is NO_GROUP_OPEN:
                raise FramingError(f"'{content}' payload for {source!r} arrived before any 'msgpack' payload opened a group")

            if self.check_source and source != state.source:
                raise FramingError(f"'{content}' payload for {source!r} found in the group for {state.source!r}")

            path = _field(header, fields.PATH, str, content)
            shape = _field(header, fields.SHAPE, List[int], content)
            dtype = _field(header, fields.DTYPE, str, content)

            state.package.retain(header_frame)
            state.package.add_array(path, payload_frame, shape, dtype)

        else:
            expected = ', '.join(sorted(fields.CONTENT_KINDS))
            raise UnknownContentKindError(f"unknown data content: {content!r}, expected one of {expected}")

    def finish(self) -> Dict[str, DataPackage]:
        self._seal()
        return self.reply


def decode(frames: Sequence, check_source: bool = False) -> Dict[str, DataPackage]:
    """Decode a complete multipart reply.

    Returns a dictionary of source name to :class:`DataPackage`, in the
    order the groups appeared. An empty frame sequence is an empty reply.
    Any error aborts the whole decode; there is no partial result.
    """

    count = len(frames)
    if count % 2:
        raise FramingError(f"the multipart message is expected to contain (header, data) pairs, got {count} frames")

    decoder = Decoder(check_source=check_source)
    for index in range(0, count, 2):
        decoder.feed(frames[index], frames[index + 1])

    return decoder.finish()
