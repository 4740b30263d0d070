""" Human-readable renderings of bridge replies, for exploring a data
    stream without knowing its structure in advance. Nothing here is used
    on the typed data path; these functions exist for operators and
    debugging sessions, and they never raise on malformed input.
"""

import msgspec

from . import codec
from .value import WireType
from ..errors import DecodeError


separator = '\n----------new message----------\n'
indent = '    '
parse_error = 'parse error\n'


def _format_key(key, depth):

    if isinstance(key, (bytes, bytearray)):
        return key.decode(errors='replace')

    return _format_value(key, depth)



def _format_value(value, depth):
    """ Recursive helper for :func:`format_frame`. The *depth* is the number
        of maps enclosing *value*, and sets the indentation of any map
        entries *value* contains.
    """

    if value is None:
        return 'null'

    if value is True:
        return 'true'

    if value is False:
        return 'false'

    if isinstance(value, int):
        return str(value)

    if isinstance(value, float):
        return '%g' % (value)

    if isinstance(value, str):
        return '"' + value + '"'

    if isinstance(value, (bytes, bytearray, memoryview)):
        return '(bin)'

    if isinstance(value, msgspec.msgpack.Ext):
        return ''

    if isinstance(value, (list, tuple)):
        items = [_format_value(item, depth) for item in value]
        return '[' + ','.join(items) + ']'

    if isinstance(value, dict):
        prefix = '\n' + indent * depth
        entries = list()

        for key, item in value.items():
            entry = prefix + _format_key(key, depth) + ': ' + _format_value(item, depth + 1)
            entries.append(entry)

        return ','.join(entries)

    return repr(value)



def format_frame(frame):
    """ Render the msgpack document in *frame* as indented text. Map entries
        are placed one per line, indented four spaces for each enclosing
        map; arrays are rendered inline. A frame that cannot be parsed
        renders as a 'parse error' notice instead of raising an exception.
    """

    # Nesting deeper than the interpreter's recursion limit is unprintable.

    try:
        value = codec.decode(frame)
        text = _format_value(value, 0)
    except (DecodeError, RecursionError):
        return parse_error

    return text + '\n'



def format_frames(frames, boundary=True):
    """ Render every frame of a multipart message via :func:`format_frame`,
        each preceded by a separator line if *boundary* is True.
    """

    output = list()

    for frame in frames:
        if boundary:
            output.append(separator)
        output.append(format_frame(frame))

    return ''.join(output)



def format_shape(shape):
    return '[' + ', '.join(str(dimension) for dimension in shape) + ']'



def describe(reply):
    """ Summarize a decoded reply, as returned by
        :func:`kbridge.protocol.decoder.decode`: for each source, the total
        bytes received and a table listing the path, type, element type,
        and shape of every field.
    """

    lines = list()

    for source, package in reply.items():
        lines.append('source: ' + str(source))
        lines.append('Total bytes received: ' + str(package.size()))
        lines.append('')
        lines.append('path, type, container data type, container shape')

        for key in sorted(package.values):
            value = package.values[key]
            type = value.wire_type

            if type is WireType.ARRAY:
                length = len(value)
                if length == 0:
                    line = '%s, %s, , [0]' % (key, type)
                else:
                    line = '%s, %s, %s, [%d]' % (key, type, value.element_type, length)

            elif type is WireType.BIN:
                line = '%s, %s, byte, [%d]' % (key, type, len(value))

            elif type is WireType.MAP or type is WireType.EXT:
                line = '%s, %s (unexpected data type)' % (key, type)

            else:
                line = '%s, %s' % (key, type)

            lines.append(line)

        for key in sorted(package.arrays):
            view = package.arrays[key]
            lines.append('%s: Array, %s, %s' % (key, view.dtype, format_shape(view.shape)))

        lines.append('')

    if lines:
        lines.append('')

    return '\n'.join(lines)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
