""" Deferred-decode wrapper for msgpack values carried inline in a bridge
    reply. The :class:`Value` holds the still-encoded bytes of one value;
    nothing is converted until the caller asks for a specific type.
"""

import enum

import msgspec

from . import codec
from ..errors import DecodeError


class WireType(enum.Enum):
    """ The msgpack type of an encoded value, as declared on the wire.
    """

    NIL = 'nil'
    BOOL = 'bool'
    UINT = 'uint'
    INT = 'int'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'
    STR = 'str'
    ARRAY = 'array'
    MAP = 'map'
    BIN = 'bin'
    EXT = 'ext'


    def __str__(self):
        return self.value


# end of class WireType



# Format byte lookup for everything outside the fixed-size ranges; see
# wire_type() below for the ranges.

_format_bytes = {
    0xc0: WireType.NIL,
    0xc2: WireType.BOOL,
    0xc3: WireType.BOOL,
    0xc4: WireType.BIN,
    0xc5: WireType.BIN,
    0xc6: WireType.BIN,
    0xc7: WireType.EXT,
    0xc8: WireType.EXT,
    0xc9: WireType.EXT,
    0xca: WireType.FLOAT32,
    0xcb: WireType.FLOAT64,
    0xcc: WireType.UINT,
    0xcd: WireType.UINT,
    0xce: WireType.UINT,
    0xcf: WireType.UINT,
    0xd0: WireType.INT,
    0xd1: WireType.INT,
    0xd2: WireType.INT,
    0xd3: WireType.INT,
    0xd4: WireType.EXT,
    0xd5: WireType.EXT,
    0xd6: WireType.EXT,
    0xd7: WireType.EXT,
    0xd8: WireType.EXT,
    0xd9: WireType.STR,
    0xda: WireType.STR,
    0xdb: WireType.STR,
    0xdc: WireType.ARRAY,
    0xdd: WireType.ARRAY,
    0xde: WireType.MAP,
    0xdf: WireType.MAP,
}


def wire_type(encoded):
    """ Return the :class:`WireType` of the msgpack value in *encoded*.
        Signed integer encodings that hold a non-negative value report
        :attr:`WireType.UINT`, the same as a msgpack object model would.
    """

    encoded = memoryview(encoded)

    if len(encoded) == 0:
        raise DecodeError('empty msgpack value')

    first = encoded[0]

    if first <= 0x7f:
        return WireType.UINT
    if first <= 0x8f:
        return WireType.MAP
    if first <= 0x9f:
        return WireType.ARRAY
    if first <= 0xbf:
        return WireType.STR
    if first >= 0xe0:
        return WireType.INT

    try:
        type = _format_bytes[first]
    except KeyError:
        raise DecodeError('invalid msgpack format byte: 0x%02x' % (first))

    if type is WireType.INT and codec.decode(encoded) >= 0:
        type = WireType.UINT

    return type



class Value:
    """ A single msgpack-encoded value, decoded on demand. The *encoded*
        argument is any bytes-like object, typically a :class:`msgspec.Raw`
        slice of a larger payload frame.

        Use :func:`as_type` for a checked conversion to a specific Python
        type, or :func:`decode` to get whatever the natural Python
        representation is.
    """

    __slots__ = ('_encoded', '_wire_type')

    def __init__(self, encoded):

        if isinstance(encoded, (bytes, msgspec.Raw)):
            pass
        else:
            encoded = bytes(encoded)

        self._encoded = encoded
        self._wire_type = None


    def __repr__(self):
        return 'Value(%s: %r)' % (self.wire_type, self.decode())


    def __eq__(self, other):
        if isinstance(other, Value):
            return bytes(self._encoded) == bytes(other._encoded)
        return NotImplemented


    def __hash__(self):
        return hash(bytes(self._encoded))


    def __len__(self):

        type = self.wire_type

        if type is WireType.ARRAY or type is WireType.MAP or \
           type is WireType.STR or type is WireType.BIN:
            return len(self.decode())

        raise TypeError(str(type) + ' value has no length')


    def as_type(self, type):
        """ Decode the held value as *type*, which is anything msgspec
            accepts as a type annotation: int, float, str, bytes, list,
            typing.List[int], and so on. Conversions that would lose
            information are refused; a float will not be truncated to an
            int, for example. A :class:`kbridge.errors.TypeMismatchError`
            is raised if the held value cannot be represented as *type*.
        """

        return codec.decode_as(self._encoded, type)


    def decode(self):
        """ Return the held value as its natural Python object.
        """

        return codec.decode(self._encoded)


    @property
    def element_type(self):
        """ The :class:`WireType` of the first element of an array value.
            None if the array is empty; a TypeError is raised if the held
            value is not an array.
        """

        if self.wire_type is not WireType.ARRAY:
            raise TypeError(str(self.wire_type) + ' value has no elements')

        elements = codec.decode_as(self._encoded, list[msgspec.Raw])

        if len(elements) == 0:
            return None

        return wire_type(elements[0])


    @property
    def encoded(self):
        """ The raw msgpack bytes for this value.
        """

        return bytes(self._encoded)


    @property
    def wire_type(self):
        """ The :class:`WireType` declared on the wire for this value.
        """

        type = self._wire_type

        if type is None:
            type = wire_type(self._encoded)
            self._wire_type = type

        return type


# end of class Value


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
