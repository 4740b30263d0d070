""" Zero-copy views over array payloads in a bridge reply. An
    :class:`ArrayView` does not own the bytes it describes; it borrows them
    from a payload frame retained by a :class:`kbridge.protocol.package.DataPackage`.
"""

import numbers
import sys
import weakref

import numpy

from ..errors import DecodeError, FramingError, SizeOverflowError, \
                     TypeMismatchError, UsageError


# C-style names for the floating point types; the integer types are handled
# by stripping the fixed-width suffix, uint16_t becomes uint16.

_aliases = {
    'float': 'float32',
    'double': 'float64',
}

# Fixed-size numeric kinds: boolean, signed, unsigned, floating point.
_numeric_kinds = 'biuf'


def _numeric_dtype(name):
    """ Return the numpy dtype for *name*, or None if *name* does not
        describe a fixed-size numeric type in native byte order. Only those
        can be read in place from a payload frame.
    """

    try:
        dtype = numpy.dtype(name)
    except (TypeError, ValueError):
        return None

    if dtype.kind not in _numeric_kinds or dtype.itemsize == 0:
        return None

    if dtype.byteorder not in '=|':
        return None

    return dtype



def normalize_dtype(name):
    """ Return the canonical numpy name for the element type *name* declared
        in an array header. Servers describe element types with portable
        names such as 'uint16' or 'float32'; these pass through unchanged.
        Names that do not describe a native-endian numeric type are returned
        as-is, and any :class:`ArrayView` carrying one will refuse every
        typed cast.
    """

    name = str(name)
    candidate = _aliases.get(name, name)

    if candidate.endswith('_t'):
        candidate = candidate[:-2]

    dtype = _numeric_dtype(candidate)
    if dtype is None:
        return name

    return dtype.name



def array_size(shape):
    """ Return the number of elements described by *shape*. The product is
        accumulated one dimension at a time, and a
        :class:`kbridge.errors.SizeOverflowError` is raised as soon as it
        would exceed the largest size the platform can index.
    """

    maximum = sys.maxsize
    size = 1

    for dimension in shape:
        if dimension != 0 and size > maximum // dimension:
            raise SizeOverflowError('unmanageable array size: ' + repr(tuple(shape)))
        size *= dimension

    return size



class ArrayView:
    """ Describe the contents of *buffer* as an N-dimensional array with
        the given *shape* and element type *dtype*. The *buffer* is any
        bytes-like object; no copy is made. If *package* is provided the
        view is bound to its lifetime: once that package is released or
        discarded, the view refuses further access.

        The view only materializes data on request: :func:`view` returns a
        read-only numpy array sharing the borrowed memory, :func:`as_type`
        returns an independent copy after confirming the element type.
    """

    def __init__(self, buffer, shape, dtype, package=None):

        buffer = memoryview(buffer)
        if buffer.ndim != 1 or buffer.format != 'B':
            buffer = buffer.cast('B')

        shape = tuple(shape)

        for dimension in shape:
            if isinstance(dimension, bool) or not isinstance(dimension, numbers.Integral):
                raise DecodeError('array dimensions must be integers: ' + repr(shape))
            if dimension < 0:
                raise DecodeError('array dimensions must be non-negative: ' + repr(shape))

        shape = tuple(int(dimension) for dimension in shape)

        self._buffer = buffer
        self._shape = shape
        self._dtype = normalize_dtype(dtype)
        self._numpy_dtype = _numeric_dtype(self._dtype)

        if package is None:
            self._package = None
        else:
            self._package = weakref.ref(package)

        # Confirm the array fits inside the buffer it borrows from. This
        # can only be known for numeric element types.

        itemsize = self._itemsize()
        if itemsize is not None:
            required = self.nbytes()
            if required > len(buffer):
                raise FramingError('array payload holds %d bytes, %r of %s requires %d' % (len(buffer), shape, self._dtype, required))


    def __repr__(self):
        return 'ArrayView(shape=%r, dtype=%r)' % (self._shape, self._dtype)


    def _check_alive(self):

        if self._package is None:
            return

        package = self._package()

        if package is None or package.released:
            raise UsageError('the data package backing this array has been released')


    def _itemsize(self):

        if self._numpy_dtype is None:
            return None

        return self._numpy_dtype.itemsize


    def as_type(self, dtype):
        """ Return a new, independent one-dimensional numpy array holding
            :func:`size` elements of type *dtype*. The requested *dtype*
            must exactly match the element type declared by the server; no
            widening or narrowing is performed. A
            :class:`kbridge.errors.TypeMismatchError` is raised otherwise.
        """

        self._check_alive()

        try:
            requested = numpy.dtype(dtype)
        except (TypeError, ValueError):
            raise TypeMismatchError('not an array element type: ' + repr(dtype))

        if self._numpy_dtype is None:
            raise TypeMismatchError('unknown array element type: ' + repr(self._dtype))

        # dtype equality includes byte order; '>u2' does not match 'uint16'.
        if requested != self._numpy_dtype:
            raise TypeMismatchError("array holds '%s', cannot cast to '%s'" % (self._dtype, requested.str))

        size = self.size()

        if size == 0:
            return numpy.empty(0, dtype=requested)

        serialized = numpy.frombuffer(self._buffer, dtype=requested, count=size)
        return serialized.copy()


    def view(self):
        """ Return a read-only numpy array of the declared shape that shares
            memory with the originating payload frame.
        """

        self._check_alive()

        dtype = self._numpy_dtype
        if dtype is None:
            raise TypeMismatchError('unknown array element type: ' + repr(self._dtype))

        size = self.size()

        if size == 0:
            array = numpy.empty(self._shape, dtype=dtype)
        else:
            serialized = numpy.frombuffer(self._buffer, dtype=dtype, count=size)
            array = numpy.reshape(serialized, self._shape)

        array.flags.writeable = False
        return array


    def nbytes(self):
        """ The number of bytes spanned by the array. Zero if the element
            type is not known.
        """

        itemsize = self._itemsize()
        if itemsize is None:
            return 0

        return array_size(self._shape + (itemsize,))


    def size(self):
        """ The number of elements in the array.
        """

        return array_size(self._shape)


    @property
    def dtype(self):
        return self._dtype


    @property
    def shape(self):
        return self._shape


# end of class ArrayView


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
