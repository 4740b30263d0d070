import gc
import sys

import numpy
import pytest

from kbridge.errors import DecodeError, FramingError, SizeOverflowError, \
                          TypeMismatchError, UsageError
from kbridge.protocol.array import ArrayView, array_size, normalize_dtype
from kbridge.protocol.package import DataPackage


def test_normalize_dtype():

    assert normalize_dtype('uint16') == 'uint16'
    assert normalize_dtype('int8') == 'int8'
    assert normalize_dtype('uint64_t') == 'uint64'
    assert normalize_dtype('int32_t') == 'int32'
    assert normalize_dtype('float32') == 'float32'
    assert normalize_dtype('float64') == 'float64'
    assert normalize_dtype('float') == 'float32'
    assert normalize_dtype('double') == 'float64'
    assert normalize_dtype(numpy.dtype('uint16').str) == 'uint16'
    assert normalize_dtype('not_a_type') == 'not_a_type'

    # Only native-endian fixed-size numeric types are normalized.
    swapped = numpy.dtype('uint16').newbyteorder().str
    assert normalize_dtype(swapped) == swapped
    for name in ('object', 'O', 'U', 'S', 'M8', 'V', 'complex64'):
        assert normalize_dtype(name) == name


def test_array_size():

    assert array_size((2, 3, 4)) == 24
    assert array_size(()) == 1
    assert array_size((0, 5)) == 0
    assert array_size([sys.maxsize]) == sys.maxsize

    with pytest.raises(SizeOverflowError):
        array_size((2**40, 2**40))

    with pytest.raises(OverflowError):
        array_size((sys.maxsize, 2))


def test_view():

    original = numpy.arange(6, dtype=numpy.int32).reshape(2, 3)
    payload = original.tobytes()

    array = ArrayView(payload, (2, 3), 'int32')

    assert array.shape == (2, 3)
    assert array.dtype == 'int32'
    assert array.size() == 6
    assert array.nbytes() == 24

    viewed = array.view()
    assert viewed.shape == (2, 3)
    assert viewed.dtype == numpy.int32
    assert (viewed == original).all()
    assert viewed.flags.writeable == False
    assert numpy.shares_memory(viewed, numpy.frombuffer(payload, dtype=numpy.uint8))


def test_as_type():

    original = numpy.arange(12, dtype=numpy.uint16)
    payload = original.tobytes()

    array = ArrayView(payload, (3, 4), 'uint16')
    copied = array.as_type(numpy.uint16)

    assert copied.shape == (12,)
    assert (copied == original).all()
    assert copied.tobytes() == payload
    assert not numpy.shares_memory(copied, numpy.frombuffer(payload, dtype=numpy.uint8))

    copied[0] = 99
    assert array.view()[0, 0] == 0

    assert (array.as_type('uint16') == original).all()


def test_as_type_mismatch():

    payload = numpy.zeros(4, dtype=numpy.float32).tobytes()
    array = ArrayView(payload, (4,), 'float32')

    for wrong in (numpy.float64, numpy.int32, numpy.uint32, numpy.uint8, float, int):
        with pytest.raises(TypeMismatchError):
            array.as_type(wrong)

    with pytest.raises(TypeMismatchError):
        array.as_type('not_a_type')

    assert array.as_type(numpy.float32).dtype == numpy.float32


def test_unknown_dtype():

    array = ArrayView(b'abcd', (4,), 'mystery')

    assert array.dtype == 'mystery'
    assert array.nbytes() == 0
    assert array.size() == 4

    with pytest.raises(TypeMismatchError):
        array.as_type(numpy.uint8)

    with pytest.raises(TypeMismatchError):
        array.view()


def test_empty():

    array = ArrayView(b'', (0, 3), 'uint8')

    assert array.size() == 0
    assert array.as_type(numpy.uint8).shape == (0,)
    assert array.view().shape == (0, 3)


def test_bounds():

    with pytest.raises(FramingError):
        ArrayView(b'\x00' * 7, (2, 2), 'uint16')

    with pytest.raises(DecodeError):
        ArrayView(b'\x00' * 8, (2, -2), 'uint16')

    with pytest.raises(SizeOverflowError):
        ArrayView(b'', (2**40, 2**40), 'uint8')


def test_released_package():

    payload = numpy.arange(4, dtype=numpy.uint8).tobytes()

    package = DataPackage('source')
    array = package.add_array('data', payload, (4,), 'uint8')
    assert array.as_type(numpy.uint8).tolist() == [0, 1, 2, 3]

    package.release()

    with pytest.raises(UsageError):
        array.as_type(numpy.uint8)

    with pytest.raises(UsageError):
        array.view()

    # Metadata remains available.
    assert array.shape == (4,)


def test_discarded_package():

    payload = numpy.arange(4, dtype=numpy.uint8).tobytes()

    package = DataPackage('source')
    array = package.add_array('data', payload, (4,), 'uint8')

    del package
    gc.collect()

    with pytest.raises(UsageError):
        array.view()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
