""" The per-source result of decoding one group of (header, payload) pairs
    from a bridge reply.
"""

from . import codec
from . import fields
from .array import ArrayView
from .value import Value, WireType
from ..errors import UsageError


class DataPackage:
    """ A :class:`DataPackage` collects everything one logical *source*
        contributed to a reply. Inline values are available via
        :attr:`values` as :class:`kbridge.protocol.value.Value` instances;
        array payloads are available via :attr:`arrays` as
        :class:`kbridge.protocol.array.ArrayView` instances. Item access,
        ``package['key']``, looks in both, inline values first.

        The package owns the frames its array views borrow from. Calling
        :func:`release` drops those frames and invalidates every view that
        was created against this package; views are likewise invalidated
        if the package itself is garbage collected.

        :ivar values: Dictionary of path to Value.
        :ivar arrays: Dictionary of path to ArrayView.
    """

    def __init__(self, source=None):

        self.source = source
        self.values = dict()
        self.arrays = dict()
        self.released = False

        self._frames = list()


    def __contains__(self, key):
        return key in self.values or key in self.arrays


    def __getitem__(self, key):
        try:
            return self.values[key]
        except KeyError:
            return self.arrays[key]


    def __iter__(self):
        return iter(self.keys())


    def __len__(self):
        return len(self.values) + len(self.arrays)


    def __repr__(self):
        return 'DataPackage(%r, values=%r, arrays=%r)' % (self.source, sorted(self.values), sorted(self.arrays))


    def keys(self):
        """ Return all paths in this package, inline values first.
        """

        keys = list(self.values.keys())
        keys.extend(self.arrays.keys())
        return keys


    def add_array(self, path, buffer, shape, dtype):
        """ Create an :class:`ArrayView` over *buffer* and store it under
            *path*. The *buffer* is retained for the lifetime of the package.
        """

        if self.released:
            raise UsageError('cannot add to a released data package')

        view = ArrayView(buffer, shape, dtype, package=self)
        self.retain(buffer)
        self.arrays[path] = view
        return view


    def add_values(self, encoded_map):
        """ Store every entry of *encoded_map*, a dictionary of key to
            encoded msgpack value, as a :class:`Value`. The 'metadata' entry,
            if it is itself a map, is flattened into the same namespace as
            the other entries. Later entries overwrite earlier ones with the
            same key, which includes metadata keys colliding with data keys.
        """

        if self.released:
            raise UsageError('cannot add to a released data package')

        for key, encoded in encoded_map.items():
            value = Value(encoded)

            if key == fields.METADATA and value.wire_type is WireType.MAP:
                for meta_key, meta_encoded in codec.decode_map(encoded).items():
                    self.values[meta_key] = Value(meta_encoded)
            else:
                self.values[key] = value


    def retain(self, frame):
        """ Keep *frame* alive for as long as this package is.
        """

        self._frames.append(frame)


    def release(self):
        """ Drop all retained frames. Any :class:`ArrayView` derived from
            this package will raise :class:`kbridge.errors.UsageError` if
            accessed afterwards.
        """

        self.released = True
        self._frames = list()


    def size(self):
        """ Total number of bytes received for this package, headers
            included.
        """

        size = 0
        for frame in self._frames:
            size += memoryview(frame).nbytes

        return size


# end of class DataPackage


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
