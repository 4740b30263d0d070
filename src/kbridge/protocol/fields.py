"""Protocol constants.

Keep these in one place to avoid stringly-typed header handling.
"""

# The one and only request a client ever sends.
TRIGGER = b"next"

# Content kinds declared in the 'content' field of a header.
MSGPACK = "msgpack"
ARRAY = "array"
IMAGE_DATA = "ImageData"

ARRAY_KINDS = frozenset((ARRAY, IMAGE_DATA))
CONTENT_KINDS = frozenset((MSGPACK, ARRAY, IMAGE_DATA))

# Header keys
CONTENT = "content"
SOURCE = "source"
PATH = "path"
SHAPE = "shape"
DTYPE = "dtype"

# Key in a msgpack payload whose map is flattened into the package.
METADATA = "metadata"
