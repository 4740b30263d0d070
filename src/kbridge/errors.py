""" Exceptions raised by the bridge protocol decoder and client session.
    Each of these aborts the operation that raised it; nothing is retried
    internally, the protocol is strictly one request, one reply.
"""


class BridgeError(Exception):
    """ Base class for all bridge protocol errors.
    """


class FramingError(BridgeError, ValueError):
    """ The multipart reply does not follow the (header, payload) pairing,
        or the pairs arrive in an order that cannot be grouped. A source
        that opens more than one group in the same reply is also a framing
        error.
    """


class MissingFieldError(BridgeError, LookupError):
    """ A header lacks a field required for its content kind.
    """

    def __init__(self, field, content=None):

        self.field = field
        self.content = content

        if content is None:
            message = 'header is missing required field: ' + repr(field)
        else:
            message = "'%s' header is missing required field: %r" % (content, field)

        BridgeError.__init__(self, message)


    def __str__(self):
        return self.args[0]


class UnknownContentKindError(BridgeError, ValueError):
    """ A header declared a content kind this decoder does not handle.
    """


class TypeMismatchError(BridgeError, TypeError):
    """ A typed cast was requested on a value or array of another type.
    """


class SizeOverflowError(BridgeError, OverflowError):
    """ The product of an array shape exceeds the platform size type.
    """


class UsageError(BridgeError, RuntimeError):
    """ An operation was invoked from a state where it is not valid.
    """


class DecodeError(BridgeError, ValueError):
    """ The codec could not interpret a byte range.
    """


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
