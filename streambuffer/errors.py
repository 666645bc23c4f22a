"""Exceptions raised by streambuffer.

Errors raised by a source while it is being consumed are not wrapped: they
propagate to the caller unchanged.
"""


class StreamBufferError(Exception):
    """Base class for every error raised by this package"""

    pass


class InvalidArgument(StreamBufferError, ValueError):
    """A batching parameter is out of range.

    Raised when a splitter is created, never during traversal.
    """

    pass


class IllegalStateError(StreamBufferError):
    """An operation is not supported in the splitter's current configuration,
    e.g. asking an unsorted source for its comparator."""

    pass
