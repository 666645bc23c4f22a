from importlib import metadata  # since 3.8

__version__ = metadata.version("pystreambuffer")

from .definitions import UNKNOWN_SIZE, Characteristic
from .errors import IllegalStateError, InvalidArgument, StreamBufferError
from .splitter import IteratorSplitter, SequenceSplitter, Splitter, splitter_of
from .batching import StreamBuffer, buffer
from .stream import collect, partitions
from . import log
