"""
binarykit

Sequential bit and byte level reader for parsing binary formats
(network packets, file headers, compressed bitstreams) whose fields
are not byte-aligned.
"""

__version__ = "1.0.0"

from binarykit.bitreader import BITS_PER_BYTE, BitReader, decode_hex
from binarykit.errors import BinaryError, NotStringError, OutOfBoundsError

__all__ = [
    "BitReader",
    "decode_hex",
    "BITS_PER_BYTE",
    "BinaryError",
    "OutOfBoundsError",
    "NotStringError",
    "__version__",
]
