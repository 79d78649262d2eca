"""
Sequential bit and byte reader over an immutable byte buffer.

This module provides bit-level and byte-level access to in-memory binary
data through a single cursor, used for parsing fields that are not
byte-aligned (packet headers, file headers, compressed bitstreams).

Bit Ordering:
Bits are addressed MSB-first within each byte:
- Bit offset 0 is bit position 7 (MSB) of byte 0
- Bit offset 7 is bit position 0 (LSB) of byte 0
Multi-bit values are big-endian: the first bit read is the most
significant bit of the result.

Peek operations never move the cursor. Read operations perform the
equivalent peek at the cursor and advance it only once the read has
succeeded, except read_bytes and read_string, which always advance by
the requested byte count.
"""

import codecs

from binarykit.errors import NotStringError, OutOfBoundsError

BITS_PER_BYTE = 8

HEX_DIGITS = "0123456789abcdefABCDEF"


def decode_hex(text: str) -> "bytes | None":
    """
    Decode a string of hexadecimal digit pairs into bytes.

    Args:
        text: Hex text, two digits per byte, no separators or prefix

    Returns:
        Decoded bytes, or None if the length is odd or any character
        is not a hex digit
    """
    if len(text) % 2 != 0:
        return None

    out = bytearray()
    for i in range(0, len(text), 2):
        chunk = text[i : i + 2]
        # int() alone would accept "+f", " f" and "_f"
        if chunk[0] not in HEX_DIGITS or chunk[1] not in HEX_DIGITS:
            return None
        out.append(int(chunk, 16))

    return bytes(out)


class BitReader:
    """Sequential bit/byte reader with an absolute bit cursor."""

    def __init__(self, data) -> None:
        """
        Initialize a reader positioned at bit 0.

        Args:
            data: bytes, bytearray, memoryview or iterable of ints 0-255
        """
        self._data = bytes(data)
        self._total_bits = len(self._data) * BITS_PER_BYTE
        self.position = 0

    @classmethod
    def from_hex(cls, text: str) -> "BitReader | None":
        """
        Create a reader from hexadecimal text such as ``"A5FF"``.

        Returns:
            New reader, or None if ``text`` is not valid hex
        """
        data = decode_hex(text)
        if data is None:
            return None
        return cls(data)

    @property
    def data(self) -> bytes:
        """The underlying buffer."""
        return self._data

    @property
    def total_bits(self) -> int:
        return self._total_bits

    @property
    def remaining(self) -> int:
        """Number of bits remaining to read."""
        return self._total_bits - self.position

    @property
    def is_aligned(self) -> bool:
        """True if the cursor sits on a byte boundary."""
        return self.position % BITS_PER_BYTE == 0

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitReader):
            return NotImplemented
        return self._data == other._data and self.position == other.position

    def __repr__(self) -> str:
        return f"BitReader(data={self._data.hex()!r}, position={self.position})"

    # Cursor

    def reset_cursor(self) -> None:
        """Move the cursor back to the first bit."""
        self.position = 0

    # Bits

    def peek_bit(self, index: int) -> int:
        """
        Return the bit at an absolute bit offset.

        Args:
            index: Bit offset from the MSB of byte 0

        Returns:
            Bit value (0 or 1)

        Raises:
            OutOfBoundsError: If the offset is outside the buffer
        """
        byte_index = index // BITS_PER_BYTE
        if index < 0 or byte_index >= len(self._data):
            raise OutOfBoundsError(
                f"Bit index {index} out of bounds for {self._total_bits} bits",
                index,
                self._total_bits,
            )

        # MSB-first: bit offset 0 is bit 7 of the byte
        shift = 7 - (index % BITS_PER_BYTE)
        return (self._data[byte_index] >> shift) & 1

    def peek_bits(self, start: int, end: int) -> int:
        """
        Return the bits in ``[start, end)`` as an unsigned integer.

        The bit at ``start`` is the most significant bit of the result.
        An empty range returns 0.

        Raises:
            OutOfBoundsError: If the range is outside the buffer
        """
        if end < 0 or end > self._total_bits:
            raise OutOfBoundsError(
                f"Bit range end {end} out of bounds for {self._total_bits} bits",
                end,
                self._total_bits,
            )
        if start > end:
            raise OutOfBoundsError(
                f"Bit range start {start} is past end {end}", start, end
            )

        result = 0
        for index in range(start, end):
            result = (result << 1) | self.peek_bit(index)

        return result

    def read_bit(self) -> int:
        """
        Read and consume a single bit.

        Returns:
            Bit value (0 or 1)

        Raises:
            OutOfBoundsError: If no more bits are available
        """
        bit = self.peek_bit(self.position)
        self.position += 1
        return bit

    def read_bits(self, count: int) -> int:
        """
        Read and consume ``count`` bits as an unsigned integer.

        Args:
            count: Number of bits to read (0 returns 0)

        Returns:
            Integer value of the bits (MSB-first)

        Raises:
            OutOfBoundsError: If ``count`` is negative or not enough bits
                are available
        """
        end = self.position + count
        if count < 0 or end > self._total_bits:
            raise OutOfBoundsError(
                f"Not enough bits: need {count}, have {self.remaining}",
                end,
                self._total_bits,
            )

        value = self.peek_bits(self.position, end)
        self.position = end
        return value

    # Bytes

    def peek_byte(self, index: int) -> int:
        """
        Return the byte at ``index``.

        Raises:
            OutOfBoundsError: Unless ``0 <= index < len(data)``
        """
        if index < 0 or index >= len(self._data):
            raise OutOfBoundsError(
                f"Byte index {index} out of bounds for {len(self._data)} bytes",
                index,
                len(self._data),
            )
        return self._data[index]

    def peek_bytes(self, start: int, end: int) -> bytes:
        """
        Return the bytes in ``[start, end)``.

        Raises:
            OutOfBoundsError: If the range is outside the buffer
        """
        size = len(self._data)
        if end < 0 or end > size:
            raise OutOfBoundsError(
                f"Byte range end {end} out of bounds for {size} bytes", end, size
            )
        # Negative starts would wrap around in a slice
        if start < 0 or start > end:
            raise OutOfBoundsError(
                f"Byte range start {start} invalid for end {end}", start, end
            )
        return self._data[start:end]

    def read_byte(self) -> int:
        """
        Read the byte containing the cursor and advance by 8 bits.

        Raises:
            OutOfBoundsError: If the cursor is past the last byte
        """
        value = self.peek_byte(self.position // BITS_PER_BYTE)
        self.position += BITS_PER_BYTE
        return value

    def read_bytes(self, count: int) -> bytes:
        """
        Read ``count`` bytes and advance by ``count * 8`` bits.

        The window starts at the byte containing the cursor, so on an
        unaligned cursor the returned bytes begin before the cursor while
        the advance is still measured from the cursor itself. Check
        ``is_aligned`` first when mixing bit and byte reads.

        The advance happens even if the range is out of bounds, so a
        failed read leaves the cursor past the end of the buffer.

        Raises:
            OutOfBoundsError: If ``count`` is negative or the range is
                outside the buffer
        """
        if count < 0:
            raise OutOfBoundsError(
                f"Byte count {count} is negative", count, len(self._data)
            )

        byte_cursor = self.position // BITS_PER_BYTE
        try:
            return self.peek_bytes(byte_cursor, byte_cursor + count)
        finally:
            self.position += count * BITS_PER_BYTE

    # Derived values

    def read_string(self, count: int, encoding: str = "utf-8") -> str:
        """
        Read ``count`` bytes and decode them as text.

        The cursor advances before decoding and is not rolled back if
        decoding fails.

        Args:
            count: Number of bytes to read
            encoding: Any codec name known to Python

        Raises:
            OutOfBoundsError: If not enough bytes are available
            NotStringError: If the encoding is unknown or the bytes are
                invalid for it
        """
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            raise NotStringError(f"Unknown encoding: {encoding}", encoding) from e

        raw = self.read_bytes(count)
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError as e:
            raise NotStringError(
                f"Invalid {encoding} at offset {e.start} of {count} bytes: {e.reason}",
                encoding,
            ) from e

    def read_character(self) -> str:
        """Read one byte as a character (code point 0-255)."""
        return chr(self.read_byte())

    def read_bool(self) -> bool:
        """Read one bit as a boolean."""
        return self.read_bit() == 1
