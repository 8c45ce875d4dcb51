"""Bit-level packing and unpacking utilities.

This module provides low-level bit manipulation for compact binary encoding.
Integers are written most-significant bit first at arbitrary widths, so fields
need not start or end on a byte boundary. Floats are laid out as little-endian
IEEE-754 bytes, each byte streamed MSB first.
"""

from __future__ import annotations

import math
import struct

from .charsets import UTF8, CharCodec


class BitPacker:
    """Packs values bit-by-bit into a growable byte buffer.

    The buffer is a length-tracked ``bytearray`` that doubles its capacity
    whenever a write would overflow it. Only the bit-granular methods below
    touch it.

    Example:
        >>> packer = BitPacker()
        >>> packer.write_bits(1, 1)
        >>> packer.write_uint(42, num_bits=7)
        >>> packer.write_cstring("hi")
        >>> data = packer.to_bytes()
    """

    def __init__(self, initial_bytes: int = 8) -> None:
        """Initialize an empty bit packer.

        Args:
            initial_bytes: Initial buffer capacity in bytes
        """
        if initial_bytes < 1:
            raise ValueError(f"initial_bytes must be >= 1, got {initial_bytes}")
        self._buffer = bytearray(initial_bytes)
        self._byte_pos = 0
        self._bit_pos = 0  # 0-7 within the current byte

    def _ensure_capacity(self) -> None:
        if self._byte_pos < len(self._buffer):
            return
        new_capacity = len(self._buffer)
        while self._byte_pos >= new_capacity:
            new_capacity *= 2
        self._buffer.extend(bytes(new_capacity - len(self._buffer)))

    def _write_bit(self, bit: int) -> None:
        self._ensure_capacity()
        if self._bit_pos == 0:
            self._buffer[self._byte_pos] = 0
        self._buffer[self._byte_pos] |= bit << (7 - self._bit_pos)
        self._bit_pos += 1
        if self._bit_pos == 8:
            self._bit_pos = 0
            self._byte_pos += 1

    def write_bits(self, value: int, width: int) -> None:
        """Write the low ``width`` bits of ``value`` (0 <= width <= 32).

        Args:
            value: Integer whose low bits are written
            width: Number of bits to write

        Raises:
            ValueError: If width is out of range
        """
        if width < 0 or width > 32:
            raise ValueError(f"Invalid bit width {width}, must be 0..32")
        self._write_masked(value, width)

    def write_bits64(self, value: int, width: int) -> None:
        """Write the low ``width`` bits of ``value`` (0 <= width <= 64).

        Args:
            value: Integer whose low bits are written
            width: Number of bits to write

        Raises:
            ValueError: If width is out of range
        """
        if width < 0 or width > 64:
            raise ValueError(f"Invalid bit width {width}, must be 0..64")
        self._write_masked(value, width)

    def _write_masked(self, value: int, width: int) -> None:
        value &= (1 << width) - 1
        for i in range(width - 1, -1, -1):
            self._write_bit((value >> i) & 1)

    def write_uint(self, value: int, num_bits: int) -> None:
        """Write an unsigned integer using the specified number of bits.

        Values that do not fit are truncated to their low ``num_bits`` bits.

        Args:
            value: Integer value to write
            num_bits: Number of bits to use for encoding (0-64)
        """
        self.write_bits64(value, num_bits)

    def write_int(self, value: int, num_bits: int) -> None:
        """Write a signed integer using two's complement encoding.

        Out-of-range values wrap around, e.g. 128 in 8 bits reads back as -128.

        Args:
            value: Signed integer value to write
            num_bits: Number of bits to use for encoding (0-64)
        """
        self.write_bits64(value, num_bits)

    def write_float32(self, value: float) -> None:
        """Write a 32-bit IEEE-754 float in little-endian byte order.

        Magnitudes beyond the float32 range are written as signed infinity.
        """
        try:
            packed = struct.pack("<f", value)
        except OverflowError:
            packed = struct.pack("<f", math.copysign(math.inf, value))
        self.write_bytes(packed)

    def write_float64(self, value: float) -> None:
        """Write a 64-bit IEEE-754 float in little-endian byte order."""
        self.write_bytes(struct.pack("<d", value))

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes, each one MSB first.

        Args:
            data: Bytes to write
        """
        for byte in data:
            self.write_bits(byte, 8)

    def write_cstring(self, text: str, codec: CharCodec = UTF8) -> None:
        """Write ``text`` through ``codec`` followed by a single zero byte.

        Args:
            text: String to write
            codec: Character codec mapping text to bytes
        """
        self.write_bytes(codec.encode(text))
        self.write_bits(0, 8)

    def bit_length(self) -> int:
        """Return the current number of bits written.

        Returns:
            Number of bits in the buffer
        """
        return self._byte_pos * 8 + self._bit_pos

    def to_bytes(self) -> bytes:
        """Return the bytes written so far.

        If the number of bits is not a multiple of 8, the last byte
        is padded with zeros on the right (LSB side).

        Returns:
            Packed bytes
        """
        used = self._byte_pos + (1 if self._bit_pos else 0)
        return bytes(self._buffer[:used])


class BitUnpacker:
    """Unpacks values bit-by-bit from a byte buffer.

    Reads never raise on a short buffer. A read that needs more bits than
    remain returns None and leaves the cursor where it was, so callers decide
    whether a truncated value is acceptable.

    Example:
        >>> unpacker = BitUnpacker(data)
        >>> flag = unpacker.read_bits(1)
        >>> value = unpacker.read_uint(7)
        >>> if value is None:
        ...     print("truncated")
    """

    def __init__(self, data: bytes) -> None:
        """Initialize a bit unpacker with the given data.

        Args:
            data: Byte buffer to unpack
        """
        self._data = bytes(data)
        self._position = 0

    def _read(self, width: int) -> int | None:
        if self._position + width > len(self._data) * 8:
            return None
        value = 0
        for _ in range(width):
            byte = self._data[self._position >> 3]
            bit = (byte >> (7 - (self._position & 7))) & 1
            value = (value << 1) | bit
            self._position += 1
        return value

    def read_bits(self, width: int) -> int | None:
        """Read ``width`` bits (0 <= width <= 32) as an unsigned integer.

        Returns:
            Unsigned value, or None if fewer than ``width`` bits remain

        Raises:
            ValueError: If width is out of range
        """
        if width < 0 or width > 32:
            raise ValueError(f"Invalid bit width {width}, must be 0..32")
        return self._read(width)

    def read_bits64(self, width: int) -> int | None:
        """Read ``width`` bits (0 <= width <= 64) as an unsigned integer.

        Returns:
            Unsigned value, or None if fewer than ``width`` bits remain

        Raises:
            ValueError: If width is out of range
        """
        if width < 0 or width > 64:
            raise ValueError(f"Invalid bit width {width}, must be 0..64")
        return self._read(width)

    def read_uint(self, num_bits: int) -> int | None:
        """Read an unsigned integer of the specified bit width (0-64)."""
        return self.read_bits64(num_bits)

    def read_int(self, num_bits: int) -> int | None:
        """Read a signed integer using two's complement encoding.

        Args:
            num_bits: Number of bits to read (0-64)

        Returns:
            Signed integer value, or None if truncated
        """
        unsigned_value = self.read_bits64(num_bits)
        if unsigned_value is None or num_bits == 0:
            return unsigned_value

        # Check sign bit (MSB)
        sign_bit = 1 << (num_bits - 1)
        if unsigned_value & sign_bit:
            return unsigned_value - (1 << num_bits)
        return unsigned_value

    def read_bytes(self, num_bytes: int) -> bytes | None:
        """Read raw bytes, or None if fewer than ``num_bytes`` remain."""
        if self._position + num_bytes * 8 > len(self._data) * 8:
            return None
        result = bytearray()
        for _ in range(num_bytes):
            result.append(self._read(8))  # type: ignore[arg-type]
        return bytes(result)

    def read_float32(self) -> float | None:
        """Read a little-endian IEEE-754 float32."""
        raw = self.read_bytes(4)
        if raw is None:
            return None
        return struct.unpack("<f", raw)[0]

    def read_float64(self) -> float | None:
        """Read a little-endian IEEE-754 float64."""
        raw = self.read_bytes(8)
        if raw is None:
            return None
        return struct.unpack("<d", raw)[0]

    def read_cstring(self, codec: CharCodec = UTF8) -> str | None:
        """Read bytes up to a zero terminator and decode them with ``codec``.

        Returns:
            Decoded text, or None if the buffer ends before a terminator.
            On None the cursor is left at the end of the buffer.
        """
        raw = bytearray()
        while True:
            byte = self._read(8)
            if byte is None:
                self._position = len(self._data) * 8
                return None
            if byte == 0:
                return codec.decode(bytes(raw))
            raw.append(byte)

    def is_eof(self) -> bool:
        """Return True once every bit has been consumed."""
        return self._position >= len(self._data) * 8

    def bits_remaining(self) -> int:
        """Return the number of bits remaining in the buffer.

        Returns:
            Number of unread bits
        """
        return len(self._data) * 8 - self._position

    def position(self) -> int:
        """Return the current bit position.

        Returns:
            Current read position in bits
        """
        return self._position
