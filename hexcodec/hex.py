"""
Hexadecimal encoding and decoding for byte strings and 64-bit unsigned integers.

Decoding is lenient: anything that is not a hex digit is skipped, a trailing
odd nibble is dropped and the 64-bit parser wraps on overflow.
"""
from typing import Union

HEX_CHARS = b"0123456789abcdef"

U64_MAX = 0xFFFFFFFFFFFFFFFF

_NIBBLE_VALUES = {c: i for i, c in enumerate("0123456789abcdef")}
_NIBBLE_VALUES.update({c: i for i, c in enumerate("ABCDEF", 10)})


class HexCodecError(Exception):
    """Base class for hex codec errors."""
    pass


class BufferTooSmallError(HexCodecError):
    """Raised when a destination buffer cannot hold the encoded output."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Destination buffer too small: need {required} bytes, have {available}"
        )


def _as_text(text: Union[str, bytes, bytearray, memoryview]) -> str:
    if isinstance(text, str):
        return text
    # latin-1 keeps one character per byte
    return bytes(text).decode("latin-1")


def _check_u64(value: int):
    if not isinstance(value, int) or not 0 <= value <= U64_MAX:
        raise ValueError(f"Not an unsigned 64-bit value: {value!r}")


def _u64_digits(value: int, skip_leading_zeroes: bool) -> bytearray:
    _check_u64(value)
    out = bytearray()
    for shift in range(60, -4, -4):
        nibble = (value >> shift) & 0xF
        if nibble or out or not skip_leading_zeroes:
            out.append(HEX_CHARS[nibble])
    return out


def encode_into_buffer(data: bytes, dest: Union[bytearray, memoryview]) -> int:
    """
    Write the hex digits of `data` into `dest` and return how many were written.

    `dest` must hold at least 2 * len(data) bytes. Nothing is written when it
    does not; BufferTooSmallError is raised instead.
    """
    required = len(data) * 2
    if len(dest) < required:
        raise BufferTooSmallError(required, len(dest))

    j = 0
    for byte in data:
        dest[j] = HEX_CHARS[byte >> 4]
        dest[j + 1] = HEX_CHARS[byte & 0xF]
        j += 2
    return j


def bytes_to_hex_string(data: bytes) -> str:
    """Encode bytes as a lowercase hex string."""
    buf = bytearray(len(data) * 2)
    encode_into_buffer(data, buf)
    return buf.decode("ascii")


def hex_string_to_bytes(text: Union[str, bytes]) -> bytes:
    """Decode a hex string, ignoring every non-hex character."""
    out = bytearray()
    byte = 0
    have_high = False
    for c in _as_text(text):
        nibble = _NIBBLE_VALUES.get(c)
        if nibble is None:
            continue
        byte = ((byte << 4) | nibble) & 0xFF
        if have_high:
            out.append(byte)
        have_high = not have_high
    return bytes(out)


def u64_to_hex_string(value: int, skip_leading_zeroes: bool) -> str:
    """
    Encode an unsigned 64-bit value as up to 16 hex digits.

    With skip_leading_zeroes, zero encodes to an empty string.
    """
    return _u64_digits(value, skip_leading_zeroes).decode("ascii")


def u64_to_hex_bytes(value: int, skip_leading_zeroes: bool) -> bytes:
    """Same as u64_to_hex_string but returns the ASCII digit codes."""
    return bytes(_u64_digits(value, skip_leading_zeroes))


def hex_string_to_u64(text: Union[str, bytes]) -> int:
    """
    Parse hex text into an unsigned 64-bit value.

    Each complete byte is shifted in from the right, so longer input keeps
    only its last 16 digits.
    """
    n = 0
    byte = 0
    have_high = False
    for c in _as_text(text):
        nibble = _NIBBLE_VALUES.get(c)
        if nibble is None:
            continue
        byte = ((byte << 4) | nibble) & 0xFF
        if have_high:
            n = ((n << 8) | byte) & U64_MAX
        have_high = not have_high
    return n
