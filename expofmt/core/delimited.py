"""Length-delimited protobuf framing.

Each record is written as its serialized length (unsigned base-128 varint)
followed by the serialized bytes, so many messages of one type can be
concatenated on a single stream and split again by the reader.
"""

from typing import BinaryIO, Optional, Type, TypeVar

from google.protobuf.message import Message

MAX_VARINT_LEN32 = 5
_MAX_UINT32 = 0xFFFFFFFF

M = TypeVar("M", bound=Message)


class DelimitedFormatError(ValueError):
    """Raised when a framed stream cannot be decoded."""


def encode_uvarint(value: int) -> bytes:
    """Encode a non-negative int as an unsigned varint, low groups first."""
    if value < 0:
        raise ValueError(f"cannot varint-encode negative value {value}")
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def decode_uvarint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode an unsigned varint starting at ``offset``.

    Returns:
        ``(value, bytes_consumed)``.

    Raises:
        DelimitedFormatError: The varint is truncated or longer than 10 bytes.
    """
    value = 0
    shift = 0
    for i, byte in enumerate(data[offset:offset + 10]):
        value |= (byte & 0x7F) << shift
        if byte < 0x80:
            return value, i + 1
        shift += 7
    raise DelimitedFormatError("truncated or overlong varint")


def write_delimited(stream: BinaryIO, message: Message) -> int:
    """Write ``message`` prefixed with its varint-encoded length.

    Returns:
        Total bytes written, prefix plus payload.

    Raises:
        ValueError: The serialized message does not fit a 32-bit length.
        Exception: Whatever the stream raises. A failed prefix write stops
            before the payload is attempted.
    """
    payload = message.SerializeToString()
    if len(payload) > _MAX_UINT32:
        raise ValueError(f"message of {len(payload)} bytes exceeds the 32-bit length prefix")

    prefix = encode_uvarint(len(payload))
    written = write_bytes(stream, prefix)
    return written + write_bytes(stream, payload)


def read_delimited(stream: BinaryIO, message_cls: Type[M]) -> Optional[M]:
    """Read one length-prefixed message.

    Returns:
        The parsed message, or ``None`` at a clean end of stream.

    Raises:
        DelimitedFormatError: The prefix or payload is truncated.
    """
    prefix = bytearray()
    while True:
        byte = stream.read(1)
        if not byte:
            if prefix:
                raise DelimitedFormatError("stream ended inside a length prefix")
            return None
        prefix += byte
        if byte[0] < 0x80:
            break
        if len(prefix) >= MAX_VARINT_LEN32:
            raise DelimitedFormatError("length prefix exceeds 32 bits")

    length, _ = decode_uvarint(bytes(prefix))
    payload = stream.read(length)
    if len(payload) != length:
        raise DelimitedFormatError(f"expected {length} payload bytes, got {len(payload)}")

    message = message_cls()
    message.ParseFromString(payload)
    return message


def write_bytes(stream: BinaryIO, data: bytes) -> int:
    """Write ``data`` and return the count the stream reports, or ``len(data)`` if it reports none."""
    n = stream.write(data)
    return len(data) if n is None else n
