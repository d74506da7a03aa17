"""Change-detection digests.

A digest is the SHA-256 of a canonical encoding of an ordered tuple of
fields. Every value is written as a one-byte type tag followed by a
length-prefixed payload, so an absent value, an empty string and an
empty list all encode differently and no two distinct tuples share an
encoding:

    N                       None
    B <0|1>                 bool
    I <len> <decimal>       int
    S <len> <utf-8 bytes>   str
    L <count> <items...>    list / tuple, items encoded recursively

Lengths and counts are 8-byte big-endian unsigned integers. Collection
order is significant.
"""

import hashlib
from collections.abc import Sequence

from repo_tracker.exceptions import DigestError

_LENGTH_BYTES = 8


def _length(value: int) -> bytes:
    return value.to_bytes(_LENGTH_BYTES, "big")


def _encode_value(value: object, out: bytearray) -> None:
    if value is None:
        out += b"N"
    elif isinstance(value, bool):
        out += b"B1" if value else b"B0"
    elif isinstance(value, int):
        payload = str(value).encode("ascii")
        out += b"I" + _length(len(payload)) + payload
    elif isinstance(value, str):
        try:
            payload = value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise DigestError(f"cannot encode string value: {e}") from e
        out += b"S" + _length(len(payload)) + payload
    elif isinstance(value, (list, tuple)):
        out += b"L" + _length(len(value))
        for item in value:
            _encode_value(item, out)
    else:
        raise DigestError(f"unsupported value type for digest: {type(value).__name__}")


def encode_fields(fields: Sequence[object]) -> bytes:
    """Encode an ordered tuple of fields canonically.

    Raises:
        DigestError: If a field has a type the encoding does not support
    """
    out = bytearray()
    _encode_value(tuple(fields), out)
    return bytes(out)


def compute_digest(*fields: object) -> str:
    """Compute the hex SHA-256 digest of the given fields."""
    return hashlib.sha256(encode_fields(fields)).hexdigest()


def repository_digest(
    topics: Sequence[str] | None,
    languages: Sequence[str] | None,
    stars: int | None,
) -> str:
    """Digest of the repository fields refreshed from GitHub."""
    return compute_digest(topics, languages, stars)


def issue_digest(title: str, labels: Sequence[str]) -> str:
    """Digest of the issue fields refreshed from GitHub."""
    return compute_digest(title, labels)
