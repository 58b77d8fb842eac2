"""
EMV-style Tag-Length-Value helpers.

Every field is ``TAG(2) LEN(2) VALUE``; LEN is the UTF-8 byte length of VALUE
written as two decimal digits, so a value can never exceed 99 bytes.
"""

from dataclasses import dataclass
from typing import List

from thaiqr.errors import OversizedFieldError, PayloadError

MAX_VALUE_LENGTH = 99


@dataclass(frozen=True)
class TlvField:
    tag: str
    value: str

    def serialize(self) -> str:
        return format_tlv(self.tag, self.value)


def format_tlv(tag: str, value: str) -> str:
    if len(tag) != 2:
        raise ValueError(f"TLV tag must be 2 characters, got {tag!r}")
    length = len(value.encode("utf-8"))
    if length > MAX_VALUE_LENGTH:
        raise OversizedFieldError(tag, length)
    return f"{tag}{length:02d}{value}"


def parse_tlv(payload: str) -> List[TlvField]:
    """Split a TLV string into its fields (one level, no recursion)."""
    data = payload.encode("utf-8")
    fields = []
    i = 0
    while i < len(data):
        if i + 4 > len(data):
            raise PayloadError(f"Dangling data at offset {i}: {data[i:]!r}")
        tag = data[i:i+2].decode("utf-8", "replace")
        raw_len = data[i+2:i+4]
        if not raw_len.isdigit():
            raise PayloadError(f"Invalid length {raw_len!r} for tag {tag} at offset {i}")
        length = int(raw_len)
        end = i + 4 + length
        if end > len(data):
            raise PayloadError(f"Tag {tag} declares {length} bytes but payload is truncated")
        try:
            value = data[i+4:end].decode("utf-8")
        except UnicodeDecodeError as e:
            raise PayloadError(f"Tag {tag} length splits a multi-byte character") from e
        fields.append(TlvField(tag, value))
        i = end
    return fields
