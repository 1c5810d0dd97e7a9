"""String/byte codec convenience wrappers over the predefined encodings."""

from .codec import Base32, Base32Hex


def b32encode(data, with_padding: bool = True) -> str:
    return Base32.encode(data, with_padding)


def b32decode(text: str) -> bytes:
    return Base32.decode(text)


def b32hexencode(data, with_padding: bool = True) -> str:
    return Base32Hex.encode(data, with_padding)


def b32hexdecode(text: str) -> bytes:
    return Base32Hex.decode(text)


def b32encode_text(string: str, with_padding: bool = True) -> str:
    return Base32.encode(string.encode("utf-8"), with_padding)


def b32decode_text(text: str, errors: str = "strict") -> str:
    return Base32.decode(text).decode("utf-8", errors=errors)


__all__ = [
    "b32decode",
    "b32decode_text",
    "b32encode",
    "b32encode_text",
    "b32hexdecode",
    "b32hexencode",
]
