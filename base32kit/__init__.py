"""
BASE32KIT - configurable Base32 codec

RFC 4648 Base32 generalized to arbitrary 32-symbol alphabets, with optional
character aliases, case sensitivity and a configurable padding character.

    >>> from base32kit import Base32, make_encoding
    >>> Base32.encode(b"foobar", True)
    'MZXW6YTBOI======'
    >>> zbase32 = make_encoding("ybndrfg8ejkmcpqxot1uwisza345h769")
    >>> zbase32.encode(b"hello!")
    'PB1SA5DXRR'
"""

from .api_strings import (
    b32decode,
    b32decode_text,
    b32encode,
    b32encode_text,
    b32hexdecode,
    b32hexencode,
)
from .codec import (
    BASE32_RFC4648_ALPHABET,
    BASE32_RFC4648_HEX_ALPHABET,
    Base32,
    Base32Encoding,
    Base32Error,
    Base32Hex,
    InvalidAliasTableError,
    InvalidAlphabetError,
    InvalidBase32StringError,
    InvalidPaddingError,
    make_encoding,
)
from .version import __version__

__all__ = [
    "BASE32_RFC4648_ALPHABET",
    "BASE32_RFC4648_HEX_ALPHABET",
    "Base32",
    "Base32Encoding",
    "Base32Error",
    "Base32Hex",
    "InvalidAliasTableError",
    "InvalidAlphabetError",
    "InvalidBase32StringError",
    "InvalidPaddingError",
    "__version__",
    "b32decode",
    "b32decode_text",
    "b32encode",
    "b32encode_text",
    "b32hexdecode",
    "b32hexencode",
    "make_encoding",
]
