# BASE32KIT CODEC ENGINE ->

import collections
import os as _os_module
import types
import typing

import numpy as np


ENGINE_VERSION = "1.0.0"

BASE32_RFC4648_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
BASE32_RFC4648_HEX_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUV"

DEFAULT_PADDING = "="


class Base32Error(ValueError):
    """Base class for every error raised by the codec."""


class InvalidAlphabetError(Base32Error):
    pass


class InvalidAliasTableError(Base32Error):
    pass


class InvalidPaddingError(Base32Error):
    pass


class InvalidBase32StringError(Base32Error):
    pass


def _env_int(name: str) -> typing.Optional[int]:
    value = _os_module.getenv(name)
    if not value:
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    if parsed <= 0:
        return None
    return parsed


# Use NumPy for inputs >= this many bytes (encode) or symbols (decode)
FAST_THRESHOLD = _env_int("BASE32KIT_FAST_THRESHOLD") or 1024

_INVALID = 0xFF


def _is_single_byte(char) -> bool:
    if not isinstance(char, str):
        return False
    try:
        return len(char.encode("utf-8")) == 1
    except UnicodeEncodeError:
        # Lone surrogates have no UTF-8 form
        return False


class Base32Encoding:
    """A validated alphabet/padding pairing with matched encode and decode.

    The constructor takes the same arguments as :func:`make_encoding` and
    runs the same validation, so every instance upholds the lookup-table
    invariants. Instances are immutable and can be shared between threads.

    Decoding strips trailing padding by exact match only, even when symbols
    decode case-insensitively: with a cased padding character such as ``w``,
    ``W`` at the end of the input is rejected as an unknown symbol.
    """

    __slots__ = ("_alphabet", "_table", "_padding", "_case_sensitive", "_alphabet_lut", "_decode_lut")

    def __init__(
        self,
        alphabet: str,
        *,
        case_sensitive: bool = False,
        alias_table: typing.Optional[typing.Mapping[str, str]] = None,
        padding: typing.Optional[str] = DEFAULT_PADDING,
    ):
        alphabet, table, padding = _build_table(alphabet, case_sensitive, alias_table, padding)
        lut = bytearray([_INVALID]) * 256
        for symbol, value in table.items():
            lut[ord(symbol)] = value
        object.__setattr__(self, "_alphabet", alphabet)
        object.__setattr__(self, "_table", types.MappingProxyType(dict(table)))
        object.__setattr__(self, "_padding", padding)
        object.__setattr__(self, "_case_sensitive", bool(case_sensitive))
        object.__setattr__(self, "_alphabet_lut", np.frombuffer(alphabet.encode("ascii"), dtype=np.uint8))
        object.__setattr__(self, "_decode_lut", np.frombuffer(bytes(lut), dtype=np.uint8))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(alphabet={self._alphabet!r}, padding={self._padding!r}, "
            f"case_sensitive={self._case_sensitive})"
        )

    @property
    def alphabet(self) -> str:
        return self._alphabet

    @property
    def padding(self) -> str:
        return self._padding

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    @property
    def table(self) -> typing.Mapping[str, int]:
        """Read-only symbol -> 5-bit value mapping, aliases and case forms included."""
        return self._table

    def encode(self, data, with_padding: bool = False) -> str:
        if isinstance(data, memoryview):
            data = data.tobytes()
        elif not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"encode expects a bytes-like object, not {type(data).__name__}")
        if not data:
            return ""
        if len(data) >= FAST_THRESHOLD:
            encoded = self._fast_encode(data)
        else:
            encoded = self._encode_bits(data)
        if with_padding:
            encoded += self._padding * ((8 - len(encoded) % 8) % 8)
        return encoded

    def decode(self, text: str) -> bytes:
        if not isinstance(text, str):
            raise TypeError(f"decode expects a str, not {type(text).__name__}")
        # Padding is stripped by exact match, even when symbols are case-folded
        text = text.rstrip(self._padding)
        if not text:
            return b""
        if len(text) >= FAST_THRESHOLD and text.isascii():
            return self._fast_decode(text)
        return self._decode_bits(text)

    def _encode_bits(self, data: bytes) -> str:
        alphabet = self._alphabet
        out = []
        buff = 0
        size = 0
        for byte in data:
            buff = (buff << 8) | byte
            size += 8
            while size >= 5:
                size -= 5
                out.append(alphabet[(buff >> size) & 0x1F])
            buff &= (1 << size) - 1
        if size:
            # Zero-fill the final partial group on the right
            out.append(alphabet[(buff << (5 - size)) & 0x1F])
        return "".join(out)

    def _decode_bits(self, text: str) -> bytes:
        table = self._table
        out = bytearray(len(text) * 5 // 8)
        buff = 0
        size = 0
        offset = 0
        for index, char in enumerate(text):
            value = table.get(char)
            if value is None:
                raise InvalidBase32StringError(
                    f'Character "{char}" at position {index} not found in the alphabet'
                )
            buff = (buff << 5) | value
            size += 5
            if size >= 8:
                size -= 8
                out[offset] = (buff >> size) & 0xFF
                offset += 1
                buff &= (1 << size) - 1
        if buff:
            raise InvalidBase32StringError("Input string contains incomplete trailing bits")
        return bytes(out)

    def _fast_encode(self, data: bytes) -> str:
        """NumPy-vectorized encoding, identical output to _encode_bits."""
        arr = np.frombuffer(data, dtype=np.uint8)
        symbols = (len(arr) * 8 + 4) // 5

        # Pad to multiple of 5 bytes
        pad_len = (5 - len(arr) % 5) % 5
        if pad_len:
            arr = np.concatenate([arr, np.zeros(pad_len, dtype=np.uint8)])

        # Reshape into groups of 5 bytes (40 bits each)
        groups = arr.reshape(-1, 5)

        # Extract 8 x 5-bit values from each 40-bit group
        out = np.empty((len(groups), 8), dtype=np.uint8)
        out[:, 0] = groups[:, 0] >> 3
        out[:, 1] = ((groups[:, 0] & 0x07) << 2) | (groups[:, 1] >> 6)
        out[:, 2] = (groups[:, 1] >> 1) & 0x1F
        out[:, 3] = ((groups[:, 1] & 0x01) << 4) | (groups[:, 2] >> 4)
        out[:, 4] = ((groups[:, 2] & 0x0F) << 1) | (groups[:, 3] >> 7)
        out[:, 5] = (groups[:, 3] >> 2) & 0x1F
        out[:, 6] = ((groups[:, 3] & 0x03) << 3) | (groups[:, 4] >> 5)
        out[:, 7] = groups[:, 4] & 0x1F

        result = self._alphabet_lut[out.ravel()[:symbols]]
        return result.tobytes().decode("ascii")

    def _fast_decode(self, text: str) -> bytes:
        """NumPy-vectorized decoding for ASCII input, same errors as _decode_bits."""
        arr = np.frombuffer(text.encode("ascii"), dtype=np.uint8)
        vals = self._decode_lut[arr]

        invalid = np.flatnonzero(vals == _INVALID)
        if invalid.size:
            index = int(invalid[0])
            raise InvalidBase32StringError(
                f'Character "{text[index]}" at position {index} not found in the alphabet'
            )

        # Up to 7 bits are left after the last whole byte, spread over the last two symbols
        leftover = (len(vals) * 5) % 8
        tail = int(vals[-1])
        if len(vals) > 1:
            tail |= int(vals[-2]) << 5
        if tail & ((1 << leftover) - 1):
            raise InvalidBase32StringError("Input string contains incomplete trailing bits")

        # Pad to multiple of 8
        pad_to_8 = (8 - len(vals) % 8) % 8
        if pad_to_8:
            vals = np.concatenate([vals, np.zeros(pad_to_8, dtype=np.uint8)])

        # Reshape into groups of 8 x 5-bit values
        groups = vals.reshape(-1, 8)

        # Combine 8 x 5-bit values into 5 bytes
        out = np.empty((len(groups), 5), dtype=np.uint8)
        out[:, 0] = (groups[:, 0] << 3) | (groups[:, 1] >> 2)
        out[:, 1] = (groups[:, 1] << 6) | (groups[:, 2] << 1) | (groups[:, 3] >> 4)
        out[:, 2] = (groups[:, 3] << 4) | (groups[:, 4] >> 1)
        out[:, 3] = (groups[:, 4] << 7) | (groups[:, 5] << 2) | (groups[:, 6] >> 3)
        out[:, 4] = (groups[:, 6] << 5) | groups[:, 7]

        return out.ravel()[: len(text) * 5 // 8].tobytes()


def _own_alias_entries(alias_table) -> dict:
    # Entries inherited from parent maps of a ChainMap are not honored
    if isinstance(alias_table, collections.ChainMap):
        alias_table = alias_table.maps[0]
    try:
        return dict(alias_table)
    except (TypeError, ValueError) as exc:
        raise InvalidAliasTableError("Alias table must be a mapping of characters") from exc


def _build_table(alphabet, case_sensitive, alias_table, padding) -> tuple[str, dict, str]:
    if not isinstance(alphabet, str):
        raise InvalidAlphabetError("The alphabet must be a string")
    if not case_sensitive:
        alphabet = alphabet.upper()

    if (
        len(alphabet) != 32
        or len(set(alphabet)) != 32
        or not all(_is_single_byte(symbol) for symbol in alphabet)
    ):
        raise InvalidAlphabetError("The alphabet must contain exactly 32 unique single-byte characters")

    table: dict[str, int] = {}
    for index, symbol in enumerate(alphabet):
        if case_sensitive:
            table[symbol] = index
        else:
            table[symbol.upper()] = table[symbol.lower()] = index

    if alias_table is not None:
        for alias, value in _own_alias_entries(alias_table).items():
            if not _is_single_byte(alias) or not isinstance(value, str) or value not in table:
                raise InvalidAliasTableError(
                    "Alias should be a single character and value should be a valid character in the alphabet"
                )
            if case_sensitive:
                if alias in table:
                    raise InvalidAliasTableError("Alias should not be present in the alphabet")
                table[alias] = table[value]
            else:
                upper = alias.upper()
                lower = alias.lower()
                if upper in table or lower in table:
                    raise InvalidAliasTableError("Alias should not be present in the alphabet")
                table[upper] = table[lower] = table[value]

    if padding is None:
        padding = DEFAULT_PADDING
    if not _is_single_byte(padding) or padding in table:
        raise InvalidPaddingError(
            "Padding character should be a single character and not present in the alphabet"
        )

    return alphabet, table, padding


def make_encoding(
    alphabet: str,
    *,
    case_sensitive: bool = False,
    alias_table: typing.Optional[typing.Mapping[str, str]] = None,
    padding: typing.Optional[str] = DEFAULT_PADDING,
) -> Base32Encoding:
    """
    Validate an alphabet and its options and build the matching encoding.

    Args:
        alphabet: 32 unique single-byte characters; position i encodes value i
        case_sensitive: keep the alphabet as given and decode it case-exactly
        alias_table: extra single-byte symbols mapped onto existing symbols
        padding: single-byte padding character, ``None`` for the default ``=``.
            Decode strips it by exact match only, so prefer an uncased one.

    Returns:
        An immutable :class:`Base32Encoding`

    Raises:
        InvalidAlphabetError, InvalidAliasTableError, InvalidPaddingError
    """
    return Base32Encoding(
        alphabet,
        case_sensitive=case_sensitive,
        alias_table=alias_table,
        padding=padding,
    )


Base32 = make_encoding(BASE32_RFC4648_ALPHABET)
Base32Hex = make_encoding(BASE32_RFC4648_HEX_ALPHABET)


__all__ = [
    "BASE32_RFC4648_ALPHABET",
    "BASE32_RFC4648_HEX_ALPHABET",
    "DEFAULT_PADDING",
    "ENGINE_VERSION",
    "FAST_THRESHOLD",
    "Base32",
    "Base32Encoding",
    "Base32Error",
    "Base32Hex",
    "InvalidAliasTableError",
    "InvalidAlphabetError",
    "InvalidBase32StringError",
    "InvalidPaddingError",
    "make_encoding",
]
