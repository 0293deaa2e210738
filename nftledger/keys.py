"""Account addresses and store keys of the NFT ledger."""

from __future__ import annotations

import binascii
import hashlib

from nftledger.errors import InvalidAddressError

MODULE_NAME = "nft"
STORE_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME
ROUTER_KEY = MODULE_NAME

COLLECTIONS_KEY_PREFIX = b"\x00"
OWNERS_KEY_PREFIX = b"\x01"

ADDR_LEN = 20
BECH32_ACCOUNT_PREFIX = "cosmos"

_OWNER_KEY_LEN = 53
_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_GENERATORS = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)


def _polymod(values: list[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = ((checksum & 0x1FFFFFF) << 5) ^ value
        for bit, generator in enumerate(_GENERATORS):
            if (top >> bit) & 1:
                checksum ^= generator
    return checksum


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _convert_bits(data: bytes | list[int], from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    result = []
    max_value = (1 << to_bits) - 1
    for value in data:
        if value >> from_bits:
            raise ValueError("invalid data range")
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((acc >> bits) & max_value)
    if pad:
        if bits:
            result.append((acc << (to_bits - bits)) & max_value)
    elif bits >= from_bits or (acc << (to_bits - bits)) & max_value:
        raise ValueError("invalid padding")
    return result


def _bech32_encode(hrp: str, payload: bytes) -> str:
    data = _convert_bits(payload, 8, 5, pad=True)
    polymod = _polymod(_hrp_expand(hrp) + data + [0] * 6) ^ 1
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]
    return hrp + "1" + "".join(_CHARSET[d] for d in data + checksum)


def _bech32_decode(text: str) -> tuple[str, bytes]:
    if not 8 <= len(text) <= 90:
        raise ValueError(f"invalid bech32 string length {len(text)}")
    if any(ord(c) < 33 or ord(c) > 126 for c in text):
        raise ValueError("invalid character in bech32 string")
    if text.lower() != text and text.upper() != text:
        raise ValueError("bech32 string has mixed case")
    text = text.lower()
    separator = text.rfind("1")
    if separator < 1 or separator + 7 > len(text):
        raise ValueError("invalid separator position")
    hrp = text[:separator]
    data = [_CHARSET.find(c) for c in text[separator + 1:]]
    if -1 in data:
        raise ValueError("invalid character in bech32 data")
    if _polymod(_hrp_expand(hrp) + data) != 1:
        raise ValueError("invalid bech32 checksum")
    return hrp, bytes(_convert_bits(data[:-6], 5, 8, pad=False))


class AccAddress(bytes):
    """An account address: raw bytes shown in bech32 form."""

    @classmethod
    def from_hex(cls, hex_string: str) -> AccAddress:
        """Build an address from its hexadecimal form."""
        if not hex_string.strip():
            raise InvalidAddressError("decoding address failed: must provide an address")
        try:
            return cls(binascii.unhexlify(hex_string))
        except (binascii.Error, ValueError) as err:
            raise InvalidAddressError(f"decoding address failed: {err}") from err

    @classmethod
    def from_bech32(cls, text: str) -> AccAddress:
        """Build an address from its bech32 form."""
        if not text.strip():
            raise InvalidAddressError("empty address string is not allowed")
        try:
            hrp, payload = _bech32_decode(text)
        except ValueError as err:
            raise InvalidAddressError(f"decoding bech32 failed: {err}") from err
        if hrp != BECH32_ACCOUNT_PREFIX:
            raise InvalidAddressError(
                f"invalid bech32 prefix: expected {BECH32_ACCOUNT_PREFIX}, got {hrp}"
            )
        if len(payload) != ADDR_LEN:
            raise InvalidAddressError(f"incorrect address length {len(payload)}")
        return cls(payload)

    def empty(self) -> bool:
        """Return whether the address holds no bytes."""
        return len(self) == 0

    def __str__(self) -> str:
        if self.empty():
            return ""
        return _bech32_encode(BECH32_ACCOUNT_PREFIX, bytes(self))

    def __repr__(self) -> str:
        return f"AccAddress({str(self)!r})"


def _denom_hash(denom: str) -> bytes:
    return hashlib.sha256(denom.encode("utf-8")).digest()


def collection_key(denom: str) -> bytes:
    """Return the store key of the collection of ``denom``."""
    return COLLECTIONS_KEY_PREFIX + _denom_hash(denom)


def owners_key(address: AccAddress) -> bytes:
    """Return the key prefix of all ID collections owned by ``address``."""
    return OWNERS_KEY_PREFIX + bytes(address)


def owner_key(address: AccAddress, denom: str) -> bytes:
    """Return the key of the ``denom`` ID collection owned by ``address``."""
    return owners_key(address) + _denom_hash(denom)


def split_owner_key(key: bytes) -> tuple[AccAddress, bytes]:
    """Split an owner key into the address and the denom hash."""
    if len(key) != _OWNER_KEY_LEN:
        raise ValueError(f"unexpected key length {len(key)}")
    return AccAddress(key[1:ADDR_LEN + 1]), bytes(key[ADDR_LEN + 1:])