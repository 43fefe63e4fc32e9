"""Bech32 address encoding as used for account addresses."""

from __future__ import annotations

import hashlib
import os

ACCOUNT_PREFIX = "cosmos"
CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
MAX_LENGTH = 1023
MAX_ADDRESS_LENGTH = 255
ADDRESS_LENGTH = 20

_GENERATORS = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)


def _polymod(values: list[int]) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ value
        for bit, generator in enumerate(_GENERATORS):
            if (top >> bit) & 1:
                chk ^= generator
    return chk


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _create_checksum(hrp: str, data: list[int]) -> list[int]:
    polymod = _polymod(_hrp_expand(hrp) + data + [0] * 6) ^ 1
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]


def _verify_checksum(hrp: str, data: list[int]) -> bool:
    return _polymod(_hrp_expand(hrp) + data) == 1


def _convert_bits(data, from_bits: int, to_bits: int, pad: bool) -> list[int]:
    acc = 0
    bits = 0
    result = []
    max_value = (1 << to_bits) - 1
    for value in data:
        if value < 0 or value >> from_bits:
            raise ValueError(f"invalid data value {value}")
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((acc >> bits) & max_value)
    if pad:
        if bits:
            result.append((acc << (to_bits - bits)) & max_value)
    elif bits >= from_bits or (acc << (to_bits - bits)) & max_value:
        raise ValueError("invalid padding in bech32 data")
    return result


def encode(hrp: str, data: bytes) -> str:
    """Encode raw bytes under the human-readable part ``hrp``."""
    if not hrp or any(ord(c) < 33 or ord(c) > 126 for c in hrp):
        raise ValueError(f"invalid human-readable part {hrp!r}")
    hrp = hrp.lower()
    five_bit = _convert_bits(data, 8, 5, True)
    combined = five_bit + _create_checksum(hrp, five_bit)
    return hrp + "1" + "".join(CHARSET[d] for d in combined)


def decode(address: str) -> tuple[str, bytes]:
    """Decode a bech32 string into its human-readable part and raw bytes."""
    if len(address) > MAX_LENGTH:
        raise ValueError(f"bech32 string too long: {len(address)}")
    if any(ord(c) < 33 or ord(c) > 126 for c in address):
        raise ValueError("invalid character in bech32 string")
    if address.lower() != address and address.upper() != address:
        raise ValueError("bech32 string has mixed case")
    address = address.lower()
    pos = address.rfind("1")
    if pos < 1 or pos + 7 > len(address):
        raise ValueError("invalid separator position in bech32 string")
    hrp = address[:pos]
    try:
        data = [CHARSET.index(c) for c in address[pos + 1:]]
    except ValueError:
        raise ValueError("invalid data character in bech32 string") from None
    if not _verify_checksum(hrp, data):
        raise ValueError("invalid bech32 checksum")
    return hrp, bytes(_convert_bits(data[:-6], 5, 8, False))


def acc_address_from_bech32(address: str, prefix: str = ACCOUNT_PREFIX) -> bytes:
    """Return the raw bytes of an account address, checking its prefix."""
    if not address.strip():
        raise ValueError("empty address string is not allowed")
    hrp, data = decode(address)
    if hrp != prefix:
        raise ValueError(f"invalid Bech32 prefix; expected {prefix}, got {hrp}")
    if not data:
        raise ValueError("addresses cannot be empty")
    if len(data) > MAX_ADDRESS_LENGTH:
        raise ValueError(
            f"address max length is {MAX_ADDRESS_LENGTH}, got {len(data)}"
        )
    return data


def module_address(name: str, prefix: str = ACCOUNT_PREFIX) -> str:
    """Return the account address that belongs to the module ``name``."""
    digest = hashlib.sha256(name.encode()).digest()[:ADDRESS_LENGTH]
    return encode(prefix, digest)


def sample_acc_address(prefix: str = ACCOUNT_PREFIX) -> str:
    """Return a fresh random account address."""
    public_key = os.urandom(32)
    return encode(prefix, hashlib.sha256(public_key).digest()[:ADDRESS_LENGTH])