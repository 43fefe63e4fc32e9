"""Helpers for laying out a local multi-validator testnet."""

from __future__ import annotations

import os
import random
import re
import shutil
from pathlib import Path

NODE_DIR_PERM = 0o755
DEFAULT_BOND_DENOM = "stake"
DEFAULT_STAKE_AMOUNTS = "100000000,100000000,100000000,100000000"
DEFAULT_VALIDATOR_STAKE = 100 * 10**6
BASE_RPC_PORT = 26657
BASE_P2P_PORT = 26656
PORT_STEP = 3
MAX_INT_BITS = 256

_CHARSET = "abcdefghijklmnopqrstuvwxyz0123456789"
_INTEGER = re.compile(r"[+-]?\d+")


def write_file(file, directory, contents: bytes) -> None:
    """Create ``directory`` if needed and write ``contents`` to ``file``."""
    try:
        os.makedirs(directory, mode=NODE_DIR_PERM, exist_ok=True)
    except OSError as err:
        raise OSError(f"could not create directory {str(directory)!r}: {err}") from err
    Path(file).write_bytes(contents)
    os.chmod(file, 0o644)


def copy_file(src, dst_dir) -> int:
    """Copy ``src`` into ``dst_dir`` under the same name; return bytes copied."""
    dst = Path(dst_dir) / Path(src).name
    with open(src, "rb") as source, open(dst, "wb") as destination:
        shutil.copyfileobj(source, destination)
        copied = destination.tell()
        destination.flush()
        os.fsync(destination.fileno())
    return copied


def is_sub_dir(src, dst_dir) -> bool:
    """Return whether ``src`` lies inside ``dst_dir``."""
    relative = os.path.relpath(os.path.abspath(src), os.path.abspath(dst_dir))
    return not relative.startswith("..") and not os.path.isabs(relative)


def generate_random_string(length: int) -> str:
    """Return ``length`` random lower-case letters and digits."""
    return "".join(random.choices(_CHARSET, k=length))


def default_ports(num_validators: int) -> list[str]:
    """RPC ports used when none are given: 26657, 26654, 26651, ..."""
    return [str(BASE_RPC_PORT - PORT_STEP * i) for i in range(num_validators)]


def parse_ports(value: str, num_validators: int) -> list[str]:
    """Parse a comma-separated port list, falling back to the default ports."""
    if value == "":
        return default_ports(num_validators)
    return value.split(",")


def parse_stake_amounts(value: str) -> list[int]:
    """Parse comma-separated stake amounts, skipping entries that are not integers."""
    amounts = []
    for amount in value.split(","):
        if not _INTEGER.fullmatch(amount):
            continue
        number = int(amount)
        if number.bit_length() > MAX_INT_BITS:
            continue
        if number < 0:
            raise ValueError(f"negative coin amount: {number}")
        amounts.append(number)
    return amounts


def persistent_peers(node_ids, ip_address: str) -> str:
    """Return the persistent peers list ``id@ip:port,...`` for the nodes."""
    return ",".join(
        f"{node_id}@{ip_address}:{BASE_P2P_PORT - PORT_STEP * i}"
        for i, node_id in enumerate(node_ids)
    )