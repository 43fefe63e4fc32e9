"""Data types, store keys and messages of the identity module."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Any, ClassVar

from .bech32 import acc_address_from_bech32
from .errors import InvalidAddressError, InvalidRequestError

MODULE_NAME = "identity"
STORE_KEY = MODULE_NAME
MEM_STORE_KEY = "mem_identity"
PARAMS_KEY = b"p_identity"
IDENTITY_KEY_PREFIX = "Identity/value/"
DEFAULT_INDEX = 1


def key_prefix(p: str) -> bytes:
    """Return the store prefix for ``p``."""
    return p.encode()


def identity_key(address: str) -> bytes:
    """Return the store key of the identity held by ``address``."""
    return address.encode() + b"/"


def hash_cccd_id(cccd_id: str) -> str:
    """Return the hex SHA-256 digest under which a CCCD ID is stored."""
    return hashlib.sha256(cccd_id.encode()).hexdigest()


@dataclass(frozen=True)
class Params:
    """Module parameters; the module currently has none."""

    def validate(self) -> None:
        """Check the parameters; every value is currently valid."""

    def to_dict(self) -> dict[str, Any]:
        return {}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Params:
        return cls()


@dataclass(frozen=True)
class Identity:
    """An on-chain identity: one per address."""

    address: str = ""
    id_hash: str = ""
    created_at: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "id_hash": self.id_hash,
            "created_at": str(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Identity:
        return cls(
            address=data.get("address", ""),
            id_hash=data.get("id_hash", data.get("idHash", "")),
            created_at=int(data.get("created_at", data.get("createdAt", 0)) or 0),
        )


@dataclass
class GenesisState:
    """The state of the module at genesis."""

    params: Params = field(default_factory=Params)
    identity_list: list[Identity] = field(default_factory=list)

    def validate(self) -> None:
        """Raise ValueError if two identities share an address."""
        seen: set[bytes] = set()
        for identity in self.identity_list:
            index = identity_key(identity.address)
            if index in seen:
                raise ValueError("duplicated index for identity")
            seen.add(index)
        self.params.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "params": self.params.to_dict(),
            "identity_list": [identity.to_dict() for identity in self.identity_list],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GenesisState:
        identities = data.get("identity_list", data.get("identityList")) or []
        return cls(
            params=Params.from_dict(data.get("params")),
            identity_list=[Identity.from_dict(item) for item in identities],
        )


def default_params() -> Params:
    return Params()


def default_genesis() -> GenesisState:
    return GenesisState(params=default_params(), identity_list=[])


@dataclass(frozen=True)
class MsgCreateIdentity:
    """Request to register an identity for ``creator``."""

    AMINO_NAME: ClassVar[str] = "identity/CreateIdentity"

    creator: str = ""
    cccd_id: str = ""

    def validate_basic(self) -> None:
        try:
            acc_address_from_bech32(self.creator)
        except ValueError as err:
            raise InvalidAddressError(f"invalid creator address ({err})") from err
        if self.cccd_id == "":
            raise InvalidRequestError("CCCD ID cannot be empty")


@dataclass(frozen=True)
class MsgUpdateParams:
    """Request by the module authority to replace the parameters."""

    AMINO_NAME: ClassVar[str] = "identity/UpdateParams"

    authority: str = ""
    params: Params = field(default_factory=Params)

    def validate_basic(self) -> None:
        try:
            acc_address_from_bech32(self.authority)
        except ValueError as err:
            raise InvalidAddressError(f"invalid authority address: {err}") from err
        self.params.validate()


MSG_TYPES: dict[str, type] = {
    MsgUpdateParams.AMINO_NAME: MsgUpdateParams,
    MsgCreateIdentity.AMINO_NAME: MsgCreateIdentity,
}