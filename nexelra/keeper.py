"""State access, message handling and queries of the identity module."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .bech32 import acc_address_from_bech32, module_address
from .errors import (
    InternalError,
    InvalidArgumentError,
    InvalidRequestError,
    InvalidSignerError,
    NotFoundError,
)
from .store import KVStore, PageRequest, PageResponse, PrefixStore, paginate
from .types import (
    IDENTITY_KEY_PREFIX,
    MODULE_NAME,
    PARAMS_KEY,
    Identity,
    MsgCreateIdentity,
    MsgUpdateParams,
    Params,
    hash_cccd_id,
    identity_key,
    key_prefix,
)

GOV_MODULE_NAME = "gov"


def _encode(data: dict) -> bytes:
    return json.dumps(data, sort_keys=True, separators=(",", ":")).encode()


def _decode_identity(raw: bytes) -> Identity:
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("stored identity is not an object")
    return Identity.from_dict(data)


def _decode_params(raw: bytes) -> Params:
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("stored params are not an object")
    return Params.from_dict(data)


@dataclass(frozen=True)
class QueryGetIdentityRequest:
    address: str = ""


@dataclass(frozen=True)
class QueryAllIdentityRequest:
    pagination: Optional[PageRequest] = None


@dataclass(frozen=True)
class QueryIdentityByCccdIdRequest:
    id_hash: str = ""
    pagination: Optional[PageRequest] = None


@dataclass(frozen=True)
class QueryParamsRequest:
    pass


@dataclass
class QueryAllIdentityResponse:
    identity: list[Identity] = field(default_factory=list)
    pagination: PageResponse = field(default_factory=PageResponse)


@dataclass
class QueryIdentityByCccdIdResponse:
    identity: list[Identity] = field(default_factory=list)
    pagination: PageResponse = field(default_factory=PageResponse)


class Keeper:
    """Reads and writes the identity module's state."""

    def __init__(
        self,
        store: KVStore,
        authority: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if authority is None:
            authority = module_address(GOV_MODULE_NAME)
        try:
            acc_address_from_bech32(authority)
        except ValueError:
            raise ValueError(f"invalid authority address: {authority}") from None
        self._store = store
        self._authority = authority
        self.clock = clock
        self._logger = logging.getLogger(f"x/{MODULE_NAME}")

    @property
    def authority(self) -> str:
        """The address allowed to update the module parameters."""
        return self._authority

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def _identity_store(self) -> PrefixStore:
        return PrefixStore(self._store, key_prefix(IDENTITY_KEY_PREFIX))

    def set_identity(self, identity: Identity) -> None:
        self._identity_store().set(
            identity_key(identity.address), _encode(identity.to_dict())
        )

    def get_identity(self, address: str) -> Optional[Identity]:
        """Return the identity held by ``address``, or None."""
        raw = self._identity_store().get(identity_key(address))
        if raw is None:
            return None
        return _decode_identity(raw)

    def remove_identity(self, address: str) -> None:
        self._identity_store().delete(identity_key(address))

    def get_all_identity(self) -> list[Identity]:
        return [_decode_identity(raw) for _, raw in self._identity_store().items()]

    def get_params(self) -> Params:
        raw = self._store.get(PARAMS_KEY)
        if raw is None:
            return Params()
        return _decode_params(raw)

    def set_params(self, params: Params) -> None:
        self._store.set(PARAMS_KEY, _encode(params.to_dict()))

    def identity(self, request: Optional[QueryGetIdentityRequest]) -> Identity:
        if request is None:
            raise InvalidArgumentError()
        found = self.get_identity(request.address)
        if found is None:
            raise NotFoundError()
        return found

    def _page(self, pagination, keep: Callable[[Identity], bool]):
        identities: list[Identity] = []

        def collect(_key: bytes, raw: bytes) -> None:
            identity = _decode_identity(raw)
            if keep(identity):
                identities.append(identity)

        try:
            page = paginate(self._identity_store(), pagination, collect)
        except ValueError as err:
            raise InternalError(str(err)) from err
        return identities, page

    def identity_all(
        self, request: Optional[QueryAllIdentityRequest]
    ) -> QueryAllIdentityResponse:
        if request is None:
            raise InvalidArgumentError()
        identities, page = self._page(request.pagination, lambda _: True)
        return QueryAllIdentityResponse(identity=identities, pagination=page)

    def identity_by_cccd_id(
        self, request: Optional[QueryIdentityByCccdIdRequest]
    ) -> QueryIdentityByCccdIdResponse:
        """List identities whose stored hash equals ``request.id_hash``."""
        if request is None:
            raise InvalidArgumentError()
        identities, page = self._page(
            request.pagination, lambda identity: identity.id_hash == request.id_hash
        )
        return QueryIdentityByCccdIdResponse(identity=identities, pagination=page)

    def params(self, request: Optional[QueryParamsRequest]) -> Params:
        if request is None:
            raise InvalidArgumentError()
        return self.get_params()


class MsgServer:
    """Handles the module's transaction messages."""

    def __init__(self, keeper: Keeper) -> None:
        self.keeper = keeper

    def create_identity(self, msg: MsgCreateIdentity) -> Identity:
        """Register an identity for the creator; one identity per address."""
        if self.keeper.get_identity(msg.creator) is not None:
            raise InvalidRequestError("address already has an identity")
        identity = Identity(
            address=msg.creator,
            id_hash=hash_cccd_id(msg.cccd_id),
            created_at=int(self.keeper.clock()),
        )
        self.keeper.set_identity(identity)
        return identity

    def update_params(self, msg: MsgUpdateParams) -> None:
        if self.keeper.authority != msg.authority:
            raise InvalidSignerError(
                f"invalid authority; expected {self.keeper.authority}, got {msg.authority}"
            )
        self.keeper.set_params(msg.params)