"""Genesis import and export of the identity module."""

from __future__ import annotations

import json
from typing import Union

from .keeper import Keeper
from .types import MODULE_NAME, GenesisState, default_genesis

JsonData = Union[str, bytes, bytearray]


def init_genesis(keeper: Keeper, genesis_state: GenesisState) -> None:
    """Load every identity and the parameters of ``genesis_state``."""
    for identity in genesis_state.identity_list:
        keeper.set_identity(identity)
    keeper.set_params(genesis_state.params)


def export_genesis(keeper: Keeper) -> GenesisState:
    """Return the module's current state as a genesis state."""
    genesis = default_genesis()
    genesis.params = keeper.get_params()
    genesis.identity_list = keeper.get_all_identity()
    return genesis


def _parse(data: JsonData) -> GenesisState:
    try:
        raw = json.loads(data)
        if not isinstance(raw, dict):
            raise ValueError("genesis state must be a JSON object")
        return GenesisState.from_dict(raw)
    except (ValueError, TypeError, AttributeError) as err:
        raise ValueError(f"failed to unmarshal {MODULE_NAME} genesis state: {err}") from err


def default_genesis_json() -> str:
    return json.dumps(default_genesis().to_dict())


def validate_genesis_json(data: JsonData) -> None:
    """Parse and validate a JSON genesis state, raising ValueError on failure."""
    _parse(data).validate()


def init_genesis_json(keeper: Keeper, data: JsonData) -> None:
    init_genesis(keeper, _parse(data))


def export_genesis_json(keeper: Keeper) -> str:
    return json.dumps(export_genesis(keeper).to_dict())