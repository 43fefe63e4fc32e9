# nexelra

Building blocks for the Nexelra chain's `identity` module, in plain Python
with no runtime dependencies.

## What is in the package

- `nexelra.store`: `KVStore`, an in-memory store that keeps byte keys in
  ascending order; `PrefixStore`, a view of the keys under one prefix; and
  `paginate` with `PageRequest` / `PageResponse` (offset or key based, default
  limit 100, optional total count).
- `nexelra.keeper`: `Keeper`, which stores identities and module parameters in
  a `KVStore` (values are JSON), and `MsgServer`, which handles
  `MsgCreateIdentity` and `MsgUpdateParams`.
- `nexelra.types`: `Identity`, `Params`, `GenesisState`, `MsgCreateIdentity`,
  `MsgUpdateParams`, store key helpers (`key_prefix`, `identity_key`),
  `hash_cccd_id`, `default_params` and `default_genesis`.
- `nexelra.genesis`: `init_genesis`, `export_genesis` and their JSON
  counterparts `default_genesis_json`, `validate_genesis_json`,
  `init_genesis_json`, `export_genesis_json`.
- `nexelra.bech32`: `encode`, `decode`, `acc_address_from_bech32`,
  `module_address` and `sample_acc_address` (prefix `cosmos` by default).
- `nexelra.errors`: `IdentityError` and its subclasses `InvalidSignerError`,
  `InvalidAddressError`, `InvalidRequestError`, `NotFoundError`,
  `InvalidArgumentError` and `InternalError`.
- `nexelra.testnet`: helpers for laying out a multi-validator testnet:
  `default_ports`, `parse_ports`, `parse_stake_amounts`, `persistent_peers`,
  `generate_random_string`, `write_file`, `copy_file` and `is_sub_dir`.
- `nexelra.snapshots`: reading `snapshot-interval` and `snapshot-keep-recent`
  from `config/app.toml` (defaults 100 and 2), counting snapshot directories,
  `create_progress_bar`, `snapshot_progress`, and `fetch_node_status` /
  `blockchain_status`, which read the node's RPC status endpoint
  (`http://localhost:26657/status` by default).
- `nexelra.cli`: the `nexelrad` command.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Library use

```python
from nexelra.keeper import Keeper, MsgServer, QueryGetIdentityRequest
from nexelra.store import KVStore
from nexelra.types import MsgCreateIdentity, default_genesis, hash_cccd_id

keeper = Keeper(KVStore())          # authority defaults to the gov module address
server = MsgServer(keeper)
identity = server.create_identity(
    MsgCreateIdentity(creator="cosmos1...", cccd_id="123456789")
)
assert identity.id_hash == hash_cccd_id("123456789")
keeper.identity(QueryGetIdentityRequest(address=identity.address))

default_genesis().validate()        # raises ValueError on duplicate addresses
```

One address may hold one identity: a second `create_identity` for the same
creator raises `InvalidRequestError`. The ID number itself is never stored,
only its hex SHA-256 hash; `created_at` comes from the keeper's `clock`
(`time.time` unless another callable is passed). `create_identity` does not
check the message itself; call `MsgCreateIdentity.validate_basic` for that.
`update_params` raises `InvalidSignerError` unless the message's authority is
the keeper's.

Queries (`Keeper.identity`, `Keeper.identity_all`,
`Keeper.identity_by_cccd_id`, `Keeper.params`) take the request classes from
`nexelra.keeper`. They raise `InvalidArgumentError` when the request is
`None`, `NotFoundError` for an unknown address, and `InternalError` when
pagination is given both an offset and a key.

## Command line

```
nexelrad snapshots info
nexelrad snapshots list
nexelrad snapshots create
nexelrad snapshots restore FILE [--force]
nexelrad snapshots delete FILE
nexelrad snapshot-info
nexelrad snapshot-list
nexelrad snapshot-restore FILE
```

Every command takes `--home` (default `~/.nexelra`).

- `info` prints the node status, the snapshot settings from
  `config/app.toml`, progress toward the next snapshot height and the
  snapshot directories found in `data/snapshots`.
- `list` prints the files in `data/snapshots` with their sizes and
  modification times.
- `delete` asks for confirmation and then removes the named entry from
  `data/snapshots`.
- `restore` asks for confirmation unless `snapshots restore` is given
  `--force`; `snapshot-restore` accepts `--force` but always asks.

## What it does not do

There is no node here. The store is in memory only, nothing is persisted,
and no transactions are signed, broadcast or replayed. `snapshots create`
and both restore commands only print messages: they neither take nor
restore a snapshot. The testnet helpers produce port lists, peer strings and
files, but do not generate validator keys, genesis files or node
configuration.