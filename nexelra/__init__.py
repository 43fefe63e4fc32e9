"""Identity module state, genesis handling, bech32 addresses, testnet helpers and snapshot tools for the Nexelra chain."""

__version__ = "0.1.0"