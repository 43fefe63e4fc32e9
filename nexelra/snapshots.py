"""Snapshot configuration, snapshot directory inspection and node status."""

from __future__ import annotations

import http.client
import json
import os
import re
import urllib.error
import urllib.request
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

DEFAULT_NODE_HOME = Path.home() / ".nexelra"
RPC_STATUS_URL = "http://localhost:26657/status"
DEFAULT_CHAIN_ID = "nexelra"
INTERVAL_KEY = "snapshot-interval"
KEEP_RECENT_KEY = "snapshot-keep-recent"
METADATA_DB = "metadata.db"

NODE_OFFLINE = "[NODE OFFLINE]"
NODE_OFFLINE_HINT = "[NODE OFFLINE - Check: ignite chain serve]"
RPC_CONNECTION_FAILED = "[RPC CONNECTION FAILED]"
JSON_PARSE_FAILED = "[JSON PARSE FAILED]"
HEIGHT_PARSE_FAILED = "[HEIGHT PARSE FAILED]"
ZERO_TIME = "0001-01-01 00:00:00"

_DEFAULTS = {INTERVAL_KEY: 100, KEEP_RECENT_KEY: 2}
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_LEADING_DIGITS = re.compile(r"^(\d+)", re.ASCII)
_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_RFC3339 = re.compile(
    r"(\d{4}-\d{2}-\d{2})T(\d{2}:\d{2}:\d{2})(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)


@dataclass(frozen=True)
class NodeStatus:
    """What the node reports about its chain."""

    chain_id: str = DEFAULT_CHAIN_ID
    block_height: int = 0
    block_time: str = NODE_OFFLINE
    catching_up: bool = False


@dataclass(frozen=True)
class SnapshotProgress:
    """Where the chain stands between two snapshot heights."""

    last_height: int
    next_height: int
    progress: int
    percent: float


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def parse_config_value_int(config_path, key: str) -> int:
    """Read the integer ``key = N`` from a config file, with built-in defaults."""
    default = _DEFAULTS.get(key, 0)
    try:
        content = Path(config_path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return default
    match = re.search(re.escape(key) + r"\s*=\s*(\d+)", content, re.ASCII)
    if match:
        value = int(match.group(1))
        if value <= _INT64_MAX:
            return value
    return default


def _app_config(home) -> Path:
    return Path(DEFAULT_NODE_HOME if home is None else home) / "config" / "app.toml"


def snapshot_interval(home=None) -> int:
    """The snapshot interval configured in the node's app.toml."""
    return parse_config_value_int(_app_config(home), INTERVAL_KEY)


def snapshot_keep_recent(home=None) -> int:
    """How many recent snapshots the node's app.toml keeps."""
    return parse_config_value_int(_app_config(home), KEEP_RECENT_KEY)


def create_progress_bar(current: int, total: int, width: int) -> str:
    """Return a bar of ``width`` cells, filled in proportion to current/total."""
    if width < 0:
        raise ValueError(f"negative progress bar width: {width}")
    if total == 0:
        return "░" * width
    filled = min(_trunc_div(current * width, total), width)
    if filled < 0:
        raise ValueError(f"negative progress: {current}/{total}")
    return "█" * filled + "░" * (width - filled)


def extract_height_from_dirname(dirname: str) -> int:
    """Return the block height a snapshot directory name starts with, or 0."""
    match = _LEADING_DIGITS.match(dirname)
    if match:
        height = int(match.group(1))
        if height <= _INT64_MAX:
            return height
    return 0


def _snapshot_heights(snapshot_dir):
    try:
        with os.scandir(snapshot_dir) as entries:
            found = [
                extract_height_from_dirname(entry.name)
                for entry in entries
                if entry.is_dir(follow_symlinks=False) and entry.name != METADATA_DB
            ]
    except OSError:
        return []
    return found


def count_snapshot_files(snapshot_dir) -> int:
    """Count the snapshot directories whose names start with a block height."""
    return sum(1 for height in _snapshot_heights(snapshot_dir) if height > 0)


def latest_snapshot_height(snapshot_dir) -> int:
    """Return the highest snapshot height found in ``snapshot_dir``, or 0."""
    return max((h for h in _snapshot_heights(snapshot_dir) if h > 0), default=0)


def snapshot_progress(block_height: int, interval: int) -> SnapshotProgress:
    """Locate ``block_height`` between the last and the next snapshot height."""
    if interval == 0:
        raise ValueError("snapshots are disabled (interval = 0)")
    last = _trunc_div(block_height, interval) * interval
    progress = block_height - last
    return SnapshotProgress(
        last_height=last,
        next_height=last + interval,
        progress=progress,
        percent=float(progress * 100) / float(interval),
    )


def _field(obj: Any, name: str, kind: type) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise ValueError(f"expected an object holding {name!r}")
    value = obj.get(name)
    if value is not None and not isinstance(value, kind):
        raise ValueError(f"unexpected type for {name!r}")
    return value


def _format_block_time(value: Optional[str]) -> str:
    if value is None:
        return ZERO_TIME
    match = _RFC3339.fullmatch(value)
    if not match:
        raise ValueError(f"invalid block time {value!r}")
    text = f"{match.group(1)} {match.group(2)}"
    datetime.strptime(text, "%Y-%m-%d %H:%M:%S")
    return text


def _parse_sync_info(body: bytes) -> tuple[str, str, bool]:
    text = body.decode("utf-8", errors="replace").lstrip()
    document, _ = json.JSONDecoder().raw_decode(text)
    result = _field(document, "result", dict)
    sync_info = _field(result, "sync_info", dict)
    height = _field(sync_info, "latest_block_height", str) or ""
    block_time = _format_block_time(_field(sync_info, "latest_block_time", str))
    catching_up = bool(_field(sync_info, "catching_up", bool))
    return height, block_time, catching_up


def fetch_node_status(url: str = RPC_STATUS_URL, timeout: float = 2.0) -> NodeStatus:
    """Ask the node's RPC status endpoint for its latest block."""
    try:
        response = urllib.request.urlopen(url, timeout=timeout)
    except urllib.error.HTTPError as err:
        response = err
    except (OSError, ValueError, http.client.HTTPException):
        return NodeStatus(block_time=RPC_CONNECTION_FAILED)
    with response:
        try:
            height_text, block_time, catching_up = _parse_sync_info(response.read())
        except (OSError, ValueError, http.client.HTTPException):
            return NodeStatus(block_time=JSON_PARSE_FAILED)
    if _SIGNED_INT.fullmatch(height_text):
        height = int(height_text)
        if _INT64_MIN <= height <= _INT64_MAX:
            return NodeStatus(
                block_height=height, block_time=block_time, catching_up=catching_up
            )
    return NodeStatus(block_time=HEIGHT_PARSE_FAILED)


def blockchain_status(url: str = RPC_STATUS_URL) -> NodeStatus:
    """Return the node's status, or an offline status if it has no blocks."""
    try:
        fetched = fetch_node_status(url)
    except Exception:  # any failure means the node is treated as offline
        return NodeStatus(block_time=NODE_OFFLINE_HINT)
    if fetched.block_height > 0:
        return fetched
    return NodeStatus()