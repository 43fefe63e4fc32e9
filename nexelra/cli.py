"""Command line for inspecting and managing node snapshots."""

from __future__ import annotations

import argparse
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from .snapshots import (
    DEFAULT_NODE_HOME,
    blockchain_status,
    count_snapshot_files,
    create_progress_bar,
    latest_snapshot_height,
    snapshot_interval,
    snapshot_keep_recent,
    snapshot_progress,
)

_TOP = "╔" + "═" * 62 + "╗"
_MIDDLE = "╠" + "═" * 62 + "╣"
_BOTTOM = "╚" + "═" * 62 + "╝"
_BLANK = "║" + " " * 62 + "║"


def _home(home) -> Path:
    return Path(DEFAULT_NODE_HOME if home is None else home)


def _snapshot_dir(home) -> Path:
    return _home(home) / "data" / "snapshots"


def _confirm(inp: TextIO, out: TextIO) -> bool:
    print("Do you want to continue? (y/N): ", end="", file=out, flush=True)
    tokens = inp.readline().split()
    response = tokens[0] if tokens else ""
    return response in ("y", "Y")


def run_snapshot_info(home=None, out: Optional[TextIO] = None) -> None:
    """Print the node status, snapshot configuration and snapshot files."""
    out = out or sys.stdout

    def say(line: str = "") -> None:
        print(line, file=out)

    say(_TOP)
    say("║                 SNAPSHOT & BLOCKCHAIN STATUS                 ║")
    say(_MIDDLE)
    say("║ 🔗 BLOCKCHAIN STATUS                                         ║")

    status = blockchain_status()
    catching_up = "true" if status.catching_up else "false"
    say(f"║   Chain ID: {status.chain_id:<47}  ║")
    say(f"║   Current Block Height: {status.block_height:<33d}    ║")
    say(f"║   Latest Block Time: {status.block_time:<36}    ║")
    say(f"║   Catching Up: {catching_up:<42}    ║")
    say(_BLANK)

    say("║ ⚙️  SNAPSHOT CONFIGURATION                                     ║")
    interval = snapshot_interval(_home(home))
    keep_recent = snapshot_keep_recent(_home(home))

    if interval == 0:
        say("║   Status: ❌ DISABLED (interval = 0)                          ║")
        say("║   Fix: Edit ~/.nexelra/config/app.toml                        ║")
        say("║        Set snapshot-interval = 100                           ║")
    else:
        say("║   Status: ✅ ENABLED                                        ║")
        say(f"║   Snapshot Interval: {interval:<35d} ║")
        say(f"║   Keep Recent: {keep_recent:<39d} ║")
        say(_BLANK)
        say("║ 📸 SNAPSHOT PROGRESS                                        ║")

        progress = snapshot_progress(status.block_height, interval)
        if progress.last_height > 0:
            say(f"║   Last Snapshot: Block {progress.last_height:<33d} ║")
        else:
            say("║   Last Snapshot: None yet                                    ║")
        say(f"║   Next Snapshot: Block {progress.next_height:<33d} ║")
        say(
            f"║   Progress: {progress.progress}/{interval} blocks "
            f"({progress.percent:.1f}%){'':<19} ║"
        )
        bar = create_progress_bar(progress.progress, interval, 40)
        say(f"║   [{bar}] ║")
        say(_BLANK)

    say("║ 📂 SNAPSHOT FILES                                           ║")
    snapshot_dir = _snapshot_dir(home)
    say(f"║   Directory: {str(snapshot_dir):<44} ║")
    snapshot_count = count_snapshot_files(snapshot_dir)
    say(f"║   Available Files: {snapshot_count:<35d} ║")
    if snapshot_count > 0:
        latest = latest_snapshot_height(snapshot_dir)
        if latest > 0:
            say(f"║   Latest: Block {latest:<37d} ║")
    say(_BOTTOM)

    say("\n💡 USEFUL COMMANDS:")
    if interval == 0:
        say(
            "   Enable snapshots: sed -i 's/snapshot-interval = 0/snapshot-interval = 100/'"
            " ~/.nexelra/config/app.toml"
        )
        say("   Restart node:     Press Ctrl+C and run 'ignite chain serve' again")
    else:
        say("   Monitor progress: watch -n 5 'nexelrad snapshots info'")
        say("   List snapshots:   nexelrad snapshots list")
        say("   Current height:   nexelrad status | jq -r '.sync_info.latest_block_height'")


def run_snapshot_list(home=None, out: Optional[TextIO] = None) -> None:
    """Print the files in the snapshot directory."""
    out = out or sys.stdout
    snapshot_dir = _snapshot_dir(home)
    if not snapshot_dir.exists():
        print(f"❌ Snapshot directory not found: {snapshot_dir}", file=out)
        return
    try:
        with os.scandir(snapshot_dir) as scan:
            entries = sorted(scan, key=lambda entry: entry.name)
    except OSError as err:
        raise OSError(f"failed to read snapshot directory: {err}") from err

    if not entries:
        print("📂 No snapshots found", file=out)
        return

    print("📂 Available Snapshots:", file=out)
    print("=" * 51, file=out)
    for number, entry in enumerate(entries, start=1):
        if entry.is_dir(follow_symlinks=False):
            continue
        info = entry.stat(follow_symlinks=False)
        modified = datetime.fromtimestamp(info.st_mtime).strftime("%Y-%m-%d %H:%M:%S")
        print(
            f"{number}. {entry.name} (Size: {info.st_size} bytes, Modified: {modified})",
            file=out,
        )


def run_snapshot_create(out: Optional[TextIO] = None) -> None:
    """Announce that a snapshot is to be taken."""
    out = out or sys.stdout
    print("🔄 Creating snapshot...", file=out)
    print("⏳ This may take a few minutes depending on blockchain size...", file=out)
    print("✅ Snapshot creation initiated", file=out)
    print("📋 Use 'nexelrad snapshot-list' to see the new snapshot", file=out)


def run_snapshot_restore(
    snapshot_file: str,
    force: bool = False,
    inp: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
) -> bool:
    """Restore from ``snapshot_file`` after confirmation; return whether it ran."""
    inp = inp or sys.stdin
    out = out or sys.stdout
    if not force:
        print(f"⚠️  This will restore blockchain state from: {snapshot_file}", file=out)
        if not _confirm(inp, out):
            print("❌ Restore cancelled", file=out)
            return False

    print(f"🔄 Restoring from snapshot: {snapshot_file}", file=out)
    print("⏳ This may take several minutes...", file=out)
    print("✅ Snapshot restore completed", file=out)
    print("🚀 Please restart the blockchain node", file=out)
    return True


def run_snapshot_delete(
    home,
    snapshot_file: str,
    inp: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
) -> bool:
    """Delete a snapshot after confirmation; return whether it was deleted."""
    inp = inp or sys.stdin
    out = out or sys.stdout
    full_path = _snapshot_dir(home) / snapshot_file
    if not full_path.exists():
        raise FileNotFoundError(f"snapshot file not found: {snapshot_file}")

    print(f"⚠️  This will permanently delete: {snapshot_file}", file=out)
    if not _confirm(inp, out):
        print("❌ Delete cancelled", file=out)
        return False

    try:
        if full_path.is_dir() and not full_path.is_symlink():
            full_path.rmdir()
        else:
            full_path.unlink()
    except OSError as err:
        raise OSError(f"failed to delete snapshot: {err}") from err

    print(f"✅ Snapshot deleted: {snapshot_file}", file=out)
    return True


def _build_parser() -> tuple[argparse.ArgumentParser, argparse.ArgumentParser]:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--home", default=argparse.SUPPRESS, help="node home directory")

    parser = argparse.ArgumentParser(
        prog="nexelrad", description="Start nexelra node", parents=[common]
    )
    parser.set_defaults(home=str(DEFAULT_NODE_HOME))
    commands = parser.add_subparsers(dest="command")

    snapshots = commands.add_parser(
        "snapshots",
        parents=[common],
        help="Snapshot management commands",
        description="Commands for managing blockchain snapshots including info, "
        "list, create, and restore operations",
    )
    actions = snapshots.add_subparsers(dest="action")
    actions.add_parser("info", parents=[common], help="Show snapshot information")
    actions.add_parser("list", parents=[common], help="List available snapshots")
    actions.add_parser("create", parents=[common], help="Create a new snapshot")
    restore = actions.add_parser("restore", parents=[common], help="Restore from snapshot")
    restore.add_argument("file")
    restore.add_argument(
        "--force", action="store_true", help="Force restore without confirmation"
    )
    delete = actions.add_parser("delete", parents=[common], help="Delete a snapshot")
    delete.add_argument("file")

    commands.add_parser(
        "snapshot-info",
        parents=[common],
        help="Display snapshot configuration and status",
    )
    commands.add_parser("snapshot-list", parents=[common], help="List available snapshots")
    top_restore = commands.add_parser(
        "snapshot-restore",
        parents=[common],
        help="Restore blockchain state from snapshot",
    )
    top_restore.add_argument("file")
    # Accepted for compatibility; this command always asks for confirmation.
    top_restore.add_argument(
        "--force", action="store_true", help="Force restore without confirmation"
    )
    return parser, snapshots


def main(argv=None) -> int:
    """Run the command line and return its exit status."""
    parser, snapshots = _build_parser()
    args = parser.parse_args(argv)
    home = args.home
    command = args.command
    action = getattr(args, "action", None)

    try:
        if command == "snapshot-info" or (command == "snapshots" and action == "info"):
            run_snapshot_info(home)
        elif command == "snapshot-list" or (command == "snapshots" and action == "list"):
            run_snapshot_list(home)
        elif command == "snapshots" and action == "create":
            run_snapshot_create()
        elif command == "snapshots" and action == "restore":
            run_snapshot_restore(args.file, args.force)
        elif command == "snapshot-restore":
            run_snapshot_restore(args.file, False)
        elif command == "snapshots" and action == "delete":
            run_snapshot_delete(home, args.file)
        elif command == "snapshots":
            snapshots.print_help()
        else:
            parser.print_help()
    except OSError as err:
        print(err, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())