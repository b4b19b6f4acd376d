"""
Subcommand implementations for the hdfs-explorer CLI.

Commands: ls, info, tail, mkdir, put, chmod, chown, setrep, config.

Each command opens one ExplorerConsole, performs the action the web
console would, and prints what the console rendered.
"""

import logging
import sys
from argparse import Namespace
from pathlib import Path

import trio

from .config import get_config_path, load_config, read_config, update_config
from .console import ExplorerConsole
from .display import TerminalDisplay, supports_color
from .models import UploadFile, normalize_path

log = logging.getLogger(__name__)


# --- ANSI formatting helpers ---

_COLOR = supports_color(sys.stdout)

def _bold(text: str) -> str:
    return f"\033[1m{text}\033[0m" if _COLOR else text

def _dim(text: str) -> str:
    return f"\033[2m{text}\033[0m" if _COLOR else text


def _console(args: Namespace) -> ExplorerConsole:
    config = load_config(
        cli_gateway_url=getattr(args, "gateway_url", None),
        cli_user_name=getattr(args, "user", None),
    )
    return ExplorerConsole(config=config, display=TerminalDisplay())


def _run(args: Namespace, action) -> int:
    """Run an async action against a fresh console; 1 if an error was shown."""
    async def _main():
        async with _console(args) as console:
            await action(console)
            return 1 if console.display.message else 0
    return trio.run(_main)


def _split_owner(value: str) -> tuple[str, str]:
    owner, _, group = value.partition(":")
    return owner, group


# --- Subcommands ---

def cmd_ls(args: Namespace) -> int:
    """List a directory."""
    return _run(args, lambda c: c.navigate(args.path))


def cmd_info(args: Namespace) -> int:
    """Show file details and block locations."""
    return _run(args, lambda c: c.select_entry(args.path, "FILE"))


def cmd_tail(args: Namespace) -> int:
    """Print the last chunk of a file."""
    async def action(console: ExplorerConsole):
        result = await console.gateway.get_file_status(normalize_path(args.path))
        if not result.ok:
            console.display.show_error(result.message)
            return
        await console.preview(args.path, int(result.value.get("length", 0)))
    return _run(args, action)


def cmd_mkdir(args: Namespace) -> int:
    """Create a directory."""
    path = normalize_path(args.path)
    parent, _, name = path.rpartition("/")

    async def action(console: ExplorerConsole):
        await console.navigator.navigate(parent or "/")
        await console.submit_mkdir(parent or "/", name, permission=args.permission)
    return _run(args, action)


def cmd_put(args: Namespace) -> int:
    """Upload local files into a directory."""
    files = []
    for local in args.files:
        p = Path(local)
        try:
            files.append(UploadFile(name=p.name, content=p.read_bytes()))
        except OSError as e:
            print(f"Cannot read {local}: {e}", file=sys.stderr)
            return 1

    async def action(console: ExplorerConsole):
        await console.navigator.navigate(args.directory)
        await console.submit_upload(args.directory, files)
    return _run(args, action)


def cmd_chmod(args: Namespace) -> int:
    """Set permission bits (octal digits, e.g. 755 or 1777)."""
    async def action(console: ExplorerConsole):
        await console.submit_chmod(normalize_path(args.path), args.permission)
    return _run(args, action)


def cmd_chown(args: Namespace) -> int:
    """Set owner and/or group (owner:group)."""
    owner, group = _split_owner(args.owner)

    async def action(console: ExplorerConsole):
        await console.submit_chown(normalize_path(args.path), owner, group)
    return _run(args, action)


def cmd_setrep(args: Namespace) -> int:
    """Set the replication factor of a file."""
    async def action(console: ExplorerConsole):
        await console.submit_set_replication(normalize_path(args.path), args.replication)
    return _run(args, action)


def cmd_config(args: Namespace) -> int:
    """Show configuration, or update it when options are given."""
    changes = {
        "gateway_url": args.set_gateway_url,
        "prefix": args.set_prefix,
        "user_name": args.set_user,
        "timeout": args.set_timeout,
    }
    if any(v is not None for v in changes.values()):
        update_config(**changes)
        print(f"Config written to: {get_config_path()}")

    config = load_config()
    on_disk = read_config() is not None
    print(f"\n{_bold('hdfs-explorer configuration')}")
    print(f"  {_dim('file:')}        {get_config_path()}" + ("" if on_disk else _dim(" (not created)")))
    print(f"  {_dim('gateway:')}     {config.gateway_url}{config.prefix}")
    print(f"  {_dim('user:')}        {config.user_name or _dim('(none)')}")
    print(f"  {_dim('timeout:')}     {config.timeout}s")
    print(f"  {_dim('tail chunk:')}  {config.tail_chunk_size} bytes\n")
    return 0
