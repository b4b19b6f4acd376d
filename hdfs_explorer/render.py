"""
Plain-text templates for the explorer views.

render(view, model) is a pure function; the display decides where the
result goes.
"""

from datetime import datetime, timezone
from typing import Any, Callable

from .projection import BlockMenuEntry, FileDetails, ListingView

Renderer = Callable[[str, Any], str]


def _format_time(ms: int) -> str:
    if not ms:
        return "-"
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")


def _format_size(n: int) -> str:
    size = float(n)
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if size < 1024 or unit == "TB":
            return f"{int(size)} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{n} B"


def _render_explorer(view: ListingView) -> str:
    crumbs = " / ".join(c.name for c in view.breadcrumbs[1:])
    lines = [f"/ {crumbs}".rstrip()]
    if not view.rows:
        lines.append("  (empty directory)")
        return "\n".join(lines)

    owner_w = max(len(r.owner) for r in view.rows)
    group_w = max(len(r.group) for r in view.rows)
    for r in view.rows:
        name = r.name + ("/" if r.is_dir else "")
        repl = str(r.replication) if not r.is_dir else "-"
        size = _format_size(r.length) if not r.is_dir else "-"
        lines.append(
            f"{r.permission:<11} {r.owner:<{owner_w}} {r.group:<{group_w}} "
            f"{size:>10} {_format_time(r.modification_time):>16} {repl:>3}  {name}"
        )
    return "\n".join(lines)


def _render_block_info(entry: BlockMenuEntry) -> str:
    b = entry.block
    lines = [
        f"{entry.label}:",
        f"  Block ID: {b.block_id if b.block_id is not None else '-'}",
        f"  Block Pool ID: {b.block_pool_id or '-'}",
        f"  Generation Stamp: {b.generation_stamp if b.generation_stamp is not None else '-'}",
        f"  Offset: {b.offset}",
        f"  Size: {b.length}",
        "  Availability:",
    ]
    lines.extend(f"    {h}" for h in b.hosts)
    return "\n".join(lines)


def _render_file_info(details: FileDetails) -> str:
    lines = [details.title, f"  Download: {details.download_url}",
             f"  Length: {_format_size(details.file_length)}"]
    if details.status is not None:
        s = details.status
        lines.append(f"  Owner: {s.owner}:{s.group}  Replication: {s.replication}")
    if details.blocks.visible:
        lines.extend(_render_block_info(e) for e in details.blocks.menu_entries)
    return "\n".join(lines)


def render(view: str, model: Any) -> str:
    if view == "explorer":
        return _render_explorer(model)
    if view == "file-info":
        return _render_file_info(model)
    if view == "block-info":
        return _render_block_info(model)
    if view == "file-preview":
        return str(model)
    raise ValueError(f"Unknown view: {view}")
