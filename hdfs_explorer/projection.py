"""
Pure transformations from gateway data to render-ready view models.

Nothing here performs I/O; the display renders whatever these return.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from .config import TAIL_CHUNK_SIZE
from .models import ROOT, Block, INode, append_path, normalize_path
from .permissions import PermissionFlags, decode, flags_from_bitmask


@dataclass(frozen=True)
class Breadcrumb:
    name: str
    path: str


@dataclass(frozen=True)
class ListingRow:
    name: str
    path: str
    type: str
    is_dir: bool
    permission: str  # symbolic, with '+' when an ACL is present
    owner: str
    group: str
    replication: int
    length: int
    modification_time: int
    block_size: int


@dataclass(frozen=True)
class ListingView:
    directory: str
    breadcrumbs: tuple[Breadcrumb, ...]
    rows: tuple[ListingRow, ...]


@dataclass(frozen=True)
class PreviewWindow:
    """Half-open byte range [start, end) of the tail preview."""
    start: int
    end: int

    @property
    def offset(self) -> Optional[int]:
        """OPEN offset parameter; None means read from the start."""
        return self.start or None


@dataclass(frozen=True)
class BlockMenuEntry:
    index: int
    label: str
    block: Block


@dataclass(frozen=True)
class BlocksView:
    menu_entries: tuple[BlockMenuEntry, ...]
    preview_window: PreviewWindow
    visible: bool


@dataclass(frozen=True)
class FileDetails:
    path: str
    title: str
    download_url: str
    file_length: int
    blocks: BlocksView
    permissions: Optional[PermissionFlags] = None
    status: Optional[INode] = field(default=None, compare=False)


def breadcrumbs(directory: str) -> tuple[Breadcrumb, ...]:
    """Root crumb followed by one crumb per path segment."""
    crumbs = [Breadcrumb(ROOT, ROOT)]
    prefix = ""
    for segment in normalize_path(directory).split("/")[1:]:
        if not segment:
            continue
        prefix = prefix + "/" + segment
        crumbs.append(Breadcrumb(segment, prefix))
    return tuple(crumbs)


def project_row(directory: str, inode: INode) -> ListingRow:
    symbolic = decode(inode.permission, inode.is_dir)
    if inode.acl_bit:
        symbolic += "+"
    return ListingRow(
        name=inode.name,
        path=append_path(directory, inode.name) if inode.name else directory,
        type=inode.type.value,
        is_dir=inode.is_dir,
        permission=symbolic,
        owner=inode.owner,
        group=inode.group,
        replication=inode.replication,
        length=inode.length,
        modification_time=inode.modification_time,
        block_size=inode.block_size,
    )


def project_listing(directory: str, entries: Sequence[INode]) -> ListingView:
    directory = normalize_path(directory)
    return ListingView(
        directory=directory,
        breadcrumbs=breadcrumbs(directory),
        rows=tuple(project_row(directory, e) for e in entries),
    )


def preview_window(file_length: int, chunk_size: int = TAIL_CHUNK_SIZE) -> PreviewWindow:
    return PreviewWindow(max(0, file_length - chunk_size), file_length)


def project_blocks(blocks: Sequence[Block], file_length: int,
                   chunk_size: int = TAIL_CHUNK_SIZE) -> BlocksView:
    window = preview_window(file_length, chunk_size)
    if file_length == 0:
        return BlocksView(menu_entries=(), preview_window=window, visible=False)
    entries = tuple(
        BlockMenuEntry(index=i, label=f"Block {i}", block=b)
        for i, b in enumerate(blocks)
    )
    return BlocksView(menu_entries=entries, preview_window=window, visible=True)


def project_file(path: str, download_url: str, file_length: int,
                 blocks: Sequence[Block], status: Optional[INode] = None,
                 chunk_size: int = TAIL_CHUNK_SIZE) -> FileDetails:
    path = normalize_path(path)
    return FileDetails(
        path=path,
        title=f"File information - {path.rsplit('/', 1)[-1]}",
        download_url=download_url,
        file_length=file_length,
        blocks=project_blocks(blocks, file_length, chunk_size),
        permissions=flags_from_bitmask(status.permission) if status else None,
        status=status,
    )
