"""Data models for the HDFS explorer, parsed from WebHDFS JSON payloads."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

ROOT = "/"


class InodeType(str, Enum):
    FILE = "FILE"
    DIRECTORY = "DIRECTORY"

    @classmethod
    def parse(cls, value: str) -> "InodeType":
        return cls.DIRECTORY if value == cls.DIRECTORY.value else cls.FILE


@dataclass(frozen=True)
class INode:
    """One entry of a directory listing.

    permission keeps the gateway's octal-digit convention (755, not 0o755).
    """
    name: str
    type: InodeType
    permission: int
    owner: str = ""
    group: str = ""
    replication: int = 0
    length: int = 0
    acl_bit: bool = False
    modification_time: int = 0  # ms since epoch
    block_size: int = 0

    @property
    def is_dir(self) -> bool:
        return self.type is InodeType.DIRECTORY

    @classmethod
    def from_status(cls, status: dict) -> "INode":
        """Build from a WebHDFS FileStatus object."""
        return cls(
            name=status.get("pathSuffix", ""),
            type=InodeType.parse(status.get("type", "FILE")),
            permission=int(status.get("permission", "0")),
            owner=status.get("owner", ""),
            group=status.get("group", ""),
            replication=int(status.get("replication", 0)),
            length=int(status.get("length", 0)),
            acl_bit=bool(status.get("aclBit", False)),
            modification_time=int(status.get("modificationTime", 0)),
            block_size=int(status.get("blockSize", 0)),
        )


def parse_listing(payload: dict) -> tuple[INode, ...]:
    """FileStatuses payload -> listing in gateway order."""
    return tuple(INode.from_status(s) for s in payload.get("FileStatus", []))


@dataclass(frozen=True)
class Block:
    """One located block of a file."""
    offset: int
    length: int
    hosts: tuple[str, ...] = ()
    block_id: Optional[int] = None
    generation_stamp: Optional[int] = None
    block_pool_id: str = ""

    @classmethod
    def from_located(cls, located: dict) -> "Block":
        block = located.get("block", {})
        hosts = tuple(
            loc.get("hostName") or loc.get("ipAddr", "")
            for loc in located.get("locations", [])
        )
        return cls(
            offset=int(located.get("startOffset", 0)),
            length=int(block.get("numBytes", 0)),
            hosts=hosts,
            block_id=block.get("blockId"),
            generation_stamp=block.get("generationStamp"),
            block_pool_id=block.get("blockPoolId", ""),
        )


def parse_located_blocks(payload: dict) -> tuple[int, tuple[Block, ...]]:
    """LocatedBlocks payload -> (file_length, blocks ordered by offset)."""
    blocks = sorted(
        (Block.from_located(b) for b in payload.get("locatedBlocks", [])),
        key=lambda b: b.offset,
    )
    return int(payload.get("fileLength", 0)), tuple(blocks)


@dataclass(frozen=True)
class NavigationState:
    """Where the console is. Replaced, never mutated, by the controller."""
    current_directory: str = ROOT
    selected_path: Optional[str] = None
    selected_name: Optional[str] = None


@dataclass(frozen=True)
class UploadFile:
    name: str
    content: bytes = field(default=b"", repr=False)


def normalize_path(path: Optional[str]) -> str:
    """Canonical absolute path: '' -> '/', no trailing slash except root."""
    if not path:
        return ROOT
    if not path.startswith("/"):
        path = "/" + path
    stripped = path.rstrip("/")
    return stripped or ROOT


def append_path(prefix: str, name: str) -> str:
    """Join a child name onto a directory path."""
    p = prefix[:-1] if prefix.endswith("/") else prefix
    return p + "/" + name


def base_name(path: str) -> str:
    return normalize_path(path).rsplit("/", 1)[-1]
