"""FileInspector: file details, block info, and tail preview."""

import logging
from typing import Optional

from .config import TAIL_CHUNK_SIZE
from .display import Display
from .errors import EncodingError
from .gateway import GatewayClient
from .models import INode, normalize_path, parse_located_blocks
from .projection import FileDetails, preview_window, project_file

log = logging.getLogger(__name__)


class FileInspector:
    """Read-only views of a single file."""

    def __init__(self, gateway: GatewayClient, display: Display,
                 tail_chunk_size: int = TAIL_CHUNK_SIZE):
        self._gateway = gateway
        self._display = display
        self.tail_chunk_size = tail_chunk_size

    async def show_file(self, path: str) -> Optional[FileDetails]:
        """Fetch block locations and status, then show the file-info view."""
        path = normalize_path(path)
        located = await self._gateway.get_block_locations(path)
        if not located.ok:
            self._display.show_error(located.message)
            return None

        # Status only feeds the permission dialog; its failure is not fatal
        status: Optional[INode] = None
        stat = await self._gateway.get_file_status(path)
        if stat.ok:
            status = INode.from_status(stat.value)
        else:
            log.info(f"GETFILESTATUS {path} failed: {stat.message}")

        try:
            file_length, blocks = parse_located_blocks(located.value)
            details = project_file(
                path,
                download_url=self._gateway.download_url(path),
                file_length=file_length,
                blocks=blocks,
                status=status,
                chunk_size=self.tail_chunk_size,
            )
        except (EncodingError, ValueError, TypeError, AttributeError) as e:
            log.warning(f"Malformed block locations for {path}: {e}")
            self._display.show_error(f"Failed to read block locations of {path}: {e}")
            return None

        self._display.show("file-info", details)
        return details

    def show_block(self, details: FileDetails, index: int) -> bool:
        """Show one entry of the block menu. Unknown index is ignored."""
        entries = details.blocks.menu_entries
        if not 0 <= index < len(entries):
            return False
        self._display.show("block-info", entries[index])
        return True

    async def preview(self, path: str, file_length: int) -> Optional[str]:
        """Fetch the tail of a file and show it in the preview pane."""
        window = preview_window(file_length, self.tail_chunk_size)
        result = await self._gateway.open(normalize_path(path), offset=window.offset)
        if not result.ok:
            self._display.show_error(result.message)
            return None
        self._display.show("file-preview", result.value)
        return result.value
