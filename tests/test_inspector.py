"""Tests for FileInspector: file details, block menu and tail preview."""

from unittest.mock import AsyncMock

import pytest

from hdfs_explorer.display import Display
from hdfs_explorer.errors import Err, GatewayError, Ok, TransportError
from hdfs_explorer.inspector import FileInspector

from tests.helpers import file_status, make_gateway


def _located(*lengths):
    blocks, offset = [], 0
    for i, length in enumerate(lengths):
        blocks.append({
            "block": {"blockId": 100 + i, "generationStamp": 1, "numBytes": length, "blockPoolId": "BP"},
            "startOffset": offset,
            "locations": [{"hostName": f"dn{i}"}],
        })
        offset += length
    return {"fileLength": offset, "locatedBlocks": blocks}


def _inspector(located=None, status=None):
    gateway = make_gateway()
    gateway.get_block_locations = AsyncMock(return_value=located or Ok(_located(10, 5)))
    gateway.get_file_status = AsyncMock(return_value=status or Ok(file_status("f.txt", length=15)))
    display = Display()
    return FileInspector(gateway, display, tail_chunk_size=8), gateway, display


class TestShowFile:
    @pytest.mark.anyio
    async def test_details_view(self):
        inspector, gateway, display = _inspector()

        details = await inspector.show_file("/d/f.txt")

        assert details.title == "File information - f.txt"
        assert details.file_length == 15
        assert details.download_url.endswith("/d/f.txt?op=OPEN")
        assert [e.label for e in details.blocks.menu_entries] == ["Block 0", "Block 1"]
        assert details.blocks.preview_window.start == 7
        assert display.last_view == ("file-info", details)

    @pytest.mark.anyio
    async def test_block_locations_error_is_shown(self):
        inspector, gateway, display = _inspector(
            located=Err(GatewayError("File does not exist: /d/gone", 404)))
        assert await inspector.show_file("/d/gone") is None
        assert display.message == "File does not exist: /d/gone"
        gateway.get_file_status.assert_not_awaited()

    @pytest.mark.anyio
    async def test_status_failure_is_not_fatal(self):
        inspector, _, display = _inspector(status=Err(TransportError("down")))
        details = await inspector.show_file("/d/f.txt")
        assert details is not None
        assert details.status is None
        assert display.message is None

    @pytest.mark.anyio
    async def test_empty_file_hides_block_panel(self):
        inspector, _, _ = _inspector(located=Ok({"fileLength": 0, "locatedBlocks": []}))
        details = await inspector.show_file("/d/empty")
        assert details.blocks.visible is False


class TestShowBlock:
    @pytest.mark.anyio
    async def test_select_block(self):
        inspector, _, display = _inspector()
        details = await inspector.show_file("/d/f.txt")
        assert inspector.show_block(details, 1) is True
        name, entry = display.last_view
        assert name == "block-info"
        assert entry.block.offset == 10
        assert entry.block.hosts == ("dn1",)

    @pytest.mark.anyio
    async def test_unknown_index_ignored(self):
        inspector, _, display = _inspector()
        details = await inspector.show_file("/d/f.txt")
        assert inspector.show_block(details, 5) is False
        assert display.last_view[0] == "file-info"


class TestPreview:
    @pytest.mark.anyio
    async def test_tail_uses_offset(self):
        inspector, gateway, display = _inspector()
        gateway.open = AsyncMock(return_value=Ok("tail"))
        assert await inspector.preview("/d/f.txt", 15) == "tail"
        gateway.open.assert_awaited_once_with("/d/f.txt", offset=7)
        assert display.last_view == ("file-preview", "tail")

    @pytest.mark.anyio
    async def test_small_file_reads_from_start(self):
        inspector, gateway, _ = _inspector()
        gateway.open = AsyncMock(return_value=Ok("all"))
        await inspector.preview("/d/f.txt", 8)
        gateway.open.assert_awaited_once_with("/d/f.txt", offset=None)

    @pytest.mark.anyio
    async def test_error_is_shown(self):
        inspector, gateway, display = _inspector()
        gateway.open = AsyncMock(return_value=Err(TransportError("refused")))
        assert await inspector.preview("/d/f.txt", 15) is None
        assert display.message == "refused"
