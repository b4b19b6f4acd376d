"""
ExplorerConsole: wires the engine together and exposes the UI entry points.

  events -> NavigationController -> GatewayClient -> projection -> Display
  actions -> MutationOrchestrator -> GatewayClient -> refresh
"""

import logging
from typing import Optional, Sequence, Union

import httpx

from .config import ExplorerConfig
from .display import AddressBar, Control, Display
from .errors import Result
from .gateway import GatewayClient
from .inspector import FileInspector
from .models import InodeType, UploadFile, base_name, normalize_path
from .mutations import MutationOrchestrator, PermissionInput
from .navigation import NavigationController
from .projection import FileDetails

log = logging.getLogger(__name__)


class ExplorerConsole:
    """One browsing session against one gateway."""

    def __init__(self, config: Optional[ExplorerConfig] = None,
                 display: Optional[Display] = None,
                 address: Optional[AddressBar] = None,
                 gateway: Optional[GatewayClient] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config or ExplorerConfig()
        self.display = display or Display()
        self.address = address or AddressBar()
        self.gateway = gateway or GatewayClient(self.config, transport=transport)

        self.navigator = NavigationController(self.gateway, self.display, self.address)
        self.inspector = FileInspector(self.gateway, self.display, self.config.tail_chunk_size)
        self.mutations = MutationOrchestrator(self.gateway, self.navigator, self.display)

    async def __aenter__(self) -> "ExplorerConsole":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    @property
    def current_directory(self) -> str:
        return self.navigator.current_directory

    # --- Navigation ---

    async def start(self) -> bool:
        return await self.navigator.start()

    async def navigate(self, path: str) -> bool:
        return await self.navigator.navigate(path)

    async def refresh(self) -> bool:
        return await self.navigator.refresh()

    async def hash_changed(self, fragment: str) -> bool:
        return await self.navigator.on_hash_change(fragment)

    async def select_entry(self, path: str,
                           inode_type: Union[InodeType, str]) -> Optional[FileDetails]:
        """A click on a listing row: enter directories, inspect files."""
        if InodeType(inode_type) is InodeType.DIRECTORY:
            await self.navigator.navigate(path)
            return None
        path = normalize_path(path)
        self.navigator.select(path, base_name(path))
        return await self.inspector.show_file(path)

    async def preview(self, path: str, file_length: int) -> Optional[str]:
        return await self.inspector.preview(path, file_length)

    # --- Mutations ---

    async def submit_mkdir(self, parent: str, name: str,
                           control: Optional[Control] = None,
                           permission: Optional[PermissionInput] = None) -> Result:
        return await self.mutations.mkdir(parent, name, control, permission=permission)

    async def submit_upload(self, target_dir: str, files: Sequence[UploadFile],
                            control: Optional[Control] = None) -> list[Result]:
        return await self.mutations.upload(target_dir, files, control)

    async def submit_chmod(self, path: str, bits: PermissionInput,
                           control: Optional[Control] = None) -> Result:
        return await self.mutations.chmod(path, bits, control)

    async def submit_chown(self, path: str, owner: str, group: str,
                           control: Optional[Control] = None) -> Result:
        return await self.mutations.chown(path, owner, group, control)

    async def submit_set_replication(self, path: str, count: Union[int, str],
                                     control: Optional[Control] = None) -> Result:
        return await self.mutations.set_replication(path, count, control)

    async def close(self) -> None:
        await self.gateway.close()
