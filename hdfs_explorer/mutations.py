"""
MutationOrchestrator: user actions that change the remote filesystem.

Every action follows the same shape: disable the triggering control,
issue the gateway call, refresh the current directory on success, and
re-enable the control whatever happened. No local state is updated
optimistically; the listing only changes through a refresh.
"""

import logging
from typing import Awaitable, Callable, Optional, Sequence, Union

import trio

from .display import Control, Display
from .errors import EncodingError, Err, Ok, Result
from .gateway import GatewayClient
from .models import UploadFile, append_path, normalize_path
from .navigation import NavigationController
from .permissions import PermissionFlags, encode, format_bitmask, parse_bitmask

log = logging.getLogger(__name__)

PermissionInput = Union[int, str, PermissionFlags, Sequence[bool]]


def _permission_param(bits: PermissionInput) -> str:
    """Turn any accepted permission form into the gateway's octal string."""
    if isinstance(bits, (int, str)):
        return format_bitmask(parse_bitmask(bits))
    return format_bitmask(encode(bits))


class MutationOrchestrator:
    """Drives mkdir, upload, chmod, chown and setrep."""

    def __init__(self, gateway: GatewayClient, navigator: NavigationController,
                 display: Display):
        self._gateway = gateway
        self._navigator = navigator
        self._display = display

    async def _run(self, action: str, control: Optional[Control],
                   call: Callable[[], Awaitable[Result]]) -> Result:
        if control is not None:
            control.disable()
        try:
            result = await call()
            if result.ok:
                log.info(f"{action}: ok")
                await self._navigator.refresh()
            else:
                log.info(f"{action}: {result.message}")
                self._display.show_error(result.message)
            return result
        finally:
            if control is not None:
                control.enable()

    def _reject(self, action: str, error: EncodingError) -> Result:
        log.info(f"{action}: rejected input: {error.message}")
        self._display.show_error(error.message)
        return Err(error)

    async def mkdir(self, parent: str, name: str, control: Optional[Control] = None,
                    permission: Optional[PermissionInput] = None) -> Result:
        action = f"mkdir {name!r} in {parent}"
        try:
            if not name or not name.strip("/"):
                raise EncodingError("Directory name must not be empty")
            perm = _permission_param(permission) if permission is not None else None
        except EncodingError as e:
            return self._reject(action, e)

        path = append_path(normalize_path(parent), name.strip("/"))
        return await self._run(action, control,
                               lambda: self._gateway.mkdirs(path, permission=perm))

    async def chmod(self, path: str, bits: PermissionInput,
                    control: Optional[Control] = None) -> Result:
        action = f"chmod {path}"
        try:
            perm = _permission_param(bits)
        except EncodingError as e:
            return self._reject(action, e)
        return await self._run(action, control,
                               lambda: self._gateway.set_permission(path, perm))

    async def chown(self, path: str, owner: str, group: str,
                    control: Optional[Control] = None) -> Result:
        action = f"chown {path}"
        owner, group = owner.strip(), group.strip()
        if not owner and not group:
            return self._reject(action, EncodingError("Owner and group must not both be empty"))
        return await self._run(action, control,
                               lambda: self._gateway.set_owner(path, owner, group))

    async def set_replication(self, path: str, count: Union[int, str],
                              control: Optional[Control] = None) -> Result:
        action = f"setrep {path}"
        try:
            replication = int(count)
        except (TypeError, ValueError):
            return self._reject(action, EncodingError(f"Invalid replication count '{count}'"))
        if replication < 1:
            return self._reject(action, EncodingError(f"Invalid replication count '{count}'"))
        return await self._run(action, control,
                               lambda: self._gateway.set_replication(path, replication))

    async def upload(self, target_dir: str, files: Sequence[UploadFile],
                     control: Optional[Control] = None) -> list[Result]:
        """One CREATE per file, all in flight together.

        Files are independent: a failed one does not stop the others.
        The listing is refreshed once if at least one upload succeeded;
        the last failure is shown after that refresh so it stays visible.
        """
        target_dir = normalize_path(target_dir)
        results: list[Result] = [Ok()] * len(files)
        failures: list[str] = []

        async def _put(i: int, f: UploadFile):
            path = append_path(target_dir, f.name)
            result = await self._gateway.create(path, f.content)
            results[i] = result
            if result.ok:
                log.info(f"Uploaded {path} ({len(f.content)} bytes)")
            else:
                log.info(f"Upload of {path} failed: {result.message}")
                failures.append(result.message)

        if control is not None:
            control.disable()
        try:
            async with trio.open_nursery() as nursery:
                for i, f in enumerate(files):
                    nursery.start_soon(_put, i, f)
            if any(r.ok for r in results):
                await self._navigator.refresh()
            if failures:
                self._display.show_error(failures[-1])
        finally:
            if control is not None:
                control.enable()
        return results
