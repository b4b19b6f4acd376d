"""
NavigationController: the single writer of NavigationState.

Status machine:
  IDLE --navigate--> LOADING --ok--> LOADED
                             --err-> FAILED  (current directory unchanged)

Overlapping navigations are not cancelled. Each one takes a sequence
number; a response older than the newest settled one (committed or
failed) is dropped, so a slow /a answer can never overwrite a newer /b
listing or error. Status only leaves LOADING once the newest issued
navigation has answered.

The address bar fragment mirrors the committed directory. Fragments the
controller published itself are recognised on the way back in, so a
hash-change event caused by a commit never triggers another fetch.
"""

import logging
from dataclasses import replace
from enum import Enum
from typing import Optional

from .display import AddressBar, Display
from .errors import EncodingError
from .gateway import GatewayClient
from .models import NavigationState, normalize_path, parse_listing
from .projection import project_listing

log = logging.getLogger(__name__)


class NavStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class NavigationController:
    """Owns "where am I" and sequences LISTSTATUS fetches."""

    def __init__(self, gateway: GatewayClient, display: Display,
                 address: Optional[AddressBar] = None):
        self._gateway = gateway
        self._display = display
        self._address = address or AddressBar()
        self._state = NavigationState()
        self._status = NavStatus.IDLE

        self._issued_seq = 0
        self._committed_seq = 0
        self._settled_seq = 0
        self._published_fragment: Optional[str] = None

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def status(self) -> NavStatus:
        return self._status

    @property
    def current_directory(self) -> str:
        return self._state.current_directory

    async def start(self) -> bool:
        """Initial load from the address bar; empty fragment means root."""
        target = normalize_path(self._address.fragment)
        if not self._address.fragment:
            self._publish(target)
        return await self.navigate(target, force=True)

    async def navigate(self, target: str, force: bool = False) -> bool:
        """Fetch and show a directory. Returns True if it was committed.

        Without force, navigating to the already-committed directory is a
        no-op, unless another navigation is still in flight.
        """
        target = normalize_path(target)
        if not force and self._committed_seq and self._idle() \
                and target == self._state.current_directory:
            log.debug(f"navigate: already at {target}")
            return True

        self._issued_seq += 1
        seq = self._issued_seq
        self._status = NavStatus.LOADING
        log.debug(f"navigate #{seq}: {target}")

        result = await self._gateway.list_status(target)

        if seq < self._settled_seq:
            log.info(f"navigate #{seq}: dropping stale response for {target}")
            return False

        if not result.ok:
            self._fail(seq, result.message)
            return False

        try:
            view = project_listing(target, parse_listing(result.value))
        except (EncodingError, ValueError, TypeError, AttributeError) as e:
            log.warning(f"navigate #{seq}: malformed listing for {target}: {e}")
            self._fail(seq, f"Failed to read listing of {target}: {e}")
            return False

        self._committed_seq = self._settled_seq = seq
        self._state = replace(
            self._state, current_directory=target, selected_path=None, selected_name=None,
        )
        if seq == self._issued_seq:
            self._status = NavStatus.LOADED
        self._display.clear_error()
        self._publish(target)
        self._display.show("explorer", view)
        log.info(f"Browsing {target} ({len(view.rows)} entries)")
        return True

    async def refresh(self) -> bool:
        """Re-fetch the current directory unconditionally."""
        return await self.navigate(self._state.current_directory, force=True)

    async def on_hash_change(self, fragment: str) -> bool:
        """External address change (back/forward, bookmark, typed URL)."""
        target = normalize_path(fragment)
        if self._published_fragment is not None and fragment == self._published_fragment:
            self._published_fragment = None
            return False
        if self._idle() and target == self._state.current_directory:
            return False
        self._display.clear_error()
        return await self.navigate(target)

    def select(self, path: Optional[str], name: Optional[str]) -> None:
        self._state = replace(self._state, selected_path=path, selected_name=name)

    def _publish(self, directory: str) -> None:
        if self._address.fragment == directory:
            return
        self._published_fragment = directory
        self._address.set_fragment(directory)

    def _idle(self) -> bool:
        """No navigation is waiting for an answer that could still commit."""
        return self._settled_seq == self._issued_seq

    def _fail(self, seq: int, message: str) -> None:
        self._settled_seq = seq
        if seq == self._issued_seq:
            self._status = NavStatus.FAILED
        self._display.show_error(message)
