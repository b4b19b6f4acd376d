"""Async HTTP client for a WebHDFS-style gateway."""

import logging
from enum import Enum
from typing import Mapping, Optional

import httpx

from .config import ExplorerConfig
from .errors import Err, Ok, Result, TransportError, error_from_response, remote_exception

log = logging.getLogger(__name__)


class Operation(str, Enum):
    GETFILESTATUS = "GETFILESTATUS"
    LISTSTATUS = "LISTSTATUS"
    GET_BLOCK_LOCATIONS = "GET_BLOCK_LOCATIONS"
    OPEN = "OPEN"
    MKDIRS = "MKDIRS"
    CREATE = "CREATE"
    SETPERMISSION = "SETPERMISSION"
    SETOWNER = "SETOWNER"
    SETREPLICATION = "SETREPLICATION"

    @property
    def is_read(self) -> bool:
        return self in READ_OPERATIONS

    @property
    def method(self) -> str:
        return "GET" if self.is_read else "PUT"


READ_OPERATIONS = frozenset({
    Operation.GETFILESTATUS,
    Operation.LISTSTATUS,
    Operation.GET_BLOCK_LOCATIONS,
    Operation.OPEN,
})

# Envelope key holding the payload of a successful JSON response
RESPONSE_KEYS = {
    Operation.GETFILESTATUS: "FileStatus",
    Operation.LISTSTATUS: "FileStatuses",
    Operation.GET_BLOCK_LOCATIONS: "LocatedBlocks",
    Operation.MKDIRS: "boolean",
}


class GatewayClient:
    """Issues one REST call per operation and resolves it to Ok or Err.

    Never raises for HTTP or network failures; no retries.
    """

    def __init__(self, config: Optional[ExplorerConfig] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config or ExplorerConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def build_url(self, path: str, op: Operation,
                  params: Optional[Mapping[str, str]] = None) -> str:
        """<gateway><prefix><path>?op=<OP>&k=v..."""
        query = [("op", op.value)]
        query.extend((k, str(v)) for k, v in (params or {}).items())
        if self.config.user_name:
            query.append(("user.name", self.config.user_name))
        base = self.config.gateway_url.rstrip("/") + self.config.prefix + path
        return str(httpx.URL(base, params=query))

    def download_url(self, path: str) -> str:
        return self.build_url(path, Operation.OPEN)

    async def call(self, path: str, op: Operation,
                   params: Optional[Mapping[str, str]] = None,
                   content: Optional[bytes] = None) -> Result:
        url = self.build_url(path, op, params)
        log.debug(f"{op.method} {url}")

        client = await self._get_client()
        try:
            response = await client.request(op.method, url, content=content)
        except httpx.TransportError as e:
            log.warning(f"{op.value} {path} failed: {e}")
            reason = str(e) or type(e).__name__
            return Err(TransportError(f"Failed to retrieve data from {url}: {reason}"))

        if not response.is_success:
            log.info(f"{op.value} {path} -> HTTP {response.status_code}")
            return Err(error_from_response(
                response.status_code, _json_or_none(response),
                url=url, reason=response.reason_phrase,
            ))

        # File bytes are never an envelope
        if op is Operation.OPEN:
            return Ok(response.text)

        envelope = _json_or_none(response)
        if remote_exception(envelope) is not None:
            return Err(error_from_response(response.status_code, envelope, url=url))

        key = RESPONSE_KEYS.get(op)
        if key is None:
            return Ok(None)
        if envelope is None or key not in envelope:
            return Err(TransportError(
                f"Failed to retrieve data from {url}: response has no {key}",
                status=response.status_code,
            ))
        return Ok(envelope[key])

    # --- Typed helpers ---

    async def get_file_status(self, path: str) -> Result:
        return await self.call(path, Operation.GETFILESTATUS)

    async def list_status(self, path: str) -> Result:
        return await self.call(path, Operation.LISTSTATUS)

    async def get_block_locations(self, path: str) -> Result:
        return await self.call(path, Operation.GET_BLOCK_LOCATIONS)

    async def open(self, path: str, offset: Optional[int] = None) -> Result:
        params = {"offset": str(offset)} if offset else None
        return await self.call(path, Operation.OPEN, params)

    async def mkdirs(self, path: str, permission: Optional[str] = None) -> Result:
        params = {"permission": permission} if permission is not None else None
        return await self.call(path, Operation.MKDIRS, params)

    async def create(self, path: str, content: bytes) -> Result:
        return await self.call(path, Operation.CREATE, content=content)

    async def set_permission(self, path: str, permission: str) -> Result:
        return await self.call(path, Operation.SETPERMISSION, {"permission": permission})

    async def set_owner(self, path: str, owner: str, group: str) -> Result:
        # An empty owner or group means "leave unchanged" and is not sent
        params = {k: v for k, v in (("owner", owner), ("group", group)) if v}
        return await self.call(path, Operation.SETOWNER, params)

    async def set_replication(self, path: str, replication: int) -> Result:
        return await self.call(path, Operation.SETREPLICATION, {"replication": str(replication)})

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def _json_or_none(response: httpx.Response) -> Optional[dict]:
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None
