"""Shared test helpers for the hdfs-explorer test suite."""

import json
from typing import Optional
from unittest.mock import AsyncMock

import httpx

from hdfs_explorer.errors import Ok
from hdfs_explorer.gateway import GatewayClient

PREFIX = "/webhdfs/v1"


def file_status(name: str, type: str = "FILE", permission: str = "644", **extra) -> dict:
    """A WebHDFS FileStatus object."""
    status = {
        "pathSuffix": name,
        "type": type,
        "permission": permission,
        "owner": "hdfs",
        "group": "supergroup",
        "replication": 3 if type == "FILE" else 0,
        "length": 0,
        "modificationTime": 1700000000000,
        "blockSize": 134217728 if type == "FILE" else 0,
    }
    status.update(extra)
    return status


def listing(*statuses: dict) -> dict:
    """A FileStatuses payload."""
    return {"FileStatus": list(statuses)}


def make_gateway() -> AsyncMock:
    """AsyncMock gateway whose list_status answers Ok(empty listing)."""
    gateway = AsyncMock(spec=GatewayClient)
    gateway.list_status = AsyncMock(return_value=Ok(listing()))
    gateway.download_url = lambda path: f"http://nn:9870{PREFIX}{path}?op=OPEN"
    return gateway


class FakeWebHDFS:
    """Minimal WebHDFS semantics behind an httpx.MockTransport.

    Keeps a flat dict of path -> FileStatus (+ content for files) and
    records every request for assertions.
    """

    def __init__(self):
        self.nodes: dict[str, dict] = {"/": file_status("", "DIRECTORY", "755")}
        self.content: dict[str, bytes] = {}
        self.requests: list[httpx.Request] = []
        self.forbidden: set[str] = set()

    def add_dir(self, path: str, permission: str = "755") -> None:
        self.nodes[path] = file_status(path.rsplit("/", 1)[-1], "DIRECTORY", permission)

    def add_file(self, path: str, data: bytes, permission: str = "644") -> None:
        self.nodes[path] = file_status(path.rsplit("/", 1)[-1], "FILE", permission, length=len(data))
        self.content[path] = data

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def ops(self) -> list[tuple[str, str, str]]:
        return [(r.method, r.url.params.get("op"), self._path(r)) for r in self.requests]

    @staticmethod
    def _path(request: httpx.Request) -> str:
        path = request.url.path[len(PREFIX):]
        return path.rstrip("/") or "/"

    @staticmethod
    def _error(status: int, message: str, exception: str) -> httpx.Response:
        return httpx.Response(status, json={"RemoteException": {
            "message": message,
            "exception": exception,
            "javaClassName": f"org.apache.hadoop.{exception}",
        }})

    def _children(self, path: str) -> list[dict]:
        prefix = path.rstrip("/") + "/"
        return [
            s for p, s in self.nodes.items()
            if p != "/" and p.startswith(prefix) and "/" not in p[len(prefix):]
        ]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        op = request.url.params.get("op")
        path = self._path(request)
        node: Optional[dict] = self.nodes.get(path)

        if path in self.forbidden:
            return self._error(403, f"Permission denied: user=dr.who, access=WRITE, inode=\"{path}\"",
                               "AccessControlException")

        if op in ("LISTSTATUS", "GETFILESTATUS", "GET_BLOCK_LOCATIONS", "OPEN",
                  "SETPERMISSION", "SETOWNER", "SETREPLICATION") and node is None:
            return self._error(404, f"File does not exist: {path}", "FileNotFoundException")

        if op == "LISTSTATUS":
            if node["type"] == "FILE":
                return httpx.Response(200, json={"FileStatuses": {"FileStatus": [node]}})
            return httpx.Response(200, json={"FileStatuses": {"FileStatus": self._children(path)}})
        if op == "GETFILESTATUS":
            return httpx.Response(200, json={"FileStatus": node})
        if op == "GET_BLOCK_LOCATIONS":
            length = node["length"]
            blocks = [] if not length else [{
                "block": {"blockId": 1073741825, "generationStamp": 1001,
                          "numBytes": length, "blockPoolId": "BP-1"},
                "startOffset": 0,
                "locations": [{"hostName": "dn1.example.com", "ipAddr": "10.0.0.1"}],
            }]
            return httpx.Response(200, json={"LocatedBlocks": {
                "fileLength": length, "locatedBlocks": blocks,
            }})
        if op == "OPEN":
            offset = int(request.url.params.get("offset", 0))
            return httpx.Response(200, content=self.content.get(path, b"")[offset:])
        if op == "MKDIRS":
            self.add_dir(path, request.url.params.get("permission", "755"))
            return httpx.Response(200, json={"boolean": True})
        if op == "CREATE":
            self.add_file(path, request.content)
            return httpx.Response(201)
        if op == "SETPERMISSION":
            node["permission"] = str(int(request.url.params["permission"]))
            return httpx.Response(200)
        if op == "SETOWNER":
            node["owner"] = request.url.params.get("owner") or node["owner"]
            node["group"] = request.url.params.get("group") or node["group"]
            return httpx.Response(200)
        if op == "SETREPLICATION":
            node["replication"] = int(request.url.params["replication"])
            return httpx.Response(200, json={"boolean": True})

        return httpx.Response(400, content=json.dumps({"RemoteException": {
            "message": f"Invalid value for webhdfs parameter \"op\": {op}",
            "exception": "IllegalArgumentException",
            "javaClassName": "java.lang.IllegalArgumentException",
        }}).encode())
