"""
Pytest fixtures for hdfs-explorer tests.

Async tests use the anyio pytest plugin pinned to trio, the event loop
the explorer runs on.
"""

import pytest

from hdfs_explorer.display import AddressBar, Display

from tests.helpers import FakeWebHDFS


@pytest.fixture
def anyio_backend():
    return "trio"


@pytest.fixture
def display() -> Display:
    """Display that renders but writes nowhere."""
    return Display()


@pytest.fixture
def address() -> AddressBar:
    return AddressBar()


@pytest.fixture
def webhdfs() -> FakeWebHDFS:
    """In-memory WebHDFS gateway with a small tree."""
    fs = FakeWebHDFS()
    fs.add_dir("/user")
    fs.add_dir("/user/alice")
    fs.add_file("/user/alice/notes.txt", b"hello world\n")
    fs.add_dir("/tmp", permission="1777")
    return fs
