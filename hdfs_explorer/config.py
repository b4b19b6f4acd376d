"""
Configuration management for hdfs-explorer.

Config lives in ~/.config/hdfs-explorer/config.json (XDG aware):

  {
    "gateway_url": "http://namenode:9870",
    "prefix": "/webhdfs/v1",
    "user_name": "alice",
    "timeout": 30.0,
    "tail_chunk_size": 32768
  }

Resolution (highest → lowest):
  1. CLI flags (--gateway-url, --user)
  2. config.json
  3. Defaults
"""

import fcntl
import json
import logging
import os
import stat
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)

# How many bytes of a file the tail preview shows
TAIL_CHUNK_SIZE = 32768


@dataclass
class ExplorerConfig:
    """Full hdfs-explorer configuration."""
    gateway_url: str = "http://localhost:9870"
    prefix: str = "/webhdfs/v1"
    user_name: str = ""
    timeout: float = 30.0
    tail_chunk_size: int = TAIL_CHUNK_SIZE


# --- Path helpers ---

def get_config_dir() -> Path:
    """Get hdfs-explorer config directory (~/.config/hdfs-explorer/)."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "hdfs-explorer"

def get_config_path() -> Path:
    return get_config_dir() / "config.json"


# --- Read/write config.json ---

def read_config() -> Optional[dict]:
    """Read config.json. Returns None if missing or unreadable."""
    path = get_config_path()
    if not path.exists():
        return None
    try:
        with open(path, "r") as f:
            fcntl.flock(f, fcntl.LOCK_SH)
            try:
                data = json.load(f)
            finally:
                fcntl.flock(f, fcntl.LOCK_UN)
    except (json.JSONDecodeError, OSError) as e:
        log.warning(f"Could not read config at {path}: {e}")
        return None
    if not isinstance(data, dict):
        log.warning(f"Ignoring config at {path}: top level is not an object")
        return None
    return data

def write_config(data: dict) -> None:
    """Atomic write to config.json with file locking, 600 permissions."""
    path = get_config_path()
    tmp_path = path.with_suffix(".tmp")

    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2) + "\n"

    with open(tmp_path, "w") as f:
        fcntl.flock(f, fcntl.LOCK_EX)
        try:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
            # Rename while still holding the lock
            os.rename(tmp_path, path)
            os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
        finally:
            fcntl.flock(f, fcntl.LOCK_UN)


# --- High-level loading ---

def config_from_dict(data: dict) -> ExplorerConfig:
    """Build a config from a dict, ignoring unknown keys and bad values."""
    config = ExplorerConfig()
    for f in fields(ExplorerConfig):
        if f.name not in data:
            continue
        default = getattr(config, f.name)
        try:
            setattr(config, f.name, type(default)(data[f.name]))
        except (TypeError, ValueError):
            log.warning(f"Ignoring invalid config value {f.name}={data[f.name]!r}")
    return config

def load_config(
    cli_gateway_url: Optional[str] = None,
    cli_user_name: Optional[str] = None,
) -> ExplorerConfig:
    """Load config with CLI flags taking priority over config.json."""
    config = config_from_dict(read_config() or {})
    if cli_gateway_url:
        config.gateway_url = cli_gateway_url
    if cli_user_name:
        config.user_name = cli_user_name
    config.gateway_url = config.gateway_url.rstrip("/")
    return config

def update_config(**changes) -> ExplorerConfig:
    """Merge non-None values into config.json and return the result."""
    data = read_config() or {}
    known = {f.name for f in fields(ExplorerConfig)}
    for key, value in changes.items():
        if key not in known:
            raise KeyError(f"Unknown config key: {key}")
        if value is not None:
            data[key] = value
    config = config_from_dict(data)
    write_config(asdict(config))
    return config
