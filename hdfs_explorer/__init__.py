"""
HDFS Explorer: navigation and mutation engine for a WebHDFS console.

Layout:
- permissions  - octal bitmask <-> symbolic string <-> flags
- gateway      - REST calls against /webhdfs/v1, resolved to Ok/Err
- errors       - error taxonomy and status -> message classifier
- projection   - listings and block locations -> view models
- navigation   - current directory state machine, address sync
- mutations    - mkdir, upload, chmod, chown, setrep
- inspector    - file details, block info, tail preview
- console      - wires the above behind the UI entry points
"""

from .config import ExplorerConfig, load_config
from .console import ExplorerConsole
from .display import AddressBar, Control, Display, TerminalDisplay
from .errors import EncodingError, Err, ExplorerError, GatewayError, Ok, TransportError
from .gateway import GatewayClient, Operation
from .models import INode, InodeType, NavigationState, UploadFile, append_path, normalize_path
from .navigation import NavigationController, NavStatus

__all__ = [
    "AddressBar",
    "Control",
    "Display",
    "EncodingError",
    "Err",
    "ExplorerConfig",
    "ExplorerConsole",
    "ExplorerError",
    "GatewayClient",
    "GatewayError",
    "INode",
    "InodeType",
    "NavStatus",
    "NavigationController",
    "NavigationState",
    "Ok",
    "Operation",
    "TerminalDisplay",
    "TransportError",
    "UploadFile",
    "append_path",
    "load_config",
    "normalize_path",
]
