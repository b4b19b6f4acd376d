"""
Error taxonomy, call results, and the user-facing message classifier.

Every gateway call resolves to ``Ok(payload)`` or ``Err(error)``; nothing
is raised past the navigation controller or the mutation orchestrator.
The error carried by ``Err`` already holds the message to show.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union


class ExplorerError(Exception):
    """Base class for everything the console can surface to the user."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class TransportError(ExplorerError):
    """Network or HTTP failure with no gateway envelope."""


class GatewayError(ExplorerError):
    """The gateway answered with a RemoteException envelope."""

    def __init__(self, message: str, status: Optional[int] = None,
                 exception: str = "", java_class_name: str = ""):
        super().__init__(message, status)
        self.exception = exception
        self.java_class_name = java_class_name


class EncodingError(ExplorerError):
    """Malformed user input: bad octal permission, empty name, bad count."""


@dataclass(frozen=True)
class Ok:
    value: Any = None
    ok = True


@dataclass(frozen=True)
class Err:
    error: ExplorerError
    ok = False

    @property
    def message(self) -> str:
        return self.error.message


Result = Union[Ok, Err]


def remote_exception(envelope: Optional[dict]) -> Optional[dict]:
    """Return the RemoteException body of an envelope, if any."""
    if not isinstance(envelope, dict):
        return None
    body = envelope.get("RemoteException")
    return body if isinstance(body, dict) else None


def classify(status: int, envelope: Optional[dict] = None,
             url: str = "", reason: str = "") -> str:
    """Map an HTTP status and optional gateway envelope to a display message.

    A RemoteException message always wins, verbatim. Otherwise:
      401 -> authentication failed
      403 -> permission denied
      404 -> path does not exist or WebHDFS is disabled
      *   -> failed to retrieve data, with the transport reason appended
    """
    body = remote_exception(envelope)
    if body and body.get("message"):
        return body["message"]

    if status == 401:
        return f"Authentication failed when trying to open {url}: Unauthorized."
    if status == 403:
        return f"Permission denied when trying to open {url}: {reason}"
    if status == 404:
        return ("Path does not exist on HDFS or WebHDFS is disabled. "
                "Please check your path or enable WebHDFS.")
    return f"Failed to retrieve data from {url}: {reason}"


def error_from_response(status: int, envelope: Optional[dict],
                        url: str = "", reason: str = "") -> ExplorerError:
    """Build the typed error for a failed or exception-carrying response."""
    message = classify(status, envelope, url=url, reason=reason)
    body = remote_exception(envelope)
    if body is not None:
        return GatewayError(
            message,
            status=status,
            exception=body.get("exception", ""),
            java_class_name=body.get("javaClassName", ""),
        )
    return TransportError(message, status=status)
