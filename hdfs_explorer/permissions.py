"""
Permission codec: octal bitmask <-> symbolic string <-> flag set.

The gateway reports permissions as a string of octal digits ("755",
"1777"). We keep that convention and treat the bitmask as an int whose
*decimal* digits are the octal digits, so 755 means rwxr-xr-x, not 0o755.

The sticky digit is always rendered on the last character of the
string, for files and directories alike: 't' when other-execute is set,
'T' when it is not.
"""

from dataclasses import astuple, dataclass
from typing import Sequence, Union

from .errors import EncodingError

SYMBOLS = ("---", "--x", "-w-", "-wx", "r--", "r-x", "rw-", "rwx")

MAX_BITMASK = 7777


@dataclass(frozen=True)
class PermissionFlags:
    """The ten checkboxes of the permission dialog, in display order."""
    sticky: bool = False
    owner_read: bool = False
    owner_write: bool = False
    owner_execute: bool = False
    group_read: bool = False
    group_write: bool = False
    group_execute: bool = False
    other_read: bool = False
    other_write: bool = False
    other_execute: bool = False

    def as_vector(self) -> tuple[bool, ...]:
        return astuple(self)

    @classmethod
    def from_vector(cls, vector: Sequence[bool]) -> "PermissionFlags":
        if len(vector) != 10:
            raise EncodingError(f"Expected 10 permission flags, got {len(vector)}")
        return cls(*(bool(v) for v in vector))


# Decimal weight of each flag, matching PermissionFlags field order
_WEIGHTS = (1000, 400, 200, 100, 40, 20, 10, 4, 2, 1)


def parse_bitmask(value: Union[int, str]) -> int:
    """Validate an octal-digit bitmask given as int or string.

    Raises EncodingError for non-numeric input, non-octal digits, or
    values outside [0, 7777].
    """
    text = str(value).strip()
    if not text.isdigit():
        raise EncodingError(f"Invalid permission '{value}': expected octal digits")
    if any(c in "89" for c in text):
        raise EncodingError(f"Invalid permission '{value}': digits must be 0-7")
    bitmask = int(text)
    if bitmask > MAX_BITMASK:
        raise EncodingError(f"Invalid permission '{value}': out of range")
    return bitmask


def format_bitmask(bitmask: int) -> str:
    """Render a bitmask as the gateway expects it, at least three digits."""
    return f"{bitmask:03d}"


def decode(bitmask: Union[int, str], is_directory: bool = False) -> str:
    """Octal bitmask -> 10-character symbolic string."""
    n = parse_bitmask(bitmask)
    other_execute = n % 2 == 1

    res = ""
    for _ in range(3):
        res = SYMBOLS[n % 10] + res
        n //= 10

    # Whatever is left is the special digit; only sticky is rendered
    if n % 2 == 1:
        res = res[:-1] + ("t" if other_execute else "T")

    return ("d" if is_directory else "-") + res


def encode(flags: Union[PermissionFlags, Sequence[bool]]) -> int:
    """Flag set (or 10-boolean vector) -> octal bitmask."""
    if not isinstance(flags, PermissionFlags):
        flags = PermissionFlags.from_vector(flags)
    return sum(w for w, on in zip(_WEIGHTS, flags.as_vector()) if on)


def flags_from_bitmask(bitmask: Union[int, str]) -> PermissionFlags:
    return flags_from_symbolic(decode(bitmask))


def flags_from_symbolic(symbolic: str) -> PermissionFlags:
    """Parse a symbolic string such as 'drwxr-xr-t' back into flags.

    A trailing ACL marker ('+') is tolerated and ignored.
    """
    text = symbolic.rstrip("+")
    if len(text) != 10 or text[0] not in "d-":
        raise EncodingError(f"Invalid permission string '{symbolic}'")

    body = text[1:]
    for i, c in enumerate(body):
        allowed = "rwx"[i % 3] + "-"
        if i == 8:
            allowed += "tT"
        if c not in allowed:
            raise EncodingError(f"Invalid permission string '{symbolic}'")

    last = body[8]
    vector = [last in "tT"]
    vector.extend(c != "-" for c in body[:8])
    vector.append(last in "xt")
    return PermissionFlags.from_vector(vector)
