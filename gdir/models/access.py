"""
Access-control domain models.

A user's drive access is one of three modes. The allow-list and block-list
are mutually exclusive, so a single ordered tuple of drive IDs plus the mode
describes the whole state.
"""

from dataclasses import dataclass
from enum import Enum


class AccessMode(Enum):
    """Access-control mode of a user."""

    UNRESTRICTED = "unrestricted"
    ALLOW_LIST = "allow-list"
    BLOCK_LIST = "block-list"

    @property
    def is_restricted(self) -> bool:
        return self is not AccessMode.UNRESTRICTED

    @property
    def opposite(self) -> "AccessMode":
        """The other list kind. Unrestricted has no opposite."""
        match self:
            case AccessMode.ALLOW_LIST:
                return AccessMode.BLOCK_LIST
            case AccessMode.BLOCK_LIST:
                return AccessMode.ALLOW_LIST
            case _:
                msg = "unrestricted access has no opposite list"
                raise ValueError(msg)


@dataclass(frozen=True, kw_only=True)
class AccessState:
    """
    Access-control state of one user.

    Attributes:
        mode: Active mode.
        drives: Drive IDs of the active list, in display order.
    """

    mode: AccessMode = AccessMode.UNRESTRICTED
    drives: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.mode is AccessMode.UNRESTRICTED and self.drives:
            msg = "unrestricted access cannot carry drive IDs"
            raise ValueError(msg)
        if self.mode.is_restricted and not self.drives:
            msg = f"{self.mode.value} access requires at least one drive ID"
            raise ValueError(msg)

    @classmethod
    def restricted(cls, mode: AccessMode, drives: tuple[str, ...] | list[str]) -> "AccessState":
        """Build a restricted state; an empty list collapses to unrestricted."""
        drives = tuple(drives)
        if not drives:
            return cls()
        return cls(mode=mode, drives=drives)

    @classmethod
    def from_lists(
        cls, allow_list: tuple[str, ...] | list[str], block_list: tuple[str, ...] | list[str]
    ) -> "AccessState":
        """
        Build from the two stored lists.

        Raises:
            ValueError: If both lists are non-empty.
        """
        if allow_list and block_list:
            msg = "allow-list and block-list cannot both be non-empty"
            raise ValueError(msg)
        if allow_list:
            return cls(mode=AccessMode.ALLOW_LIST, drives=tuple(allow_list))
        if block_list:
            return cls(mode=AccessMode.BLOCK_LIST, drives=tuple(block_list))
        return cls()

    @property
    def allow_list(self) -> tuple[str, ...]:
        return self.drives if self.mode is AccessMode.ALLOW_LIST else ()

    @property
    def block_list(self) -> tuple[str, ...]:
        return self.drives if self.mode is AccessMode.BLOCK_LIST else ()


@dataclass(frozen=True)
class Confirm:
    """Accept the current state."""


@dataclass(frozen=True)
class Append:
    """Add drive IDs not already in the active list."""

    drives: tuple[str, ...]


@dataclass(frozen=True)
class Remove:
    """Drop entries by their 1-based position in the displayed list."""

    indices: tuple[int, ...]


@dataclass(frozen=True)
class Replace:
    """Overwrite the active list."""

    drives: tuple[str, ...]


@dataclass(frozen=True)
class Convert:
    """Move the active list to the opposite kind."""


@dataclass(frozen=True)
class Disable:
    """Clear both lists."""


@dataclass(frozen=True)
class Promote:
    """Turn unrestricted access into an allow-list or block-list."""

    mode: AccessMode
    drives: tuple[str, ...]


AccessCommand = Confirm | Append | Remove | Replace | Convert | Disable | Promote
