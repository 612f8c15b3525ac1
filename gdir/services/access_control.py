"""
Access-control list engine.

``apply`` is a pure transition function over ``AccessState``. The interactive
wizard translates operator input into commands, shows ``display(state)`` and
feeds the commands through an ``AccessSession`` until the operator confirms.
"""

import structlog

from gdir.exceptions import InvalidTransitionError, UnconfirmedChangesError
from gdir.models.access import (
    AccessCommand,
    AccessState,
    Append,
    Confirm,
    Convert,
    Disable,
    Promote,
    Remove,
    Replace,
)

logger = structlog.get_logger(__name__)


def apply(state: AccessState, command: AccessCommand) -> AccessState:
    """
    Apply one command to an access state.

    Drive IDs carried by the command are trimmed and blank ones dropped.

    Args:
        state: Current state.
        command: Command to apply.

    Returns:
        The resulting state. ``state`` itself is never modified.

    Raises:
        InvalidTransitionError: If the command is not allowed in the current mode.
    """
    match command:
        case Confirm():
            return state
        case Disable():
            return AccessState()
        case Promote(mode=mode, drives=drives):
            _require_unrestricted(state, command)
            if not mode.is_restricted:
                msg = "Promote target must be allow-list or block-list"
                raise InvalidTransitionError(msg, mode=state.mode.value, command="promote")
            return AccessState.restricted(mode, _trimmed(drives))
        case Append(drives=drives):
            _require_restricted(state, command)
            merged = list(state.drives)
            for drive in _trimmed(drives):
                if drive not in merged:
                    merged.append(drive)
            return AccessState.restricted(state.mode, merged)
        case Remove(indices=indices):
            _require_restricted(state, command)
            dropped = set(indices)
            kept = [d for i, d in enumerate(state.drives, start=1) if i not in dropped]
            return AccessState.restricted(state.mode, kept)
        case Replace(drives=drives):
            _require_restricted(state, command)
            return AccessState.restricted(state.mode, _trimmed(drives))
        case Convert():
            _require_restricted(state, command)
            return AccessState.restricted(state.mode.opposite, state.drives)
        case _:
            msg = f"Unknown access command: {command!r}"
            raise TypeError(msg)


def _trimmed(drives: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    return tuple(d for d in (drive.strip() for drive in drives) if d)


def _command_name(command: AccessCommand) -> str:
    return type(command).__name__.lower()


def _require_restricted(state: AccessState, command: AccessCommand) -> None:
    if state.mode.is_restricted:
        return
    name = _command_name(command)
    msg = f"Cannot {name} drives while access is unrestricted"
    raise InvalidTransitionError(msg, mode=state.mode.value, command=name)


def _require_unrestricted(state: AccessState, command: AccessCommand) -> None:
    if not state.mode.is_restricted:
        return
    name = _command_name(command)
    msg = f"Cannot {name} while access is {state.mode.value}"
    raise InvalidTransitionError(msg, mode=state.mode.value, command=name)


def display(state: AccessState) -> list[tuple[int, str]]:
    """Numbered snapshot of the active list; ``Remove`` indices refer to it."""
    return list(enumerate(state.drives, start=1))


def parse_drive_ids(text: str) -> tuple[str, ...]:
    """Split comma-separated drive IDs, trimming whitespace and dropping blanks."""
    return _trimmed(text.split(","))


def parse_indices(text: str) -> tuple[int, ...]:
    """
    Parse comma-separated 1-based list positions.

    Raises:
        ValueError: If any entry is not a positive integer.
    """
    indices = []
    for part in text.split(","):
        part = part.strip()
        if not part.isdigit() or int(part) == 0:
            msg = f"Invalid list position: {part!r}"
            raise ValueError(msg)
        indices.append(int(part))
    return tuple(indices)


class AccessSession:
    """
    One interactive edit of a user's access.

    Every mutation must be followed by an explicit ``Confirm`` before the
    result is handed out for persistence.
    """

    def __init__(self, state: AccessState) -> None:
        """
        Args:
            state: Access state loaded for the user being edited.
        """
        self._state = state
        self._confirmed = False

    @property
    def state(self) -> AccessState:
        """Working state, possibly unconfirmed."""
        return self._state

    @property
    def confirmed(self) -> bool:
        return self._confirmed

    def submit(self, command: AccessCommand) -> AccessState:
        """
        Apply a command to the working state.

        Returns:
            The working state after the command.
        """
        self._state = apply(self._state, command)
        self._confirmed = isinstance(command, Confirm)
        logger.debug(
            "Access command applied",
            command=_command_name(command),
            mode=self._state.mode.value,
            drives=len(self._state.drives),
        )
        return self._state

    def result(self) -> AccessState:
        """
        The confirmed state.

        Raises:
            UnconfirmedChangesError: If the last command was not ``Confirm``.
        """
        if not self._confirmed:
            msg = "Access changes must be confirmed before saving"
            raise UnconfirmedChangesError(msg, mode=self._state.mode.value)
        return self._state

