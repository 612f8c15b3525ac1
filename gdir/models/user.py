"""
User domain model.
"""

import json
from dataclasses import dataclass, replace
from typing import Any, Self

from gdir.models.access import AccessState


def _drive_list(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(d, str) for d in value):
        msg = f"Expected a list of drive IDs, got {value!r}"
        raise ValueError(msg)
    return tuple(value)


@dataclass(frozen=True, kw_only=True)
class User:
    """
    A user allowed to browse the index.

    Stored as JSON with the field names the worker script reads:
    ``Name``, ``Pass``, ``DrivesAllowList``, ``DrivesBlockList``.
    An empty list is written as ``null``.
    """

    name: str
    password: str = ""
    allow_list: tuple[str, ...] = ()
    block_list: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.allow_list and self.block_list:
            msg = "allow-list and block-list cannot both be non-empty"
            raise ValueError(msg)

    @property
    def access(self) -> AccessState:
        return AccessState.from_lists(self.allow_list, self.block_list)

    @property
    def is_admin(self) -> bool:
        """Unrestricted users see every drive."""
        return not self.allow_list and not self.block_list

    def with_access(self, state: AccessState) -> Self:
        return replace(self, allow_list=state.allow_list, block_list=state.block_list)

    def to_json(self) -> bytes:
        document = {
            "Name": self.name,
            "Pass": self.password,
            "DrivesAllowList": list(self.allow_list) or None,
            "DrivesBlockList": list(self.block_list) or None,
        }
        return json.dumps(document, separators=(",", ":")).encode("utf-8")

    @classmethod
    def from_json(cls, data: bytes) -> Self:
        document = json.loads(data)
        if not isinstance(document, dict):
            msg = "User record is not a JSON object"
            raise ValueError(msg)
        return cls(
            name=document.get("Name") or "",
            password=document.get("Pass") or "",
            allow_list=_drive_list(document.get("DrivesAllowList")),
            block_list=_drive_list(document.get("DrivesBlockList")),
        )
