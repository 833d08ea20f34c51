from __future__ import annotations


class BlockBlastError(Exception):
    """Base class for engine errors."""


class InvalidPlacement(BlockBlastError, ValueError):
    """Raised when a placement command violates its preconditions.

    Callers are expected to check `can_place` first, so this signals a
    contract violation rather than a recoverable condition.
    """

    def __init__(self, message: str, slot: int | None = None, row: int | None = None,
                 col: int | None = None) -> None:
        super().__init__(message)
        self.slot = slot
        self.row = row
        self.col = col
