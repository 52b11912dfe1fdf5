from __future__ import annotations

from typing import Generic, TypeVar

"""Undo/redo history for immutable dashboard states (filters, chart settings)."""

__all__ = [
    "History",
]

T = TypeVar("T")


class History(Generic[T]):
    """Current state plus undo/redo stacks.

    ``push`` records the current state for undo and clears the redo stack.
    ``undo``/``redo`` return the new current state, or None when there is
    nothing to undo/redo (the current state is left unchanged).
    States are expected to be immutable; they are stored as-is.
    """

    def __init__(self, initial: T) -> None:
        self._current: T = initial
        self._undo: list[T] = []
        self._redo: list[T] = []

    @property
    def current(self) -> T:
        return self._current

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def push(self, state: T) -> T:
        self._undo.append(self._current)
        self._redo.clear()
        self._current = state
        return state

    def undo(self) -> T | None:
        if not self._undo:
            return None
        self._redo.append(self._current)
        self._current = self._undo.pop()
        return self._current

    def redo(self) -> T | None:
        if not self._redo:
            return None
        self._undo.append(self._current)
        self._current = self._redo.pop()
        return self._current

    def reset(self, state: T) -> None:
        self._current = state
        self._undo.clear()
        self._redo.clear()
