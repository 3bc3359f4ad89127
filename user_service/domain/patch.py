"""Present/absent wrapper for fields that an update may leave untouched."""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class Patch(Generic[T]):
    """A field value that is either present or absent.

    Absent is not the same as ``None`` or ``""``: an absent field keeps the
    value already stored.
    """

    __slots__ = ("_present", "_value")

    def __init__(self, present: bool, value: Optional[T] = None) -> None:
        self._present = present
        self._value = value if present else None

    @classmethod
    def of(cls, value: T) -> "Patch[T]":
        return cls(True, value)

    @classmethod
    def absent(cls) -> "Patch[T]":
        return cls(False)

    @classmethod
    def from_optional(cls, value: Optional[T]) -> "Patch[T]":
        if value is None:
            return cls.absent()
        return cls.of(value)

    @property
    def is_present(self) -> bool:
        return self._present

    @property
    def value(self) -> T:
        if not self._present:
            raise ValueError("Patch value is absent")
        return self._value  # type: ignore[return-value]

    def value_or(self, default: T) -> T:
        return self._value if self._present else default  # type: ignore[return-value]

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Patch):
            return NotImplemented
        return self._present == other._present and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._present, self._value))

    def __repr__(self) -> str:
        if self._present:
            return f"Patch.of({self._value!r})"
        return "Patch.absent()"


__all__ = ["Patch"]
