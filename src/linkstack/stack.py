from dataclasses import dataclass, field
from enum import Enum

from linkstack.errors import EmptyStackError


class _NoValue(Enum):
    # Lets `Stack(None)` hold a `None` instead of being empty.
    TOKEN = 0


@dataclass(eq=False)
class StackNode[T]:
    value: T
    next: "StackNode[T] | None" = field(default=None, repr=False)


class Stack[T]:
    def __init__(self, value: T | _NoValue = _NoValue.TOKEN) -> None:
        self._top: StackNode[T] | None = None

        if not isinstance(value, _NoValue):
            self._top = StackNode(value)

    @property
    def top(self) -> StackNode[T] | None:
        return self._top

    def push(self, value: T) -> None:
        self._top = StackNode(value, self._top)

    def pop(self) -> T:
        if self._top is None:
            raise EmptyStackError("pop")

        popped = self._top
        self._top = popped.next
        return popped.value

    def peek(self) -> T:
        if self._top is None:
            raise EmptyStackError("peek")

        return self._top.value

    def is_empty(self) -> bool:
        return self._top is None

    def __repr__(self) -> str:
        if self._top is None:
            return "Stack()"
        return f"Stack(top={self._top.value!r})"
