from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SourceLocation:
    file: str
    line: int

    def __str__(self) -> str:
        return f"File '{self.file}', line {self.line}"


class LinkStackError(ValueError):
    def __init__(self, message: str) -> None:
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


class EmptyStackError(LinkStackError, IndexError):
    def __init__(self, operation: str) -> None:
        super().__init__(f"Error: '{operation}' called on an empty stack")

        self.operation = operation


class ScriptSyntaxError(LinkStackError):
    def __init__(
        self, line: int, source_context: list[str], reason: str = "invalid syntax"
    ) -> None:
        super().__init__("\n".join([f"Error: {reason}", *source_context]))

        self.line = line
        self.reason = reason
        self.source_context = source_context


class ErrorWithLocationInfo(LinkStackError):
    def __init__(
        self, message: str, location: SourceLocation, context: Optional[str] = None
    ) -> None:
        super().__init__(message)

        self.loc = location
        # The failing operation, if any
        self.context = context
