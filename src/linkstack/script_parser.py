import ast
import re
import warnings
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import (
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
    VisitError,
)

from linkstack.errors import (
    ErrorWithLocationInfo,
    ScriptSyntaxError,
    SourceLocation,
)


class OperationKind(Enum):
    PUSH = "push"
    POP = "pop"
    PEEK = "peek"
    IS_EMPTY = "is_empty"


@dataclass(frozen=True)
class Operation:
    kind: OperationKind
    line: int
    value: Any = None

    def __str__(self) -> str:
        if self.kind == OperationKind.PUSH:
            return f"{self.kind.value} {self.value!r}"
        return self.kind.value


# Global; only ever make one parser
lark = Lark.open(
    str(Path(__file__).parent / "script_grammar.lark"),
    parser="lalr",
    start=["start", "value"],
)


_STRING_OR_COMMENT = re.compile(r'"(?:\\.|[^"\\\n])*"|#[^\n]*')


def syntax_error_at(
    source: str, error_pos: int, reason: str = "invalid syntax"
) -> ScriptSyntaxError:
    this_line_start_pos = source.rfind("\n", 0, error_pos) + 1
    this_line_end_pos = source.find("\n", error_pos)
    if this_line_end_pos == -1:
        this_line_end_pos = len(source)

    line = source.count("\n", 0, error_pos) + 1
    caret_pos = error_pos - this_line_start_pos

    return ScriptSyntaxError(
        line,
        [source[this_line_start_pos:this_line_end_pos], caret_pos * " " + "^"],
        reason,
    )


def end_of_previous_token(source: str, pos: int) -> int:
    # Walk back over whitespace, separators and comments
    end = pos
    while True:
        end = len(source[:end].rstrip(" \t\r\n;"))
        this_line_start_pos = source.rfind("\n", 0, end) + 1

        matches = _STRING_OR_COMMENT.finditer(source, this_line_start_pos, end)
        comment = next(
            (match for match in matches if match.group().startswith("#")), None
        )
        if comment is None:
            return end
        end = comment.start()


@v_args(inline=True)
class ScriptTransformer(Transformer):
    def __init__(self, source: str) -> None:
        super().__init__()

        self.source = source

    def start(self, *operations: Operation) -> list[Operation]:
        return list(operations)

    def push_cmd(self, keyword: Token, value: Any) -> Operation:
        return Operation(OperationKind.PUSH, keyword.line, value)

    def pop_cmd(self, keyword: Token) -> Operation:
        return Operation(OperationKind.POP, keyword.line)

    def peek_cmd(self, keyword: Token) -> Operation:
        return Operation(OperationKind.PEEK, keyword.line)

    def is_empty_cmd(self, keyword: Token) -> Operation:
        return Operation(OperationKind.IS_EMPTY, keyword.line)

    def number(self, token: Token) -> int | float:
        try:
            return int(token)
        except ValueError:
            return float(token)

    def string(self, token: Token) -> str:
        # Unknown escapes are a SyntaxWarning, make them fail too
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            try:
                return ast.literal_eval(token)
            except (SyntaxError, ValueError) as exc:
                assert isinstance(token.start_pos, int)
                raise syntax_error_at(
                    self.source, token.start_pos, "invalid string escape"
                ) from exc

    def true(self, token: Token) -> bool:
        return True

    def false(self, token: Token) -> bool:
        return False

    def none(self, token: Token) -> None:
        return None


def make_syntax_error(source: str, exc: UnexpectedInput) -> ScriptSyntaxError:
    if isinstance(exc, UnexpectedEOF) or (
        isinstance(exc, UnexpectedToken) and exc.token.type == "$END"
    ):
        error_pos = end_of_previous_token(source, len(source))
    elif isinstance(exc, UnexpectedToken) and "SIGNED_NUMBER" in exc.expected:
        # A `push` without its value: blame the `push`, not whatever follows
        assert isinstance(exc.pos_in_stream, int)
        error_pos = end_of_previous_token(source, exc.pos_in_stream)
    else:
        assert isinstance(exc.pos_in_stream, int)
        error_pos = exc.pos_in_stream

    return syntax_error_at(source, error_pos)


def _parse(source: str, start: str) -> Any:
    try:
        tree = lark.parse(source, start=start)
    except UnexpectedInput as exc:
        raise make_syntax_error(source, exc) from exc

    try:
        return ScriptTransformer(source).transform(tree)
    except VisitError as exc:
        raise exc.orig_exc


def parse_script(source: str) -> list[Operation]:
    operations = _parse(source, "start")
    assert isinstance(operations, list)

    return operations


def parse_value(source: str) -> Any:
    return _parse(source, "value")


def parse_source(source: str, name: str) -> list[Operation]:
    try:
        return parse_script(source)
    except ScriptSyntaxError as exc:
        location = SourceLocation(name, exc.line)
        raise ErrorWithLocationInfo(exc.message, location) from exc


def parse_file(path: Path) -> list[Operation]:
    with path.open(encoding="utf-8") as file:
        source = file.read()

    return parse_source(source, str(path))
