import sys
import traceback
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from tap import Tap

from linkstack.errors import (
    EmptyStackError,
    ErrorWithLocationInfo,
    ScriptSyntaxError,
    SourceLocation,
)
from linkstack.script_parser import (
    Operation,
    OperationKind,
    parse_file,
    parse_source,
    parse_value,
)
from linkstack.stack import Stack

EXECUTE_SOURCE_NAME = "<execute>"
INITIAL_SOURCE_NAME = "<initial>"


class DriverArguments(Tap):
    inputs: list[Path] = []
    """Stack scripts to run, in order, against a single stack."""

    execute: list[str] = []
    """Inline scripts to run after the input files; may be repeated."""

    initial: str | None = None
    """A script value (e.g. 42 or '"foo"') to seed the stack with."""

    verbose: bool = False
    """Echo each operation before running it."""

    debug: bool = False
    """Print full exception traces."""

    def __init__(self):
        super().__init__(underscores_to_dashes=True)

    def configure(self) -> None:
        self.add_argument("inputs", nargs="*")
        self.add_argument("-e", "--execute", action="extend")
        self.add_argument("-v", "--verbose")

    def process_args(self) -> None:
        for path in self.inputs:
            if not path.is_file():
                self.error(f"cannot read script '{path}'")


def format_value(value: Any) -> str:
    return repr(value)


def run_operation(stack: Stack[Any], operation: Operation) -> str | None:
    match operation.kind:
        case OperationKind.PUSH:
            stack.push(operation.value)
            return None
        case OperationKind.POP:
            return format_value(stack.pop())
        case OperationKind.PEEK:
            return format_value(stack.peek())
        case OperationKind.IS_EMPTY:
            return "true" if stack.is_empty() else "false"


def run_operations(
    stack: Stack[Any], operations: Iterable[Operation], name: str, verbose: bool
) -> None:
    for operation in operations:
        if verbose:
            print(f"> {operation}")

        try:
            output = run_operation(stack, operation)
        except EmptyStackError as exc:
            raise ErrorWithLocationInfo(
                exc.message, SourceLocation(name, operation.line), str(operation)
            ) from exc

        if output is not None:
            print(output)


def make_stack(initial: str | None) -> Stack[Any]:
    if initial is None:
        return Stack()

    try:
        return Stack(parse_value(initial))
    except ScriptSyntaxError as exc:
        raise ErrorWithLocationInfo(
            exc.message, SourceLocation(INITIAL_SOURCE_NAME, exc.line)
        ) from exc


def run_driver(args: DriverArguments) -> Stack[Any]:
    stack = make_stack(args.initial)

    for path in args.inputs:
        run_operations(stack, parse_file(path), str(path), args.verbose)

    for source in args.execute:
        run_operations(
            stack,
            parse_source(source, EXECUTE_SOURCE_NAME),
            EXECUTE_SOURCE_NAME,
            args.verbose,
        )

    return stack


def main() -> None:
    args = DriverArguments().parse_args()

    try:
        run_driver(args)
    except ErrorWithLocationInfo as exc:
        if args.debug:
            traceback.print_exc(file=sys.stderr)
            print("~~~ User-facing error message ~~~", file=sys.stderr)

        context = f", in '{exc.context}'" if exc.context else ""
        print(f"{exc.loc}{context}", file=sys.stderr)
        for line in exc.message.splitlines():
            print(f"    {line}", file=sys.stderr)

        sys.exit(1)


if __name__ == "__main__":
    main()
