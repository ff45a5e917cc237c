"""Programs: backend-agnostic sequences of file-system operations.

Building a program performs no I/O. A program only runs when folded through
an interpreter with ``run_program`` (or an interpreter's ``run``), which
executes operations one at a time in declaration order.

Example::

    out = path_from_string("out")
    prog = make_dirs(out).then(write_text(out.child("a.txt"), "hello"))
    ReadWriteInterpreter("/tmp/root").run(prog)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, TypeVar, Union

from genfs.errors import InjectedFailure
from genfs.ops import (
    Deferred,
    Exists,
    Fail,
    MakeDirs,
    Operation,
    ReadFile,
    RemoveRecursive,
    WriteFile,
)
from genfs.paths import FsPath

__all__ = [
    "UNIT",
    "Bind",
    "Program",
    "ProgramRunner",
    "Pure",
    "Suspend",
    "and_then",
    "exists",
    "fail",
    "make_dirs",
    "or_unit",
    "pure",
    "read_text",
    "remove_if_exists",
    "remove_recursive",
    "run_program",
    "run_program_async",
    "sequence",
    "write_compressed_text",
    "write_text",
]

T = TypeVar("T")
U = TypeVar("U")

Handler = Callable[[Operation], Any]


class Program(Generic[T]):
    """A description of work yielding a ``T`` once interpreted."""

    __slots__ = ()

    def and_then(self, continuation: Callable[[T], Program[U]]) -> Program[U]:
        """Run this program, then the program ``continuation`` builds from its result."""
        return Bind(self, continuation)

    def then(self, next_program: Program[U]) -> Program[U]:
        """Run this program, discard its result, then run ``next_program``."""
        return Bind(self, lambda _: next_program)

    def map(self, fn: Callable[[T], U]) -> Program[U]:
        return Bind(self, lambda value: Pure(fn(value)))


@dataclass(frozen=True)
class Pure(Program[T]):
    """Performs nothing and yields ``value``."""

    value: T


@dataclass(frozen=True)
class Suspend(Program[T]):
    """Performs a single operation."""

    op: Operation


@dataclass(frozen=True)
class Bind(Program[U]):
    program: Program[Any]
    continuation: Callable[[Any], Program[U]]


UNIT: Program[None] = Pure(None)


def pure(value: T) -> Program[T]:
    return Pure(value)


def and_then(program: Program[T], continuation: Callable[[T], Program[U]]) -> Program[U]:
    return program.and_then(continuation)


def exists(path: FsPath) -> Program[bool]:
    return Suspend(Exists(path))


def make_dirs(path: FsPath) -> Program[bool]:
    return Suspend(MakeDirs(path))


def remove_recursive(path: FsPath, remove_hidden: bool = True) -> Program[None]:
    return Suspend(RemoveRecursive(path, remove_hidden))


def remove_if_exists(path: FsPath, remove_hidden: bool = True) -> Program[None]:
    """Remove ``path`` recursively when it exists, otherwise do nothing."""
    return exists(path).and_then(
        lambda present: remove_recursive(path, remove_hidden) if present else UNIT
    )


def _deferred(content: str | Callable[[], str]) -> Deferred[str]:
    if callable(content):
        return Deferred(content)
    return Deferred.now(content)


def write_text(path: FsPath, content: str | Callable[[], str]) -> Program[None]:
    """Write UTF-8 text. ``content`` may be a zero-argument callable, evaluated lazily."""
    return Suspend(WriteFile(path, _deferred(content), compressed=False))


def write_compressed_text(path: FsPath, content: str | Callable[[], str]) -> Program[None]:
    """Write gzip-compressed UTF-8 text."""
    return Suspend(WriteFile(path, _deferred(content), compressed=True))


def read_text(path: FsPath) -> Program[str | None]:
    """Read UTF-8 text, yielding ``None`` when nothing exists at ``path``."""
    return Suspend(ReadFile(path))


def fail(error: BaseException | str) -> Program[Any]:
    """Abort the program with ``error``. Strings are wrapped in ``InjectedFailure``."""
    if isinstance(error, str):
        error = InjectedFailure(error)
    return Suspend(Fail(error))


def or_unit(program: Program[None] | None) -> Program[None]:
    return UNIT if program is None else program


def sequence(programs: Iterable[Program[T]]) -> Program[list[T]]:
    """Run ``programs`` in order, collecting their results."""
    pending = tuple(programs)

    def collect(results: list[T], index: int) -> Program[list[T]]:
        if index == len(pending):
            return Pure(results)

        def append(value: T) -> Program[list[T]]:
            results.append(value)
            return collect(results, index + 1)

        return pending[index].and_then(append)

    # fresh list per run so the program can be executed more than once
    return UNIT.and_then(lambda _: collect([], 0))


def _step(program: Program[Any], stack: list[Callable[[Any], Program[Any]]]) -> Program[Any]:
    # unwind nested binds so the fold never recurses
    while isinstance(program, Bind):
        stack.append(program.continuation)
        program = program.program
    return program


def run_program(program: Program[T], handle: Handler) -> T:
    """Fold ``program`` through ``handle``, one operation at a time.

    Args:
        program: Program to execute.
        handle: Called with each operation; returns its result or raises.

    Returns:
        The program's final value.
    """
    stack: list[Callable[[Any], Program[Any]]] = []
    current: Program[Any] = program
    while True:
        current = _step(current, stack)
        if isinstance(current, Pure):
            value = current.value
        elif isinstance(current, Suspend):
            value = handle(current.op)
        else:
            raise TypeError(f"Not a program: {current!r}")
        if not stack:
            return value
        current = stack.pop()(value)


async def run_program_async(program: Program[T], handle: Handler) -> T:
    """Like ``run_program``, but each operation runs on a worker thread.

    Operations still run strictly in order; the event loop is free while one
    is blocked on disk.
    """
    stack: list[Callable[[Any], Program[Any]]] = []
    current: Program[Any] = program
    while True:
        current = _step(current, stack)
        if isinstance(current, Pure):
            value = current.value
        elif isinstance(current, Suspend):
            value = await asyncio.to_thread(handle, current.op)
        else:
            raise TypeError(f"Not a program: {current!r}")
        if not stack:
            return value
        current = stack.pop()(value)


class ProgramRunner:
    """Mixin giving an interpreter ``run``/``run_async`` over its ``handle``."""

    def handle(self, op: Operation) -> Any:
        raise NotImplementedError

    def run(self, program: Program[T]) -> T:
        return run_program(program, self.handle)

    async def run_async(self, program: Program[T]) -> T:
        return await run_program_async(program, self.handle)
