"""Describe file-system changes once; write them, inspect them, or check them."""

__version__ = "0.1.0"

from genfs.discrepancy import DirectoryMissing, Discrepancy, DiscrepancyLog, WriteMismatch
from genfs.errors import (
    GenfsError,
    HiddenFileEncountered,
    InjectedFailure,
    InvalidPathOperation,
    IOFailure,
    ReadOnlyViolation,
)
from genfs.interpreters import (
    CheckInterpreter,
    ReadOnlyInterpreter,
    ReadWriteInterpreter,
    get_interpreter,
)
from genfs.paths import ROOT, FsPath, path_from_string
from genfs.program import (
    UNIT,
    Program,
    and_then,
    exists,
    fail,
    make_dirs,
    or_unit,
    pure,
    read_text,
    remove_if_exists,
    remove_recursive,
    sequence,
    write_compressed_text,
    write_text,
)

__all__ = [
    "__version__",
    "CheckInterpreter",
    "DirectoryMissing",
    "Discrepancy",
    "DiscrepancyLog",
    "FsPath",
    "GenfsError",
    "HiddenFileEncountered",
    "IOFailure",
    "InjectedFailure",
    "InvalidPathOperation",
    "Program",
    "ROOT",
    "ReadOnlyInterpreter",
    "ReadOnlyViolation",
    "ReadWriteInterpreter",
    "UNIT",
    "WriteMismatch",
    "and_then",
    "exists",
    "fail",
    "get_interpreter",
    "make_dirs",
    "or_unit",
    "path_from_string",
    "pure",
    "read_text",
    "remove_if_exists",
    "remove_recursive",
    "sequence",
    "write_compressed_text",
    "write_text",
]
