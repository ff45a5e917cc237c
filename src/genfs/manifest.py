"""Generation manifests: a YAML description of the files a tool produces.

A manifest turns into one ``Program``, so the same file can drive both
regeneration and check mode.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from genfs.paths import FsPath, path_from_string
from genfs.program import (
    Program,
    exists,
    make_dirs,
    remove_if_exists,
    sequence,
    write_compressed_text,
    write_text,
)

# Manifest looked up in the working directory when none is given
DEFAULT_MANIFEST = "genfs.yaml"


def _parse_path(value: str) -> FsPath:
    path = path_from_string(value)
    if path.is_root:
        raise ValueError("path must name something below the root")
    return path


class RemoveEntry(BaseModel):
    """A path removed before anything is generated."""

    model_config = ConfigDict(populate_by_name=True)

    path: str
    remove_hidden: bool = Field(default=True, alias="removeHidden")

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        _parse_path(value)
        return value

    @property
    def fs_path(self) -> FsPath:
        return path_from_string(self.path)


class FileEntry(BaseModel):
    """A generated file. Exactly one of ``content`` or ``source`` is set."""

    model_config = ConfigDict(populate_by_name=True)

    path: str
    content: str | None = None
    source: str | None = None
    compressed: bool = False
    create_parents: bool = Field(default=True, alias="createParents")

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        _parse_path(value)
        return value

    @model_validator(mode="after")
    def _one_content_source(self) -> FileEntry:
        if (self.content is None) == (self.source is None):
            raise ValueError(f"{self.path}: exactly one of 'content' or 'source' is required")
        return self

    @property
    def fs_path(self) -> FsPath:
        return path_from_string(self.path)


class Manifest(BaseModel):
    """Everything one generation run removes, creates and writes."""

    remove: list[RemoveEntry] = Field(default_factory=list)
    directories: list[str] = Field(default_factory=list)
    files: list[FileEntry] = Field(default_factory=list)
    # Directory that relative ``source`` entries are read from
    base_dir: Path = Field(default_factory=Path.cwd, exclude=True)

    @field_validator("remove", mode="before")
    @classmethod
    def _coerce_remove(cls, value: object) -> object:
        if isinstance(value, list):
            return [{"path": v} if isinstance(v, str) else v for v in value]
        return value

    @field_validator("directories")
    @classmethod
    def _check_directories(cls, value: list[str]) -> list[str]:
        for entry in value:
            _parse_path(entry)
        return value

    @classmethod
    def from_file(cls, path: Path) -> Manifest:
        """Load a manifest from a YAML file.

        Args:
            path: Path to the manifest.

        Returns:
            Parsed Manifest whose sources resolve next to the file.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If the YAML or its structure is invalid.
        """
        if not path.exists():
            raise FileNotFoundError(f"Manifest not found: {path}")
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid manifest {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid manifest {path}: expected a mapping")
        data["base_dir"] = path.resolve().parent
        return cls.model_validate(data)

    def _content(self, entry: FileEntry) -> str | Callable[[], str]:
        if entry.content is not None:
            return entry.content
        source = self.base_dir / entry.source  # type: ignore[operator]
        return lambda: source.read_text(encoding="utf-8")

    def file_program(self, entry: FileEntry) -> Program[None]:
        path = entry.fs_path
        write = write_compressed_text if entry.compressed else write_text
        program = write(path, self._content(entry))
        parent = path.parent()
        if entry.create_parents and not parent.is_root:
            return make_dirs(parent).then(program)
        return program

    def to_program(self) -> Program[None]:
        """Build the program: removals, then directories, then files."""
        steps: list[Program[object]] = []
        steps.extend(remove_if_exists(r.fs_path, r.remove_hidden) for r in self.remove)
        steps.extend(make_dirs(_parse_path(d)) for d in self.directories)
        steps.extend(self.file_program(f) for f in self.files)
        return sequence(steps).map(lambda _: None)

    def status_program(self) -> Program[list[bool]]:
        """Build a read-only program probing whether each declared file exists."""
        return sequence([exists(f.fs_path) for f in self.files])
