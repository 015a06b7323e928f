"""Resource access: the location a module and its companion files live at."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

__all__ = ["Resource", "FileSystemResource", "DescriptiveResource"]


@runtime_checkable
class Resource(Protocol):
    """Protocol for module resource locations.

    ``exists()`` must report absence by returning False rather than raising.
    Failures while opening or reading surface as ``OSError``.
    """

    @property
    def description(self) -> str:
        """Human-readable description, used for diagnostics."""
        ...

    def exists(self) -> bool:
        """Whether the resource physically exists."""
        ...

    def create_relative(self, relative_path: str) -> Resource:
        """Return a resource located relative to this one."""
        ...

    def open(self) -> BinaryIO:
        """Open the resource for binary reading."""
        ...

    def read_bytes(self) -> bytes:
        """Read the full content of the resource."""
        ...


class FileSystemResource:
    """Resource backed by a local file or directory.

    Relative resources of a file are its siblings; relative resources of a
    directory are its children.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def description(self) -> str:
        return f"file [{self._path.absolute()}]"

    def exists(self) -> bool:
        try:
            return self._path.exists()
        except OSError:
            return False

    def create_relative(self, relative_path: str) -> FileSystemResource:
        base = self._path if self._path.is_dir() else self._path.parent
        return FileSystemResource(base / relative_path)

    def open(self) -> BinaryIO:
        return self._path.open("rb")

    def read_bytes(self) -> bytes:
        return self._path.read_bytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileSystemResource):
            return NotImplemented
        return self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def __repr__(self) -> str:
        return f"FileSystemResource({str(self._path)!r})"


class DescriptiveResource:
    """Placeholder resource that carries only a description and never exists."""

    def __init__(self, description: str) -> None:
        self._description = description

    @property
    def description(self) -> str:
        return self._description

    def exists(self) -> bool:
        return False

    def create_relative(self, relative_path: str) -> Resource:
        raise FileNotFoundError(f"Cannot create a relative resource of {self._description}")

    def open(self) -> BinaryIO:
        raise FileNotFoundError(f"{self._description} cannot be opened because it does not point to a readable resource")

    def read_bytes(self) -> bytes:
        with self.open() as fp:
            return fp.read()

    def __repr__(self) -> str:
        return f"DescriptiveResource({self._description!r})"
