"""Helper classes and sources shared by the xdmodule tests.

Importable as ``option_helpers`` because the tests directory is on sys.path.
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import pytest

from xdmodule.resource import Resource

HTTP_OPTIONS_SOURCE = '''
from typing import Optional

from pydantic import BaseModel, Field


class HttpOptions(BaseModel):
    port: int = Field(9000, description="the port to listen on")
    host: str = Field(description="the host to bind to")
    path: Optional[str] = Field(None, description="the path prefix")

    class Nested:
        pass
'''


class Outer:
    """Ambient class with a nested class, for qualified-name resolution."""

    class Inner:
        pass


class ProbeOnceResource:
    """Resource wrapper that fails the test if its companion is probed twice."""

    def __init__(self, inner: Resource) -> None:
        self._inner = inner
        self.probes = 0

    @property
    def description(self) -> str:
        return self._inner.description

    def exists(self) -> bool:
        return self._inner.exists()

    def create_relative(self, relative_path: str) -> Resource:
        self.probes += 1
        if self.probes > 1:
            pytest.fail(f"companion resource {relative_path} probed more than once")
        return self._inner.create_relative(relative_path)

    def open(self) -> Any:
        return self._inner.open()

    def read_bytes(self) -> bytes:
        return self._inner.read_bytes()


class UnreadableResource:
    """Resource whose companion exists but cannot be read."""

    description = "unreadable resource"

    def exists(self) -> bool:
        return True

    def create_relative(self, relative_path: str) -> UnreadableResource:
        return self

    def open(self) -> Any:
        raise PermissionError("permission denied")

    def read_bytes(self) -> bytes:
        raise PermissionError("permission denied")


def write_package(root: Path, package: str, modules: dict[str, str]) -> Path:
    """Create ``package`` under ``root`` with the given ``{module: source}`` files."""
    pkg_dir = root / package
    pkg_dir.mkdir(parents=True, exist_ok=True)
    (pkg_dir / "__init__.py").write_text("")
    for module_name, source in modules.items():
        (pkg_dir / f"{module_name}.py").write_text(textwrap.dedent(source))
    return root


POSTPONED_OPTIONS_SOURCE = '''
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class DirOptions:
    root: Path
    port: int = 9000
    label: Optional[str] = None


class PlainDirOptions:
    root: Path
    retries: int = 3
'''
