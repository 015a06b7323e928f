"""Shared fixtures for the xdmodule test suite."""

from __future__ import annotations

import sys
import textwrap
from pathlib import Path
from typing import Callable, Iterator

import pytest

from option_helpers import HTTP_OPTIONS_SOURCE, write_package
from xdmodule.resource import FileSystemResource


@pytest.fixture
def make_module(tmp_path: Path) -> Callable[..., FileSystemResource]:
    """Factory writing ``<name>.xml`` and an optional ``<name>.properties`` companion."""

    def factory(name: str, properties: str | None = None) -> FileSystemResource:
        config_dir = tmp_path / "modules" / name / "config"
        config_dir.mkdir(parents=True, exist_ok=True)
        xml = config_dir / f"{name}.xml"
        xml.write_text("<beans/>")
        if properties is not None:
            (config_dir / f"{name}.properties").write_text(textwrap.dedent(properties), encoding="utf-8")
        return FileSystemResource(xml)

    return factory


@pytest.fixture
def options_classpath(tmp_path: Path) -> Path:
    """A classpath directory with ``xdcp_opts.http.HttpOptions`` (a pydantic model)."""
    return write_package(tmp_path / "lib", "xdcp_opts", {"http": HTTP_OPTIONS_SOURCE})


@pytest.fixture
def clean_modules() -> Iterator[list[str]]:
    """Names appended to the yielded list are removed from sys.modules afterwards."""
    names: list[str] = []
    yield names
    for name in list(sys.modules):
        if any(name == n or name.startswith(n + ".") for n in names):
            del sys.modules[name]
