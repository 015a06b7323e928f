"""Module type enumeration."""

from __future__ import annotations

from enum import Enum

__all__ = ["ModuleType"]


class ModuleType(str, Enum):
    """Category of a deployable module."""

    SOURCE = "source"
    PROCESSOR = "processor"
    SINK = "sink"
    JOB = "job"

    def __str__(self) -> str:
        return self.value
