"""Module descriptor: the identity of a deployable module and its options metadata."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Mapping, Sequence

from xdmodule.errors import InvalidArgumentError
from xdmodule.options import ModuleOptionsMetadata
from xdmodule.resolver import OptionsMetadataResolver
from xdmodule.resource import DescriptiveResource, Resource
from xdmodule.types import ModuleType

logger = logging.getLogger(__name__)

__all__ = ["ModuleDescriptor"]

_DUMMY_RESOURCE_DESCRIPTION = "Dummy resource"
_UNSET: Any = object()


class ModuleDescriptor:
    """Defines a module.

    ``name``, ``type``, ``resource`` and ``classpath`` are fixed at
    construction. ``properties`` and ``definition`` are plain settable
    attributes. Options metadata is resolved on first request and cached.
    """

    def __init__(
        self,
        name: str,
        type: ModuleType | str,
        resource: Resource = _UNSET,
        classpath: Sequence[str | Path] | None = None,
        resolver: OptionsMetadataResolver | None = None,
    ) -> None:
        """Initialize the descriptor.

        Args:
            name: Non-empty module name.
            type: Module category; a matching string value is accepted.
            resource: Location of the module. When omitted, a placeholder
                ``DescriptiveResource("Dummy resource")`` is used.
            classpath: Locations searched first when loading the module's
                options class. Empty is treated as no classpath.
            resolver: Resolver used for options metadata. Defaults to an
                :class:`OptionsMetadataResolver` with default configuration.

        Raises:
            InvalidArgumentError: If name is empty, or type or resource is None
                or type is not a known module type.
        """
        if not name or not isinstance(name, str):
            raise InvalidArgumentError(message="name cannot be blank")
        if type is None:
            raise InvalidArgumentError(message="type cannot be null")
        try:
            module_type = ModuleType(type)
        except ValueError as e:
            raise InvalidArgumentError(message=f"Unknown module type: {type!r}") from e
        if resource is _UNSET:
            resource = DescriptiveResource(_DUMMY_RESOURCE_DESCRIPTION)
        elif resource is None:
            raise InvalidArgumentError(message="resource cannot be null")

        self._name = name
        self._type = module_type
        self._resource: Resource = resource
        self._classpath: tuple[str | Path, ...] | None = tuple(classpath) if classpath else None
        self._resolver = resolver
        self.properties: Mapping[str, Any] | None = None
        self.definition: str | None = None

        self._options_lock = threading.Lock()
        self._options_resolved = False
        self._options_metadata: ModuleOptionsMetadata | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> ModuleType:
        return self._type

    @property
    def resource(self) -> Resource:
        return self._resource

    @property
    def classpath(self) -> tuple[str | Path, ...] | None:
        return self._classpath

    def get_options_metadata(self) -> ModuleOptionsMetadata | None:
        """Return metadata about the options this module accepts.

        Resolved at most once per descriptor, even under concurrent first
        calls; a None result (no companion properties file) is cached too.
        A resolution error is not cached and propagates to the caller.

        Returns:
            The options metadata, or None if the module does not describe any.
        """
        with self._options_lock:
            if not self._options_resolved:
                resolver = self._resolver or OptionsMetadataResolver()
                self._options_metadata = resolver.resolve(self)
                self._options_resolved = True
                logger.debug("Resolved options metadata for %s: %r", self, self._options_metadata)
            return self._options_metadata

    def __repr__(self) -> str:
        nb_jars = len(self._classpath) if self._classpath else 0
        return f"{type(self).__name__}[{self._type}:{self._name} with {nb_jars} jars at {self._resource.description}]"

    __str__ = __repr__
