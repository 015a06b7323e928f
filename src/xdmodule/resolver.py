"""Resolution of the options a module accepts from its companion properties file."""

from __future__ import annotations

import functools
import logging
import re
from typing import TYPE_CHECKING

from xdmodule.classloading import TypeLoader, load_type
from xdmodule.config import Config
from xdmodule.errors import ClassResolutionError, TypeNotFoundError, TypeResolutionError
from xdmodule.options import (
    ModuleOption,
    ModuleOptionsMetadata,
    PojoModuleOptionsMetadata,
    SimpleModuleOptionsMetadata,
)
from xdmodule.properties import loads_bytes

if TYPE_CHECKING:
    from xdmodule.definition import ModuleDescriptor

logger = logging.getLogger(__name__)

__all__ = [
    "OPTIONS_CLASS",
    "DESCRIPTION_KEY_PATTERN",
    "OptionsMetadataResolver",
    "resolve_options_metadata",
]

OPTIONS_CLASS = "options_class"
"""Property naming the class whose structure describes the module options."""

DESCRIPTION_KEY_PATTERN = re.compile(r"^options\.([a-zA-Z\-_0-9]+)\.description$")

_DEFAULT_SUFFIX = ".properties"


class OptionsMetadataResolver:
    """Resolves :class:`ModuleOptionsMetadata` for a module descriptor.

    The following strategies are applied in turn:

    1. look for ``<module name>.properties`` next to the module resource, and
       return None if it is absent or cannot be read;
    2. if it has an ``options_class`` property, return a
       :class:`PojoModuleOptionsMetadata` backed by that class, loaded from the
       module classpath first;
    3. otherwise return a :class:`SimpleModuleOptionsMetadata` built from keys
       of the form ``options.<name>.description``, with optional
       ``options.<name>.default`` and ``options.<name>.type`` siblings.

    The resolver keeps no state between calls.
    """

    def __init__(self, config: Config | None = None, type_loader: TypeLoader | None = None) -> None:
        """Initialize the resolver.

        Args:
            config: Optional Config; reads ``options.companion_suffix`` and
                ``classloading.parent_last``.
            type_loader: Callable ``(qualified_name, classpath) -> type``.
                Defaults to :func:`xdmodule.classloading.load_type`.
        """
        config = config or Config()
        self._suffix: str = config.get("options.companion_suffix", _DEFAULT_SUFFIX)
        if type_loader is None:
            type_loader = functools.partial(load_type, parent_last=config.get("classloading.parent_last", True))
        self._type_loader = type_loader

    def resolve(self, descriptor: ModuleDescriptor) -> ModuleOptionsMetadata | None:
        """Return options metadata for ``descriptor``, or None if it has none.

        Raises:
            ClassResolutionError: If ``options_class`` names a class that cannot be loaded.
            TypeResolutionError: If an ``options.<name>.type`` cannot be loaded.
        """
        companion_name = descriptor.name + self._suffix
        try:
            companion = descriptor.resource.create_relative(companion_name)
            if not companion.exists():
                logger.debug("No %s for module %s", companion_name, descriptor.name)
                return None
            content = companion.read_bytes()
        except OSError as e:
            logger.debug("Could not read %s for module %s: %s", companion_name, descriptor.name, e)
            return None

        props = loads_bytes(content)

        options_class = props.get(OPTIONS_CLASS)
        if options_class:
            return self._pojo_options(options_class, descriptor)
        return self._simple_options(props)

    def _pojo_options(self, class_name: str, descriptor: ModuleDescriptor) -> PojoModuleOptionsMetadata:
        try:
            cls = self._type_loader(class_name, descriptor.classpath)
        except TypeNotFoundError as e:
            raise ClassResolutionError(class_name=class_name, cause=e) from e
        logger.debug("Module %s options described by %s", descriptor.name, class_name)
        return PojoModuleOptionsMetadata(cls)

    def _simple_options(self, props: dict[str, str]) -> SimpleModuleOptionsMetadata:
        # Discovery order is the properties file order; nothing is sorted.
        result = SimpleModuleOptionsMetadata()
        for key, description in props.items():
            match = DESCRIPTION_KEY_PATTERN.fullmatch(key)
            if match is None:
                continue
            option_name = match.group(1)
            default_value = props.get(f"options.{option_name}.default")
            type_name = props.get(f"options.{option_name}.type")
            option_type = None
            if type_name is not None:
                try:
                    option_type = self._type_loader(type_name, None)
                except TypeNotFoundError as e:
                    raise TypeResolutionError(option_name=option_name, type_name=type_name, cause=e) from e
            result.add(
                ModuleOption(option_name, description)
                .with_default_value(default_value)
                .with_type(option_type)
            )
        return result


def resolve_options_metadata(descriptor: ModuleDescriptor) -> ModuleOptionsMetadata | None:
    """Resolve options metadata for ``descriptor`` with a default resolver."""
    return OptionsMetadataResolver().resolve(descriptor)
