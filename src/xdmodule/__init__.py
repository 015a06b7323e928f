"""xdmodule - Module descriptors and options metadata resolution."""

from __future__ import annotations

# Core
from xdmodule.definition import ModuleDescriptor
from xdmodule.types import ModuleType

# Options
from xdmodule.options import (
    ModuleOption,
    ModuleOptionsMetadata,
    PojoModuleOptionsMetadata,
    SimpleModuleOptionsMetadata,
)
from xdmodule.resolver import OPTIONS_CLASS, OptionsMetadataResolver, resolve_options_metadata

# Resources
from xdmodule.resource import DescriptiveResource, FileSystemResource, Resource

# Class loading
from xdmodule.classloading import ParentLastTypeLoader, load_type

# Config
from xdmodule.config import Config

# Errors
from xdmodule.errors import (
    ClassResolutionError,
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    InvalidArgumentError,
    ModuleDefinitionError,
    PropertiesParseError,
    TypeNotFoundError,
    TypeResolutionError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "ModuleDescriptor",
    "ModuleType",
    # Options
    "ModuleOption",
    "ModuleOptionsMetadata",
    "SimpleModuleOptionsMetadata",
    "PojoModuleOptionsMetadata",
    "OptionsMetadataResolver",
    "resolve_options_metadata",
    "OPTIONS_CLASS",
    # Resources
    "Resource",
    "FileSystemResource",
    "DescriptiveResource",
    # Class loading
    "ParentLastTypeLoader",
    "load_type",
    # Config
    "Config",
    # Errors
    "ErrorCodes",
    "ModuleDefinitionError",
    "InvalidArgumentError",
    "ConfigError",
    "ConfigNotFoundError",
    "PropertiesParseError",
    "TypeNotFoundError",
    "ClassResolutionError",
    "TypeResolutionError",
]
