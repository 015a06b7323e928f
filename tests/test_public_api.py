"""Tests for the xdmodule public API surface.

Verifies that all expected names are importable from the top-level
``xdmodule`` package and that ``__all__`` is comprehensive.
"""

import re

import xdmodule


class TestPublicAPIImports:
    """Every public component must be importable from ``import xdmodule``."""

    # -- Core --

    def test_module_descriptor_importable(self):
        from xdmodule import ModuleDescriptor

        assert ModuleDescriptor is not None

    def test_module_type_importable(self):
        from xdmodule import ModuleType

        assert ModuleType.SOURCE.value == "source"

    # -- Options --

    def test_options_importable(self):
        from xdmodule import (
            ModuleOption,
            ModuleOptionsMetadata,
            PojoModuleOptionsMetadata,
            SimpleModuleOptionsMetadata,
        )

        assert issubclass(SimpleModuleOptionsMetadata, ModuleOptionsMetadata)
        assert issubclass(PojoModuleOptionsMetadata, ModuleOptionsMetadata)
        assert ModuleOption is not None

    def test_resolver_importable(self):
        from xdmodule import OPTIONS_CLASS, OptionsMetadataResolver, resolve_options_metadata

        assert OPTIONS_CLASS == "options_class"
        assert OptionsMetadataResolver is not None
        assert resolve_options_metadata is not None

    # -- Resources and class loading --

    def test_resources_importable(self):
        from xdmodule import DescriptiveResource, FileSystemResource, Resource

        assert isinstance(DescriptiveResource("d"), Resource)
        assert FileSystemResource is not None

    def test_class_loading_importable(self):
        from xdmodule import ParentLastTypeLoader, load_type

        assert ParentLastTypeLoader is not None
        assert load_type("int") is int

    # -- Errors --

    def test_errors_share_base(self):
        for name in (
            "InvalidArgumentError",
            "ConfigError",
            "ConfigNotFoundError",
            "PropertiesParseError",
            "TypeNotFoundError",
            "ClassResolutionError",
            "TypeResolutionError",
        ):
            assert issubclass(getattr(xdmodule, name), xdmodule.ModuleDefinitionError)

    # -- Version --

    def test_version_is_set(self):
        assert hasattr(xdmodule, "__version__")
        assert isinstance(xdmodule.__version__, str)
        assert re.match(r"^\d+\.\d+\.\d+", xdmodule.__version__)


class TestPublicAPIAll:
    """Verify __all__ is comprehensive and matches actual exports."""

    EXPECTED_NAMES = {
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
    }

    def test_all_contains_all_expected_names(self):
        actual = set(xdmodule.__all__)
        missing = self.EXPECTED_NAMES - actual
        assert not missing, f"Missing from __all__: {missing}"

    def test_all_has_no_unexpected_extras(self):
        actual = set(xdmodule.__all__)
        extra = actual - self.EXPECTED_NAMES
        assert not extra, f"Unexpected names in __all__: {extra}"

    def test_all_names_are_importable(self):
        _MISSING = object()
        for name in xdmodule.__all__:
            obj = getattr(xdmodule, name, _MISSING)
            assert obj is not _MISSING, f"Name '{name}' listed in __all__ but not found on module"
