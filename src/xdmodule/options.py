"""Module options: individual option descriptors and the metadata collections holding them."""

from __future__ import annotations

import abc
import builtins
import dataclasses
import inspect
import logging
import types
import typing
from dataclasses import dataclass
from typing import Any, Iterator

from pydantic import BaseModel

from xdmodule.classloading import module_namespace

logger = logging.getLogger(__name__)

__all__ = [
    "ModuleOption",
    "ModuleOptionsMetadata",
    "SimpleModuleOptionsMetadata",
    "PojoModuleOptionsMetadata",
]


@dataclass(frozen=True)
class ModuleOption:
    """A single option a module accepts.

    Attributes:
        name: Option identifier.
        description: Human-readable description, possibly empty.
        default_value: Default value, or None when the option has none.
        type: Declared type of the option, or None when undeclared.
    """

    name: str
    description: str
    default_value: Any = None
    type: builtins.type | None = None

    def with_default_value(self, default_value: Any) -> ModuleOption:
        """Return a copy of this option carrying ``default_value``."""
        return dataclasses.replace(self, default_value=default_value)

    def with_type(self, type_: type | None) -> ModuleOption:
        """Return a copy of this option declaring ``type_``."""
        return dataclasses.replace(self, type=type_)

    def to_dict(self) -> dict[str, Any]:
        """Serializable view, with the type rendered as its qualified name."""
        return {
            "name": self.name,
            "description": self.description,
            "default_value": self.default_value,
            "type": _qualified_name(self.type) if self.type is not None else None,
        }


def _qualified_name(cls: type) -> str:
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


class ModuleOptionsMetadata(abc.ABC):
    """Iterable collection of the options a module accepts.

    Subclasses implement :meth:`__iter__`; lookups and sizing derive from it.
    """

    @abc.abstractmethod
    def __iter__(self) -> Iterator[ModuleOption]:
        """Iterate over the options in declaration order."""

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __contains__(self, name: object) -> bool:
        return self.get(name) is not None  # type: ignore[arg-type]

    def get(self, name: str) -> ModuleOption | None:
        """Return the option called ``name``, or None."""
        for option in self:
            if option.name == name:
                return option
        return None

    @property
    def option_names(self) -> list[str]:
        return [option.name for option in self]


class SimpleModuleOptionsMetadata(ModuleOptionsMetadata):
    """Options enumerated explicitly, kept in the order they were added."""

    def __init__(self, options: list[ModuleOption] | None = None) -> None:
        self._options: list[ModuleOption] = list(options or [])

    def add(self, option: ModuleOption) -> None:
        self._options.append(option)

    def __iter__(self) -> Iterator[ModuleOption]:
        return iter(list(self._options))

    def __len__(self) -> int:
        return len(self._options)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimpleModuleOptionsMetadata):
            return NotImplemented
        return self._options == other._options

    def __repr__(self) -> str:
        return f"SimpleModuleOptionsMetadata({self._options!r})"


class PojoModuleOptionsMetadata(ModuleOptionsMetadata):
    """Options whose schema is delegated to the structure of a class.

    Supported class shapes, in order of precedence:

    * pydantic ``BaseModel`` subclasses: one option per model field, with the
      description taken from ``Field(description=...)``;
    * dataclasses: one option per field;
    * plain classes: one option per annotated class attribute.

    Options appear in declaration order. Required fields have no default.
    """

    def __init__(self, options_class: type) -> None:
        self._options_class = options_class
        self._options: list[ModuleOption] | None = None

    @property
    def options_class(self) -> type:
        return self._options_class

    def __iter__(self) -> Iterator[ModuleOption]:
        if self._options is None:
            self._options = _introspect(self._options_class)
        return iter(list(self._options))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PojoModuleOptionsMetadata):
            return NotImplemented
        return self._options_class is other._options_class

    def __hash__(self) -> int:
        return hash(self._options_class)

    def __repr__(self) -> str:
        return f"PojoModuleOptionsMetadata({_qualified_name(self._options_class)})"


def _annotation_type(annotation: Any) -> type | None:
    """Reduce an annotation to a plain class.

    ``Optional[X]`` becomes ``X`` and ``list[X]`` becomes ``list``; anything
    else that is not a class gives None.
    """
    origin = typing.get_origin(annotation)
    if origin is None:
        return annotation if inspect.isclass(annotation) else None
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return _annotation_type(args[0])
        return None
    return origin if inspect.isclass(origin) else None


def _field_type(cls: type, name: str, annotation: Any) -> type | None:
    """Resolve the annotation of field ``name`` on its own.

    String annotations are evaluated in the namespace of the class that
    declares the field. An annotation that cannot be evaluated leaves only
    that field untyped.
    """
    if isinstance(annotation, str):
        owner = next((base for base in cls.__mro__ if name in inspect.get_annotations(base)), cls)
        try:
            annotation = eval(annotation, dict(module_namespace(owner)), dict(vars(owner)))
        except Exception as e:
            logger.debug("Cannot evaluate annotation %r of %s.%s: %s", annotation, owner.__qualname__, name, e)
            return None
    return _annotation_type(annotation)


def _introspect(cls: type) -> list[ModuleOption]:
    if issubclass(cls, BaseModel):
        options = []
        for field_name, info in cls.model_fields.items():
            default = None if info.is_required() else info.get_default(call_default_factory=True)
            options.append(
                ModuleOption(
                    name=info.alias or field_name,
                    description=info.description or "",
                    default_value=default,
                    type=_annotation_type(info.annotation),
                )
            )
        return options

    if dataclasses.is_dataclass(cls):
        options = []
        for f in dataclasses.fields(cls):
            if f.default is not dataclasses.MISSING:
                default = f.default
            elif f.default_factory is not dataclasses.MISSING:
                default = f.default_factory()
            else:
                default = None
            options.append(
                ModuleOption(
                    name=f.name,
                    description=f.metadata.get("description", ""),
                    default_value=default,
                    type=_field_type(cls, f.name, f.type),
                )
            )
        return options

    annotations = inspect.get_annotations(cls)
    return [
        ModuleOption(
            name=attr,
            description="",
            default_value=getattr(cls, attr, None),
            type=_field_type(cls, attr, annotation),
        )
        for attr, annotation in annotations.items()
        if not attr.startswith("_")
    ]
