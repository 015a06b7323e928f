"""Dynamic type resolution by qualified name.

Two loaders are provided:

* :func:`load_ambient_type` imports through the regular import system.
* :class:`ParentLastTypeLoader` searches a module's own classpath (directories
  or zip archives) first, so module-local classes shadow same-named ambient
  ones, and falls back to the ambient import system on a miss.

:func:`load_type` picks between them based on whether a classpath is given.
"""

from __future__ import annotations

import builtins
import importlib
import importlib.machinery
import importlib.util
import inspect
import logging
import os
import sys
import threading
from pathlib import Path
from types import ModuleType as PyModule
from typing import Any, Callable, Iterator, Optional, Sequence, Union

from xdmodule.errors import TypeNotFoundError

logger = logging.getLogger(__name__)

__all__ = ["TypeLoader", "ParentLastTypeLoader", "load_ambient_type", "load_type", "module_namespace"]

TypeLoader = Callable[[str, Optional[Sequence[Union[str, Path]]]], type]
"""Signature of an injectable type loader: ``(qualified_name, classpath) -> type``."""

# Loading from a classpath temporarily swaps entries in sys.modules.
_SYS_MODULES_LOCK = threading.RLock()

# Classes loaded from a classpath, mapped to the namespace of their defining
# module, which is no longer reachable through sys.modules.
_CLASSPATH_NAMESPACES: dict[type, dict[str, Any]] = {}


def _candidate_splits(qualified_name: str) -> Iterator[tuple[str, list[str]]]:
    """Yield ``(module_name, attribute_path)`` splits, longest module first."""
    parts = qualified_name.split(".")
    for i in range(len(parts) - 1, 0, -1):
        yield ".".join(parts[:i]), parts[i:]


def _walk_attributes(obj: Any, attribute_path: list[str]) -> Any:
    for attr in attribute_path:
        obj = getattr(obj, attr)
    return obj


def _ensure_class(qualified_name: str, obj: Any) -> type:
    if not inspect.isclass(obj):
        raise TypeNotFoundError(type_name=qualified_name, reason=f"resolved to a non-class object {obj!r}")
    return obj


def _validate_name(qualified_name: str) -> None:
    if not qualified_name or any(not part.isidentifier() for part in qualified_name.split(".")):
        raise TypeNotFoundError(type_name=qualified_name, reason="not a valid qualified name")


def load_ambient_type(qualified_name: str) -> type:
    """Resolve ``package.module.Class`` through the regular import system.

    A name without dots is looked up in :mod:`builtins` (``int``, ``str``...).

    Raises:
        TypeNotFoundError: If no importable module exposes a class under that name.
    """
    _validate_name(qualified_name)

    if "." not in qualified_name:
        obj = getattr(builtins, qualified_name, None)
        if obj is None:
            raise TypeNotFoundError(type_name=qualified_name, reason="no such builtin")
        return _ensure_class(qualified_name, obj)

    for module_name, attribute_path in _candidate_splits(qualified_name):
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            continue
        except Exception as exc:
            raise TypeNotFoundError(
                type_name=qualified_name, reason=f"importing '{module_name}' failed: {exc}", cause=exc
            ) from exc
        try:
            obj = _walk_attributes(module, attribute_path)
        except AttributeError:
            continue
        return _ensure_class(qualified_name, obj)

    raise TypeNotFoundError(type_name=qualified_name, reason="no importable module defines it")


def module_namespace(cls: type) -> dict[str, Any]:
    """Return the global namespace ``cls`` was defined in.

    Classes loaded from a classpath are looked up in the namespaces recorded
    by :class:`ParentLastTypeLoader`; other classes use ``sys.modules``. An
    empty dict is returned when the defining module is unknown.
    """
    namespace = _CLASSPATH_NAMESPACES.get(cls)
    if namespace is not None:
        return namespace
    module = sys.modules.get(cls.__module__)
    return vars(module) if module is not None else {}


class ParentLastTypeLoader:
    """Type loader that prefers a module's own classpath over the ambient one.

    Modules found on the classpath are executed under their real names with
    ``sys.modules`` swapped for the duration of the load, then the previous
    entries are restored. Loaded modules are cached per loader instance.

    Only entries executed from the classpath are removed afterwards. Another
    thread importing the same top-level package while a load is in progress
    may still observe the classpath copy.
    """

    def __init__(self, classpath: Sequence[str | Path]) -> None:
        self._classpath = [str(Path(entry)) for entry in classpath]
        self._modules: dict[str, PyModule | None] = {}

    @property
    def classpath(self) -> list[str]:
        return list(self._classpath)

    def load(self, qualified_name: str) -> type:
        """Resolve ``qualified_name``, classpath first, ambient import system second.

        Raises:
            TypeNotFoundError: If neither location defines a class under that name.
        """
        _validate_name(qualified_name)

        for module_name, attribute_path in _candidate_splits(qualified_name):
            module = self._load_local(module_name)
            if module is None:
                continue
            try:
                obj = _walk_attributes(module, attribute_path)
            except AttributeError:
                continue
            cls = _ensure_class(qualified_name, obj)
            defining = module if cls.__module__ == module.__name__ else self._modules.get(cls.__module__)
            if defining is not None:
                with _SYS_MODULES_LOCK:
                    _CLASSPATH_NAMESPACES[cls] = vars(defining)
            logger.debug("Loaded '%s' from module classpath %s", qualified_name, self._classpath)
            return cls

        return load_ambient_type(qualified_name)

    def _load_local(self, module_name: str) -> PyModule | None:
        if module_name in self._modules:
            return self._modules[module_name]

        with _SYS_MODULES_LOCK:
            parts = module_name.split(".")
            names = [".".join(parts[: i + 1]) for i in range(len(parts))]
            top = parts[0]
            saved = {
                name: mod for name, mod in list(sys.modules.items()) if name == top or name.startswith(top + ".")
            }
            inserted: list[str] = []
            try:
                module = self._exec_chain(names, inserted)
            finally:
                for name in [n for n in list(sys.modules) if n == top or n.startswith(top + ".")]:
                    if name in saved:
                        continue
                    if name in inserted or self._is_local(sys.modules[name]):
                        del sys.modules[name]
                sys.modules.update(saved)

        self._modules[module_name] = module
        return module

    def _is_local(self, module: Any) -> bool:
        """True if ``module`` was executed from a file on this classpath."""
        spec = getattr(module, "__spec__", None)
        locations = list(getattr(module, "__path__", None) or [])
        origin = getattr(spec, "origin", None) or getattr(module, "__file__", None)
        if origin:
            locations.append(origin)
        prefixes = [os.path.join(entry, "") for entry in self._classpath]
        return any(str(location).startswith(prefix) for location in locations for prefix in prefixes)

    def _exec_chain(self, names: list[str], inserted: list[str]) -> PyModule | None:
        search_path: list[str] | None = self._classpath
        module: PyModule | None = None
        for name in names:
            if name in self._modules:
                module = self._modules[name]
                if module is None:
                    return None
                sys.modules[name] = module
                inserted.append(name)
            else:
                spec = importlib.machinery.PathFinder.find_spec(name, search_path)
                if spec is None or spec.loader is None:
                    self._modules[name] = None
                    return None
                module = importlib.util.module_from_spec(spec)
                sys.modules[name] = module
                inserted.append(name)
                try:
                    spec.loader.exec_module(module)
                except Exception as exc:
                    raise TypeNotFoundError(
                        type_name=name, reason=f"executing module from classpath failed: {exc}", cause=exc
                    ) from exc
                self._modules[name] = module
            search_path = list(getattr(module, "__path__", None) or [])
            if not search_path and name != names[-1]:
                return None
        return module


def load_type(
    qualified_name: str,
    classpath: Sequence[str | Path] | None = None,
    parent_last: bool = True,
) -> type:
    """Resolve a qualified type name, preferring ``classpath`` when given.

    Args:
        qualified_name: Dotted name such as ``mypkg.options.HttpOptions``.
        classpath: Prioritized locations searched before the ambient import
            system. ``None`` or empty means ambient only.
        parent_last: When False the ambient import system is tried first and
            the classpath only on a miss.

    Raises:
        TypeNotFoundError: If the name cannot be resolved to a class.
    """
    if not classpath:
        return load_ambient_type(qualified_name)

    loader = ParentLastTypeLoader(classpath)
    if parent_last:
        return loader.load(qualified_name)

    try:
        return load_ambient_type(qualified_name)
    except TypeNotFoundError:
        return loader.load(qualified_name)
