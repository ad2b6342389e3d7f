"""
Parser and producer plugin resolution.

An identifier resolves to a transform callable in this order:

1. a callable is used as-is;
2. a name registered with ``register_parser`` / ``register_producer``;
3. a dotted name is a fully-qualified module exposing the role's function
   (``parse`` for parsers, ``produce`` for producers);
4. any other name is a module under the role's namespace package
   (``schema_translator.parsers`` / ``schema_translator.producers``),
   lower-cased with ``-`` turned into ``_``.

Transforms are called as ``transform(translator, value)``.
"""
from __future__ import annotations

import importlib
import sys
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Protocol, Set, Tuple

import structlog

from .config import PluginConfig
from .exceptions import PluginResolutionError

if TYPE_CHECKING:
    from .translator import Translator

NAMESPACE_SEPARATOR = "."


class PluginRole(str, Enum):
    PARSER = "parser"
    PRODUCER = "producer"


class Parser(Protocol):
    def __call__(self, translator: "Translator", data: str) -> Any: ...


class Producer(Protocol):
    def __call__(self, translator: "Translator", data: Any) -> Any: ...


Transform = Callable[["Translator", Any], Any]


def identity(translator: "Translator", data: Any) -> Any:
    """Default transform for both roles: returns its input unchanged."""
    return data


_REGISTRY: Dict[Tuple[PluginRole, str], Transform] = {}
# Process-wide record of plugin modules imported by any resolver.
_LOADED_MODULES: Set[str] = set()


def _key(name: str) -> str:
    return name.strip().lower()


def register(role: PluginRole, *names: str) -> Callable[[Transform], Transform]:
    def deco(func: Transform) -> Transform:
        for name in names:
            _REGISTRY[(PluginRole(role), _key(name))] = func
        return func
    return deco


def register_parser(*names: str) -> Callable[[Transform], Transform]:
    return register(PluginRole.PARSER, *names)


def register_producer(*names: str) -> Callable[[Transform], Transform]:
    return register(PluginRole.PRODUCER, *names)


def registered_plugins(role: Optional[PluginRole] = None) -> Dict[str, Transform]:
    return {
        name: func for (r, name), func in _REGISTRY.items()
        if role is None or r == PluginRole(role)
    }


def load_module(module_name: str) -> Any:
    """Import `module_name` unless it is already loaded. Import errors propagate."""
    module = sys.modules.get(module_name)
    if module is None:
        module = importlib.import_module(module_name)
    _LOADED_MODULES.add(module_name)
    return module


def loaded_modules() -> Set[str]:
    return set(_LOADED_MODULES)


@dataclass(frozen=True)
class PluginResolution:
    """Outcome of a lookup: either a transform and the binding it came from, or an error message."""
    role: PluginRole
    identifier: Any
    transform: Optional[Transform] = None
    binding: Optional[str] = None
    error: Optional[str] = None
    cause: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.transform is not None


class PluginResolver:
    """Maps parser/producer identifiers to transform callables."""

    def __init__(self, config: Optional[PluginConfig] = None, logger: Optional[structlog.BoundLogger] = None):
        self.config = config or PluginConfig()
        self.logger = (logger or structlog.get_logger(__name__)).bind(component="PluginResolver")

    def _namespace(self, role: PluginRole) -> str:
        if role == PluginRole.PARSER:
            return self.config.parser_namespace
        return self.config.producer_namespace

    def _function_name(self, role: PluginRole) -> str:
        if role == PluginRole.PARSER:
            return self.config.parser_function
        return self.config.producer_function

    def load_namespace(self, role: PluginRole) -> None:
        """Import the role's namespace package so its built-in aliases are registered."""
        namespace = self._namespace(role)
        try:
            load_module(namespace)
        except Exception as e:
            # Registered aliases still resolve; unregistered short names fail in _bind.
            self.logger.debug("Plugin namespace not importable.", namespace=namespace, error=str(e))

    def _bind(self, role: PluginRole, identifier: Any, module_name: str) -> PluginResolution:
        function_name = self._function_name(role)
        try:
            module = load_module(module_name)
        except Exception as e:
            # Import errors and anything the module raises while executing.
            return PluginResolution(
                role=role, identifier=identifier,
                error=f"{type(e).__name__}: {e}", cause=e,
            )

        func = getattr(module, function_name, None)
        if func is None:
            return PluginResolution(role=role, identifier=identifier, error=f"module '{module_name}' has no function '{function_name}'")
        if not callable(func):
            return PluginResolution(role=role, identifier=identifier, error=f"'{module_name}.{function_name}' is not callable")
        return PluginResolution(role=role, identifier=identifier, transform=func, binding=f"{module_name}:{function_name}")

    def lookup(self, role: PluginRole, identifier: Any) -> PluginResolution:
        """Resolve without raising; failures are reported on the returned PluginResolution."""
        role = PluginRole(role)
        if isinstance(identifier, str) and NAMESPACE_SEPARATOR not in identifier:
            self.load_namespace(role)

        if callable(identifier):
            resolution = PluginResolution(role=role, identifier=identifier, transform=identifier, binding="callable")
        elif not isinstance(identifier, str) or not identifier.strip():
            resolution = PluginResolution(role=role, identifier=identifier, error="identifier must be a non-empty name or a callable")
        elif (role, _key(identifier)) in _REGISTRY:
            resolution = PluginResolution(
                role=role, identifier=identifier,
                transform=_REGISTRY[(role, _key(identifier))],
                binding=f"registry:{_key(identifier)}",
            )
        elif NAMESPACE_SEPARATOR in identifier:
            resolution = self._bind(role, identifier, identifier.strip())
        else:
            short_name = _key(identifier).replace("-", "_")
            resolution = self._bind(role, identifier, f"{self._namespace(role)}.{short_name}")

        if resolution.ok:
            self.logger.debug("Resolved plugin.", role=role.value, identifier=str(identifier), binding=resolution.binding)
        else:
            self.logger.debug("Plugin lookup failed.", role=role.value, identifier=str(identifier), error=resolution.error)
        return resolution

    def resolve(self, role: PluginRole, identifier: Any) -> Transform:
        """Resolve `identifier` or raise PluginResolutionError."""
        resolution = self.lookup(role, identifier)
        if not resolution.ok:
            raise PluginResolutionError(
                PluginRole(role).value, identifier, resolution.error or "unknown error"
            ) from resolution.cause
        return resolution.transform  # type: ignore[return-value]
