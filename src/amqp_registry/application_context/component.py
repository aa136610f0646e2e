from __future__ import annotations

import importlib
import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from amqp_registry.kernel.errors import CatalogError, ConfigError

_PARAMETER_RE = re.compile(r"%%|%([^%\s]+)%")


@dataclass(frozen=True, slots=True)
class ComponentDef:
    # A catalog entry: what the application would instantiate under service_id.
    service_id: str
    type_ref: type | str | None = None
    public: bool = True
    abstract: bool = False
    tags: frozenset[str] = field(default_factory=frozenset)
    factory: Callable[..., object] | None = None

    def __post_init__(self) -> None:
        if not self.service_id:
            raise ValueError("ComponentDef.service_id must be a non-empty string")
        object.__setattr__(self, "tags", frozenset(self.tags))


class ComponentCatalog:
    # Explicit, enumerable registry of application components and parameters.
    def __init__(
        self,
        components: Iterable[ComponentDef] = (),
        *,
        parameters: Mapping[str, object] | None = None,
    ) -> None:
        self._components: dict[str, ComponentDef] = {}
        self._parameters: dict[str, object] = dict(parameters or {})
        for component in components:
            self.register(component)

    def register(self, component: ComponentDef) -> None:
        if component.service_id in self._components:
            raise CatalogError(f"Duplicate component registration: {component.service_id}")
        self._components[component.service_id] = component

    def get(self, service_id: str) -> ComponentDef:
        try:
            return self._components[service_id]
        except KeyError:
            raise CatalogError(f"Unknown component: {service_id}") from None

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._components

    def __iter__(self) -> Iterator[ComponentDef]:
        return iter(list(self._components.values()))

    def __len__(self) -> int:
        return len(self._components)

    def find_tagged(self, tag: str) -> list[ComponentDef]:
        return [component for component in self._components.values() if tag in component.tags]

    def get_parameter(self, name: str) -> object:
        if name not in self._parameters:
            raise ConfigError(f"Unknown catalog parameter: {name}")
        return self._parameters[name]

    def resolve_value(self, value: str) -> str:
        # Expand %name% placeholders; %% is a literal percent sign.
        def _replace(match: re.Match[str]) -> str:
            if match.group(1) is None:
                return "%"
            return str(self.get_parameter(match.group(1)))

        return _PARAMETER_RE.sub(_replace, value)

    def resolve_type(self, component: ComponentDef) -> type | None:
        # None means "not a loadable class"; callers treat it as not a binding at all.
        ref = component.type_ref
        if isinstance(ref, type):
            return ref
        if not isinstance(ref, str) or not ref:
            return None
        return import_type(self.resolve_value(ref))


def import_type(path: str) -> type | None:
    # Accepts "pkg.module:Class" or "pkg.module.Class"; failures are not errors.
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
    else:
        module_name, _, attr_path = path.rpartition(".")
    if not module_name or not attr_path or module_name.startswith("."):
        # Relative names have no anchor package here.
        return None
    try:
        target: object = importlib.import_module(module_name)
        for part in attr_path.split("."):
            target = getattr(target, part)
    except Exception:  # noqa: BLE001 - a module that fails to import is not loadable
        return None
    return target if isinstance(target, type) else None
