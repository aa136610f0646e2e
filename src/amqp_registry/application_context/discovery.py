from __future__ import annotations

import importlib
import pkgutil
from collections.abc import Callable
from dataclasses import dataclass
from types import ModuleType
from typing import TypeVar

from amqp_registry.application_context.component import ComponentCatalog, ComponentDef
from amqp_registry.application_context.selector import TAG_CONSUMER, TAG_PRODUCER
from amqp_registry.kernel.binding import ConsumerBinding, ProducerBinding, get_bindings
from amqp_registry.kernel.errors import CatalogError, ConfigError
from amqp_registry.kernel.naming import qualified_name

T = TypeVar("T")

SERVICE_ATTR = "__amqp_service__"


@dataclass(frozen=True, slots=True)
class ServiceMeta:
    # Catalog service id pinned on a binding class, overriding its qualified name.
    service_id: str

    def __post_init__(self) -> None:
        if not self.service_id:
            raise ValueError("ServiceMeta.service_id must be a non-empty string")


def service(*, name: str | None = None) -> Callable[[T], T]:
    # Without a name the class registers under its qualified name, same as undecorated classes.
    def _decorate(target: T) -> T:
        if not isinstance(target, type):
            raise TypeError(f"@service applies to classes only, got {target!r}")
        meta = ServiceMeta(service_id=name if name is not None else qualified_name(target))
        setattr(target, SERVICE_ATTR, meta)
        return target

    return _decorate


def catalog_from_modules(
    modules: list[ModuleType],
    *,
    catalog: ComponentCatalog | None = None,
) -> ComponentCatalog:
    # Register every class with binding declarations found in the given modules.
    catalog = catalog if catalog is not None else ComponentCatalog()
    seen_targets: dict[str, type] = {}
    for module in modules:
        for value in list(module.__dict__.values()):
            if not isinstance(value, type):
                continue
            bindings = get_bindings(value)
            if not bindings:
                continue
            service_id = _service_id(value)
            if service_id in seen_targets:
                if seen_targets[service_id] is value:
                    # Same class re-exported through multiple modules is not a conflict.
                    continue
                raise CatalogError(f"Duplicate service id discovered: {service_id}")
            seen_targets[service_id] = value
            catalog.register(
                ComponentDef(
                    service_id=service_id,
                    type_ref=value,
                    tags=_role_tags(bindings),
                )
            )
    return catalog


def load_modules(module_names: list[str]) -> list[ModuleType]:
    # Import the named modules; packages are expanded to all their submodules.
    modules: list[ModuleType] = []
    seen: set[str] = set()

    def _append(module: ModuleType) -> None:
        if module.__name__ in seen:
            return
        seen.add(module.__name__)
        modules.append(module)

    for module_name in module_names:
        root = _import_discovery_module(module_name)
        _append(root)
        module_path = getattr(root, "__path__", None)
        if module_path is None:
            continue
        for info in pkgutil.walk_packages(module_path, prefix=f"{root.__name__}."):
            _append(_import_discovery_module(info.name))
    return modules


def _import_discovery_module(module_name: str) -> ModuleType:
    # A discovery module that cannot be imported is a configuration mistake.
    try:
        return importlib.import_module(module_name)
    except (ImportError, TypeError, ValueError) as exc:
        raise ConfigError(f"Failed to import discovery module: {module_name}") from exc


def _service_id(cls: type) -> str:
    meta = cls.__dict__.get(SERVICE_ATTR)
    if isinstance(meta, ServiceMeta):
        return meta.service_id
    return qualified_name(cls)


def _role_tags(bindings: tuple[ConsumerBinding | ProducerBinding, ...]) -> frozenset[str]:
    tags: set[str] = set()
    for binding in bindings:
        tags.add(TAG_CONSUMER if isinstance(binding, ConsumerBinding) else TAG_PRODUCER)
    return frozenset(tags)
