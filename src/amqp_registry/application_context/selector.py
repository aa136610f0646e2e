from __future__ import annotations

from typing import Literal

from amqp_registry.application_context.component import ComponentCatalog, ComponentDef
from amqp_registry.kernel.errors import ConfigError

TAG_PRODUCER = "amqp.producer"
TAG_CONSUMER = "amqp.consumer"

DiscoveryMode = Literal["tags", "scan"]


def select_candidates(catalog: ComponentCatalog, mode: str) -> list[ComponentDef]:
    # Components eligible for binding inspection under the configured discovery mode.
    if mode == "tags":
        return _tagged_candidates(catalog)
    if mode == "scan":
        return _scanned_candidates(catalog)
    raise ConfigError(f"discovery_mode must be one of: ['scan', 'tags'], got {mode!r}")


def _tagged_candidates(catalog: ComponentCatalog) -> list[ComponentDef]:
    # Tagged components are trusted as-is; a component tagged twice is inspected once.
    candidates: dict[str, ComponentDef] = {}
    for tag in (TAG_PRODUCER, TAG_CONSUMER):
        for component in catalog.find_tagged(tag):
            candidates.setdefault(component.service_id, component)
    return list(candidates.values())


def _scanned_candidates(catalog: ComponentCatalog) -> list[ComponentDef]:
    # Coarse pre-filter: concrete, public, with a known type.
    return [
        component
        for component in catalog
        if not component.abstract and component.public and component.type_ref
    ]
