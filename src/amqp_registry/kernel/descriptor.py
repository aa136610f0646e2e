from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any, NamedTuple

from amqp_registry.kernel.binding import ConsumerBinding, ProducerBinding


class ContentTypes:
    APPLICATION_JSON = "application/json"


@dataclass(frozen=True, slots=True)
class ServiceRef:
    # Reference to another catalog component, resolved when collaborators are instantiated.
    service_id: str

    def __post_init__(self) -> None:
        if not self.service_id:
            raise ValueError("ServiceRef.service_id must be a non-empty string")


@dataclass(frozen=True, slots=True)
class ConsumerDescriptor:
    # Validated consumer binding stamped with its owning service and class.
    name: str
    class_name: str
    queue: str | None
    exchange: str | None
    routing_key: str = ""
    meta: Mapping[str, str] = field(default_factory=dict)
    max_messages: int | None = None
    max_seconds: float | None = None
    prefetch_count: int | None = None
    prefetch_size: int | None = None

    @classmethod
    def from_binding(cls, binding: ConsumerBinding, *, name: str, class_name: str) -> ConsumerDescriptor:
        return cls(
            name=name,
            class_name=class_name,
            queue=binding.queue or None,
            exchange=binding.exchange or None,
            routing_key=binding.routing_key,
            meta=dict(binding.meta),
            max_messages=binding.max_messages,
            max_seconds=binding.max_seconds,
            prefetch_count=binding.prefetch_count,
            prefetch_size=binding.prefetch_size,
        )

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["meta"] = dict(self.meta)
        return data


@dataclass(frozen=True, slots=True)
class ProducerDescriptor:
    # Validated producer binding; content_type is always populated.
    name: str
    class_name: str
    exchange: str
    routing_key: str = ""
    mandatory: bool = False
    immediate: bool = False
    meta: Mapping[str, str] = field(default_factory=dict)
    before_method: str | None = None
    content_type: str = ContentTypes.APPLICATION_JSON

    @classmethod
    def from_binding(cls, binding: ProducerBinding, *, name: str, class_name: str) -> ProducerDescriptor:
        return cls(
            name=name,
            class_name=class_name,
            exchange=binding.exchange,
            routing_key=binding.routing_key,
            mandatory=binding.mandatory,
            immediate=binding.immediate,
            meta=dict(binding.meta),
            before_method=binding.before_method,
            content_type=binding.content_type or ContentTypes.APPLICATION_JSON,
        )

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["meta"] = dict(self.meta)
        return data


class ProducerArguments(NamedTuple):
    # Positional constructor arguments every producer component is built with.
    exchange: str
    routing_key: str
    mandatory: bool
    immediate: bool
    meta: Mapping[str, str]
    before_method: str | None
    content_type: str
    manager: object

    @classmethod
    def for_descriptor(cls, descriptor: ProducerDescriptor, manager: object) -> ProducerArguments:
        return cls(
            exchange=descriptor.exchange,
            routing_key=descriptor.routing_key,
            mandatory=descriptor.mandatory,
            immediate=descriptor.immediate,
            meta=dict(descriptor.meta),
            before_method=descriptor.before_method,
            content_type=descriptor.content_type,
            manager=manager,
        )
