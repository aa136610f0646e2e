from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from amqp_registry.application_context.component import ComponentCatalog, ComponentDef
from amqp_registry.kernel.binding import ConsumerBinding, ProducerBinding, get_bindings
from amqp_registry.kernel.descriptor import (
    ConsumerDescriptor,
    ProducerArguments,
    ProducerDescriptor,
    ServiceRef,
)
from amqp_registry.kernel.errors import BindingError
from amqp_registry.kernel.naming import derive_name, qualified_name
from amqp_registry.observability.logging import LogSink, emit


@dataclass(frozen=True, slots=True)
class ValidatedConsumer:
    name: str
    descriptor: ConsumerDescriptor


@dataclass(frozen=True, slots=True)
class ValidatedProducer:
    name: str
    descriptor: ProducerDescriptor
    arguments: ProducerArguments


Validated = Union[ValidatedConsumer, ValidatedProducer]


def inspect_candidate(
    candidate: ComponentDef,
    catalog: ComponentCatalog,
    *,
    manager: ServiceRef,
    log_sink: LogSink | None = None,
) -> Iterator[Validated]:
    """Validate the bindings declared on one candidate, in declaration order.

    Yields lazily so the caller can insert each result into the registries
    before the next declaration is examined. Candidates whose type cannot be
    loaded or that declare no bindings yield nothing.
    """
    cls = catalog.resolve_type(candidate)
    if cls is None:
        emit(log_sink, "debug", "candidate.skipped", service_id=candidate.service_id, reason="unresolvable")
        return
    bindings = get_bindings(cls)
    if not bindings:
        emit(log_sink, "debug", "candidate.skipped", service_id=candidate.service_id, reason="no_bindings")
        return

    class_name = qualified_name(cls)
    for binding in bindings:
        if isinstance(binding, ConsumerBinding):
            yield validate_consumer(binding, cls, service_id=candidate.service_id, class_name=class_name)
        elif isinstance(binding, ProducerBinding):
            yield validate_producer(
                binding,
                cls,
                service_id=candidate.service_id,
                class_name=class_name,
                manager=manager,
            )


def validate_consumer(
    binding: ConsumerBinding,
    cls: type,
    *,
    service_id: str,
    class_name: str,
) -> ValidatedConsumer:
    # Exactly one of queue/exchange; empty strings count as unset.
    if bool(binding.queue) == bool(binding.exchange):
        raise BindingError(
            f"Either 'queue', or 'exchange' (but not both) has to be specified {class_name} (service: {service_id}).",
            service_id=service_id,
            class_name=class_name,
        )
    descriptor = ConsumerDescriptor.from_binding(binding, name=service_id, class_name=class_name)
    return ValidatedConsumer(name=derive_name(cls.__name__, "Consumer"), descriptor=descriptor)


def validate_producer(
    binding: ProducerBinding,
    cls: type,
    *,
    service_id: str,
    class_name: str,
    manager: ServiceRef,
) -> ValidatedProducer:
    descriptor = ProducerDescriptor.from_binding(binding, name=service_id, class_name=class_name)
    return ValidatedProducer(
        name=derive_name(cls.__name__, "Producer"),
        descriptor=descriptor,
        arguments=ProducerArguments.for_descriptor(descriptor, manager),
    )
