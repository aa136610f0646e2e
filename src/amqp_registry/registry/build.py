from __future__ import annotations

from dataclasses import dataclass

from amqp_registry.application_context.component import ComponentCatalog
from amqp_registry.application_context.selector import select_candidates
from amqp_registry.config.models import AmqpConfig
from amqp_registry.kernel.descriptor import ServiceRef
from amqp_registry.kernel.errors import BindingError, ConfigError
from amqp_registry.observability.logging import LogSink, emit
from amqp_registry.registry.builder import Registries, RegistryBuilder
from amqp_registry.registry.validator import ValidatedConsumer, inspect_candidate

DEFAULT_MANAGER_ID = "amqp.manager"


@dataclass(frozen=True, slots=True)
class BuildResult:
    # Either finished registries or the first fatal error, never both.
    registries: Registries | None = None
    error: ConfigError | BindingError | None = None

    def __post_init__(self) -> None:
        if (self.registries is None) == (self.error is None):
            raise ValueError("BuildResult requires exactly one of registries/error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Registries:
        if self.registries is not None:
            return self.registries
        raise self.error if self.error is not None else ValueError("BuildResult holds no registries")


def build_registries(
    catalog: ComponentCatalog,
    config: AmqpConfig | None,
    *,
    manager: ServiceRef | None = None,
    log_sink: LogSink | None = None,
) -> Registries:
    """Run discovery and fold every binding into the consumer/producer registries.

    Raises ConfigError when config is missing or the discovery mode is unknown,
    and BindingError on the first invalid declaration or name collision. No
    partially built registry is returned in either case.
    """
    if config is None:
        raise ConfigError("AMQP config is missing; it has to be loaded before registries are built")
    manager = manager if manager is not None else ServiceRef(DEFAULT_MANAGER_ID)

    builder = RegistryBuilder()
    candidates = select_candidates(catalog, config.discovery_mode)
    for candidate in candidates:
        for validated in inspect_candidate(candidate, catalog, manager=manager, log_sink=log_sink):
            if isinstance(validated, ValidatedConsumer):
                builder.add_consumer(validated.name, validated.descriptor)
                emit(log_sink, "debug", "consumer.registered", name=validated.name, service_id=candidate.service_id)
            else:
                builder.add_producer(validated.name, validated.descriptor, validated.arguments)
                emit(log_sink, "debug", "producer.registered", name=validated.name, service_id=candidate.service_id)

    registries = builder.build()
    emit(
        log_sink,
        "info",
        "registry.built",
        discovery_mode=config.discovery_mode,
        candidates=len(candidates),
        consumers=len(registries.consumers),
        producers=len(registries.producers),
    )
    return registries


def try_build_registries(
    catalog: ComponentCatalog,
    config: AmqpConfig | None,
    *,
    manager: ServiceRef | None = None,
    log_sink: LogSink | None = None,
) -> BuildResult:
    # Same as build_registries, but the caller decides whether a failure halts startup.
    try:
        registries = build_registries(catalog, config, manager=manager, log_sink=log_sink)
    except (ConfigError, BindingError) as exc:
        emit(log_sink, "error", "registry.failed", error=str(exc))
        return BuildResult(error=exc)
    return BuildResult(registries=registries)
