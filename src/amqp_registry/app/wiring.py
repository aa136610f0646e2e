from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from amqp_registry.application_context.component import ComponentCatalog
from amqp_registry.config.models import AmqpConfig
from amqp_registry.kernel.descriptor import ConsumerDescriptor, ProducerDescriptor, ServiceRef
from amqp_registry.kernel.errors import ConfigError
from amqp_registry.observability.logging import LogSink
from amqp_registry.registry.build import build_registries
from amqp_registry.registry.builder import Registries


@dataclass(frozen=True, slots=True)
class ServiceIds:
    # Service ids under which the dispatch collaborators are known to the application.
    client: str = "amqp.client"
    manager: str = "amqp.manager"
    channel: str = "amqp.channel"
    setup_command: str = "amqp.command.setup"
    consumer_command: str = "amqp.command.consumer"
    producer_command: str = "amqp.command.producer"


@dataclass(frozen=True, slots=True)
class Assembly:
    """Everything the external setup/consumer/producer collaborators are built from."""

    config: AmqpConfig
    registries: Registries
    service_ids: ServiceIds
    catalog: ComponentCatalog

    @property
    def manager(self) -> ServiceRef:
        return ServiceRef(self.service_ids.manager)

    @property
    def client_options(self) -> dict[str, object]:
        return self.config.client_options()

    @property
    def channel_factory(self) -> tuple[ServiceRef, str]:
        return (self.manager, "get_channel")

    @property
    def setup_arguments(self) -> tuple[ServiceRef]:
        # Setup re-derives topology through the manager.
        return (self.manager,)

    @property
    def consumer_arguments(self) -> tuple[ServiceRef, Mapping[str, tuple[ConsumerDescriptor, ...]]]:
        return (self.manager, self.registries.consumers)

    @property
    def producer_arguments(self) -> tuple[ServiceRef, Mapping[str, ProducerDescriptor]]:
        return (self.manager, self.registries.producers)

    def build_producers(self, manager: object) -> dict[str, object]:
        # Instantiate every producer component from its resolved arguments.
        instances: dict[str, object] = {}
        for service_id, arguments in self.registries.producer_arguments.items():
            component = self.catalog.get(service_id)
            factory = component.factory or self.catalog.resolve_type(component)
            if factory is None:
                raise ConfigError(f"Producer service {service_id} has no factory or loadable type")
            instances[service_id] = factory(*arguments._replace(manager=manager))
        return instances


def assemble(
    catalog: ComponentCatalog,
    config: AmqpConfig | None,
    *,
    service_ids: ServiceIds | None = None,
    log_sink: LogSink | None = None,
) -> Assembly:
    # Build registries and package them with the collaborator inputs.
    if config is None:
        raise ConfigError("AMQP config is missing; it has to be loaded before assembly")
    ids = service_ids if service_ids is not None else ServiceIds()
    registries = build_registries(catalog, config, manager=ServiceRef(ids.manager), log_sink=log_sink)
    return Assembly(config=config, registries=registries, service_ids=ids, catalog=catalog)
