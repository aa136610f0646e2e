from amqp_registry.app.wiring import Assembly, ServiceIds, assemble
from amqp_registry.application_context.component import ComponentCatalog, ComponentDef
from amqp_registry.application_context.selector import TAG_CONSUMER, TAG_PRODUCER
from amqp_registry.config.models import AmqpConfig
from amqp_registry.kernel.binding import consumer, producer
from amqp_registry.kernel.errors import BindingError, CatalogError, ConfigError
from amqp_registry.registry.build import BuildResult, build_registries, try_build_registries
from amqp_registry.registry.builder import Registries

__all__ = [
    "AmqpConfig",
    "Assembly",
    "BindingError",
    "BuildResult",
    "CatalogError",
    "ComponentCatalog",
    "ComponentDef",
    "ConfigError",
    "Registries",
    "ServiceIds",
    "TAG_CONSUMER",
    "TAG_PRODUCER",
    "assemble",
    "build_registries",
    "consumer",
    "producer",
    "try_build_registries",
]
