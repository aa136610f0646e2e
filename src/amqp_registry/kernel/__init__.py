from .binding import ConsumerBinding, ProducerBinding, consumer, get_bindings, has_bindings, producer
from .descriptor import ConsumerDescriptor, ContentTypes, ProducerArguments, ProducerDescriptor, ServiceRef
from .errors import BindingError, CatalogError, ConfigError
from .naming import derive_name, qualified_name

__all__ = [
    "BindingError",
    "CatalogError",
    "ConfigError",
    "ConsumerBinding",
    "ConsumerDescriptor",
    "ContentTypes",
    "ProducerArguments",
    "ProducerBinding",
    "ProducerDescriptor",
    "ServiceRef",
    "consumer",
    "derive_name",
    "get_bindings",
    "has_bindings",
    "producer",
    "qualified_name",
]
