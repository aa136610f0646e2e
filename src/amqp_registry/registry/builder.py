from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from amqp_registry.kernel.descriptor import ConsumerDescriptor, ProducerArguments, ProducerDescriptor
from amqp_registry.kernel.errors import BindingError


@dataclass(frozen=True, slots=True)
class Registries:
    # Final output of one build; read-only once returned.
    consumers: Mapping[str, tuple[ConsumerDescriptor, ...]]
    producers: Mapping[str, ProducerDescriptor]
    producer_arguments: Mapping[str, ProducerArguments]

    @classmethod
    def empty(cls) -> Registries:
        return cls(
            consumers=MappingProxyType({}),
            producers=MappingProxyType({}),
            producer_arguments=MappingProxyType({}),
        )

    def as_dict(self) -> dict[str, object]:
        return {
            "consumers": {
                name: [descriptor.as_dict() for descriptor in bucket] for name, bucket in self.consumers.items()
            },
            "producers": {name: descriptor.as_dict() for name, descriptor in self.producers.items()},
        }


@dataclass(slots=True)
class RegistryBuilder:
    """Accumulates descriptors by derived name and enforces the collision policy.

    Consumers may share a name when every member of the bucket comes from the
    same class (several running instances of one worker). Producers never
    share a name, not even across instances of one class.
    """

    _consumers: dict[str, list[ConsumerDescriptor]] = field(default_factory=dict)
    _producers: dict[str, ProducerDescriptor] = field(default_factory=dict)
    _producer_arguments: dict[str, ProducerArguments] = field(default_factory=dict)

    def add_consumer(self, name: str, descriptor: ConsumerDescriptor) -> None:
        bucket = self._consumers.get(name)
        if bucket is None:
            self._consumers[name] = [descriptor]
            return
        for existing in bucket:
            if existing.class_name != descriptor.class_name:
                raise BindingError(
                    "Multiple consumer services would result in same name: "
                    f"{existing.name} ({existing.class_name}) and {descriptor.name} ({descriptor.class_name}).",
                    service_id=descriptor.name,
                    class_name=descriptor.class_name,
                )
        bucket.append(descriptor)

    def add_producer(self, name: str, descriptor: ProducerDescriptor, arguments: ProducerArguments) -> None:
        existing = self._producers.get(name)
        if existing is not None:
            raise BindingError(
                "Multiple producer services would result in same name: "
                f"{existing.name} ({existing.class_name}) and {descriptor.name} ({descriptor.class_name}).",
                service_id=descriptor.name,
                class_name=descriptor.class_name,
            )
        self._producers[name] = descriptor
        self._producer_arguments[descriptor.name] = arguments

    def build(self) -> Registries:
        return Registries(
            consumers=MappingProxyType({name: tuple(bucket) for name, bucket in self._consumers.items()}),
            producers=MappingProxyType(dict(self._producers)),
            producer_arguments=MappingProxyType(dict(self._producer_arguments)),
        )
