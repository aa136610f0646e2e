from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TypeVar, Union

T = TypeVar("T")

BINDINGS_ATTR = "__amqp_bindings__"


@dataclass(frozen=True, slots=True)
class ConsumerBinding:
    # Source form of a consumer declaration; queue/exchange exclusivity is checked at build time.
    queue: str | None = None
    exchange: str | None = None
    routing_key: str = ""
    meta: Mapping[str, str] = field(default_factory=dict)
    max_messages: int | None = None
    max_seconds: float | None = None
    prefetch_count: int | None = None
    prefetch_size: int | None = None


@dataclass(frozen=True, slots=True)
class ProducerBinding:
    # Source form of a producer declaration; producers always publish to an exchange.
    exchange: str
    routing_key: str = ""
    mandatory: bool = False
    immediate: bool = False
    meta: Mapping[str, str] = field(default_factory=dict)
    before_method: str | None = None
    content_type: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.exchange, str):
            raise ValueError("ProducerBinding.exchange must be a string")


Binding = Union[ConsumerBinding, ProducerBinding]


def consumer(
    *,
    queue: str | None = None,
    exchange: str | None = None,
    routing_key: str = "",
    meta: Mapping[str, str] | None = None,
    max_messages: int | None = None,
    max_seconds: float | None = None,
    prefetch_count: int | None = None,
    prefetch_size: int | None = None,
) -> Callable[[T], T]:
    # Decorator declares the class as a message consumer.
    binding = ConsumerBinding(
        queue=queue,
        exchange=exchange,
        routing_key=routing_key,
        meta=dict(meta or {}),
        max_messages=max_messages,
        max_seconds=max_seconds,
        prefetch_count=prefetch_count,
        prefetch_size=prefetch_size,
    )
    return _attach(binding)


def producer(
    *,
    exchange: str,
    routing_key: str = "",
    mandatory: bool = False,
    immediate: bool = False,
    meta: Mapping[str, str] | None = None,
    before_method: str | None = None,
    content_type: str | None = None,
) -> Callable[[T], T]:
    # Decorator declares the class as a message producer.
    binding = ProducerBinding(
        exchange=exchange,
        routing_key=routing_key,
        mandatory=mandatory,
        immediate=immediate,
        meta=dict(meta or {}),
        before_method=before_method,
        content_type=content_type,
    )
    return _attach(binding)


def _attach(binding: Binding) -> Callable[[T], T]:
    def _decorate(target: T) -> T:
        if not isinstance(target, type):
            raise TypeError(f"Binding decorators apply to classes only, got {target!r}")
        # Decorators run bottom-up; prepend so the tuple reads in declaration order.
        own = target.__dict__.get(BINDINGS_ATTR, ())
        setattr(target, BINDINGS_ATTR, (binding, *own))
        return target

    return _decorate


def get_bindings(target: type) -> tuple[Binding, ...]:
    # Only the class's own declarations count; subclasses do not inherit bindings.
    raw = target.__dict__.get(BINDINGS_ATTR, ())
    return tuple(item for item in raw if isinstance(item, (ConsumerBinding, ProducerBinding)))


def has_bindings(target: object) -> bool:
    return isinstance(target, type) and bool(get_bindings(target))
