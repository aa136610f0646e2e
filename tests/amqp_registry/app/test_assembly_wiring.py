from __future__ import annotations

from dataclasses import dataclass

import pytest

from amqp_registry.app.wiring import ServiceIds, assemble
from amqp_registry.application_context.component import ComponentCatalog, ComponentDef
from amqp_registry.config.models import AmqpConfig
from amqp_registry.kernel.binding import consumer, producer
from amqp_registry.kernel.descriptor import ServiceRef
from amqp_registry.kernel.errors import BindingError, ConfigError


@consumer(queue="mail")
class MailConsumer:
    pass


@producer(exchange="mail", routing_key="send", mandatory=True)
@dataclass
class MailProducer:
    exchange: str
    routing_key: str
    mandatory: bool
    immediate: bool
    meta: dict[str, str]
    before_method: str | None
    content_type: str
    manager: object


def _catalog(**factory: object) -> ComponentCatalog:
    return ComponentCatalog(
        [
            ComponentDef("app.mail_consumer", type_ref=MailConsumer),
            ComponentDef("app.mail_producer", type_ref=MailProducer, **factory),  # type: ignore[arg-type]
        ]
    )


def test_assemble_exposes_collaborator_inputs() -> None:
    assembly = assemble(_catalog(), AmqpConfig(host="rabbit"))
    manager = ServiceRef("amqp.manager")
    assert assembly.manager == manager
    assert assembly.setup_arguments == (manager,)
    assert assembly.consumer_arguments[0] == manager
    assert list(assembly.consumer_arguments[1]) == ["mail"]
    assert list(assembly.producer_arguments[1]) == ["mail"]
    assert assembly.channel_factory == (manager, "get_channel")
    assert assembly.client_options["host"] == "rabbit"
    assert assembly.client_options["timeout"] == 1.0


def test_assemble_uses_custom_manager_id() -> None:
    ids = ServiceIds(manager="bus.manager")
    assembly = assemble(_catalog(), AmqpConfig(), service_ids=ids)
    assert assembly.registries.producer_arguments["app.mail_producer"].manager == ServiceRef("bus.manager")


def test_build_producers_passes_resolved_arguments_and_manager() -> None:
    assembly = assemble(_catalog(), AmqpConfig())
    manager = object()
    instances = assembly.build_producers(manager)
    instance = instances["app.mail_producer"]
    assert isinstance(instance, MailProducer)
    assert instance.exchange == "mail"
    assert instance.routing_key == "send"
    assert instance.mandatory is True
    assert instance.content_type == "application/json"
    assert instance.manager is manager


def test_build_producers_prefers_component_factory() -> None:
    calls: list[tuple[object, ...]] = []

    def _factory(*args: object) -> str:
        calls.append(args)
        return "built"

    assembly = assemble(_catalog(factory=_factory), AmqpConfig())
    assert assembly.build_producers("mgr") == {"app.mail_producer": "built"}
    assert calls[0][0] == "mail"
    assert calls[0][-1] == "mgr"


def test_assemble_requires_config() -> None:
    with pytest.raises(ConfigError):
        assemble(_catalog(), None)


def test_assemble_propagates_binding_errors() -> None:
    catalog = _catalog()
    catalog.register(ComponentDef("app.mail_producer_2", type_ref=MailProducer))
    with pytest.raises(BindingError):
        assemble(catalog, AmqpConfig())
