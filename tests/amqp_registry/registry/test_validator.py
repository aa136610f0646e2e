from __future__ import annotations

import pytest

from amqp_registry.application_context.component import ComponentCatalog, ComponentDef
from amqp_registry.kernel.binding import consumer, producer
from amqp_registry.kernel.descriptor import ServiceRef
from amqp_registry.kernel.errors import BindingError
from amqp_registry.kernel.naming import qualified_name
from amqp_registry.observability.logging import MemoryLogSink
from amqp_registry.registry.validator import ValidatedConsumer, ValidatedProducer, inspect_candidate

MANAGER = ServiceRef("amqp.manager")


def _inspect(component: ComponentDef, log_sink: MemoryLogSink | None = None) -> list[object]:
    catalog = ComponentCatalog([component])
    return list(inspect_candidate(component, catalog, manager=MANAGER, log_sink=log_sink))


def test_consumer_with_queue_is_stamped_with_service_and_class() -> None:
    @consumer(queue="mail")
    class MailConsumer:
        pass

    [validated] = _inspect(ComponentDef("app.mail_consumer", type_ref=MailConsumer))
    assert isinstance(validated, ValidatedConsumer)
    assert validated.name == "mail"
    assert validated.descriptor.name == "app.mail_consumer"
    assert validated.descriptor.class_name == qualified_name(MailConsumer)
    assert validated.descriptor.queue == "mail"


def test_consumer_with_both_queue_and_exchange_is_rejected() -> None:
    @consumer(queue="mail", exchange="events")
    class MailConsumer:
        pass

    with pytest.raises(BindingError) as exc:
        _inspect(ComponentDef("app.mail_consumer", type_ref=MailConsumer))
    message = str(exc.value)
    assert "Either 'queue', or 'exchange' (but not both)" in message
    assert qualified_name(MailConsumer) in message
    assert "(service: app.mail_consumer)" in message
    assert exc.value.service_id == "app.mail_consumer"


def test_consumer_with_neither_queue_nor_exchange_is_rejected() -> None:
    @consumer(routing_key="x")
    class IdleConsumer:
        pass

    with pytest.raises(BindingError):
        _inspect(ComponentDef("idle", type_ref=IdleConsumer))


def test_consumer_with_empty_strings_counts_as_unset() -> None:
    @consumer(queue="", exchange="")
    class BlankConsumer:
        pass

    with pytest.raises(BindingError):
        _inspect(ComponentDef("blank", type_ref=BlankConsumer))


def test_producer_gets_default_content_type_and_arguments() -> None:
    @producer(exchange="mail", routing_key="send", before_method="prepare")
    class MailProducer:
        pass

    [validated] = _inspect(ComponentDef("app.mail_producer", type_ref=MailProducer))
    assert isinstance(validated, ValidatedProducer)
    assert validated.name == "mail"
    assert validated.descriptor.content_type == "application/json"
    assert tuple(validated.arguments) == ("mail", "send", False, False, {}, "prepare", "application/json", MANAGER)


def test_producer_on_default_exchange_is_accepted() -> None:
    # Producers have no queue/exchange exclusivity rule.
    @producer(exchange="")
    class DefaultExchangeProducer:
        pass

    [validated] = _inspect(ComponentDef("p", type_ref=DefaultExchangeProducer))
    assert validated.name == "defaultexchange"  # type: ignore[attr-defined]


def test_undeclared_class_is_skipped_silently() -> None:
    class PlainService:
        pass

    sink = MemoryLogSink()
    assert _inspect(ComponentDef("plain", type_ref=PlainService), sink) == []
    [skipped] = sink.by_message("candidate.skipped")
    assert skipped.fields["reason"] == "no_bindings"


def test_unresolvable_type_is_skipped_silently() -> None:
    sink = MemoryLogSink()
    assert _inspect(ComponentDef("ghost", type_ref="no_such_module_for_amqp_registry.Ghost"), sink) == []
    [skipped] = sink.by_message("candidate.skipped")
    assert skipped.fields == {"service_id": "ghost", "reason": "unresolvable"}


def test_stacked_declarations_are_yielded_in_declaration_order() -> None:
    @consumer(exchange="events", routing_key="user.*")
    @producer(exchange="events")
    class AuditConsumer:
        pass

    results = _inspect(ComponentDef("audit", type_ref=AuditConsumer))
    assert [type(item) for item in results] == [ValidatedConsumer, ValidatedProducer]
    assert results[0].name == "audit"  # type: ignore[attr-defined]
    assert results[1].name == "auditconsumer"  # type: ignore[attr-defined]


def test_validation_is_lazy_per_declaration() -> None:
    # Earlier declarations are handed out before a later invalid one fails.
    @consumer(queue="ok")
    @consumer(queue="bad", exchange="bad")
    class SplitConsumer:
        pass

    component = ComponentDef("split", type_ref=SplitConsumer)
    iterator = inspect_candidate(component, ComponentCatalog([component]), manager=MANAGER)
    first = next(iterator)
    assert isinstance(first, ValidatedConsumer)
    with pytest.raises(BindingError):
        next(iterator)
