from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Config models map the `amqp` YAML section to typed structures.


class BindingConfig(BaseModel):
    # Exchange-to-exchange or exchange-to-queue binding declared in topology.
    model_config = ConfigDict(extra="forbid", populate_by_name=True)
    exchange: str
    routing_key: str = Field(default="", validation_alias=AliasChoices("routing_key", "routingKey"))
    arguments: dict[str, Any] = Field(default_factory=dict)


class ExchangeConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    type: Literal["direct", "fanout", "topic", "headers"] = "direct"
    durable: bool = False
    auto_delete: bool = False
    arguments: dict[str, Any] = Field(default_factory=dict)
    bindings: list[BindingConfig] = Field(default_factory=list)


class QueueConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    durable: bool = False
    exclusive: bool = False
    auto_delete: bool = False
    arguments: dict[str, Any] = Field(default_factory=dict)
    bindings: list[BindingConfig] = Field(default_factory=list)


class AmqpConfig(BaseModel):
    # Connection settings are passed through to the transport client unmodified.
    model_config = ConfigDict(extra="forbid")
    discovery_mode: Literal["tags", "scan"] = "scan"
    host: str = "127.0.0.1"
    port: int = 5672
    vhost: str = "/"
    user: str = "guest"
    password: str = "guest"
    heartbeat: float = 60.0
    connection_timeout: float = 1.0
    read_write_timeout: float = 1.0
    exchanges: dict[str, ExchangeConfig] = Field(default_factory=dict)
    queues: dict[str, QueueConfig] = Field(default_factory=dict)
    discovery_modules: list[str] = Field(default_factory=list)

    def client_options(self) -> dict[str, object]:
        # Transport client option names differ from config keys for the connect timeout.
        return {
            "host": self.host,
            "port": self.port,
            "vhost": self.vhost,
            "user": self.user,
            "password": self.password,
            "heartbeat": self.heartbeat,
            "timeout": self.connection_timeout,
            "read_write_timeout": self.read_write_timeout,
        }
