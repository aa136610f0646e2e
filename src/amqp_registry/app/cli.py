from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from contextlib import ExitStack
from pathlib import Path

from amqp_registry.app.wiring import assemble
from amqp_registry.application_context.discovery import catalog_from_modules, load_modules
from amqp_registry.config.loader import DEFAULT_CONFIG_KEY, load_config
from amqp_registry.kernel.errors import BindingError, CatalogError, ConfigError
from amqp_registry.observability.logging import LEVELS, FanoutLogSink, JsonlLogSink, LogSink, StreamLogSink


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="amqp-registry", description="Build and print AMQP binding registries")
    parser.add_argument("--config", required=True, help="Path to YAML config")
    parser.add_argument("--config-key", default=DEFAULT_CONFIG_KEY, help="Config section holding AMQP settings")
    parser.add_argument(
        "--module",
        action="append",
        default=[],
        dest="modules",
        help="Module or package to discover bindings in (repeatable)",
    )
    parser.add_argument("--log-path", help="Write assembly diagnostics as JSONL to this path")
    parser.add_argument(
        "--log-level",
        choices=LEVELS,
        help="Stream assembly diagnostics at or above this level to stderr",
    )
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Caller passes argv for testability.
    return build_parser().parse_args(argv)


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    with ExitStack() as stack:
        sinks: list[LogSink] = []
        if args.log_level:
            sinks.append(StreamLogSink(min_level=args.log_level))
        if args.log_path:
            sinks.append(stack.enter_context(JsonlLogSink(Path(args.log_path))))
        log_sink = FanoutLogSink(sinks) if sinks else None
        try:
            config = load_config(Path(args.config), key=args.config_key)
            module_names = list(dict.fromkeys([*args.modules, *config.discovery_modules]))
            catalog = catalog_from_modules(load_modules(module_names))
            assembly = assemble(catalog, config, log_sink=log_sink)
        except (ConfigError, BindingError, CatalogError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2

    print(json.dumps(assembly.registries.as_dict(), indent=2, sort_keys=True))
    return 0
