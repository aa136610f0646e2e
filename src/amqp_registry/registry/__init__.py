from .build import BuildResult, build_registries, try_build_registries
from .builder import Registries, RegistryBuilder
from .validator import ValidatedConsumer, ValidatedProducer, inspect_candidate

__all__ = [
    "BuildResult",
    "Registries",
    "RegistryBuilder",
    "ValidatedConsumer",
    "ValidatedProducer",
    "build_registries",
    "inspect_candidate",
    "try_build_registries",
]
