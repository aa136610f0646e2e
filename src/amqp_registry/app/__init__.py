from .cli import run
from .wiring import Assembly, ServiceIds, assemble

__all__ = ["Assembly", "ServiceIds", "assemble", "run"]
