from __future__ import annotations

import sys

from amqp_registry.app.cli import run

if __name__ == "__main__":
    sys.exit(run())
