from __future__ import annotations

from typing import Literal

Role = Literal["Consumer", "Producer"]


def derive_name(short_name: str, role: Role) -> str:
    # Registry key: short class name without its trailing role word, lowercased.
    if short_name.endswith(role):
        short_name = short_name[: -len(role)]
    return short_name.lower()


def qualified_name(cls: type) -> str:
    # Stable type identity used to tell distinct classes apart.
    return f"{cls.__module__}.{cls.__qualname__}"
