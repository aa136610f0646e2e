from __future__ import annotations


class ConfigError(ValueError):
    # Raised for missing or invalid configuration (fail fast, before discovery starts).
    pass


class BindingError(RuntimeError):
    # Raised when a declared binding violates an invariant or collides with another registration.
    def __init__(self, message: str, *, service_id: str | None = None, class_name: str | None = None) -> None:
        super().__init__(message)
        self.service_id = service_id
        self.class_name = class_name


class CatalogError(ValueError):
    # Raised when the component catalog receives conflicting registrations.
    pass
