from .component import ComponentCatalog, ComponentDef, import_type
from .discovery import ServiceMeta, catalog_from_modules, load_modules, service
from .selector import TAG_CONSUMER, TAG_PRODUCER, select_candidates

__all__ = [
    "ComponentCatalog",
    "ComponentDef",
    "ServiceMeta",
    "TAG_CONSUMER",
    "TAG_PRODUCER",
    "catalog_from_modules",
    "import_type",
    "load_modules",
    "select_candidates",
    "service",
]
