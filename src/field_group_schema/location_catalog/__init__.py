"""Location catalog exports."""

from .catalog_index import LocationCatalog, build_location_catalog
from .catalog_models import LocationCatalogError, LocationEntry

__all__ = [
    "LocationCatalog",
    "LocationCatalogError",
    "LocationEntry",
    "build_location_catalog",
]
