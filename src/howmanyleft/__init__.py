"""howmanyleft - UK vehicle licensing statistics index builder."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("howmanyleft")
except PackageNotFoundError:
    __version__ = "0+local"
from howmanyleft.config import BuildConfig
from howmanyleft.exceptions import (
    ConfigError,
    HowManyLeftError,
    IdentityError,
    InputError,
    InvalidCharacterError,
    PersistenceError,
)
from howmanyleft.identity import HasIdentity, VehicleIdentity, slugify
from howmanyleft.index import VehicleIndex
from howmanyleft.ingestion import build_index, build_snapshot
from howmanyleft.models import (
    BodyType,
    Flag,
    FuelType,
    GenericModel,
    LicenceStatus,
    Link,
    Make,
    Model,
    Stats,
    Veh0120,
    Veh0124,
    Veh0160,
    Veh0220,
)
from howmanyleft.search import SearchIndex
from howmanyleft.snapshot import save_index

__all__ = [
    "__version__",
    "BodyType",
    "BuildConfig",
    "ConfigError",
    "Flag",
    "FuelType",
    "GenericModel",
    "HasIdentity",
    "HowManyLeftError",
    "IdentityError",
    "InputError",
    "InvalidCharacterError",
    "LicenceStatus",
    "Link",
    "Make",
    "Model",
    "PersistenceError",
    "SearchIndex",
    "Stats",
    "Veh0120",
    "Veh0124",
    "Veh0160",
    "Veh0220",
    "VehicleIdentity",
    "VehicleIndex",
    "build_index",
    "build_snapshot",
    "save_index",
    "slugify",
]
