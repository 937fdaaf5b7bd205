from .catalog import CatalogClient
from .collection import CollectionManager
from .config import Settings
from .errors import CollectionError, NotFound, ValidationError
from .models import CreatureRecord, EvolutionChainNode, SpeciesDetail, Stat
from .store import CollectionStore, JsonFileBackend

__all__ = [
    "CatalogClient",
    "CollectionError",
    "CollectionManager",
    "CollectionStore",
    "CreatureRecord",
    "EvolutionChainNode",
    "JsonFileBackend",
    "NotFound",
    "Settings",
    "SpeciesDetail",
    "Stat",
    "ValidationError",
]
