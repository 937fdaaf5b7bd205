import logging
from typing import List, Optional

from .catalog import CatalogClient, normalize_name
from .errors import NotFound, ValidationError
from .models import CreatureRecord, EvolutionChainNode
from .store import CollectionStore

log = logging.getLogger(__name__)


class CollectionManager:
    """Add / remove / evolve entries of the saved collection.

    Every mutation is one read-modify-write pass over the store: load the
    full list, change it, save the full list. Nothing is written on a
    failed lookup. Entries are addressed by position, so callers must run
    one mutation at a time (Streamlit reruns the script per click, which
    gives that within a session).
    """

    def __init__(self, store: CollectionStore, catalog: CatalogClient):
        self.store = store
        self.catalog = catalog

    def load(self) -> List[CreatureRecord]:
        return self.store.load()

    def add(self, name: str) -> CreatureRecord:
        if not normalize_name(name):
            raise ValidationError("Type a pokemon name")
        record = self.catalog.fetch_by_name(name)
        if record is None:
            raise NotFound(f"The pokemon {name.strip()} was not found!")
        collection = self.store.load()
        collection.append(record)
        self.store.save(collection)
        log.info("Added %s (#%s) at position %d", record.name, record.id, len(collection) - 1)
        return record

    def remove_at(self, index: int) -> Optional[List[CreatureRecord]]:
        """Drop one entry. Returns the new list, or None when there is nothing to remove."""
        collection = self.store.load()
        if not 0 <= index < len(collection):
            return None
        removed = collection.pop(index)
        self.store.save(collection)
        log.info("Removed %s from position %d", removed.name, index)
        return collection

    def find_successor(self, record: CreatureRecord) -> Optional[str]:
        """Species name the record evolves into, following only the first branch."""
        species = self.catalog.fetch_species(record)
        if species is None:
            return None
        root = self.catalog.fetch_evolution_chain(species)
        if root is None or root.successor() is None:
            return None
        return successor_name(root, record.name)

    def evolve_at(self, index: int) -> List[CreatureRecord]:
        collection = self.store.load()
        if not 0 <= index < len(collection):
            raise NotFound(f"No pokemon at position {index + 1}.")
        current = collection[index]
        target = self.find_successor(current)
        if target is None:
            raise NotFound(f"{current.name} cannot evolve any further.")
        evolved = self.catalog.fetch_by_name(target)
        if evolved is None:
            raise NotFound(f"The pokemon {target} was not found!")
        collection[index] = evolved
        self.store.save(collection)
        log.info("Evolved %s into %s at position %d", current.name, evolved.name, index)
        return collection


def successor_name(root: EvolutionChainNode, name: str) -> Optional[str]:
    # first match wins; alternative branches (e.g. eevee) are never visited
    key = normalize_name(name)
    for node in root.first_branch():
        if normalize_name(node.species_name) == key:
            nxt = node.successor()
            if nxt is not None:
                return nxt.species_name
    return None
