import json
import logging
import os
from typing import Dict, Iterator, List, MutableMapping, Optional

from .models import CreatureRecord, MalformedRecord

log = logging.getLogger(__name__)


def decode_bytes(data: bytes) -> str:
    for enc in ("utf-8", "utf-8-sig", "cp1252", "latin-1"):
        try:
            return data.decode(enc)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", "ignore")


# =============================================================================
# Collection store (one JSON array under one key)
# =============================================================================
class CollectionStore:
    """Persists the collection as a single serialized list under a fixed key.

    ``backend`` is any synchronous string key-value mapping: Streamlit's
    ``st.session_state`` in the app, a :class:`JsonFileBackend` when disk
    persistence is on, or a plain ``dict`` in tests.
    """

    def __init__(self, backend: MutableMapping[str, str], key: str = "pokemons"):
        self.backend = backend
        self.key = key

    def load(self) -> List[CreatureRecord]:
        raw = self.backend.get(self.key)
        if not raw:
            return []
        try:
            docs = json.loads(raw)
        except (TypeError, ValueError):
            log.warning("Stored value under %r is not valid JSON; starting empty", self.key)
            return []
        if not isinstance(docs, list):
            log.warning("Stored value under %r is not a list; starting empty", self.key)
            return []
        try:
            return [CreatureRecord.from_json(d) for d in docs]
        except MalformedRecord as e:
            log.warning("Stored collection under %r is corrupt (%s); starting empty", self.key, e)
            return []

    def save(self, collection: List[CreatureRecord]):
        self.backend[self.key] = dumps_collection(collection)

    def clear(self):
        self.backend.pop(self.key, None)


def dumps_collection(collection: List[CreatureRecord], indent: Optional[int] = None) -> str:
    return json.dumps([rec.to_json() for rec in collection], indent=indent, ensure_ascii=False)


def loads_collection(text: str) -> List[CreatureRecord]:
    """Parse an exported collection; raises ValueError on anything else."""
    docs = json.loads(text)
    if not isinstance(docs, list):
        raise ValueError("Uploaded JSON must be a list of pokemon")
    return [CreatureRecord.from_json(d) for d in docs]


def import_collection(store: CollectionStore, data: bytes) -> List[CreatureRecord]:
    """Replace the stored collection with an uploaded export; ValueError leaves it untouched."""
    imported = loads_collection(decode_bytes(data))
    store.save(imported)
    return imported


# =============================================================================
# Disk backend (opt-in)
# =============================================================================
class JsonFileBackend(MutableMapping[str, str]):
    """String mapping kept in one JSON file, written atomically with a backup copy."""

    def __init__(self, path: str, backup_path: Optional[str] = None):
        self.path = path
        self.backup_path = backup_path or path + ".bak"
        self._data: Dict[str, str] = self._read()

    def _read_one(self, path: str) -> Optional[Dict[str, str]]:
        if not os.path.exists(path):
            return None
        try:
            with open(path, "rb") as f:
                data = json.loads(decode_bytes(f.read()))
        except (OSError, ValueError) as e:
            log.warning("Could not read %s: %s", path, e)
            return None
        if not isinstance(data, dict):
            log.warning("Ignoring %s: top level is not an object", path)
            return None
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _read(self) -> Dict[str, str]:
        for p in (self.path, self.backup_path):
            data = self._read_one(p)
            if data is not None:
                return data
        return {}

    def _write(self):
        payload = json.dumps(self._data, indent=2, ensure_ascii=False)
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(payload); f.flush(); os.fsync(f.fileno())
        os.replace(tmp, self.path)
        with open(self.backup_path, "w", encoding="utf-8") as fb:
            fb.write(payload); fb.flush(); os.fsync(fb.fileno())

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str):
        self._data[key] = value
        self._write()

    def __delitem__(self, key: str):
        del self._data[key]
        self._write()

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)
