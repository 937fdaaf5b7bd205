from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


class MalformedRecord(ValueError):
    """Raised when a catalog document lacks a required field."""


def _require(doc: Any, key: str, kind, where: str):
    if not isinstance(doc, dict):
        raise MalformedRecord(f"{where}: expected an object, got {type(doc).__name__}")
    val = doc.get(key)
    # bool is an int subclass; a true/false id is still malformed
    if not isinstance(val, kind) or (kind is int and isinstance(val, bool)):
        raise MalformedRecord(f"{where}: missing or invalid '{key}'")
    return val


def _nested(doc: Dict, *path: str) -> Any:
    cur: Any = doc
    for p in path:
        if not isinstance(cur, dict):
            return None
        cur = cur.get(p)
    return cur


# =============================================================================
# Catalog records
# =============================================================================
@dataclass(frozen=True)
class Stat:
    name: str
    base_value: int

    @classmethod
    def from_json(cls, doc: Dict) -> "Stat":
        stat = _require(doc, "stat", dict, "stat")
        return cls(
            name=_require(stat, "name", str, "stat.stat"),
            base_value=_require(doc, "base_stat", int, "stat"),
        )

    def to_json(self) -> Dict:
        return {"stat": {"name": self.name}, "base_stat": self.base_value}


@dataclass(frozen=True)
class CreatureRecord:
    id: int
    name: str
    sprites: Dict[str, Any]
    stats: Tuple[Stat, ...]
    species_url: str
    types: Tuple[str, ...] = field(default=())

    @classmethod
    def from_json(cls, doc: Dict) -> "CreatureRecord":
        species = _require(doc, "species", dict, "pokemon")
        sprites = doc.get("sprites") if isinstance(doc, dict) else None
        raw_stats = _require(doc, "stats", list, "pokemon")
        types = []
        for t in doc.get("types") or []:
            nm = _nested(t, "type", "name")
            if isinstance(nm, str):
                types.append(nm)
        return cls(
            id=_require(doc, "id", int, "pokemon"),
            name=_require(doc, "name", str, "pokemon"),
            sprites=sprites if isinstance(sprites, dict) else {},
            stats=tuple(Stat.from_json(s) for s in raw_stats),
            species_url=_require(species, "url", str, "pokemon.species"),
            types=tuple(types),
        )

    def to_json(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "sprites": self.sprites,
            "stats": [s.to_json() for s in self.stats],
            "species": {"url": self.species_url},
            "types": [{"slot": i + 1, "type": {"name": t}} for i, t in enumerate(self.types)],
        }

    def image_url(self) -> Optional[str]:
        for path in (
            ("other", "dream_world", "front_default"),
            ("other", "official-artwork", "front_default"),
            ("front_default",),
        ):
            url = _nested(self.sprites, *path)
            if isinstance(url, str) and url:
                return url
        return None


@dataclass(frozen=True)
class SpeciesDetail:
    name: str
    evolution_chain_url: str

    @classmethod
    def from_json(cls, doc: Dict) -> "SpeciesDetail":
        chain = _require(doc, "evolution_chain", dict, "species")
        return cls(
            name=doc.get("name") or "",
            evolution_chain_url=_require(chain, "url", str, "species.evolution_chain"),
        )


@dataclass(frozen=True)
class EvolutionChainNode:
    species_name: str
    evolves_to: Tuple["EvolutionChainNode", ...] = ()

    @classmethod
    def from_json(cls, doc: Dict) -> "EvolutionChainNode":
        # /evolution-chain/{id} wraps the root node in {"id": ..., "chain": {...}}
        if isinstance(doc, dict) and "chain" in doc and "species" not in doc:
            doc = doc["chain"]
        species = _require(doc, "species", dict, "chain")
        children = doc.get("evolves_to") or []
        if not isinstance(children, list):
            raise MalformedRecord("chain: 'evolves_to' must be a list")
        return cls(
            species_name=_require(species, "name", str, "chain.species"),
            evolves_to=tuple(cls.from_json(c) for c in children),
        )

    def successor(self) -> Optional["EvolutionChainNode"]:
        return self.evolves_to[0] if self.evolves_to else None

    def first_branch(self) -> List["EvolutionChainNode"]:
        """Nodes from this one down, following evolves_to[0] at every step."""
        out = []
        node: Optional[EvolutionChainNode] = self
        while node is not None:
            out.append(node)
            node = node.successor()
        return out
