"""Shared fakes: canned PokeAPI payloads served without touching the network."""

from __future__ import annotations

import copy
import io
import json
import urllib.error
import urllib.request
from typing import Any

import pytest

from pokecollection import CatalogClient, CollectionManager, CollectionStore

API = "https://pokeapi.test/api/v2"

STAT_NAMES = ("hp", "attack", "defense", "special-attack", "special-defense", "speed")


def pokemon_doc(pid: int, name: str, base: int = 50) -> dict[str, Any]:
    """Trimmed /pokemon/{name} response."""

    return {
        "id": pid,
        "name": name,
        "base_experience": 64,
        "sprites": {
            "front_default": f"https://img.test/{pid}.png",
            "other": {"dream_world": {"front_default": f"https://img.test/dream/{pid}.svg"}},
        },
        "stats": [{"base_stat": base + i, "effort": 0, "stat": {"name": s, "url": ""}} for i, s in enumerate(STAT_NAMES)],
        "species": {"name": name, "url": f"{API}/pokemon-species/{pid}/"},
        "types": [{"slot": 1, "type": {"name": "grass", "url": ""}}],
    }


def chain_node(name: str, *children: dict[str, Any]) -> dict[str, Any]:
    return {
        "is_baby": False,
        "species": {"name": name, "url": ""},
        "evolution_details": [],
        "evolves_to": list(children),
    }


class FakeCatalog(CatalogClient):
    """CatalogClient whose HTTP layer is a dict of url -> JSON body."""

    def __init__(self) -> None:
        super().__init__(base_url=API, timeout=1)
        self.responses: dict[str, dict[str, Any]] = {}
        self.calls: list[str] = []

    def fetch_json(self, url: str):
        self.calls.append(url)
        doc = self.responses.get(url)
        return copy.deepcopy(doc) if doc is not None else None

    def add_pokemon(self, pid: int, name: str, chain_id: int | None = None) -> dict[str, Any]:
        doc = pokemon_doc(pid, name)
        self.responses[f"{API}/pokemon/{name}"] = doc
        if chain_id is not None:
            self.responses[doc["species"]["url"]] = {
                "id": pid,
                "name": name,
                "evolution_chain": {"url": f"{API}/evolution-chain/{chain_id}/"},
            }
        return doc

    def add_chain(self, chain_id: int, root: dict[str, Any]) -> None:
        self.responses[f"{API}/evolution-chain/{chain_id}/"] = {"id": chain_id, "chain": root, "baby_trigger_item": None}

    def add_line(self, chain_id: int, *members: tuple[int, str]) -> None:
        """Register a straight evolution line, base form first."""

        for pid, name in members:
            self.add_pokemon(pid, name, chain_id)
        node = None
        for _, name in reversed(members):
            node = chain_node(name, node) if node is not None else chain_node(name)
        self.add_chain(chain_id, node)


class FakeResponse(io.BytesIO):
    def __init__(self, body: bytes, status: int = 200) -> None:
        super().__init__(body)
        self.status = status


class FakeOrigin:
    """url -> (status, body) routes; anything unrouted is a 404."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, object]] = {}
        self.seen: list[urllib.request.Request] = []

    def __setitem__(self, url: str, route: tuple[int, object]) -> None:
        self.routes[url] = route

    def urlopen(self, req, context=None, timeout=None):
        self.seen.append(req)
        status, body = self.routes.get(req.full_url, (404, None))
        if isinstance(body, Exception):
            raise body
        if isinstance(body, FakeResponse):
            return body
        if status >= 400:
            raise urllib.error.HTTPError(req.full_url, status, "Not Found", {}, None)
        raw = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
        return FakeResponse(raw, status)

    def serve(self, catalog: "FakeCatalog") -> None:
        """Answer every url the fake catalog knows about."""

        self.routes.update({url: (200, doc) for url, doc in catalog.responses.items()})


@pytest.fixture
def served(monkeypatch) -> FakeOrigin:
    origin = FakeOrigin()
    monkeypatch.setattr(urllib.request, "urlopen", origin.urlopen)
    return origin


@pytest.fixture
def catalog() -> FakeCatalog:
    cat = FakeCatalog()
    cat.add_line(1, (1, "bulbasaur"), (2, "ivysaur"), (3, "venusaur"))
    cat.add_line(67, (150, "mewtwo"))
    cat.add_line(10, (172, "pichu"), (25, "pikachu"), (26, "raichu"))
    return cat


@pytest.fixture
def backend() -> dict[str, str]:
    return {}


@pytest.fixture
def store(backend) -> CollectionStore:
    return CollectionStore(backend)


@pytest.fixture
def manager(store, catalog) -> CollectionManager:
    return CollectionManager(store, catalog)
