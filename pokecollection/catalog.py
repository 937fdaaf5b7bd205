import http.client
import json
import logging
import ssl
import urllib.error
import urllib.request
from typing import Dict, Optional
from urllib.parse import quote

from .config import DEFAULT_API_BASE, DEFAULT_TIMEOUT, USER_AGENT
from .models import CreatureRecord, EvolutionChainNode, MalformedRecord, SpeciesDetail
from .store import decode_bytes

log = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    return (name or "").strip().lower()


class CatalogClient:
    """Read-only PokeAPI lookups. ``None`` means not found, whatever the cause.

    Nothing is cached: every call goes back to the origin.
    """

    def __init__(self, base_url: str = DEFAULT_API_BASE, timeout: float = DEFAULT_TIMEOUT,
                 user_agent: str = USER_AGENT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent

    def fetch_json(self, url: str) -> Optional[Dict]:
        try:
            req = urllib.request.Request(url, headers={
                "User-Agent": self.user_agent,
                "Accept": "application/json",
                "Cache-Control": "no-store",
            })
            ctx = ssl.create_default_context()
            with urllib.request.urlopen(req, context=ctx, timeout=self.timeout) as r:
                status = getattr(r, "status", 200)
                if status != 200:
                    log.info("GET %s -> %s", url, status)
                    return None
                body = decode_bytes(r.read())
        except urllib.error.HTTPError as e:
            log.info("GET %s -> %s", url, e.code)
            return None
        # URLError, timeouts, resets, truncated bodies, urls without a scheme
        except (OSError, ValueError, http.client.HTTPException) as e:
            log.warning("GET %s failed: %r", url, e)
            return None
        try:
            data = json.loads(body)
        except ValueError:
            log.warning("GET %s returned a body that is not JSON", url)
            return None
        if not isinstance(data, dict):
            log.warning("GET %s returned %s, expected an object", url, type(data).__name__)
            return None
        return data

    def fetch_by_url(self, url: str) -> Optional[Dict]:
        if not url:
            return None
        return self.fetch_json(url)

    def fetch_by_name(self, name: str) -> Optional[CreatureRecord]:
        key = normalize_name(name)
        if not key:
            return None
        doc = self.fetch_json(f"{self.base_url}/pokemon/{quote(key, safe='')}")
        if doc is None:
            return None
        try:
            return CreatureRecord.from_json(doc)
        except MalformedRecord as e:
            log.warning("Catalog record for %r is unusable: %s", key, e)
            return None

    def fetch_species(self, record: CreatureRecord) -> Optional[SpeciesDetail]:
        doc = self.fetch_by_url(record.species_url)
        if doc is None:
            return None
        try:
            return SpeciesDetail.from_json(doc)
        except MalformedRecord as e:
            log.warning("Species for %s is unusable: %s", record.name, e)
            return None

    def fetch_evolution_chain(self, species: SpeciesDetail) -> Optional[EvolutionChainNode]:
        doc = self.fetch_by_url(species.evolution_chain_url)
        if doc is None:
            return None
        try:
            return EvolutionChainNode.from_json(doc)
        except MalformedRecord as e:
            log.warning("Evolution chain for %s is unusable: %s", species.name, e)
            return None
