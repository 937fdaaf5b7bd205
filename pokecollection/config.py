import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_API_BASE = "https://pokeapi.co/api/v2"
DEFAULT_STORAGE_KEY = "pokemons"
DEFAULT_TIMEOUT = 60.0
USER_AGENT = "Mozilla/5.0"


def _flag(val: Optional[str], default: bool) -> bool:
    if val is None or not val.strip():
        return default
    try:
        return bool(int(val))
    except ValueError:
        return val.strip().lower() in ("true", "yes", "on")


def _number(val: Optional[str], default: float) -> float:
    try:
        n = float(val) if val is not None else default
    except ValueError:
        return default
    return n if n > 0 else default


@dataclass(frozen=True)
class Settings:
    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT
    storage_key: str = DEFAULT_STORAGE_KEY
    persist_to_disk: bool = False
    state_path: str = "state.json"
    log_level: str = "INFO"

    @property
    def backup_path(self) -> str:
        stem, ext = os.path.splitext(self.state_path)
        return f"{stem}.backup{ext or '.json'}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            api_base=(env.get("POKEDEX_API_BASE") or DEFAULT_API_BASE).rstrip("/"),
            timeout=_number(env.get("POKEDEX_HTTP_TIMEOUT"), DEFAULT_TIMEOUT),
            storage_key=env.get("POKEDEX_STORAGE_KEY") or DEFAULT_STORAGE_KEY,
            # session-only unless you deliberately set this to "1"
            persist_to_disk=_flag(env.get("POKEDEX_PERSIST_TO_DISK"), False),
            state_path=env.get("POKEDEX_STATE_PATH") or "state.json",
            log_level=(env.get("POKEDEX_LOG_LEVEL") or "INFO").upper(),
        )
