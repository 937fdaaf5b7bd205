import streamlit as st
import logging
from typing import List

from pokecollection import (
    CatalogClient,
    CollectionError,
    CollectionManager,
    CollectionStore,
    CreatureRecord,
    JsonFileBackend,
    Settings,
)
from pokecollection.store import dumps_collection, import_collection

SETTINGS = Settings.from_env()

LOGGER = logging.getLogger("pokedex")
if not logging.getLogger().handlers:
    logging.basicConfig(level=getattr(logging, SETTINGS.log_level, logging.INFO),
                        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

st.set_page_config(page_title="Pokédex Collection", layout="wide")

st.markdown("""
<style>
.pk-name { text-transform: capitalize; margin-bottom: 0; }
.pk-stats { margin: 4px 0 8px 0; padding-left: 18px; font-size: 14px; }
.pk-stats li { text-transform: capitalize; }
</style>
""", unsafe_allow_html=True)

IMAGE_SIZE = 169
CARDS_PER_ROW = 3

# =============================================================================
# Per-session state container
# =============================================================================
def _backend():
    # Default: the browser session is the store. Disk only when asked for.
    if not SETTINGS.persist_to_disk:
        return st.session_state
    if "_disk_backend" not in st.session_state:
        st.session_state["_disk_backend"] = JsonFileBackend(SETTINGS.state_path, SETTINGS.backup_path)
    return st.session_state["_disk_backend"]

STORE = CollectionStore(_backend(), key=SETTINGS.storage_key)
MANAGER = CollectionManager(STORE, CatalogClient(SETTINGS.api_base, timeout=SETTINGS.timeout))

# =============================================================================
# Small utils
# =============================================================================
def flash(kind: str, msg: str):
    st.session_state["_flash"] = (kind, msg)

def show_flash():
    kind, msg = st.session_state.pop("_flash", (None, None))
    if kind == "error":
        st.error(msg)
    elif kind == "success":
        st.success(msg)

def title(name: str) -> str:
    return (name or "").replace("-", " ").title()

# =============================================================================
# Pages
# =============================================================================
def render_card(index: int, pk: CreatureRecord):
    st.markdown(f"<h3 class='pk-name'>{title(pk.name)}</h3>", unsafe_allow_html=True)
    url = pk.image_url()
    if url:
        st.image(url, width=IMAGE_SIZE, caption=f"Image of the pokemon {pk.name}")
    else:
        st.caption("No image available.")
    if pk.types:
        st.caption(" / ".join(title(t) for t in pk.types))
    items = "".join(f"<li>{s.name}: {s.base_value}</li>" for s in pk.stats)
    st.markdown(f"<ul class='pk-stats'>{items}</ul>", unsafe_allow_html=True)

    c1, c2 = st.columns(2)
    if c1.button("Evolve", key=f"evo_{index}_{pk.id}"):
        with st.spinner(f"Looking up the evolution of {pk.name}..."):
            try:
                updated = MANAGER.evolve_at(index)
                flash("success", f"{title(pk.name)} evolved into {title(updated[index].name)}!")
            except CollectionError as e:
                flash("error", str(e))
        st.rerun()
    if c2.button("Remove", key=f"rm_{index}_{pk.id}"):
        if MANAGER.remove_at(index) is None:
            flash("error", "Nothing to remove at that position.")
        else:
            flash("success", f"Removed {title(pk.name)}.")
        st.rerun()


def render_collection():
    st.header("My Pokémon")

    c_in, c_btn = st.columns([4, 1])
    name = c_in.text_input("Add a new pokemon:", key="add_name", placeholder="pokemon name")
    c_btn.write("")
    if c_btn.button("Add", key="add_btn"):
        with st.spinner("Searching pokemon..."):
            try:
                rec = MANAGER.add(name)
                flash("success", f"Added {title(rec.name)}.")
            except CollectionError as e:
                flash("error", str(e))

    show_flash()

    pokemons: List[CreatureRecord] = MANAGER.load()
    if not pokemons:
        st.info("No Pokémon yet.")
        return

    for start in range(0, len(pokemons), CARDS_PER_ROW):
        cols = st.columns(CARDS_PER_ROW)
        for offset, pk in enumerate(pokemons[start:start + CARDS_PER_ROW]):
            with cols[offset]:
                render_card(start + offset, pk)


def render_saveload():
    st.header("Save / Load")

    st.markdown("**Download your collection**")
    st.download_button(
        "Download pokemons.json",
        data=dumps_collection(MANAGER.load(), indent=2),
        file_name="pokemons.json",
        mime="application/json",
    )

    st.markdown("---")
    st.markdown("**Import a pokemons.json**")
    st.caption("Importing replaces the current collection.")
    up = st.file_uploader("Choose pokemons.json", type=["json"])
    if up is not None and st.button("Import", key="import_btn"):
        try:
            imported = import_collection(STORE, up.getvalue())
        except ValueError as e:
            st.error(f"Failed to load: {e}")
        else:
            LOGGER.info("Imported %d pokemon", len(imported))
            st.success(f"Loaded {len(imported)} pokemon into this session.")

    show_flash()


def render_settings():
    st.header("Settings")

    if st.button("Reset this session (start fresh)", key="reset_session_btn"):
        STORE.clear()
        for k in list(st.session_state.keys()):
            if k != "_disk_backend":
                del st.session_state[k]
        flash("success", "Collection cleared.")
        st.rerun()
    if SETTINGS.persist_to_disk:
        st.caption(f"Collection is saved to {SETTINGS.state_path}.")
    else:
        st.caption("Per-user session only. No data is written to the server.")
    st.markdown("---")
    st.caption(f"Catalog: {SETTINGS.api_base}")

    show_flash()


# =============================================================================
# Sidebar routing
# =============================================================================
PAGE_REGISTRY = [
    ("collection", "My Pokémon", render_collection),
    ("save", "Save / Load", render_saveload),
    ("settings", "Settings", render_settings),
]

def _run_router():
    st.sidebar.title("Navigation")
    labels = [lbl for _, lbl, _ in PAGE_REGISTRY]
    choice = st.sidebar.radio("Go to", labels, index=0)
    label_to_fn = {lbl: fn for _, lbl, fn in PAGE_REGISTRY}
    fn = label_to_fn.get(choice)
    if fn:
        fn()
    else:
        st.info("No page selected.")

_run_router()
