"""Application state: config, document store, media resolver, and the engine built on them."""

import random
from pathlib import Path
from typing import Any, Optional

from recommender import RecommendationEngine, StoreQueryError

from .config import ServerConfig, get_config
from .services import (
    FirestoreDocumentStore,
    InMemoryDocumentStore,
    JsonDocumentStore,
    NullMediaResolver,
    StaticMediaResolver,
    SupabaseMediaResolver,
)


class AppState:
    """Global application state."""

    def __init__(
        self,
        config: ServerConfig,
        store: Optional[Any] = None,
        media: Optional[Any] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.store = store if store is not None else self._create_store(config)
        print(f"[startup] Document store: {type(self.store).__name__ if self.store else 'not configured'}")
        self.media = media if media is not None else self._create_media_resolver(config)
        print(f"[startup] Media resolver: {type(self.media).__name__}")
        self.engine: Optional[RecommendationEngine] = None
        if self.store is not None:
            self.engine = RecommendationEngine(
                self.store,
                self.media,
                config.recommendation_config(),
                rng=rng,
            )

    def _create_store(self, config: ServerConfig) -> Optional[Any]:
        """Create document store from config (memory, JSON file, or Firestore); None when it cannot be opened."""
        limit = config.fan_out_limit
        if config.data_source == "json":
            try:
                return JsonDocumentStore(config.data_json_path, fan_out_limit=limit)
            except (FileNotFoundError, StoreQueryError) as e:
                print(f"[startup] JSON document store skipped: {e}")
                return None
        if config.data_source == "firebase":
            cred_path = config.firebase_credentials_path
            if cred_path and not Path(cred_path).is_file():
                print(
                    f"[startup] Firestore document store skipped: FIREBASE_CREDENTIALS_PATH is not a file: {cred_path}. "
                    "Point it to your service account JSON in .env."
                )
                return None
            try:
                return FirestoreDocumentStore(
                    project_id=config.firebase_project_id,
                    credentials_path=cred_path,
                    fan_out_limit=limit,
                )
            except (ImportError, ValueError) as e:
                print(f"[startup] Firestore document store init failed: {e}")
                return None
        return InMemoryDocumentStore(fan_out_limit=limit)

    def _create_media_resolver(self, config: ServerConfig) -> Any:
        """Supabase when url and key are set, else a static base URL, else nothing resolves."""
        if config.supabase_url and config.supabase_key:
            return SupabaseMediaResolver(config.supabase_url, config.supabase_key)
        if config.media_base_url:
            return StaticMediaResolver(config.media_base_url)
        return NullMediaResolver()

    @property
    def is_ready(self) -> bool:
        return self.engine is not None


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        config = get_config()
        _state = AppState(config)
    return _state


def set_state(state: Optional[AppState]) -> None:
    """Replace the global state (None drops it so the next get_state() rebuilds)."""
    global _state
    _state = state
