"""Load and save the wardrobe collection and the user profile as JSON blobs."""
from __future__ import annotations

import json
import logging
from typing import List

from assistant_app.logging_config import get_logger, log_event
from memory.kv_store import KeyValueStore
from models.profile import UserProfile, profile_from_raw, profile_to_dict
from models.seed_wardrobe import starter_wardrobe
from models.wardrobe_item import ClothingItem, from_raw_metadata, item_to_dict

WARDROBE_KEY = "wardrobe"
PROFILE_KEY = "userProfile"

LOGGER = get_logger(__name__)


class PersistentState:
    """Adapter between the key-value store and the in-memory domain objects."""

    def __init__(self, store: KeyValueStore, seed_wardrobe: bool = True) -> None:
        self.store = store
        self.seed_wardrobe = seed_wardrobe

    def _default_wardrobe(self) -> List[ClothingItem]:
        return starter_wardrobe() if self.seed_wardrobe else []

    def load_wardrobe(self) -> List[ClothingItem]:
        raw = self.store.get(WARDROBE_KEY)
        if raw is None:
            return self._default_wardrobe()
        try:
            payload = json.loads(raw)
            if not isinstance(payload, list):
                raise ValueError("wardrobe state must be a JSON array")
            return [from_raw_metadata(entry) for entry in payload]
        except (ValueError, TypeError, AttributeError) as exc:
            log_event(
                LOGGER,
                logging.WARNING,
                "state_load_failed",
                key=WARDROBE_KEY,
                error=str(exc),
            )
            return self._default_wardrobe()

    def save_wardrobe(self, items: List[ClothingItem]) -> None:
        self.store.set(WARDROBE_KEY, json.dumps([item_to_dict(item) for item in items]))

    def load_profile(self) -> UserProfile:
        raw = self.store.get(PROFILE_KEY)
        if raw is None:
            return UserProfile()
        try:
            payload = json.loads(raw)
            if not isinstance(payload, dict):
                raise ValueError("profile state must be a JSON object")
            return profile_from_raw(payload)
        except (ValueError, TypeError) as exc:
            log_event(
                LOGGER,
                logging.WARNING,
                "state_load_failed",
                key=PROFILE_KEY,
                error=str(exc),
            )
            return UserProfile()

    def save_profile(self, profile: UserProfile) -> None:
        self.store.set(PROFILE_KEY, json.dumps(profile_to_dict(profile)))


__all__ = ["PersistentState", "WARDROBE_KEY", "PROFILE_KEY"]
