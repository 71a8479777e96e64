"""Application bootstrap and user-action boundary."""

from __future__ import annotations

import logging
from dataclasses import asdict, replace
from typing import Any, Callable, Dict, Optional

from agents.gemini_models import configure_api_key
from agents.image_composer import GeminiImageComposer, ImageComposer
from agents.item_analyzer import GeminiItemAnalyzer, ItemAnalyzer
from agents.outfit_recommender import GeminiOutfitRecommender, OutfitRecommender, check_preconditions
from assistant_app.config import AppConfig
from assistant_app.logging_config import configure_logging, get_logger, log_event, operation_context
from logic.errors import NotFoundError, RemoteServiceError, ValidationError, WardrobeAssistantError
from logic.outfit_builder import resolve_outfit
from memory.kv_store import JSONFileKeyValueStore, KeyValueStore, SQLiteKeyValueStore
from memory.persistence import PersistentState
from memory.user_profile import ProfileStore
from models.item_draft import ItemDraftBuilder
from models.outfit import Outfit
from models.profile import profile_from_raw, profile_to_dict
from models.wardrobe_item import ClothingItem, item_to_dict
from tools.connectivity import ConnectivityCheck, ConnectivityProbe
from tools.image_upload import CloudinaryUploader
from tools.wardrobe_store import WardrobeRepository

LOGGER = get_logger(__name__)

ActionResult = Dict[str, Any]


class WardrobeAssistantApp:
    """Wires persistence, the wardrobe repository, the profile and the AI clients.

    Every public action returns ``{"status": "ok", ...}`` or
    ``{"status": "error", "error": <type>, "message": <user text>}``; errors
    from the taxonomy are never retried and never escape.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        state_store: KeyValueStore | None = None,
        analyzer: ItemAnalyzer | None = None,
        recommender: OutfitRecommender | None = None,
        composer: ImageComposer | None = None,
        uploader: CloudinaryUploader | None = None,
        connectivity: ConnectivityCheck | None = None,
    ) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging()
        configure_api_key(self.config.api_key)

        self.state = PersistentState(state_store or self._build_state_store())
        self.repository = WardrobeRepository(self.state.load_wardrobe(), on_change=self.state.save_wardrobe)
        self.profile_store = ProfileStore(self.state.load_profile(), on_change=self.state.save_profile)
        # Write the loaded (or seeded) state back so the store always reflects memory.
        self.state.save_wardrobe(self.repository.list_all())
        self.state.save_profile(self.profile_store.profile)

        self.connectivity = connectivity or ConnectivityProbe(self.config.connectivity_url)
        self.analyzer = analyzer or GeminiItemAnalyzer(self.config, connectivity=self.connectivity)
        self.recommender = recommender or GeminiOutfitRecommender(self.config, connectivity=self.connectivity)
        self.composer = composer or GeminiImageComposer(self.config, connectivity=self.connectivity)
        self.uploader = uploader or CloudinaryUploader(self.config)

        self.current_outfit: Optional[Outfit] = None
        self.current_try_on: Optional[str] = None

    def _build_state_store(self) -> KeyValueStore:
        if self.config.state_backend.lower() == "sqlite":
            return SQLiteKeyValueStore(self.config.state_path or "data/state.db")
        return JSONFileKeyValueStore(self.config.state_path or "data/state")

    def _run_action(self, method: str, action: Callable[[], ActionResult]) -> ActionResult:
        with operation_context(f"app:{method}") as correlation_id:
            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_started",
                method=method,
                correlation_id=correlation_id,
            )
            try:
                payload = action()
            except WardrobeAssistantError as exc:
                log_event(
                    LOGGER,
                    level=logging.WARNING,
                    event="app_call_failed",
                    method=method,
                    correlation_id=correlation_id,
                    error_type=type(exc).__name__,
                    error=exc.user_message,
                )
                return {"status": "error", "error": type(exc).__name__, "message": exc.user_message}
            except Exception as exc:  # noqa: BLE001
                log_event(
                    LOGGER,
                    level=logging.ERROR,
                    event="app_call_crashed",
                    method=method,
                    correlation_id=correlation_id,
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
                return {
                    "status": "error",
                    "error": RemoteServiceError.__name__,
                    "message": WardrobeAssistantError.default_message,
                }

            log_event(
                LOGGER,
                level=logging.INFO,
                event="app_call_completed",
                method=method,
                correlation_id=correlation_id,
            )
            return {"status": "ok", **payload}

    def list_wardrobe(self, available_only: bool = False) -> list:
        items = self.repository.list_available() if available_only else self.repository.list_all()
        return [item_to_dict(item) for item in items]

    def get_profile(self) -> dict:
        return profile_to_dict(self.profile_store.profile)

    def analyze_photo(self, data: bytes, mime_type: str) -> ActionResult:
        """Upload a clothing photo and return the analysed draft for review."""

        def action() -> ActionResult:
            if not data:
                raise ValidationError("Please select an image file first.")
            upload = self.uploader.upload(data, mime_type)
            analyzed = self.analyzer.analyze(data, mime_type)
            draft = replace(analyzed, image_url=upload.image_url)
            return {"draft": item_to_dict(draft), "public_id": upload.public_id}

        return self._run_action("analyze_photo", action)

    def commit_item(self, fields: Dict[str, Any]) -> ActionResult:
        """Add a reviewed draft to the wardrobe once every field is present."""

        def action() -> ActionResult:
            draft = ItemDraftBuilder(**fields).build()
            item = self.repository.add(draft)
            return {"item": item_to_dict(item)}

        return self._run_action("commit_item", action)

    def update_item(self, fields: Dict[str, Any]) -> ActionResult:
        """Replace an existing item with a complete edited record.

        Every draft field must be present. Availability is kept from the
        stored item unless ``is_available`` is given explicitly.
        """

        def action() -> ActionResult:
            item_id = str(fields.get("id") or "")
            current = self.repository.get(item_id)
            if current is None:
                raise NotFoundError(item_id)
            draft = ItemDraftBuilder(**fields).build()
            is_available = fields.get("is_available")
            item = ClothingItem.from_draft(
                draft,
                item_id=item_id,
                is_available=current.is_available if is_available is None else bool(is_available),
            )
            updated = self.repository.update_by_id(item)
            return {"item": item_to_dict(updated)}

        return self._run_action("update_item", action)

    def toggle_availability(self, item_id: str) -> ActionResult:
        def action() -> ActionResult:
            return {"item": item_to_dict(self.repository.toggle_availability(item_id))}

        return self._run_action("toggle_availability", action)

    def save_profile(self, fields: Dict[str, Any]) -> ActionResult:
        def action() -> ActionResult:
            try:
                profile = profile_from_raw(fields)
            except (TypeError, ValueError) as exc:
                raise ValidationError(str(exc)) from exc
            saved = self.profile_store.save(profile)
            return {"profile": profile_to_dict(saved)}

        return self._run_action("save_profile", action)

    def recommend_outfit(self, occasion: str, must_use_item_id: Optional[str] = None) -> ActionResult:
        """Recommend an outfit from available items and resolve it against the wardrobe."""

        def action() -> ActionResult:
            available = self.repository.list_available()
            # A rejected request keeps the previous recommendation on screen.
            check_preconditions(available, occasion, must_use_item_id or None)
            self.current_outfit = None
            self.current_try_on = None
            selection = self.recommender.recommend(
                available,
                occasion,
                self.profile_store.profile,
                must_use_item_id or None,
            )
            outfit = resolve_outfit(selection, self.repository.list_all(), occasion.strip())
            self.current_outfit = outfit
            return {"outfit": asdict(outfit)}

        return self._run_action("recommend_outfit", action)

    def visualize_outfit(self) -> ActionResult:
        """Compose the current recommendation onto the profile photo.

        A failure here leaves the current recommendation untouched.
        """

        def action() -> ActionResult:
            outfit = self.current_outfit
            if outfit is None:
                raise ValidationError("Get an outfit recommendation first.")
            photo = self.profile_store.profile.photo_url
            if not photo:
                raise ValidationError("Upload a profile photo to use the virtual try-on.")
            self.current_try_on = None
            image = self.composer.compose(photo, outfit.items)
            self.current_try_on = image
            return {"image": image, "outfit": asdict(outfit)}

        return self._run_action("visualize_outfit", action)


__all__ = ["WardrobeAssistantApp"]
