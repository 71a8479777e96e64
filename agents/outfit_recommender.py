"""Outfit recommendation clients backed by a generative reasoning model."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Sequence

from agents.gemini_models import (
    REMOTE_ERRORS,
    block_reason,
    build_generative_model,
    json_generation_config,
    request_options,
)
from assistant_app.config import AppConfig
from assistant_app.logging_config import get_logger, log_event
from logic.errors import InsufficientWardrobeError, RemoteServiceError, ValidationError
from logic.prompts import build_recommendation_prompt, recommendation_response_schema
from logic.safety import system_instruction
from logic.validation import RecommendationPayload, parse_json_response
from models.outfit import OutfitSelection
from models.profile import UserProfile
from models.wardrobe_item import ClothingItem
from tools.connectivity import ConnectivityCheck, ConnectivityProbe, require_online
from tools.observability import instrument_tool

logger = get_logger(__name__)

MIN_AVAILABLE_ITEMS = 2


def check_preconditions(
    available_items: Sequence[ClothingItem],
    occasion: str,
    must_use_item_id: Optional[str] = None,
) -> None:
    """Validate the request before anything leaves the process."""

    if not occasion or not occasion.strip():
        raise ValidationError("Please enter an occasion.")
    if not must_use_item_id and len(available_items) < MIN_AVAILABLE_ITEMS:
        raise InsufficientWardrobeError()


class OutfitRecommender(ABC):
    """Strategy interface: pick item ids for an occasion and explain why."""

    def recommend(
        self,
        available_items: Sequence[ClothingItem],
        occasion: str,
        profile: UserProfile,
        must_use_item_id: Optional[str] = None,
    ) -> OutfitSelection:
        available = [item for item in available_items if item.is_available]
        must_use = must_use_item_id or None
        check_preconditions(available, occasion, must_use)
        return self._select(available, occasion.strip(), profile, must_use)

    @abstractmethod
    def _select(
        self,
        available_items: List[ClothingItem],
        occasion: str,
        profile: UserProfile,
        must_use_item_id: Optional[str],
    ) -> OutfitSelection:
        """Produce a selection once preconditions hold."""


class GeminiOutfitRecommender(OutfitRecommender):
    """Asks Gemini for a schema-constrained outfit selection."""

    def __init__(
        self,
        config: AppConfig,
        model: Any = None,
        connectivity: Optional[ConnectivityCheck] = None,
    ) -> None:
        self.config = config
        self.connectivity = connectivity or ConnectivityProbe(config.connectivity_url)
        self.system_instruction = system_instruction(
            "outfit stylist. Select item ids only from the supplied wardrobe and return structured JSON only."
        )
        self._model = model or build_generative_model(config.text_model, self.system_instruction)

    @instrument_tool("recommend_outfit")
    def _select(
        self,
        available_items: List[ClothingItem],
        occasion: str,
        profile: UserProfile,
        must_use_item_id: Optional[str],
    ) -> OutfitSelection:
        require_online(self.connectivity)
        prompt = build_recommendation_prompt(available_items, occasion, profile, must_use_item_id)

        try:
            response = self._model.generate_content(
                prompt,
                generation_config=json_generation_config(recommendation_response_schema()),
                request_options=request_options(self.config.request_timeout_seconds),
            )
        except REMOTE_ERRORS as exc:
            log_event(logger, logging.ERROR, "recommendation_call_failed", error=str(exc))
            raise RemoteServiceError() from exc

        reason = block_reason(response)
        if reason:
            raise RemoteServiceError(f"Recommendation was blocked. Reason: {reason}.")
        try:
            selection = parse_json_response(response.text, RecommendationPayload).to_selection()
        except ValueError as exc:
            log_event(logger, logging.WARNING, "recommendation_payload_invalid", error=str(exc))
            raise RemoteServiceError() from exc

        log_event(
            logger,
            logging.INFO,
            "recommendation_received",
            item_count=len(selection.item_ids),
            candidate_count=len(available_items),
            must_use=bool(must_use_item_id),
        )
        return selection


SelectionRule = Callable[[List[ClothingItem], str, UserProfile, Optional[str]], OutfitSelection]


def _first_two(
    items: List[ClothingItem], occasion: str, profile: UserProfile, must_use_item_id: Optional[str]
) -> OutfitSelection:
    ids = [must_use_item_id] if must_use_item_id else []
    ids.extend(item.id for item in items if item.id not in ids)
    return OutfitSelection(item_ids=ids[:MIN_AVAILABLE_ITEMS], reasoning=f"A simple look for {occasion}.")


class StaticOutfitRecommender(OutfitRecommender):
    """Deterministic recommender for tests; shares the real preconditions."""

    def __init__(self, selection: Optional[OutfitSelection] = None, rule: Optional[SelectionRule] = None) -> None:
        self.selection = selection
        self.rule = rule or _first_two
        self.calls: List[dict] = []

    def _select(
        self,
        available_items: List[ClothingItem],
        occasion: str,
        profile: UserProfile,
        must_use_item_id: Optional[str],
    ) -> OutfitSelection:
        self.calls.append(
            {
                "item_ids": [item.id for item in available_items],
                "occasion": occasion,
                "must_use_item_id": must_use_item_id,
            }
        )
        if self.selection is not None:
            return self.selection
        return self.rule(available_items, occasion, profile, must_use_item_id)


__all__ = [
    "MIN_AVAILABLE_ITEMS",
    "check_preconditions",
    "OutfitRecommender",
    "GeminiOutfitRecommender",
    "StaticOutfitRecommender",
]
