"""Outfit recommendation: preconditions, prompt contents, answer parsing and resolution."""

import json

import pytest
from google.api_core import exceptions as google_exceptions

from agents.outfit_recommender import GeminiOutfitRecommender, StaticOutfitRecommender
from assistant_app.config import AppConfig
from conftest import FakeGeminiModel, make_draft, offline, online, text_response
from logic.errors import ConnectivityError, InsufficientWardrobeError, RemoteServiceError, ResolutionError, ValidationError
from logic.outfit_builder import resolve_outfit
from logic.prompts import build_recommendation_prompt, serialize_wardrobe
from models.outfit import OutfitSelection
from models.profile import UserProfile
from models.wardrobe_item import ClothingItem, ColorDetail


def _recommender(model, connectivity=online):
    return GeminiOutfitRecommender(AppConfig(request_timeout_seconds=20), model=model, connectivity=connectivity)


@pytest.fixture()
def sneakers():
    draft = make_draft(
        name="White Leather Sneakers",
        category="Footwear",
        tags=["Minimalist"],
        fabric="Leather",
        texture="Smooth",
        layering="Base",
    )
    return ClothingItem.from_draft(draft, item_id="sneakers")


def test_blank_occasion_fails_without_remote_call(white_tee, jeans):
    model = FakeGeminiModel(text_response({"itemIds": [], "reasoning": ""}))

    with pytest.raises(ValidationError):
        _recommender(model).recommend([white_tee, jeans], "   ", UserProfile())

    assert model.calls == []


def test_single_available_item_is_insufficient(white_tee, jeans):
    model = FakeGeminiModel(text_response({"itemIds": [], "reasoning": ""}))
    unavailable = jeans.with_availability(False)

    with pytest.raises(InsufficientWardrobeError):
        _recommender(model).recommend([white_tee, unavailable], "Casual brunch", UserProfile())

    assert model.calls == []


def test_must_use_item_bypasses_minimum(white_tee):
    model = FakeGeminiModel(text_response({"itemIds": ["tee"], "reasoning": "Simple."}))

    selection = _recommender(model).recommend([white_tee], "Errands", UserProfile(), must_use_item_id="tee")

    assert selection.item_ids == ["tee"]
    assert len(model.calls) == 1


def test_offline_raises_before_model_call(white_tee, jeans):
    model = FakeGeminiModel(text_response({"itemIds": ["tee"], "reasoning": "x"}))

    with pytest.raises(ConnectivityError):
        _recommender(model, connectivity=offline).recommend([white_tee, jeans], "Brunch", UserProfile())

    assert model.calls == []


def test_prompt_carries_profile_occasion_and_items(white_tee, jeans):
    model = FakeGeminiModel(text_response({"itemIds": ["tee", "jeans"], "reasoning": "Relaxed."}))
    profile = UserProfile(height="170", style_preferences=["Casual"], favorite_colors=["Blue"])

    _recommender(model).recommend([white_tee, jeans], "  Casual brunch ", profile, must_use_item_id="jeans")

    call = model.calls[0]
    prompt = call["contents"]
    assert '**Occasion:** "Casual brunch"' in prompt
    assert "Style Preferences: Casual." in prompt
    assert "Favorite Colors: Blue." in prompt
    assert "Height: 170 cm." in prompt
    assert 'You MUST include the item with ID "jeans"' in prompt
    assert '"id": "tee"' in prompt
    assert call["generation_config"].response_mime_type == "application/json"
    assert call["request_options"] == {"timeout": 20.0}


def test_prompt_without_must_use_has_no_constraint(white_tee, jeans):
    prompt = build_recommendation_prompt([white_tee, jeans], "Office", UserProfile())
    assert "MUST include" not in prompt
    assert "Not specified" in prompt


def test_serialized_wardrobe_omits_image_references(white_tee):
    payload = json.loads(serialize_wardrobe([white_tee]))
    assert "image_url" not in payload[0]
    assert payload[0]["colors"] == [{"type": "Primary", "name": "White", "hex": "#FFFFFF"}]


def test_only_available_items_are_sent(white_tee, jeans, sneakers):
    model = FakeGeminiModel(text_response({"itemIds": ["tee", "sneakers"], "reasoning": "Clean."}))

    _recommender(model).recommend(
        [white_tee, jeans.with_availability(False), sneakers], "Walk", UserProfile()
    )

    assert '"id": "jeans"' not in model.calls[0]["contents"]


@pytest.mark.parametrize(
    "response",
    [
        text_response("not json"),
        text_response(""),
        text_response({"reasoning": "missing ids"}),
        text_response({"itemIds": ["tee"], "reasoning": "ok", "extra": True}),
    ],
    ids=["invalid-json", "empty", "missing-field", "extra-field"],
)
def test_malformed_answers_raise_remote_error(white_tee, jeans, response):
    with pytest.raises(RemoteServiceError):
        _recommender(FakeGeminiModel(response)).recommend([white_tee, jeans], "Brunch", UserProfile())


def test_transport_failures_raise_remote_error(white_tee, jeans):
    model = FakeGeminiModel(error=google_exceptions.ServiceUnavailable("down"))

    with pytest.raises(RemoteServiceError) as excinfo:
        _recommender(model).recommend([white_tee, jeans], "Brunch", UserProfile())

    assert excinfo.value.user_message == "Failed to get recommendation. Please try again."


def test_unknown_recommended_id_fails_resolution(white_tee, jeans):
    selection = OutfitSelection(item_ids=["tee", "ghost"], reasoning="Nice.")

    with pytest.raises(ResolutionError) as excinfo:
        resolve_outfit(selection, [white_tee, jeans], "Brunch")

    assert excinfo.value.unresolved == ["ghost"]


def test_resolution_keeps_selection_order(white_tee, jeans, sneakers):
    selection = OutfitSelection(item_ids=["sneakers", "tee"], reasoning="Fresh.")

    outfit = resolve_outfit(selection, [white_tee, jeans, sneakers], "Brunch")

    assert [item.id for item in outfit.items] == ["sneakers", "tee"]
    assert outfit.reasoning == "Fresh."


def test_casual_brunch_scenario(white_tee, jeans, sneakers):
    blazer = ClothingItem.from_draft(
        make_draft(
            name="Charcoal Wool Blazer",
            category="Outerwear",
            colors=[ColorDetail(role="Primary", name="Charcoal", hex="#36454F")],
            formality="Formal",
            layering="Outer",
        ),
        item_id="blazer",
    )
    wardrobe = [white_tee, jeans, sneakers, blazer]
    model = FakeGeminiModel(
        text_response(
            {
                "itemIds": ["tee", "jeans", "sneakers"],
                "reasoning": "A relaxed, breathable base for a casual brunch.",
            }
        )
    )

    selection = _recommender(model).recommend(wardrobe, "Casual brunch", UserProfile(style_preferences=["Casual"]))
    outfit = resolve_outfit(selection, wardrobe, "Casual brunch")

    assert [item.category for item in outfit.items] == ["Top", "Bottom", "Footwear"]
    assert outfit.occasion == "Casual brunch"


def test_static_recommender_shares_preconditions(white_tee):
    recommender = StaticOutfitRecommender()

    with pytest.raises(InsufficientWardrobeError):
        recommender.recommend([white_tee], "Dinner", UserProfile())

    assert recommender.calls == []


def test_static_recommender_puts_must_use_first(white_tee, jeans):
    selection = StaticOutfitRecommender().recommend([white_tee, jeans], "Dinner", UserProfile(), "jeans")
    assert selection.item_ids == ["jeans", "tee"]
