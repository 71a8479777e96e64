import pytest

from conftest import make_draft
from logic.errors import ValidationError
from models.item_draft import CompleteDraft, IncompleteDraft, ItemDraftBuilder
from models.profile import UserProfile, parse_color_list, profile_from_raw
from models.taxonomy import normalize_hex, validate_category, validate_formality, validate_season
from models.wardrobe_item import ClothingItem, ColorDetail, from_raw_metadata, item_to_dict, primary_color


def test_taxonomy_accepts_loose_spellings():
    assert validate_category("outerwear") == "Outerwear"
    assert validate_season("all season") == "All-Season"
    assert validate_formality("smart_casual") == "Smart Casual"


def test_taxonomy_rejects_unknown_values():
    with pytest.raises(ValueError):
        validate_category("Hat")


def test_normalize_hex_expands_short_form():
    assert normalize_hex("fff") == "#FFFFFF"
    assert normalize_hex("#4169e1") == "#4169E1"
    assert normalize_hex("navy") == "navy"


def test_primary_color_prefers_primary_role():
    colors = [
        ColorDetail(role="Accent", name="Gold", hex="#FFD700"),
        ColorDetail(role="Primary", name="Navy", hex="#000080"),
    ]
    assert primary_color(colors).name == "Navy"


def test_first_primary_color_wins_when_several_are_primary():
    colors = [
        ColorDetail(role="Secondary", name="Grey", hex="#808080"),
        ColorDetail(role="Primary", name="Black", hex="#000000"),
        ColorDetail(role="Primary", name="White", hex="#FFFFFF"),
    ]
    assert primary_color(colors).name == "Black"


def test_primary_color_falls_back_to_first_entry():
    colors = [ColorDetail(role="Secondary", name="Grey", hex="#808080")]
    assert primary_color(colors).name == "Grey"
    assert primary_color([]) is None


def test_color_detail_reads_type_key():
    color = ColorDetail.from_raw({"type": "accent", "name": "Red", "hex": "#ff0000"})
    assert color == ColorDetail(role="Accent", name="Red", hex="#FF0000")


def test_from_raw_metadata_requires_identity_fields():
    with pytest.raises(ValueError):
        from_raw_metadata({"id": "1", "name": "Tee", "category": "Top"})


def test_from_raw_metadata_round_trips_item(white_tee):
    restored = from_raw_metadata(item_to_dict(white_tee.with_availability(False)))
    assert restored.is_available is False
    assert restored.colors == white_tee.colors
    assert restored.primary_color.name == "White"


def test_dress_item_is_its_own_category():
    dress = ClothingItem.from_draft(make_draft(name="Floral Midi Dress", category="dress"), item_id="d1")
    assert dress.category == "Dress"


def test_builder_reports_missing_fields():
    builder = ItemDraftBuilder(name="Linen Shirt", category="Top")

    state = builder.state()

    assert isinstance(state, IncompleteDraft)
    assert "gender" in state.missing
    assert "name" not in state.missing


def test_builder_completes_after_edits():
    analyzed = make_draft()
    builder = ItemDraftBuilder.from_analysis(analyzed).update(name="  ", fit="Slim")
    assert builder.missing_fields() == ["name"]

    builder.update(name="Fitted White Tee")
    state = builder.state()

    assert isinstance(state, CompleteDraft)
    assert state.item.name == "Fitted White Tee"
    assert state.item.fit == "Slim"


def test_builder_allows_cleared_tags():
    builder = ItemDraftBuilder.from_analysis(make_draft()).update(tags=[])
    assert builder.build().tags == []


def test_builder_build_raises_with_missing_list():
    with pytest.raises(ValidationError) as excinfo:
        ItemDraftBuilder(name="Shirt").build()

    assert "category" in excinfo.value.missing
    assert excinfo.value.user_message.startswith("Please fill out all fields")


def test_builder_rejects_invalid_values():
    with pytest.raises(ValidationError):
        ItemDraftBuilder.from_analysis(make_draft()).update(category="Hat").build()


def test_builder_ignores_unknown_fields():
    builder = ItemDraftBuilder.from_analysis(make_draft()).update(id="sneaky", is_available=False)
    assert "id" not in builder.fields


def test_profile_normalises_preferences_and_colors():
    profile = profile_from_raw(
        {
            "height": " 175 ",
            "style_preferences": ["minimalist", "Minimalist", "classic"],
            "favorite_colors": ["Navy", " ", "Olive"],
        }
    )
    assert profile == UserProfile(
        height="175",
        style_preferences=["Minimalist", "Classic"],
        favorite_colors=["Navy", "Olive"],
    )


def test_profile_rejects_unknown_style():
    with pytest.raises(ValueError):
        UserProfile(style_preferences=["Goth"])


def test_parse_color_list_drops_blanks():
    assert parse_color_list("Navy, , Beige,Olive ") == ["Navy", "Beige", "Olive"]
