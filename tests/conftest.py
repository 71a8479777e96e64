"""Shared fixtures: sample wardrobe items and Gemini model fakes."""

from __future__ import annotations

import base64
import json
from types import SimpleNamespace
from typing import Any, List, Optional

import pytest

from models.wardrobe_item import AnalyzedClothingItem, ClothingItem, ColorDetail


class FakeGeminiModel:
    """Records ``generate_content`` calls and replays a canned response or error."""

    def __init__(self, response: Any = None, error: Optional[Exception] = None) -> None:
        self.response = response
        self.error = error
        self.calls: List[dict] = []

    def generate_content(self, contents: Any, **kwargs: Any) -> Any:
        self.calls.append({"contents": contents, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


def text_response(payload: Any) -> SimpleNamespace:
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return SimpleNamespace(text=text, prompt_feedback=None, candidates=[])


def image_response(data: bytes, mime_type: str = "image/png") -> SimpleNamespace:
    parts = [
        SimpleNamespace(text="Here you go", inline_data=None),
        SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type)),
    ]
    candidate = SimpleNamespace(content=SimpleNamespace(parts=parts))
    return SimpleNamespace(candidates=[candidate], prompt_feedback=None)


def make_draft(name: str = "Plain White T-Shirt", category: str = "Top", **overrides: Any) -> AnalyzedClothingItem:
    fields = dict(
        name=name,
        category=category,
        gender="Unisex",
        colors=[ColorDetail(role="Primary", name="White", hex="#FFFFFF")],
        tags=["Solid"],
        fabric="Cotton",
        texture="Soft",
        season="All-Season",
        formality="Casual",
        fit="Regular",
        layering="Base",
        image_url="https://res.cloudinary.com/demo/tee.jpg",
    )
    fields.update(overrides)
    return AnalyzedClothingItem(**fields)


@pytest.fixture()
def white_tee() -> ClothingItem:
    return ClothingItem.from_draft(make_draft(), item_id="tee")


@pytest.fixture()
def jeans() -> ClothingItem:
    draft = make_draft(
        name="Blue Slim-Fit Jeans",
        category="Bottom",
        colors=[ColorDetail(role="Primary", name="Blue", hex="#0000FF")],
        tags=["Denim"],
        fabric="Denim",
        texture="Slightly Rough",
        fit="Slim",
    )
    return ClothingItem.from_draft(draft, item_id="jeans")


@pytest.fixture()
def photo_data_uri() -> str:
    return "data:image/jpeg;base64," + base64.b64encode(b"\xff\xd8\xffjpeg-bytes").decode("ascii")


def online() -> bool:
    return True


def offline() -> bool:
    return False
