"""Pydantic schemas for validating Gemini JSON answers."""

from __future__ import annotations

import json
from typing import List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models import taxonomy
from models.outfit import OutfitSelection
from models.wardrobe_item import AnalyzedClothingItem, ColorDetail

ModelT = TypeVar("ModelT", bound=BaseModel)


class ColorPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: str = Field(alias="type")
    name: str
    hex: str

    @field_validator("role")
    @classmethod
    def _validate_role(cls, value: str) -> str:
        return taxonomy.validate_color_role(value)


class AnalysisPayload(BaseModel):
    """Answer contract for the item analysis call."""

    name: str = Field(min_length=1)
    category: str
    gender: str
    colors: List[ColorPayload]
    tags: List[str]
    fabric: str
    texture: str
    season: str
    formality: str
    fit: str
    layering: str

    @field_validator("category")
    @classmethod
    def _category(cls, value: str) -> str:
        return taxonomy.validate_category(value)

    @field_validator("gender")
    @classmethod
    def _gender(cls, value: str) -> str:
        return taxonomy.validate_gender(value)

    @field_validator("season")
    @classmethod
    def _season(cls, value: str) -> str:
        return taxonomy.validate_season(value)

    @field_validator("formality")
    @classmethod
    def _formality(cls, value: str) -> str:
        return taxonomy.validate_formality(value)

    @field_validator("fit")
    @classmethod
    def _fit(cls, value: str) -> str:
        return taxonomy.validate_fit(value)

    @field_validator("layering")
    @classmethod
    def _layering(cls, value: str) -> str:
        return taxonomy.validate_layering(value)

    def to_item(self) -> AnalyzedClothingItem:
        return AnalyzedClothingItem(
            name=self.name,
            category=self.category,
            gender=self.gender,
            colors=[ColorDetail(role=c.role, name=c.name, hex=c.hex) for c in self.colors],
            tags=list(self.tags),
            fabric=self.fabric,
            texture=self.texture,
            season=self.season,
            formality=self.formality,
            fit=self.fit,
            layering=self.layering,
        )


class RecommendationPayload(BaseModel):
    """Answer contract for the outfit recommendation call: exactly two fields."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    item_ids: List[str] = Field(alias="itemIds")
    reasoning: str

    def to_selection(self) -> OutfitSelection:
        return OutfitSelection(item_ids=list(self.item_ids), reasoning=self.reasoning)


def parse_json_response(text: str | None, model: Type[ModelT]) -> ModelT:
    """Parse model output text and validate it against ``model``.

    Raises :class:`ValueError` for empty or non-JSON text and
    :class:`pydantic.ValidationError` for schema violations.
    """

    if not text or not text.strip():
        raise ValueError("empty response text")
    payload = json.loads(text.strip())
    return model.model_validate(payload)


__all__ = [
    "AnalysisPayload",
    "ColorPayload",
    "RecommendationPayload",
    "parse_json_response",
]
