"""Clothing item data model and helpers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

from models.taxonomy import (
    PRIMARY_ROLE,
    normalize_hex,
    validate_category,
    validate_color_role,
    validate_fit,
    validate_formality,
    validate_gender,
    validate_layering,
    validate_season,
)


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


@dataclass
class ColorDetail:
    """One colour of an item with its role in the palette."""

    role: str
    name: str
    hex: str

    def __post_init__(self) -> None:
        self.role = validate_color_role(self.role)
        self.name = str(self.name).strip()
        self.hex = normalize_hex(str(self.hex))

    @classmethod
    def from_raw(cls, raw: Any) -> "ColorDetail":
        if isinstance(raw, ColorDetail):
            return raw
        if not isinstance(raw, dict):
            raise ValueError(f"Color entries must be mappings, got {type(raw).__name__}")
        # Gemini and the original storage format call the role "type".
        role = raw.get("role", raw.get("type"))
        return cls(role=str(role), name=str(raw.get("name", "")), hex=str(raw.get("hex", "")))


def primary_color(colors: List[ColorDetail]) -> Optional[ColorDetail]:
    """Return the first Primary colour, falling back to the first entry."""

    for color in colors:
        if color.role == PRIMARY_ROLE:
            return color
    return colors[0] if colors else None


class _ItemAttributes:
    """Validation shared by analysed drafts and committed items."""

    def _validate_attributes(self) -> None:
        self.name = str(self.name).strip()
        self.category = validate_category(self.category)
        self.gender = validate_gender(self.gender)
        self.colors = [ColorDetail.from_raw(color) for color in _ensure_list(self.colors)]
        self.tags = [str(tag) for tag in _ensure_list(self.tags)]
        self.fabric = str(self.fabric)
        self.texture = str(self.texture)
        self.season = validate_season(self.season)
        self.formality = validate_formality(self.formality)
        self.fit = validate_fit(self.fit)
        self.layering = validate_layering(self.layering)
        self.image_url = str(self.image_url or "")

    @property
    def primary_color(self) -> Optional[ColorDetail]:
        return primary_color(self.colors)


@dataclass
class AnalyzedClothingItem(_ItemAttributes):
    """Every clothing attribute except identity and availability.

    This is what the analysis service returns and what the repository accepts
    when adding an item. ``image_url`` stays empty until the upload finishes.
    """

    name: str
    category: str
    gender: str
    colors: List[ColorDetail]
    tags: List[str]
    fabric: str
    texture: str
    season: str
    formality: str
    fit: str
    layering: str
    image_url: str = ""

    def __post_init__(self) -> None:
        self._validate_attributes()


@dataclass
class ClothingItem(_ItemAttributes):
    """Represents an item in the user's wardrobe."""

    id: str
    name: str
    image_url: str
    category: str
    gender: str
    colors: List[ColorDetail] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    fabric: str = ""
    texture: str = ""
    season: str = "All-Season"
    formality: str = "Casual"
    fit: str = "Regular"
    layering: str = "Base"
    is_available: bool = True

    def __post_init__(self) -> None:
        self.id = str(self.id)
        self._validate_attributes()
        self.is_available = bool(self.is_available)

    @classmethod
    def from_draft(cls, draft: AnalyzedClothingItem, item_id: str, is_available: bool = True) -> "ClothingItem":
        attributes = {f.name: getattr(draft, f.name) for f in fields(AnalyzedClothingItem)}
        return cls(id=item_id, is_available=is_available, **attributes)

    def with_availability(self, is_available: bool) -> "ClothingItem":
        return replace(self, is_available=is_available, colors=list(self.colors), tags=list(self.tags))


DRAFT_FIELDS = [f.name for f in fields(AnalyzedClothingItem)]


def item_to_dict(item: ClothingItem | AnalyzedClothingItem) -> Dict[str, Any]:
    return asdict(item)


def from_raw_metadata(metadata: Dict[str, Any]) -> ClothingItem:
    """Factory to build a :class:`ClothingItem` from a stored or submitted mapping."""

    required_fields = ["id", "name", "category", "gender"]
    missing = [name for name in required_fields if not metadata.get(name)]
    if missing:
        raise ValueError(f"Missing required fields for ClothingItem: {missing}")

    return ClothingItem(
        id=str(metadata["id"]),
        name=str(metadata["name"]),
        image_url=str(metadata.get("image_url") or ""),
        category=str(metadata["category"]),
        gender=str(metadata["gender"]),
        colors=_ensure_list(metadata.get("colors")),
        tags=_ensure_list(metadata.get("tags")),
        fabric=str(metadata.get("fabric") or ""),
        texture=str(metadata.get("texture") or ""),
        season=str(metadata.get("season") or "All-Season"),
        formality=str(metadata.get("formality") or "Casual"),
        fit=str(metadata.get("fit") or "Regular"),
        layering=str(metadata.get("layering") or "Base"),
        is_available=bool(metadata.get("is_available", True)),
    )


__all__ = [
    "AnalyzedClothingItem",
    "ClothingItem",
    "ColorDetail",
    "DRAFT_FIELDS",
    "from_raw_metadata",
    "item_to_dict",
    "primary_color",
]
