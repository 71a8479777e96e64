"""Canonical value sets for clothing items and user profiles.

This module centralises the fixed enumerations used by the data model, the
Gemini response schemas and the HTTP layer. Helper functions keep validation
consistent: values match case-insensitively (spaces, hyphens and underscores
are interchangeable) and come back in their canonical display form.
"""

import re
from typing import Iterable, List, Optional

CATEGORIES: List[str] = ["Top", "Bottom", "Outerwear", "Footwear", "Accessory", "Dress"]
GENDERS: List[str] = ["Male", "Female", "Unisex"]
SEASONS: List[str] = ["Spring", "Summer", "Autumn", "Winter", "All-Season"]
FORMALITIES: List[str] = ["Casual", "Smart Casual", "Business Casual", "Formal", "Sport"]
FITS: List[str] = ["Skinny", "Slim", "Regular", "Loose", "Oversized"]
LAYERINGS: List[str] = ["Base", "Mid", "Outer"]
COLOR_ROLES: List[str] = ["Primary", "Secondary", "Accent"]
STYLE_PREFERENCES: List[str] = [
    "Classic",
    "Modern",
    "Sporty",
    "Casual",
    "Minimalist",
    "Vintage",
    "Bohemian",
]

PRIMARY_ROLE = "Primary"

_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a comparison key."""

    return re.sub(r"[\s_\-]+", "", value.strip().lower())


def validate_choice(value: str, allowed: List[str], label: str) -> str:
    """Return the canonical spelling of ``value`` from ``allowed``.

    Raises a :class:`ValueError` if the value is not part of the value set.
    """

    key = _normalize_key(str(value))
    for option in allowed:
        if _normalize_key(option) == key:
            return option
    raise ValueError(f"Unsupported {label} '{value}'. Allowed: {allowed}")


def validate_category(value: str) -> str:
    return validate_choice(value, CATEGORIES, "category")


def validate_gender(value: str) -> str:
    return validate_choice(value, GENDERS, "gender")


def validate_season(value: str) -> str:
    return validate_choice(value, SEASONS, "season")


def validate_formality(value: str) -> str:
    return validate_choice(value, FORMALITIES, "formality")


def validate_fit(value: str) -> str:
    return validate_choice(value, FITS, "fit")


def validate_layering(value: str) -> str:
    return validate_choice(value, LAYERINGS, "layering")


def validate_color_role(value: str) -> str:
    return validate_choice(value, COLOR_ROLES, "color role")


def normalize_hex(value: str) -> str:
    """Return ``#RRGGBB`` in upper case, or the input unchanged if it is not a hex colour."""

    match = _HEX_PATTERN.match(value.strip())
    if not match:
        return value
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits.upper()}"


def normalise_style_preferences(values: Optional[Iterable[str]]) -> List[str]:
    """Validate and deduplicate style preferences, keeping first-seen order."""

    normalised: List[str] = []
    for value in values or []:
        option = validate_choice(value, STYLE_PREFERENCES, "style preference")
        if option not in normalised:
            normalised.append(option)
    return normalised


__all__ = [
    "CATEGORIES",
    "GENDERS",
    "SEASONS",
    "FORMALITIES",
    "FITS",
    "LAYERINGS",
    "COLOR_ROLES",
    "STYLE_PREFERENCES",
    "PRIMARY_ROLE",
    "validate_choice",
    "validate_category",
    "validate_gender",
    "validate_season",
    "validate_formality",
    "validate_fit",
    "validate_layering",
    "validate_color_role",
    "normalize_hex",
    "normalise_style_preferences",
]
