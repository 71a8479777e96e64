"""User profile data model."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from models.taxonomy import normalise_style_preferences


@dataclass
class UserProfile:
    """Measurements, style preferences, favourite colours and a reference photo."""

    height: str = ""
    weight: str = ""
    style_preferences: List[str] = field(default_factory=list)
    favorite_colors: List[str] = field(default_factory=list)
    photo_url: Optional[str] = None

    def __post_init__(self) -> None:
        self.height = str(self.height or "").strip()
        self.weight = str(self.weight or "").strip()
        self.style_preferences = normalise_style_preferences(self.style_preferences)
        self.favorite_colors = [str(c).strip() for c in self.favorite_colors or [] if str(c).strip()]
        self.photo_url = self.photo_url or None


def profile_from_raw(raw: Dict[str, Any]) -> UserProfile:
    return UserProfile(
        height=raw.get("height", ""),
        weight=raw.get("weight", ""),
        style_preferences=list(raw.get("style_preferences") or []),
        favorite_colors=list(raw.get("favorite_colors") or []),
        photo_url=raw.get("photo_url"),
    )


def profile_to_dict(profile: UserProfile) -> Dict[str, Any]:
    return asdict(profile)


def parse_color_list(raw: str) -> List[str]:
    """Split a comma separated colour field, dropping blanks."""

    return [color.strip() for color in raw.split(",") if color.strip()]


__all__ = ["UserProfile", "profile_from_raw", "profile_to_dict", "parse_color_list"]
