"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.wardrobe_item import AnalyzedClothingItem, ClothingItem, ColorDetail, from_raw_metadata

__all__ = ["AnalyzedClothingItem", "ClothingItem", "ColorDetail", "from_raw_metadata"]
