"""Outfit schemas produced by the recommender and the resolver."""

from dataclasses import dataclass, field
from typing import List

from models.wardrobe_item import ClothingItem


@dataclass
class OutfitSelection:
    """Raw recommender answer: ordered item ids plus the stylist's reasoning."""

    item_ids: List[str]
    reasoning: str


@dataclass
class Outfit:
    occasion: str
    reasoning: str
    items: List[ClothingItem] = field(default_factory=list)
