"""Turn recommender answers into outfits and outfits into try-on descriptions."""
from __future__ import annotations

from typing import Dict, List, Sequence

from logic.errors import ResolutionError
from models.outfit import Outfit, OutfitSelection
from models.wardrobe_item import ClothingItem


def resolve_outfit(selection: OutfitSelection, wardrobe: Sequence[ClothingItem], occasion: str) -> Outfit:
    """Map every selected id back to a wardrobe item, keeping the selection order.

    Resolution runs against the whole wardrobe, not only the available subset.
    A single unknown id fails the whole recommendation with
    :class:`ResolutionError`; no partial outfit is ever returned.
    """

    by_id: Dict[str, ClothingItem] = {item.id: item for item in wardrobe}
    unresolved = [item_id for item_id in selection.item_ids if item_id not in by_id]
    if unresolved:
        raise ResolutionError(unresolved)
    items: List[ClothingItem] = [by_id[item_id] for item_id in selection.item_ids]
    return Outfit(occasion=occasion, reasoning=selection.reasoning, items=items)


def describe_item(item: ClothingItem) -> str:
    color = item.primary_color
    color_name = color.name if color else ""
    return f"a {item.fit} {color_name} {item.name} made of {item.fabric} with a {item.texture} texture"


def describe_outfit(items: Sequence[ClothingItem]) -> str:
    return ", worn with ".join(describe_item(item) for item in items)


__all__ = ["resolve_outfit", "describe_item", "describe_outfit"]
