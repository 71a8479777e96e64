"""Starter wardrobe shown to first-time users."""

from __future__ import annotations

from typing import List

from models.wardrobe_item import ClothingItem, ColorDetail


def starter_wardrobe() -> List[ClothingItem]:
    """Return fresh copies of the sample items."""

    return [
        ClothingItem(
            id="1",
            name="Plain White T-Shirt",
            image_url="https://picsum.photos/id/10/400/600",
            category="Top",
            gender="Unisex",
            colors=[ColorDetail(role="Primary", name="White", hex="#FFFFFF")],
            tags=["Solid", "Plain"],
            fabric="Cotton",
            texture="Soft",
            season="All-Season",
            formality="Casual",
            fit="Regular",
            layering="Base",
        ),
        ClothingItem(
            id="2",
            name="Blue Slim-Fit Jeans",
            image_url="https://picsum.photos/id/20/400/600",
            category="Bottom",
            gender="Unisex",
            colors=[ColorDetail(role="Primary", name="Blue", hex="#0000FF")],
            tags=["Denim"],
            fabric="Denim",
            texture="Slightly Rough",
            season="All-Season",
            formality="Casual",
            fit="Slim",
            layering="Base",
        ),
        ClothingItem(
            id="3",
            name="Black Leather Jacket",
            image_url="https://picsum.photos/id/30/400/600",
            category="Outerwear",
            gender="Male",
            colors=[ColorDetail(role="Primary", name="Black", hex="#000000")],
            tags=["Solid", "Leather"],
            fabric="Leather",
            texture="Smooth",
            season="Autumn",
            formality="Smart Casual",
            fit="Regular",
            layering="Outer",
        ),
        ClothingItem(
            id="4",
            name="White Canvas Sneakers",
            image_url="https://picsum.photos/id/40/400/600",
            category="Footwear",
            gender="Unisex",
            colors=[ColorDetail(role="Primary", name="White", hex="#FFFFFF")],
            tags=["Sneakers", "Laces"],
            fabric="Canvas",
            texture="Matte",
            season="All-Season",
            formality="Casual",
            fit="Regular",
            layering="Base",
        ),
        ClothingItem(
            id="5",
            name="Red Floral Summer Dress",
            image_url="https://picsum.photos/id/50/400/600",
            category="Dress",
            gender="Female",
            colors=[
                ColorDetail(role="Primary", name="Red", hex="#FF0000"),
                ColorDetail(role="Secondary", name="Green", hex="#00FF00"),
            ],
            tags=["Floral", "Sleeveless"],
            fabric="Viscose",
            texture="Lightweight",
            season="Summer",
            formality="Casual",
            fit="Loose",
            layering="Base",
            is_available=False,
        ),
        ClothingItem(
            id="6",
            name="Brown Leather Belt",
            image_url="https://picsum.photos/id/60/400/600",
            category="Accessory",
            gender="Unisex",
            colors=[ColorDetail(role="Primary", name="Brown", hex="#A52A2A")],
            tags=["Leather", "Belt"],
            fabric="Leather",
            texture="Smooth",
            season="All-Season",
            formality="Smart Casual",
            # Fit and layering do not apply to a belt but are required fields.
            fit="Regular",
            layering="Base",
        ),
    ]


__all__ = ["starter_wardrobe"]
