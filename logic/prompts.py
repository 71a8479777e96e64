"""Prompt and response-schema construction for the Gemini calls.

Schemas are plain dicts in the OpenAPI subset accepted by
``google.generativeai.GenerationConfig.response_schema``.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from models.profile import UserProfile
from models.taxonomy import (
    CATEGORIES,
    COLOR_ROLES,
    FITS,
    FORMALITIES,
    GENDERS,
    LAYERINGS,
    SEASONS,
)
from models.wardrobe_item import ClothingItem

ANALYSIS_INSTRUCTION = (
    "Analyze this clothing item and provide its details in JSON format. Your analysis must be "
    "comprehensive. Provide a specific, descriptive `name` for the item (e.g., 'Blue Denim Shorts', "
    "'Graphic Print T-Shirt'). Then, identify its category, gender, colors (primary, secondary, and "
    "accent colors with names and hex codes), descriptive tags (including pattern, design details like "
    "zippers or logos), fabric, texture, fit, suitable season, formality level, and layering potential."
)

STYLING_RULES: List[str] = [
    "**Outfit Completeness & Layering:** Select a cohesive set of items. Use the 'layering' property to "
    "build from a 'Base' layer outwards to an 'Outer' layer if necessary. An outfit must feel complete "
    "(e.g., a top, a bottom, footwear).",
    "**One-Piece Garments:** If you select an item from the 'Dress' category (e.g., a dress, jumpsuit), "
    "treat it as the main outfit. Do not add conflicting top or bottom layers. Only add appropriate "
    "outerwear (like a jacket) or accessories.",
    "**Color Coordination:** Create a harmonious palette using the detailed 'colors' list for each item. "
    "The primary color is the most important. Incorporate the user's favorite colors where appropriate.",
    "**Pattern & Texture Mixing:** Use the 'tags' to identify patterns. Mix patterns of different scales. "
    "Use the 'texture' property to create interesting contrasts (e.g., a soft knit with smooth leather). "
    "Anchor patterned or textured items with simpler pieces.",
    "**Fit & Style:** The 'fit' of items should combine to create a balanced silhouette. The overall "
    "outfit must align with the user's 'stylePreferences'.",
    "**Contextual Appropriateness:** Match 'formality' to the occasion and 'fabric'/'season' to likely "
    "weather conditions.",
]

TRY_ON_CONSTRAINTS: List[str] = [
    "**Strictly Adhere to the Description:** You MUST use the exact clothing items described. Do not add "
    "any extra items, change colors, or modify the style, cut, or length of the garments.",
    "**Preserve Identity and Background:** The original person (including their face, hair, and body "
    "shape) and the background of the photo must be preserved as much as possible. Only change the clothes.",
    "**Be Realistic:** The final image should look natural and believable.",
]

# Fields sent to the recommender; image references are never included.
_STYLING_FIELDS = (
    "id",
    "name",
    "category",
    "gender",
    "colors",
    "tags",
    "fabric",
    "texture",
    "season",
    "formality",
    "fit",
    "layering",
)


def _enum_property(values: Sequence[str], description: str) -> Dict[str, Any]:
    return {"type": "STRING", "format": "enum", "enum": list(values), "description": description}


def analysis_response_schema() -> Dict[str, Any]:
    """Schema for the item analysis answer, restricted to the fixed value sets."""

    return {
        "type": "OBJECT",
        "properties": {
            "name": {
                "type": "STRING",
                "description": "A specific, descriptive name for the item (e.g., 'Blue Denim Shorts').",
            },
            "category": _enum_property(CATEGORIES, "The category of the clothing item."),
            "gender": _enum_property(GENDERS, "The target gender for the item."),
            "colors": {
                "type": "ARRAY",
                "description": "List of prominent colors. The first should be the primary color.",
                "items": {
                    "type": "OBJECT",
                    "properties": {
                        "type": _enum_property(
                            COLOR_ROLES, "The role of the color (Primary, Secondary, or Accent)."
                        ),
                        "name": {"type": "STRING", "description": "The common name of the color (e.g., 'Royal Blue')."},
                        "hex": {"type": "STRING", "description": "The hex code of the color (e.g., '#4169E1')."},
                    },
                    "required": ["type", "name", "hex"],
                },
            },
            "tags": {
                "type": "ARRAY",
                "description": (
                    "A list of descriptive tags, including pattern (e.g., 'Striped'), details "
                    "('Zipper', 'Logo'), and style ('Color Block')."
                ),
                "items": {"type": "STRING"},
            },
            "fabric": {"type": "STRING", "description": "The primary material of the item (e.g., 'Cotton')."},
            "texture": {"type": "STRING", "description": "The surface texture of the fabric (e.g., 'Soft', 'Matte')."},
            "season": _enum_property(SEASONS, "The suitable season for this item."),
            "formality": _enum_property(FORMALITIES, "The formality level of the item."),
            "fit": _enum_property(FITS, "The fit or cut of the item (e.g., 'Slim', 'Regular')."),
            "layering": _enum_property(
                LAYERINGS, "How the item is best used in layering (Base, Mid, or Outer layer)."
            ),
        },
        "required": [
            "name",
            "category",
            "gender",
            "colors",
            "tags",
            "fabric",
            "texture",
            "season",
            "formality",
            "fit",
            "layering",
        ],
    }


def recommendation_response_schema() -> Dict[str, Any]:
    return {
        "type": "OBJECT",
        "properties": {
            "itemIds": {
                "type": "ARRAY",
                "items": {"type": "STRING"},
                "description": "An array of IDs of the selected clothing items for the outfit.",
            },
            "reasoning": {
                "type": "STRING",
                "description": (
                    "A detailed explanation of why this outfit is suitable, addressing occasion, "
                    "user style, and color coordination."
                ),
            },
        },
        "required": ["itemIds", "reasoning"],
    }


def serialize_wardrobe(items: Sequence[ClothingItem]) -> str:
    """JSON array of the styling-relevant attributes of each item."""

    payload = []
    for item in items:
        entry: Dict[str, Any] = {}
        for name in _STYLING_FIELDS:
            if name == "colors":
                entry["colors"] = [
                    {"type": color.role, "name": color.name, "hex": color.hex} for color in item.colors
                ]
            else:
                entry[name] = getattr(item, name)
        payload.append(entry)
    return json.dumps(payload)


def build_profile_context(profile: UserProfile) -> str:
    styles = ", ".join(profile.style_preferences) if profile.style_preferences else "Not specified"
    colors = ", ".join(profile.favorite_colors) if profile.favorite_colors else "Not specified"
    lines = [
        f"- Style Preferences: {styles}.",
        f"- Favorite Colors: {colors}.",
    ]
    if profile.height:
        lines.append(f"- Height: {profile.height} cm.")
    if profile.weight:
        lines.append(f"- Weight: {profile.weight} kg.")
    return "\n".join(lines)


def must_use_instruction(must_use_item_id: Optional[str]) -> str:
    if not must_use_item_id:
        return ""
    return (
        f'**Constraint:** You MUST include the item with ID "{must_use_item_id}" in your final selection. '
        "Build the rest of the outfit around this core piece."
    )


def build_recommendation_prompt(
    available_items: Sequence[ClothingItem],
    occasion: str,
    profile: UserProfile,
    must_use_item_id: Optional[str] = None,
) -> str:
    """Compose the stylist directive sent to the reasoning model."""

    rules = "\n".join(f"{index}. {rule}" for index, rule in enumerate(STYLING_RULES, start=1))
    sections = [
        "You are an expert personal fashion stylist. Your goal is to create a complete, stylish, and "
        "highly personalized outfit from a client's available wardrobe.",
        f"**Client Profile:**\n{build_profile_context(profile)}",
        f'**Occasion:** "{occasion}"',
    ]
    constraint = must_use_instruction(must_use_item_id)
    if constraint:
        sections.append(constraint)
    sections.extend(
        [
            f"**Available Wardrobe (JSON format):**\n{serialize_wardrobe(available_items)}",
            f"**Styling Rules & Guidelines:**\n{rules}",
            "**Your Task:**\nBased on all the provided details, select the best combination of item IDs.",
            "**Output Format:**\n"
            'Provide your response as a JSON object with two keys: "itemIds" and "reasoning".\n'
            '- "itemIds": An array of strings, where each string is the ID of a selected clothing item.\n'
            '- "reasoning": A detailed paragraph explaining your choices. This reasoning MUST address:\n'
            f"  1. **Occasion Suitability:** Why the items' formality and fabric choices are perfect for \"{occasion}\".\n"
            "  2. **Style & Fit:** How the outfit reflects the user's style and creates a flattering "
            "silhouette using the 'fit' of the items.\n"
            "  3. **Color, Pattern & Texture:** Justify the combination of colors, patterns (from tags), and textures.\n"
            "  4. **Layering & Completeness:** Explain how the layers work together to complete the look.",
        ]
    )
    return "\n\n".join(sections)


def build_try_on_prompt(outfit_description: str) -> str:
    constraints = "\n".join(f"{index}. {rule}" for index, rule in enumerate(TRY_ON_CONSTRAINTS, start=1))
    return (
        "You are a virtual fashion stylist. Your task is to realistically dress the person in the "
        "provided photo with a specific outfit.\n"
        f"**Instructions:**\n{constraints}\n\n"
        f"**Outfit to apply:**\nA complete outfit consisting of: {outfit_description}."
    )


__all__ = [
    "ANALYSIS_INSTRUCTION",
    "STYLING_RULES",
    "TRY_ON_CONSTRAINTS",
    "analysis_response_schema",
    "recommendation_response_schema",
    "serialize_wardrobe",
    "build_profile_context",
    "must_use_instruction",
    "build_recommendation_prompt",
    "build_try_on_prompt",
]
