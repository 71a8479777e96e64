"""Shared system instruction for every Gemini call."""

from __future__ import annotations

from typing import List

GUARDRAIL_BULLETS: List[str] = [
    "Stay within the wardrobe assistant scope (clothing analysis, outfit styling, try-on images).",
    "Only reference clothing items that appear in the data you were given.",
    "Never invent item ids, colours or garments that are not present.",
    "Do not comment on the person's body beyond what is needed for fit and silhouette.",
    "Answer in the exact response format requested.",
]


def system_instruction(role_hint: str) -> str:
    """Compose a consistent system prompt with boundary reminders."""

    boundary_text = "\n".join(f"- {bullet}" for bullet in GUARDRAIL_BULLETS)
    return (
        f"You are the Smart Outfit Assistant {role_hint}.\n"
        "Follow these guardrails before responding:\n"
        f"{boundary_text}"
    )


__all__ = ["system_instruction", "GUARDRAIL_BULLETS"]
