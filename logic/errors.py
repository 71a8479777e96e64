"""Error taxonomy shared by the repository, the AI clients and the app boundary."""

from __future__ import annotations

from typing import List, Sequence


class WardrobeAssistantError(Exception):
    """Base class for errors that are surfaced to the user as a message."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        return str(self)


class ConnectivityError(WardrobeAssistantError):
    """No network path is available before a remote call."""

    default_message = (
        "You are currently offline. Please check your internet connection and try again."
    )


class ValidationError(WardrobeAssistantError):
    """Required user input is missing or malformed."""

    def __init__(self, message: str | None = None, missing: Sequence[str] = ()) -> None:
        self.missing: List[str] = list(missing)
        if message is None and self.missing:
            message = f"Please fill out all fields. Missing: {', '.join(self.missing)}"
        super().__init__(message)


class InsufficientWardrobeError(WardrobeAssistantError):
    default_message = "Not enough available items in the wardrobe to create an outfit."


class NotFoundError(WardrobeAssistantError):
    """An update addressed an item id the wardrobe does not contain."""

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"No clothing item with id '{item_id}' exists in the wardrobe.")


class ResolutionError(WardrobeAssistantError):
    """Recommended ids do not all map to known wardrobe items."""

    def __init__(self, unresolved: Sequence[str]) -> None:
        self.unresolved: List[str] = list(unresolved)
        super().__init__("Could not find all recommended items in the wardrobe.")


class RemoteServiceError(WardrobeAssistantError):
    """The remote AI call failed or returned data outside the declared schema."""

    default_message = "Failed to get recommendation. Please try again."


class AnalysisError(RemoteServiceError):
    default_message = "Failed to analyze image. Please try again."


class GenerationError(RemoteServiceError):
    default_message = "Could not generate an image from the response."


class GenerationBlockedError(GenerationError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(
            f"Image generation was blocked. Reason: {reason}. "
            "Please try a different photo or outfit description."
        )


class InvalidPhotoError(WardrobeAssistantError):
    default_message = "Invalid user photo data URL."


class UploadError(WardrobeAssistantError):
    default_message = "Failed to upload image."


__all__ = [
    "WardrobeAssistantError",
    "ConnectivityError",
    "ValidationError",
    "InsufficientWardrobeError",
    "NotFoundError",
    "ResolutionError",
    "RemoteServiceError",
    "AnalysisError",
    "GenerationError",
    "GenerationBlockedError",
    "InvalidPhotoError",
    "UploadError",
]
