"""Virtual try-on clients: dress the user's photo in a resolved outfit."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from agents.gemini_models import (
    REMOTE_ERRORS,
    block_reason,
    build_generative_model,
    inline_image_part,
    request_options,
)
from assistant_app.config import AppConfig
from assistant_app.logging_config import get_logger, log_event
from logic.errors import GenerationBlockedError, GenerationError, ValidationError
from logic.outfit_builder import describe_outfit
from logic.photo_data import split_data_uri, to_data_uri
from logic.prompts import build_try_on_prompt
from models.wardrobe_item import ClothingItem
from tools.connectivity import ConnectivityCheck, ConnectivityProbe, require_online
from tools.observability import instrument_tool

logger = get_logger(__name__)

DEFAULT_OUTPUT_MIME_TYPE = "image/png"


class ImageComposer(ABC):
    """Strategy interface for try-on composites."""

    def compose(self, user_photo: str, outfit_items: Sequence[ClothingItem]) -> str:
        """Return a data URI of the user photo dressed in ``outfit_items``."""

        image_bytes, mime_type = split_data_uri(user_photo)
        if not outfit_items:
            raise ValidationError("An outfit needs at least one item to visualize.")
        return self._generate(image_bytes, mime_type, describe_outfit(outfit_items))

    @abstractmethod
    def _generate(self, image_bytes: bytes, mime_type: str, outfit_description: str) -> str:
        """Produce the composite once the photo has been decoded."""


def extract_first_image(response: Any) -> str:
    """Return the first inline image of the first candidate as a data URI."""

    candidates = list(getattr(response, "candidates", None) or [])
    candidate = candidates[0] if candidates else None
    content = getattr(candidate, "content", None) if candidate is not None else None
    parts = list(getattr(content, "parts", None) or []) if content is not None else []

    if not parts:
        reason = block_reason(response)
        if reason:
            raise GenerationBlockedError(reason)
        raise GenerationError(
            "Could not generate an image from the response. The model did not return valid content."
        )

    for part in parts:
        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            return to_data_uri(inline.data, getattr(inline, "mime_type", None) or DEFAULT_OUTPUT_MIME_TYPE)

    raise GenerationError()


class GeminiImageComposer(ImageComposer):
    """Image-to-image try-on using a Gemini image model."""

    def __init__(
        self,
        config: AppConfig,
        model: Any = None,
        connectivity: Optional[ConnectivityCheck] = None,
    ) -> None:
        self.config = config
        self.connectivity = connectivity or ConnectivityProbe(config.connectivity_url)
        self._model = model or build_generative_model(config.image_model)

    @instrument_tool("generate_virtual_try_on")
    def _generate(self, image_bytes: bytes, mime_type: str, outfit_description: str) -> str:
        require_online(self.connectivity)
        try:
            response = self._model.generate_content(
                [inline_image_part(image_bytes, mime_type), build_try_on_prompt(outfit_description)],
                generation_config={"response_modalities": ["IMAGE"]},
                request_options=request_options(self.config.request_timeout_seconds),
            )
        except REMOTE_ERRORS as exc:
            log_event(logger, logging.ERROR, "try_on_call_failed", error=str(exc))
            raise GenerationError("Failed to generate virtual try-on image.") from exc
        return extract_first_image(response)


class StaticImageComposer(ImageComposer):
    """Returns a fixed image; records the outfit descriptions it was asked for."""

    def __init__(self, image: str = "data:image/png;base64,iVBORw0KGgo=") -> None:
        self.image = image
        self.descriptions: List[str] = []

    def _generate(self, image_bytes: bytes, mime_type: str, outfit_description: str) -> str:
        self.descriptions.append(outfit_description)
        return self.image


__all__ = [
    "ImageComposer",
    "GeminiImageComposer",
    "StaticImageComposer",
    "extract_first_image",
]
