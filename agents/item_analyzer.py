"""Item analysis clients: turn a clothing photo into structured attributes."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from agents.gemini_models import (
    REMOTE_ERRORS,
    block_reason,
    build_generative_model,
    inline_image_part,
    json_generation_config,
    request_options,
)
from assistant_app.config import AppConfig
from assistant_app.logging_config import get_logger, log_event
from logic.errors import AnalysisError
from logic.prompts import ANALYSIS_INSTRUCTION, analysis_response_schema
from logic.safety import system_instruction
from logic.validation import AnalysisPayload, parse_json_response
from models.wardrobe_item import AnalyzedClothingItem
from tools.connectivity import ConnectivityCheck, ConnectivityProbe, require_online
from tools.observability import instrument_tool

logger = get_logger(__name__)


class ItemAnalyzer(ABC):
    """Strategy interface for clothing image classification."""

    @abstractmethod
    def analyze(self, image_bytes: bytes, mime_type: str) -> AnalyzedClothingItem:
        """Return the attributes of the garment shown in the image."""


class GeminiItemAnalyzer(ItemAnalyzer):
    """Classifies clothing photos with a Gemini vision model and a strict JSON schema."""

    def __init__(
        self,
        config: AppConfig,
        model: Any = None,
        connectivity: Optional[ConnectivityCheck] = None,
    ) -> None:
        self.config = config
        self.connectivity = connectivity or ConnectivityProbe(config.connectivity_url)
        self.system_instruction = system_instruction(
            "clothing analyst. Describe only the garment in the photo and fill every schema field."
        )
        self._model = model or build_generative_model(config.text_model, self.system_instruction)

    @instrument_tool("analyze_clothing_item")
    def analyze(self, image_bytes: bytes, mime_type: str) -> AnalyzedClothingItem:
        if not image_bytes:
            raise AnalysisError("Please select an image file first.")
        require_online(self.connectivity)

        try:
            response = self._model.generate_content(
                [inline_image_part(image_bytes, mime_type), ANALYSIS_INSTRUCTION],
                generation_config=json_generation_config(analysis_response_schema()),
                request_options=request_options(self.config.request_timeout_seconds),
            )
        except REMOTE_ERRORS as exc:
            log_event(logger, logging.ERROR, "analysis_call_failed", error=str(exc))
            raise AnalysisError() from exc

        reason = block_reason(response)
        if reason:
            raise AnalysisError(f"Image analysis was blocked. Reason: {reason}.")
        try:
            payload = parse_json_response(response.text, AnalysisPayload)
            return payload.to_item()
        except ValueError as exc:
            # pydantic's ValidationError is a ValueError, as is response.text without parts.
            log_event(logger, logging.WARNING, "analysis_payload_invalid", error=str(exc))
            raise AnalysisError() from exc


class StaticItemAnalyzer(ItemAnalyzer):
    """Deterministic analyzer for tests and offline demos."""

    def __init__(self, result: AnalyzedClothingItem) -> None:
        self.result = result
        self.calls: List[Tuple[int, str]] = []

    def analyze(self, image_bytes: bytes, mime_type: str) -> AnalyzedClothingItem:
        self.calls.append((len(image_bytes), mime_type))
        return self.result


__all__ = ["ItemAnalyzer", "GeminiItemAnalyzer", "StaticItemAnalyzer"]
