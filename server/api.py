"""FastAPI server exposing the upload proxy and the wardrobe actions."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests
from fastapi import FastAPI, File, HTTPException, Request, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from assistant_app.app import WardrobeAssistantApp
from assistant_app.logging_config import configure_logging, get_logger
from logic.errors import UploadError
from models.profile import parse_color_list
from tools.asset_cache import APP_SHELL_PATH, OfflineAssetCache

LOGGER = get_logger(__name__)

ERROR_STATUS_CODES: Dict[str, int] = {
    "ValidationError": 400,
    "InsufficientWardrobeError": 400,
    "InvalidPhotoError": 400,
    "NotFoundError": 404,
    "UploadError": 500,
    "RemoteServiceError": 502,
    "AnalysisError": 502,
    "GenerationError": 502,
    "GenerationBlockedError": 502,
    "ResolutionError": 502,
    "ConnectivityError": 503,
}


class ColorRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: str = Field(alias="type")
    name: str
    hex: str


class ItemFieldsRequest(BaseModel):
    """Item fields as edited by the user; any of them may still be missing."""

    name: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    gender: Optional[str] = None
    colors: Optional[List[ColorRequest]] = None
    tags: Optional[List[str]] = None
    fabric: Optional[str] = None
    texture: Optional[str] = None
    season: Optional[str] = None
    formality: Optional[str] = None
    fit: Optional[str] = None
    layering: Optional[str] = None

    def fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ItemUpdateRequest(ItemFieldsRequest):
    is_available: Optional[bool] = None


class ProfileRequest(BaseModel):
    height: str = ""
    weight: str = ""
    style_preferences: List[str] = Field(default_factory=list)
    favorite_colors: List[str] = Field(default_factory=list)
    photo_url: Optional[str] = None

    @field_validator("favorite_colors", mode="before")
    @classmethod
    def _split_colors(cls, value: Any) -> Any:
        return parse_color_list(value) if isinstance(value, str) else value


class RecommendationRequest(BaseModel):
    occasion: str = ""
    must_use_item_id: Optional[str] = None


def _unwrap(result: Dict[str, Any]) -> Dict[str, Any]:
    """Return an ok payload or raise the matching HTTP error."""

    if result.get("status") == "ok":
        return result
    status_code = ERROR_STATUS_CODES.get(result.get("error", ""), 400)
    raise HTTPException(status_code=status_code, detail=result.get("message", "request failed"))


def _build_asset_cache(base_url: str) -> OfflineAssetCache:
    cache = OfflineAssetCache(base_url)
    try:
        cache.precache(["/", APP_SHELL_PATH])
    except requests.RequestException as exc:
        LOGGER.warning("Asset precache failed", extra={"base_url": base_url, "error": str(exc)})
    cache.activate()
    return cache


def _content_type(headers: Dict[str, str]) -> Optional[str]:
    for key, value in headers.items():
        if key.lower() == "content-type":
            return value
    return None


def create_app(
    assistant: WardrobeAssistantApp | None = None,
    asset_cache: OfflineAssetCache | None = None,
) -> FastAPI:
    """Build the FastAPI application around one assistant instance.

    When ``asset_base_url`` is configured (or a cache is passed in) the
    front-end's static files are proxied under ``/app/`` through the
    offline asset cache.
    """

    assistant = assistant or WardrobeAssistantApp()
    if asset_cache is None and assistant.config.asset_base_url:
        asset_cache = _build_asset_cache(assistant.config.asset_base_url)
    api = FastAPI(title="Smart Outfit Assistant", version="0.1.0")
    api.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    api.state.assistant = assistant

    @api.get("/healthz")
    def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "smart-outfit-assistant",
            "environment": assistant.config.environment or "local",
            "model": assistant.config.text_model,
        }

    @api.get("/api")
    def welcome() -> dict:
        return {"message": "Welcome to the Smart Outfit Assistant API!", "status": "Server is running"}

    @api.post("/api/upload")
    def upload_image(image: Optional[UploadFile] = File(None)) -> JSONResponse:
        """Proxy a single multipart image to the image host."""

        if image is None:
            return JSONResponse(status_code=400, content={"message": "No image file provided."})
        data = image.file.read()
        if not data:
            return JSONResponse(status_code=400, content={"message": "No image file provided."})
        try:
            result = assistant.uploader.upload(data, image.content_type or "application/octet-stream")
        except UploadError as exc:
            LOGGER.error("Image upload failed", extra={"error": str(exc)})
            return JSONResponse(status_code=500, content={"message": "Image upload failed", "error": str(exc)})
        return JSONResponse(
            status_code=200,
            content={
                "message": "Image uploaded successfully",
                "imageUrl": result.image_url,
                "publicId": result.public_id,
            },
        )

    @api.get("/api/wardrobe")
    def list_wardrobe(available_only: bool = False) -> dict:
        return {"items": assistant.list_wardrobe(available_only=available_only)}

    @api.post("/api/wardrobe/analyze")
    def analyze_item(image: Optional[UploadFile] = File(None)) -> dict:
        """Upload and analyse a clothing photo; the draft is not yet in the wardrobe."""

        if image is None:
            raise HTTPException(status_code=400, detail="Please select an image file first.")
        data = image.file.read()
        return _unwrap(assistant.analyze_photo(data, image.content_type or "image/jpeg"))

    @api.post("/api/wardrobe")
    def add_item(request: ItemFieldsRequest) -> dict:
        return _unwrap(assistant.commit_item(request.fields()))

    @api.put("/api/wardrobe/{item_id}")
    def update_item(item_id: str, request: ItemUpdateRequest) -> dict:
        return _unwrap(assistant.update_item({**request.fields(), "id": item_id}))

    @api.post("/api/wardrobe/{item_id}/toggle-availability")
    def toggle_item(item_id: str) -> dict:
        return _unwrap(assistant.toggle_availability(item_id))

    @api.get("/api/profile")
    def get_profile() -> dict:
        return {"profile": assistant.get_profile()}

    @api.put("/api/profile")
    def save_profile(request: ProfileRequest) -> dict:
        return _unwrap(assistant.save_profile(request.model_dump()))

    @api.post("/api/outfits/recommend")
    def recommend(request: RecommendationRequest) -> dict:
        return _unwrap(assistant.recommend_outfit(request.occasion, request.must_use_item_id))

    @api.post("/api/outfits/try-on")
    def try_on() -> dict:
        return _unwrap(assistant.visualize_outfit())

    if asset_cache is not None:
        api.state.asset_cache = asset_cache

        @api.get("/app/{asset_path:path}")
        def static_asset(asset_path: str, request: Request) -> Response:
            navigate = (
                request.headers.get("sec-fetch-mode") == "navigate"
                or "text/html" in request.headers.get("accept", "")
            )
            try:
                cached = asset_cache.fetch("/" + asset_path, navigate=navigate)
            except requests.RequestException as exc:
                LOGGER.warning("Static asset unavailable", extra={"path": asset_path, "error": str(exc)})
                raise HTTPException(status_code=503, detail="You appear to be offline.") from exc
            return Response(
                content=cached.content,
                status_code=cached.status_code,
                media_type=_content_type(cached.headers),
            )

    return api


_APP: FastAPI | None = None


def get_app() -> FastAPI:
    """Expose a lazily built FastAPI instance for ASGI servers."""

    global _APP
    if _APP is None:
        configure_logging()
        _APP = create_app()
    return _APP


__all__ = ["create_app", "get_app", "ERROR_STATUS_CODES"]
