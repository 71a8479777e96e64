"""Configuration helpers for the Smart Outfit Assistant."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_UPLOAD_FOLDER = "smart-outfit-assistant"
DEFAULT_CONNECTIVITY_URL = "https://generativelanguage.googleapis.com"


@dataclass
class AppConfig:
    """Configuration values for the assistant.

    The Gemini models, the local state location and the Cloudinary credentials
    are the only moving parts; everything else has a local default so the app
    boots without any environment at all.
    """

    api_key: Optional[str] = None
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    state_backend: str = "json"
    state_path: Optional[str] = None
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None
    upload_folder: str = DEFAULT_UPLOAD_FOLDER
    connectivity_url: str = DEFAULT_CONNECTIVITY_URL
    request_timeout_seconds: Optional[float] = None
    asset_base_url: Optional[str] = None
    port: int = 3000
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that API keys never
        have to be written to disk.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("APP_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        timeout = get_value("request_timeout_seconds")
        port = get_value("port", "3000")

        return cls(
            api_key=get_value("google_api_key") or get_value("api_key"),
            text_model=str(get_value("text_model", DEFAULT_TEXT_MODEL) or DEFAULT_TEXT_MODEL),
            image_model=str(get_value("image_model", DEFAULT_IMAGE_MODEL) or DEFAULT_IMAGE_MODEL),
            state_backend=str(get_value("state_backend", "json") or "json"),
            state_path=get_value("state_path"),
            cloudinary_cloud_name=get_value("cloudinary_cloud_name"),
            cloudinary_api_key=get_value("cloudinary_api_key"),
            cloudinary_api_secret=get_value("cloudinary_api_secret"),
            upload_folder=str(get_value("upload_folder", DEFAULT_UPLOAD_FOLDER) or DEFAULT_UPLOAD_FOLDER),
            connectivity_url=str(
                get_value("connectivity_url", DEFAULT_CONNECTIVITY_URL) or DEFAULT_CONNECTIVITY_URL
            ),
            request_timeout_seconds=float(timeout) if timeout else None,
            asset_base_url=get_value("asset_base_url"),
            port=int(port or 3000),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
