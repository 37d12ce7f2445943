"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from recommender import RecommendationConfig

# Single .env at the project root
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)

DATA_SOURCES = ("memory", "json", "firebase")
PROFILE_LOOKUPS = ("full_scan", "by_id")


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Data source: "memory" (empty, for local runs) | "json" | "firebase"
    data_source: str = "memory"
    # When data_source=json: {collection: {id: fields}} file
    data_json_path: Optional[Path] = None
    # When data_source=firebase: path to service account JSON and optional project id
    firebase_credentials_path: Optional[Path] = None
    firebase_project_id: Optional[str] = None

    # Media: Supabase storage when url+key are set, else MEDIA_BASE_URL, else unresolved
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    media_base_url: Optional[str] = None
    media_bucket: str = "videos"

    # Recommender knobs
    fan_out_limit: int = 10
    profile_lookup: str = "full_scan"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        base_dir = Path(__file__).parent.parent
        data_source = os.getenv("DATA_SOURCE", "").strip().lower() or "memory"
        if data_source not in DATA_SOURCES:
            data_source = "memory"

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (base_dir / p).resolve()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            data_source=data_source,
            data_json_path=_path_env("DATA_JSON_PATH", base_dir / "data" / "store.json"),
            firebase_credentials_path=_path_env("FIREBASE_CREDENTIALS_PATH") or _path_env("GOOGLE_APPLICATION_CREDENTIALS"),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
            supabase_url=os.getenv("SUPABASE_URL") or None,
            supabase_key=os.getenv("SUPABASE_KEY") or None,
            media_base_url=os.getenv("MEDIA_BASE_URL") or None,
            media_bucket=os.getenv("MEDIA_BUCKET", "videos"),
            fan_out_limit=int(os.getenv("FAN_OUT_LIMIT", "10")),
            profile_lookup=os.getenv("PROFILE_LOOKUP", "full_scan").strip().lower(),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.data_source == "json":
            if not self.data_json_path or not self.data_json_path.is_file():
                errors.append(f"Data JSON file not found: {self.data_json_path}")

        if self.data_source == "firebase" and self.firebase_credentials_path:
            if not self.firebase_credentials_path.is_file():
                errors.append(f"Firebase credentials file not found: {self.firebase_credentials_path}")

        if not 1 <= self.fan_out_limit <= 30:
            errors.append(f"FAN_OUT_LIMIT must be between 1 and 30, got {self.fan_out_limit}")

        if self.profile_lookup not in PROFILE_LOOKUPS:
            errors.append(f"PROFILE_LOOKUP must be one of {PROFILE_LOOKUPS}, got {self.profile_lookup!r}")

        if logging.getLevelName(self.log_level) == f"Level {self.log_level}":
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        return len(errors) == 0, errors

    def recommendation_config(self) -> RecommendationConfig:
        """Recommender settings derived from this server config."""
        return RecommendationConfig.from_dict(
            {
                "fan_out_limit": self.fan_out_limit,
                "profile_lookup": self.profile_lookup,
                "media_bucket": self.media_bucket,
            }
        )


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
