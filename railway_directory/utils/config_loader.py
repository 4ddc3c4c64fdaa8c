"""
Configuration loader for the directory client
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "directory_config.yml"

# env var -> (section, key)
_ENV_OVERRIDES = {
    "API_BASE_URL": ("api", "base_url"),
    "API_TIMEOUT_MS": ("api", "timeout_ms"),
    "API_KEY": ("api", "api_key"),
    "API_USERNAME": ("api", "username"),
    "API_PASSWORD": ("api", "password"),
    "DOCUMENTS_API_URL": ("api", "documents_url"),
    "DOCUMENTS_COUNT_API_URL": ("api", "documents_count_url"),
    "DOCUMENTS_TITLE_MARKER": ("api", "document_title_marker"),
    "SEARCH_DEBOUNCE_MS": ("search", "debounce_ms"),
    "SEARCH_PAGE_SIZE": ("search", "page_size"),
}


class ApiConfig(BaseModel):
    """Directory backend connection settings"""

    base_url: str = "http://localhost:3000"
    timeout_ms: int = Field(default=30000, ge=1)
    api_key: str = ""
    username: str = ""
    password: str = ""
    documents_url: str = ""
    documents_count_url: str = ""
    document_title_marker: Optional[str] = None

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


class SearchConfig(BaseModel):
    """Interactive search settings"""

    debounce_ms: int = Field(default=1500, ge=0)
    page_size: int = Field(default=50, ge=1)


class DirectoryConfig(BaseModel):
    """Complete client configuration"""

    api: ApiConfig = Field(default_factory=ApiConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    use_mock_backend: bool = False


def _apply_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    for env_name, (section, key) in _ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is None or value == "":
            continue
        config_data.setdefault(section, {})[key] = value

    mock_flag = os.getenv("USE_MOCK_BACKEND", "").strip().lower()
    if mock_flag:
        config_data["use_mock_backend"] = mock_flag in ("1", "true", "yes")
    return config_data


def load_directory_config(config_path: Optional[Path] = None) -> DirectoryConfig:
    """
    Load and validate directory client configuration

    Values come from the YAML file (when present) and are then overridden by
    environment variables, including any defined in a local .env file.

    Args:
        config_path: Path to config file. Defaults to config/directory_config.yml

    Returns:
        Validated DirectoryConfig object

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    load_dotenv()

    config_data: Dict[str, Any] = {}
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    path = config_path or DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

    config_data = _apply_env_overrides(config_data)

    try:
        config = DirectoryConfig(**config_data)
        logger.info(f"Loaded directory config (base_url={config.api.base_url})")
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise
