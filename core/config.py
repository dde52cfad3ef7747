import os
from dataclasses import dataclass
from typing import Mapping, Optional

import yaml

STAGE_BASE_URLS = {
    "development": "http://api.mcp.ai.app.freispace.io",
    "staging": "https://mcp-api.ai.staging.cloud.freispace.com",
    "demo": "https://mcp-api.ai.demo.freispace.com",
    "production": "https://mcp-api.ai.freispace.com",
}
DEFAULT_STAGE = "production"
DEFAULT_TIMEOUT = 30.0

API_KEY_ENV_VARS = ("FREISPACE_API_KEY", "API_KEY")


class ConfigLoader:
    _instance = None
    _config = None

    def __new__(cls):
        """
        Create a singleton instance of ConfigLoader.
        Loads configuration from YAML file on first instantiation.
        """
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._load_config()
        return cls._instance

    @classmethod
    def _load_config(cls):
        """
        Load config.yaml (or the file named by FREISPACE_CONFIG) into _config.
        A missing file leaves an empty configuration.
        """
        config_path = os.environ.get("FREISPACE_CONFIG") or os.path.join(
            os.path.dirname(__file__), "..", "config.yaml"
        )
        cls._config = load_config_file(config_path)

    @classmethod
    def reset(cls):
        cls._instance = None
        cls._config = None

    def get_config(self):
        """
        Return the loaded configuration dictionary.
        """
        return self._config


def load_config_file(config_path) -> dict:
    config_path = os.path.abspath(config_path)
    if not os.path.isfile(config_path):
        return {}
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_config():
    """
    Helper function to get the singleton configuration instance's config dictionary.
    """
    return ConfigLoader().get_config()


@dataclass(frozen=True)
class Settings:
    """Resolved connection settings, fixed for the lifetime of the process."""

    base_url: str
    stage: str = DEFAULT_STAGE
    api_key: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT


def _first_non_empty(*values) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None


def resolve_settings(
    environ: Optional[Mapping[str, str]] = None,
    config: Optional[dict] = None,
) -> Settings:
    """Resolve the API key and base URL from config.yaml and the environment.

    The key comes from `api_key` in the config file, then FREISPACE_API_KEY,
    then API_KEY. A missing key is allowed; requests go out unauthenticated.
    STAGE picks the base URL and anything unrecognized falls back to production.
    """
    if environ is None:
        environ = os.environ
    if config is None:
        config = get_config() or {}

    api_key = _first_non_empty(
        config.get("api_key"),
        *(environ.get(name) for name in API_KEY_ENV_VARS),
    )

    base_urls = dict(STAGE_BASE_URLS)
    base_urls.update(config.get("base_urls") or {})

    stage = environ.get("STAGE", "")
    if stage not in STAGE_BASE_URLS:
        stage = DEFAULT_STAGE

    return Settings(
        base_url=base_urls[stage],
        stage=stage,
        api_key=api_key,
        timeout=float(config.get("request_timeout", DEFAULT_TIMEOUT)),
    )
