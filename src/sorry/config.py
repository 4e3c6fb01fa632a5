"""Config file loading, saving and resolution."""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import click

from sorry.errors import ApiKeyUnset, ConfigMissingProvider, ConfigSaveError, ProviderNotFound
from sorry.moods import Mood

logger = logging.getLogger(__name__)

APP_NAME = "sorry"

# provider -> (base_url, model)
PROVIDER_DEFAULTS: dict[str, tuple[str, str]] = {
    "openai": ("https://api.openai.com/v1", "gpt-4.1-mini"),
    "groq": ("https://api.groq.com/openai/v1", "openai/gpt-oss-20b"),
}

PROVIDER_NAMES = sorted(PROVIDER_DEFAULTS.keys())


def get_config_path() -> Path:
    """Return <user config dir>/sorry/config.json."""
    return Path(click.get_app_dir(APP_NAME)) / "config.json"


def default_base_url(provider: str) -> str:
    return PROVIDER_DEFAULTS.get(provider, PROVIDER_DEFAULTS["openai"])[0]


def default_model(provider: str) -> str:
    return PROVIDER_DEFAULTS.get(provider, PROVIDER_DEFAULTS["openai"])[1]


@dataclass
class ProviderConfig:
    api_key: str = ""
    base_url: str = ""
    model: str = ""

    @classmethod
    def for_provider(cls, name: str) -> "ProviderConfig":
        return cls(api_key="", base_url=default_base_url(name), model=default_model(name))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProviderConfig":
        return cls(
            api_key=_require_str(data, "api_key"),
            base_url=_require_str(data, "base_url"),
            model=_require_str(data, "model"),
        )


def default_providers() -> dict[str, ProviderConfig]:
    """Built-in provider entries with empty API keys."""
    return {name: ProviderConfig.for_provider(name) for name in PROVIDER_NAMES}


@dataclass
class Config:
    """Everything sorry persists between runs."""

    provider: str | None = None
    mood: Mood | None = None
    providers: dict[str, ProviderConfig] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": self.provider,
            "mood": self.mood.value if self.mood is not None else None,
            "providers": {name: asdict(pc) for name, pc in self.providers.items()},
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        """Build a Config from decoded JSON. Raises ValueError on a wrong shape."""
        if not isinstance(data, dict):
            raise ValueError("config root must be an object")

        provider = data.get("provider")
        if provider is not None and not isinstance(provider, str):
            raise ValueError("'provider' must be a string or null")

        mood = None
        raw_mood = data.get("mood")
        if raw_mood is not None:
            if not isinstance(raw_mood, str):
                raise ValueError("'mood' must be a string or null")
            mood = Mood.parse(raw_mood)
            if mood is None:
                raise ValueError(f"unknown mood '{raw_mood}'")

        raw_providers = data.get("providers", {})
        if not isinstance(raw_providers, dict):
            raise ValueError("'providers' must be an object")
        providers = {}
        for name, entry in raw_providers.items():
            if not isinstance(entry, dict):
                raise ValueError(f"provider '{name}' must be an object")
            providers[name] = ProviderConfig.from_dict(entry)

        return cls(provider=provider, mood=mood, providers=providers)

    def active_mood(self) -> Mood:
        return self.mood if self.mood is not None else Mood.default()

    def get_provider(self, name: str) -> ProviderConfig | None:
        return self.providers.get(name)

    def active_provider(self, override: str | None = None) -> tuple[str, ProviderConfig]:
        """Return the (name, settings) pair to send requests with.

        `override` takes precedence over the stored active provider.
        """
        name = resolve(override, self.provider, None)
        if name is None:
            raise ConfigMissingProvider()
        provider = self.get_provider(name)
        if provider is None:
            raise ProviderNotFound(name)
        if not provider.api_key:
            raise ApiKeyUnset(name)
        return name, provider


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    return value


def load_config(path: Path | None = None) -> Config:
    """Load config from JSON. Missing or unreadable files give an empty Config."""
    config_path = path or get_config_path()
    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return Config()
    try:
        with open(config_path, encoding="utf-8") as f:
            return Config.from_dict(json.load(f))
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        logger.debug("Ignoring unreadable config %s: %s", config_path, e)
        return Config()


def save_config(config: Config, path: Path | None = None) -> Path:
    """Write the whole config as pretty-printed JSON. Returns the path written."""
    config_path = path or get_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigSaveError(config_path, e) from e
    logger.debug("Saved config to %s", config_path)
    return config_path


def resolve(cli_value: Any, config_value: Any, default: Any) -> Any:
    """Resolve a setting with precedence: CLI flag > config file > default."""
    if cli_value is not None:
        return cli_value
    if config_value is not None:
        return config_value
    return default
