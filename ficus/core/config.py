"""
Configuration management for Ficus.

Loads process settings from environment variables and user
settings (language, theme) from the local key-value store.
"""

import logging
import os
from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Dict, Optional

logger = logging.getLogger(__name__)

SETTINGS_KEY = "sentinel_settings"

# Shared between key generation and validation.
# Changing it invalidates every key issued so far.
DEFAULT_SALT = "FICUS-SENTINEL-V2.1"


class Language(str, Enum):
    """Supported UI languages."""
    MARATHI = "mr"
    HINDI = "hi"
    ENGLISH = "en"


class Theme(str, Enum):
    """Accent color themes."""
    INDIGO = "indigo"
    SKY = "sky"
    EMERALD = "emerald"
    ROSE = "rose"
    VIOLET = "violet"
    AMBER = "amber"


@dataclass(frozen=True)
class ThemePalette:
    """Colors for a theme."""
    name: str
    primary: str
    hover: str
    secondary: str


THEME_PALETTES: Dict[Theme, ThemePalette] = {
    Theme.INDIGO: ThemePalette("Classic", "#4f46e5", "#4338ca", "#f5f7ff"),
    Theme.SKY: ThemePalette("Ocean", "#0284c7", "#0369a1", "#f0f9ff"),
    Theme.EMERALD: ThemePalette("Nature", "#059669", "#047857", "#f0fdf4"),
    Theme.ROSE: ThemePalette("Berry", "#e11d48", "#be123c", "#fff1f2"),
    Theme.VIOLET: ThemePalette("Twilight", "#7c3aed", "#6d28d9", "#f5f3ff"),
    Theme.AMBER: ThemePalette("Golden", "#d97706", "#b45309", "#fffbeb"),
}


@dataclass
class AppSettings:
    """
    User-facing settings.

    Loaded once at startup and saved back on every change.
    """

    language: Language = Language.MARATHI
    theme: Theme = Theme.INDIGO

    @property
    def palette(self) -> ThemePalette:
        return THEME_PALETTES[self.theme]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"language": self.language.value, "theme": self.theme.value}

    @classmethod
    def from_dict(cls, data) -> "AppSettings":
        """
        Create from stored dictionary.

        Unknown or missing values fall back to defaults.
        """
        if not isinstance(data, dict):
            return cls()

        settings = cls()

        try:
            settings.language = Language(data.get("language", settings.language.value))
        except ValueError:
            logger.warning(f"Unknown language in settings: {data.get('language')!r}")

        try:
            settings.theme = Theme(data.get("theme", settings.theme.value))
        except ValueError:
            logger.warning(f"Unknown theme in settings: {data.get('theme')!r}")

        return settings

    @classmethod
    def load(cls, store) -> "AppSettings":
        """Load settings from a LocalStore."""
        return cls.from_dict(store.get_json(SETTINGS_KEY, {}))

    def save(self, store) -> None:
        """Persist settings to a LocalStore."""
        store.set_json(SETTINGS_KEY, self.to_dict())

    def update(self, store, language: Optional[Language] = None, theme: Optional[Theme] = None) -> "AppSettings":
        """
        Apply a partial change and save it.

        Returns the updated settings.
        """
        changes = {}
        if language is not None:
            changes["language"] = Language(language)
        if theme is not None:
            changes["theme"] = Theme(theme)

        updated = replace(self, **changes)
        updated.save(store)
        logger.info(f"Settings updated: {updated.to_dict()}")
        return updated


@dataclass
class Config:
    """Application configuration."""

    # Database
    database_path: str = "data/ficus.db"

    # Licensing
    license_salt: str = DEFAULT_SALT
    admin_pin: str = "1111"
    support_whatsapp: str = "910000000000"

    # Active installation (optional, saves typing on every command)
    system_id: Optional[str] = None
    license_key: Optional[str] = None

    # AI coach
    gemini_api_key: Optional[str] = None
    coach_fast_model: str = "gemini-3-flash-preview"
    coach_thinking_model: str = "gemini-3-pro-preview"
    coach_timeout: float = 60.0

    # Timezone used for weekday buckets
    timezone: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            database_path=os.getenv("FICUS_DB_PATH", "data/ficus.db"),
            license_salt=os.getenv("FICUS_LICENSE_SALT", DEFAULT_SALT),
            admin_pin=os.getenv("FICUS_ADMIN_PIN", "1111"),
            support_whatsapp=os.getenv("FICUS_SUPPORT_WHATSAPP", "910000000000"),
            system_id=os.getenv("FICUS_SYSTEM_ID"),
            license_key=os.getenv("FICUS_LICENSE_KEY"),
            gemini_api_key=os.getenv("GEMINI_API_KEY"),
            coach_fast_model=os.getenv("FICUS_COACH_FAST_MODEL", "gemini-3-flash-preview"),
            coach_thinking_model=os.getenv("FICUS_COACH_THINKING_MODEL", "gemini-3-pro-preview"),
            coach_timeout=float(os.getenv("FICUS_COACH_TIMEOUT", "60")),
            timezone=os.getenv("TIMEZONE") or None,
        )

    def get_summary(self) -> str:
        """Get a summary of current settings with secrets masked."""
        data = asdict(self)
        for secret in ("license_salt", "admin_pin", "gemini_api_key", "license_key"):
            if data[secret]:
                data[secret] = "****"

        return f"""Database: {data['database_path']}
System ID: {data['system_id'] or 'Not set'}
License Key: {data['license_key'] or 'Not set'}
Salt: {data['license_salt']}
Admin PIN: {data['admin_pin']}
Support WhatsApp: {data['support_whatsapp']}

AI Coach:
  API Key: {data['gemini_api_key'] or 'Not configured'}
  Fast Model: {self.coach_fast_model}
  Thinking Model: {self.coach_thinking_model}
  Timeout: {self.coach_timeout:.0f}s

Timezone: {self.timezone or 'system local'}
"""
