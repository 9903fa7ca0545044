"""
Application session state.

Tracks whether the app is locked, unlocked for a System ID,
or in the hidden admin console.
"""

import logging
from enum import Enum
from typing import Optional

from ficus.core.config import AppSettings, Config
from ficus.core.i18n import get_translations
from ficus.license.admin import authenticate
from ficus.license.keys import normalize_system_id, validate_key

logger = logging.getLogger(__name__)

ADMIN_CLICKS = 5


class AppStatus(str, Enum):
    LOCKED = "LOCKED"
    ADMIN_AUTH = "ADMIN_AUTH"
    ADMIN_DASHBOARD = "ADMIN_DASHBOARD"
    UNLOCKED = "UNLOCKED"


class AppSession:
    """
    Lock screen and admin gate.

    Errors come back as localized messages, not exceptions.
    """

    def __init__(self, config: Config, settings: Optional[AppSettings] = None):
        self.config = config
        self.settings = settings or AppSettings()
        self.status = AppStatus.LOCKED
        self.system_id = ""
        self.error: Optional[str] = None
        self._clicks = 0

    def unlock(self, system_id: str, license_key: str) -> Optional[str]:
        """
        Try to unlock with a System ID and license key.

        Returns None on success, otherwise the error to show.
        """
        t = get_translations(self.settings.language)
        sid = normalize_system_id(system_id)
        key = (license_key or "").strip().upper()

        if not sid or not key:
            self.error = t.missing_fields_error
            return self.error

        if not validate_key(sid, key, self.config.license_salt):
            logger.warning(f"Rejected license key for {sid}")
            self.error = t.invalid_key_error
            return self.error

        self.error = None
        self.system_id = sid
        self.status = AppStatus.UNLOCKED
        logger.info(f"Unlocked for {sid}")
        return None

    def lock(self) -> None:
        self.status = AppStatus.LOCKED
        self.system_id = ""

    def header_click(self) -> AppStatus:
        """Hidden admin entry: the fifth click opens the PIN prompt."""
        if self.status != AppStatus.LOCKED:
            return self.status

        self._clicks += 1
        if self._clicks >= ADMIN_CLICKS:
            self._clicks = 0
            self.status = AppStatus.ADMIN_AUTH
        return self.status

    def admin_login(self, pin: str) -> bool:
        if self.status != AppStatus.ADMIN_AUTH:
            return False

        if authenticate(pin, self.config):
            self.status = AppStatus.ADMIN_DASHBOARD
            return True
        return False

    def back(self) -> None:
        """Leave the admin console."""
        if self.status in (AppStatus.ADMIN_AUTH, AppStatus.ADMIN_DASHBOARD):
            self.status = AppStatus.LOCKED


def unlock_from_config(
    config: Config,
    settings: AppSettings,
    system_id: Optional[str] = None,
    license_key: Optional[str] = None,
) -> AppSession:
    """
    Unlock a session with explicit values or FICUS_SYSTEM_ID / FICUS_LICENSE_KEY.

    Check session.status; the error (if any) is in session.error.
    """
    session = AppSession(config, settings)
    session.unlock(
        system_id or config.system_id or "",
        license_key or config.license_key or "",
    )
    return session
