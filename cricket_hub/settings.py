from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone

from cryptography.fernet import Fernet, InvalidToken

from cricket_hub.content.keys import FIXTURES_FEED_TTL
from cricket_hub.models import AppSettings

logger = logging.getLogger(__name__)
_FERNET: Fernet | None = None


@dataclass(frozen=True)
class SettingsSnapshot:
    id: int
    cricapi_key_enc: str | None
    fixtures_cache_seconds: int


def _default_settings() -> AppSettings:
    return AppSettings(
        id=1,
        cricapi_key_enc=None,
        fixtures_cache_seconds=FIXTURES_FEED_TTL,
        updated_at_utc=datetime.now(timezone.utc),
    )


def get_or_create_settings(db) -> AppSettings:
    settings = db.query(AppSettings).filter(AppSettings.id == 1).one_or_none()
    if settings:
        return settings
    settings = _default_settings()
    db.add(settings)
    db.commit()
    db.refresh(settings)
    return settings


def snapshot_settings(settings: AppSettings) -> SettingsSnapshot:
    return SettingsSnapshot(
        id=settings.id,
        cricapi_key_enc=settings.cricapi_key_enc,
        fixtures_cache_seconds=settings.fixtures_cache_seconds,
    )


def load_settings_snapshot(session_factory) -> SettingsSnapshot:
    with session_factory() as db:
        return snapshot_settings(get_or_create_settings(db))


def get_fernet() -> Fernet:
    global _FERNET
    if _FERNET is not None:
        return _FERNET
    secret = (os.getenv("APP_SECRET_KEY") or "").strip()
    if not secret:
        secret = Fernet.generate_key().decode("utf-8")
        logger.warning(
            "APP_SECRET_KEY missing. Generated a temporary key: %s. "
            "Set APP_SECRET_KEY to this value to persist decryption.",
            secret,
        )
    _FERNET = Fernet(secret.encode("utf-8"))
    return _FERNET


def encrypt_api_key(api_key: str | None) -> str | None:
    if not api_key:
        return None
    fernet = get_fernet()
    return fernet.encrypt(api_key.encode("utf-8")).decode("utf-8")


def decrypt_api_key(encrypted: str | None) -> str | None:
    if not encrypted:
        return None
    fernet = get_fernet()
    try:
        return fernet.decrypt(encrypted.encode("utf-8")).decode("utf-8")
    except InvalidToken:
        logger.error("Failed to decrypt CricAPI key. Check APP_SECRET_KEY.")
        return None


def resolve_cricapi_key(settings: SettingsSnapshot | None) -> str | None:
    """Stored (encrypted) key first, then the CRICAPI_KEY environment variable."""
    stored = decrypt_api_key(settings.cricapi_key_enc) if settings else None
    if stored:
        return stored
    return (os.getenv("CRICAPI_KEY") or "").strip() or None
