from __future__ import annotations

import logging
import secrets

from fastapi import Header

from statsync.core.config import get_settings
from statsync.db.session import SessionLocal
from statsync.services.errors import AuthorizationError
from statsync.services.player_stats import BatchUpsertService

logger = logging.getLogger(__name__)


def require_api_key(x_api_key: str | None = Header(default=None)) -> None:
    settings = get_settings()
    if not x_api_key or not secrets.compare_digest(
        x_api_key.encode("utf-8"), settings.API_KEY.encode("utf-8")
    ):
        logger.warning("sync_stats_unauthorized key_present=%s", bool(x_api_key))
        raise AuthorizationError()


def get_upsert_service() -> BatchUpsertService:
    return BatchUpsertService(SessionLocal)
