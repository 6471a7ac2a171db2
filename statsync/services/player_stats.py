from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from statsync.schemas.sync import PlayerStatIn
from statsync.services.errors import TransactionError, ValidationError

logger = logging.getLogger(__name__)

UPSERT_PLAYER_STAT_SQL = text(
    """
    INSERT INTO player_stats (
        player_name, team_name, status, kills, deaths, assists, kda, games_played,
        avg_kills, avg_deaths, avg_assists, avg_kda, cs, avg_cs, last_updated
    )
    VALUES (
        :player_name, :team_name, :status, :kills, :deaths, :assists, :kda, :games_played,
        :avg_kills, :avg_deaths, :avg_assists, :avg_kda, :cs, :avg_cs, CURRENT_TIMESTAMP
    )
    ON CONFLICT (player_name, team_name) DO UPDATE
    SET status = EXCLUDED.status,
        kills = EXCLUDED.kills,
        deaths = EXCLUDED.deaths,
        assists = EXCLUDED.assists,
        kda = EXCLUDED.kda,
        games_played = EXCLUDED.games_played,
        avg_kills = EXCLUDED.avg_kills,
        avg_deaths = EXCLUDED.avg_deaths,
        avg_assists = EXCLUDED.avg_assists,
        avg_kda = EXCLUDED.avg_kda,
        cs = EXCLUDED.cs,
        avg_cs = EXCLUDED.avg_cs,
        last_updated = CURRENT_TIMESTAMP
    """
)


@dataclass(frozen=True)
class BatchResult:
    processed: int
    success: bool = True


def _error_detail(exc: BaseException) -> str:
    # DBAPI message without the SQL statement and bound parameters
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


class BatchUpsertService:
    """Writes a batch of player stats in one transaction, all or nothing."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def upsert_batch(self, records: Sequence[PlayerStatIn]) -> BatchResult:
        if records is None or not isinstance(records, (list, tuple)):
            raise ValidationError()
        rows = [
            (record if isinstance(record, PlayerStatIn) else PlayerStatIn.from_payload(record)).to_row()
            for record in records
        ]

        processed = 0
        with self._session_factory() as db:
            try:
                for row in rows:
                    db.execute(UPSERT_PLAYER_STAT_SQL, row)
                    processed += 1
                db.commit()
            except Exception as exc:
                try:
                    db.rollback()
                except SQLAlchemyError:
                    logger.exception("rollback_failed")
                logger.error(
                    "player_stats_rollback processed=%s total=%s detail=%s",
                    processed,
                    len(rows),
                    _error_detail(exc),
                )
                raise TransactionError(details=_error_detail(exc)) from exc

        logger.info("player_stats_synced processed=%s", processed)
        return BatchResult(processed=processed)
