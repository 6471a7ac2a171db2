from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from statsync.services.coercion import coerce_float, coerce_int, pass_through_text
from statsync.services.errors import ValidationError

INT_FIELDS = ("kills", "deaths", "assists", "games", "cs")
FLOAT_FIELDS = ("kda", "avg_kills", "avg_deaths", "avg_assists", "avg_kda", "avg_cs")
TEXT_FIELDS = ("name", "team_name", "status")


class PlayerStatIn(BaseModel):
    """One scraped player line. Unreadable numbers default to zero."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    team_name: Optional[str] = Field(default=None, alias="teamName")
    status: Optional[str] = None
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    kda: float = 0.0
    games: int = 0
    avg_kills: float = Field(default=0.0, alias="avgKills")
    avg_deaths: float = Field(default=0.0, alias="avgDeaths")
    avg_assists: float = Field(default=0.0, alias="avgAssists")
    avg_kda: float = Field(default=0.0, alias="avgKda")
    cs: int = 0
    avg_cs: float = Field(default=0.0, alias="avgCs")

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def _text(cls, value: Any) -> Optional[str]:
        return pass_through_text(value)

    @field_validator(*INT_FIELDS, mode="before")
    @classmethod
    def _int(cls, value: Any) -> int:
        return coerce_int(value)

    @field_validator(*FLOAT_FIELDS, mode="before")
    @classmethod
    def _float(cls, value: Any) -> float:
        return coerce_float(value)

    @classmethod
    def from_payload(cls, item: Any) -> "PlayerStatIn":
        if not isinstance(item, dict):
            item = {}
        return cls.model_validate(item)

    def to_row(self) -> Dict[str, Any]:
        return {
            "player_name": self.name,
            "team_name": self.team_name,
            "status": self.status,
            "kills": self.kills,
            "deaths": self.deaths,
            "assists": self.assists,
            "kda": self.kda,
            "games_played": self.games,
            "avg_kills": self.avg_kills,
            "avg_deaths": self.avg_deaths,
            "avg_assists": self.avg_assists,
            "avg_kda": self.avg_kda,
            "cs": self.cs,
            "avg_cs": self.avg_cs,
        }


class SyncStatsOut(BaseModel):
    success: bool = True
    message: str
    processed: int


class ErrorOut(BaseModel):
    error: str
    details: Optional[str] = None


def parse_players(payload: Any) -> List[PlayerStatIn]:
    if not isinstance(payload, dict):
        raise ValidationError()
    players = payload.get("players")
    if not isinstance(players, list):
        raise ValidationError()
    return [PlayerStatIn.from_payload(item) for item in players]
