from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    Integer,
    Text,
    UniqueConstraint,
    func,
)

from statsync.db.base import Base


class PlayerStat(Base):
    __tablename__ = "player_stats"
    __table_args__ = (
        UniqueConstraint("player_name", "team_name", name="uq_player_stats_player_team"),
    )

    id = Column(Integer, primary_key=True)
    player_name = Column(Text, nullable=False)
    team_name = Column(Text, nullable=False)
    status = Column(Text, nullable=True)
    kills = Column(Integer, nullable=False, server_default="0")
    deaths = Column(Integer, nullable=False, server_default="0")
    assists = Column(Integer, nullable=False, server_default="0")
    kda = Column(Float, nullable=False, server_default="0")
    games_played = Column(Integer, nullable=False, server_default="0")
    avg_kills = Column(Float, nullable=False, server_default="0")
    avg_deaths = Column(Float, nullable=False, server_default="0")
    avg_assists = Column(Float, nullable=False, server_default="0")
    avg_kda = Column(Float, nullable=False, server_default="0")
    cs = Column(Integer, nullable=False, server_default="0")
    avg_cs = Column(Float, nullable=False, server_default="0")
    last_updated = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
