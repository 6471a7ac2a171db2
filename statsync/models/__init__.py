from statsync.models.tables import PlayerStat

__all__ = ["PlayerStat"]
