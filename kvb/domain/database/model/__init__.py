from kvb.domain.database.model.database import ConnectionType, Database

__all__ = ["ConnectionType", "Database"]
