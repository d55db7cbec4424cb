from kvb.domain.database.service.database import DatabaseService

__all__ = ["DatabaseService"]
