from kvb.domain.keys.service.keys import KeysService

__all__ = ["KeysService"]
