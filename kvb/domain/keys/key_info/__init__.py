from kvb.domain.keys.key_info.base import TypeInfoStrategy
from kvb.domain.keys.key_info.provider import KeyInfoProvider

__all__ = ["KeyInfoProvider", "TypeInfoStrategy"]
