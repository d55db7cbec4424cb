from kvb.infrastructure.redis.di import RedisProvider

__all__ = ["RedisProvider"]
