"""Unit tests for type-info strategies and KeyInfoProvider."""

import pytest

from kvb.domain.keys.key_info import KeyInfoProvider
from kvb.domain.keys.key_info.strategies import (
    HashTypeInfoStrategy,
    JsonTypeInfoStrategy,
    StringTypeInfoStrategy,
)
from kvb.domain.keys.model import KeyType
from kvb.domain.keys.port.client import ReplyError
from kvb.domain.shared.error import UnsupportedTypeError


@pytest.fixture
def provider(accessor) -> KeyInfoProvider:
    return KeyInfoProvider.default(accessor)


class TestKeyInfoProvider:
    @pytest.mark.parametrize(
        "key_type",
        [
            KeyType.STRING,
            KeyType.HASH,
            KeyType.LIST,
            KeyType.SET,
            KeyType.ZSET,
            KeyType.STREAM,
            KeyType.JSON,
        ],
    )
    def test_every_supported_type_has_a_strategy(self, provider, key_type):
        assert provider.get_strategy(key_type) is not None

    @pytest.mark.parametrize("key_type", [KeyType.NONE, KeyType.UNKNOWN])
    def test_unsupported_type_raises(self, provider, key_type):
        with pytest.raises(UnsupportedTypeError) as exc_info:
            provider.get_strategy(key_type)

        assert exc_info.value.code == "UNSUPPORTED_KEY_TYPE"

    def test_custom_registry(self, accessor):
        strategy = StringTypeInfoStrategy(accessor)
        provider = KeyInfoProvider({KeyType.STRING: strategy})

        assert provider.get_strategy(KeyType.STRING) is strategy
        with pytest.raises(UnsupportedTypeError):
            provider.get_strategy(KeyType.HASH)


class TestTypeInfoStrategy:
    @pytest.mark.parametrize(
        ("key_type", "value", "command", "encoding"),
        [
            (KeyType.STRING, "hello", "STRLEN", "embstr"),
            (KeyType.HASH, {"a": 1, "b": 2}, "HLEN", "listpack"),
            (KeyType.LIST, [1, 2, 3], "LLEN", "quicklist"),
            (KeyType.SET, {1, 2, 3, 4}, "SCARD", "hashtable"),
            (KeyType.ZSET, {"m": 1.0}, "ZCARD", "skiplist"),
            (KeyType.STREAM, [("1-0", {})], "XLEN", "stream"),
        ],
    )
    async def test_reports_length_and_encoding(
        self, provider, metadata, store, key_type, value, command, encoding
    ):
        store.set(b"k", key_type.value, value, ttl=30)

        info = await provider.get_strategy(key_type).get_info(metadata, b"k", key_type)

        assert info.name == b"k"
        assert info.type == key_type
        assert info.ttl == 30
        assert info.length == len(value)
        assert info.encoding == encoding
        assert info.size is not None
        assert len(store.commands(command)) == 1

    async def test_refused_memory_usage_leaves_size_unset(self, accessor, metadata, store):
        store.set(b"k", "hash", {"a": 1})
        store.refuse("MEMORY USAGE")

        info = await HashTypeInfoStrategy(accessor).get_info(metadata, b"k", KeyType.HASH)

        assert info.size is None
        assert info.length == 1

    async def test_refused_length_command_propagates(self, accessor, metadata, store):
        store.set(b"k", "hash", {"a": 1})
        store.refuse("HLEN")

        with pytest.raises(ReplyError) as exc_info:
            await HashTypeInfoStrategy(accessor).get_info(metadata, b"k", KeyType.HASH)

        assert exc_info.value.message.startswith("NOPERM")


class TestJsonTypeInfoStrategy:
    @pytest.mark.parametrize(
        ("value", "command"),
        [
            ({"a": 1, "b": 2}, "JSON.OBJLEN"),
            ([1, 2, 3], "JSON.ARRLEN"),
            ("text", "JSON.STRLEN"),
        ],
    )
    async def test_length_command_follows_root_type(self, accessor, metadata, store, value, command):
        store.set(b"doc", KeyType.JSON.value, value)

        info = await JsonTypeInfoStrategy(accessor).get_info(metadata, b"doc", KeyType.JSON)

        assert info.type == KeyType.JSON
        assert info.length == len(value)
        assert len(store.commands(command)) == 1

    async def test_scalar_root_has_no_length(self, accessor, metadata, store):
        store.set(b"doc", KeyType.JSON.value, 42)

        info = await JsonTypeInfoStrategy(accessor).get_info(metadata, b"doc", KeyType.JSON)

        assert info.length is None
        assert info.ttl == -1

    async def test_encoding_is_not_requested(self, accessor, metadata, store):
        store.set(b"doc", KeyType.JSON.value, {"a": 1})

        info = await JsonTypeInfoStrategy(accessor).get_info(metadata, b"doc", KeyType.JSON)

        assert info.encoding is None
        assert store.commands("OBJECT ENCODING") == []
