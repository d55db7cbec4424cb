"""Unit tests for the redis-py ClientHandle adapters."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.asyncio import Redis, RedisCluster
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import NoPermissionError, ResponseError

from kvb.domain.keys.model.command import KeysCommand
from kvb.domain.keys.port.client import ReplyError
from kvb.domain.keys.scanner.base import parse_scan_reply
from kvb.domain.shared.error import ConnectionUnavailableError
from kvb.infrastructure.redis.client import RedisClientHandle, RedisClusterClientHandle, RedisClusterNodeHandle


@pytest.fixture
def redis() -> MagicMock:
    return MagicMock(spec=Redis)


@pytest.fixture
def handle(redis) -> RedisClientHandle:
    return RedisClientHandle(redis, host="127.0.0.1", port=6379, db=2)


@pytest.fixture
def cluster() -> MagicMock:
    return MagicMock(spec=RedisCluster)


class TestRedisClientHandle:
    async def test_execute_passes_command_through(self, handle, redis):
        redis.execute_command.return_value = b"string"

        assert await handle.execute(KeysCommand.TYPE, b"k") == b"string"
        redis.execute_command.assert_awaited_once_with(KeysCommand.TYPE, b"k")

    async def test_is_its_own_single_node(self, handle):
        assert await handle.nodes() == [handle]
        assert handle.node_id == "127.0.0.1:6379"
        assert handle.db == 2
        assert not handle.is_cluster

    async def test_error_reply_becomes_reply_error(self, handle, redis):
        redis.execute_command.side_effect = ResponseError("WRONGTYPE Operation against a key")

        with pytest.raises(ReplyError) as exc_info:
            await handle.execute(KeysCommand.TTL, b"k")

        assert exc_info.value.message.startswith("WRONGTYPE")
        assert exc_info.value.command == "TTL"

    async def test_permission_error_keeps_noperm_prefix(self, handle, redis):
        redis.execute_command.side_effect = NoPermissionError(
            "this user has no permissions to run the 'scan' command"
        )

        with pytest.raises(ReplyError) as exc_info:
            await handle.execute(KeysCommand.SCAN, 0)

        assert exc_info.value.message.startswith("NOPERM ")

    async def test_lost_connection_becomes_unavailable(self, handle, redis):
        redis.execute_command.side_effect = RedisConnectionError("Connection refused")

        with pytest.raises(ConnectionUnavailableError):
            await handle.execute(KeysCommand.DBSIZE)

    async def test_pipeline_keeps_failed_slots(self, handle, redis):
        pipe = MagicMock()
        pipe.execute = AsyncMock(return_value=[b"string", ResponseError("unknown command 'MEMORY'")])
        redis.pipeline.return_value = pipe
        commands = [(KeysCommand.TYPE, b"k"), (KeysCommand.MEMORY_USAGE, b"k", "SAMPLES", 0)]

        replies = await handle.pipeline(commands, raise_on_error=False)

        redis.pipeline.assert_called_once_with(transaction=False)
        assert pipe.execute_command.call_count == 2
        pipe.execute.assert_awaited_once_with(raise_on_error=False)
        assert replies[0] == b"string"
        assert isinstance(replies[1], ReplyError)
        assert replies[1].command == "MEMORY USAGE"

    async def test_close(self, handle, redis):
        await handle.close()

        redis.aclose.assert_awaited_once()


class TestRedisClusterClientHandle:
    async def test_multi_key_delete_is_split_by_slot(self, cluster):
        cluster.delete = AsyncMock(return_value=2)
        handle = RedisClusterClientHandle(cluster)

        assert await handle.execute(KeysCommand.DEL, b"a", b"b") == 2
        cluster.delete.assert_awaited_once_with(b"a", b"b")
        cluster.execute_command.assert_not_awaited()

    async def test_single_key_commands_are_routed_by_client(self, cluster):
        cluster.execute_command.return_value = 1
        handle = RedisClusterClientHandle(cluster)

        await handle.execute(KeysCommand.DEL, b"a")

        cluster.execute_command.assert_awaited_once_with(KeysCommand.DEL, b"a")

    async def test_nodes_target_each_primary(self, cluster):
        primary = MagicMock(host="10.0.0.1", port=7000)
        cluster.get_primaries.return_value = [primary]
        cluster.execute_command.return_value = 12
        handle = RedisClusterClientHandle(cluster)

        [node] = await handle.nodes()

        assert node.node_id == "10.0.0.1:7000"
        assert await node.execute(KeysCommand.DBSIZE) == 12
        cluster.execute_command.assert_awaited_once_with(KeysCommand.DBSIZE, target_nodes=primary)

    async def test_reports_cluster_topology(self, cluster):
        handle = RedisClusterClientHandle(cluster)

        assert handle.is_cluster
        assert handle.db == 0


class TestRedisClusterNodeHandle:
    @pytest.fixture
    def primary(self) -> MagicMock:
        primary = MagicMock(host="10.0.0.1", port=7000)
        primary.name = "10.0.0.1:7000"
        return primary

    async def test_scan_reply_keyed_by_node_is_unwrapped(self, cluster, primary):
        # Shape produced by the cluster SCAN result callback for a single target node
        cluster.execute_command.return_value = RedisCluster.RESULT_CALLBACKS["SCAN"](
            "SCAN", {primary.name: [b"5", [b"k"]]}
        )
        node = RedisClusterNodeHandle(cluster, primary)

        reply = await node.execute(KeysCommand.SCAN, 0, "MATCH", "*", "COUNT", 15)

        assert reply == (5, [b"k"])
        assert parse_scan_reply(reply) == (5, [b"k"])
        cluster.execute_command.assert_awaited_once_with(
            KeysCommand.SCAN, 0, "MATCH", "*", "COUNT", 15, target_nodes=primary
        )

    async def test_plain_scan_reply_is_kept(self, cluster, primary):
        cluster.execute_command.return_value = (0, [b"a", b"b"])
        node = RedisClusterNodeHandle(cluster, primary)

        assert await node.execute(KeysCommand.SCAN, 0) == (0, [b"a", b"b"])

    async def test_other_commands_pass_through(self, cluster, primary):
        cluster.execute_command.return_value = {"db0": {"keys": 3}}
        node = RedisClusterNodeHandle(cluster, primary)

        assert await node.execute(KeysCommand.INFO, "keyspace") == {"db0": {"keys": 3}}
