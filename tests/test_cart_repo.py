"""Tests for the cart slot stores."""

from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from portal.data.database import Base
from portal.data.models import CartSlotModel  # noqa: F401
from portal.domain.errors import PersistenceError
from portal.repos.cart_repo import InMemorySlotStore, RedisSlotStore, SqlSlotStore
from portal.services.cart_aggregator import CartAggregator


def _sqlite_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def session_factory():
    engine = _sqlite_engine()
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


class TestInMemorySlotStore:
    def test_namespaces_are_isolated(self):
        shared = {}
        a = InMemorySlotStore(namespace="a")
        b = InMemorySlotStore(namespace="b")
        a.slots = b.slots = shared

        a.write("cart", "[1]")

        assert b.read("cart") is None
        assert shared == {"a:cart": "[1]"}


class TestSqlSlotStore:
    def test_write_then_read(self, session_factory):
        store = SqlSlotStore(session_factory, namespace="s1")

        store.write("cart", "[]")
        store.write("cart", '["x"]')

        assert store.read("cart") == '["x"]'

    def test_absent_slot(self, session_factory):
        assert SqlSlotStore(session_factory).read("cart") is None

    def test_sessions_do_not_share_slots(self, session_factory):
        SqlSlotStore(session_factory, namespace="s1").write("cart", "[1]")

        assert SqlSlotStore(session_factory, namespace="s2").read("cart") is None

    def test_missing_table_raises_persistence_error(self):
        factory = sessionmaker(bind=_sqlite_engine())
        store = SqlSlotStore(factory)

        with pytest.raises(PersistenceError):
            store.read("cart")
        with pytest.raises(PersistenceError):
            store.write("cart", "[]")

    def test_cart_survives_restart(self, session_factory, configurator, phone, full_option):
        cart = CartAggregator(SqlSlotStore(session_factory, namespace="s1"))
        item = cart.add(configurator.build(phone, full_option, quantity=2))

        restarted = CartAggregator(SqlSlotStore(session_factory, namespace="s1"))

        assert [i.id for i in restarted.snapshot().items] == [item.id]
        assert restarted.snapshot().subtotal == cart.snapshot().subtotal

    def test_broken_database_does_not_break_cart(self, configurator, phone, full_option):
        cart = CartAggregator(SqlSlotStore(sessionmaker(bind=_sqlite_engine())))

        cart.add(configurator.build(phone, full_option))

        assert len(cart) == 1


class TestRedisSlotStore:
    def test_write_sets_ttl(self):
        client = MagicMock()
        store = RedisSlotStore(client=client, namespace="s1", ttl=60)

        store.write("cart", "[]")

        client.set.assert_called_once_with(name="s1:cart", value="[]", ex=60)

    def test_read_decodes_bytes(self):
        client = MagicMock()
        client.get.return_value = b'["x"]'
        store = RedisSlotStore(client=client, namespace="s1")

        assert store.read("cart") == '["x"]'
        client.get.assert_called_once_with("s1:cart")

    def test_read_absent(self):
        client = MagicMock()
        client.get.return_value = None

        assert RedisSlotStore(client=client).read("cart") is None

    def test_redis_errors_are_retried_then_wrapped(self):
        client = MagicMock()
        client.get.side_effect = RedisConnectionError("down")
        store = RedisSlotStore(client=client)

        with pytest.raises(PersistenceError):
            store.read("cart")
        assert client.get.call_count == 3

    def test_transient_error_recovers(self):
        client = MagicMock()
        client.set.side_effect = [RedisConnectionError("blip"), True]
        store = RedisSlotStore(client=client)

        store.write("cart", "[]")

        assert client.set.call_count == 2

    def test_undecodable_bytes_raise_persistence_error(self):
        client = MagicMock()
        client.get.return_value = b"\xff\xfe\xfa"
        store = RedisSlotStore(client=client)

        with pytest.raises(PersistenceError):
            store.read("cart")
        assert client.get.call_count == 1

    def test_undecodable_slot_does_not_break_cart(self):
        client = MagicMock()
        client.get.return_value = b"\xff\xfe\xfa"

        cart = CartAggregator(RedisSlotStore(client=client, namespace="s1"))

        assert cart.snapshot().items == []
