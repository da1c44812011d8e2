# portal/repos/cart_repo.py
from typing import Dict, Optional, Protocol

import redis
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from portal.data.models.cart_slot import CartSlotModel
from portal.domain.errors import PersistenceError
from portal.utils.retry import redis_retry
from portal.utils.settings import REDIS_URL, CART_SLOT_TTL_SECONDS


class SlotStore(Protocol):
    """Trwaly slot klucz -> tekst. Port, przez ktory koszyk zapisuje swoj stan."""

    def read(self, key: str) -> Optional[str]: ...

    def write(self, key: str, value: str) -> None: ...


def _slot_key(namespace: str | None, key: str) -> str:
    return f"{namespace}:{key}" if namespace else key


class InMemorySlotStore:
    def __init__(self, namespace: str | None = None, slots: Dict[str, str] | None = None):
        self.namespace = namespace
        self.slots: Dict[str, str] = {} if slots is None else slots

    def read(self, key: str) -> Optional[str]:
        return self.slots.get(_slot_key(self.namespace, key))

    def write(self, key: str, value: str) -> None:
        self.slots[_slot_key(self.namespace, key)] = value


class SqlSlotStore:
    """
    Slot trzymany w tabeli cart_slots.
    Kazde wywolanie otwiera wlasna sesje, bo koszyk zyje dluzej niz request.
    """

    def __init__(self, session_factory: sessionmaker, namespace: str | None = None):
        self.session_factory = session_factory
        self.namespace = namespace

    def read(self, key: str) -> Optional[str]:
        db: Session = self.session_factory()
        try:
            slot = db.get(CartSlotModel, _slot_key(self.namespace, key))
            return slot.value if slot else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Cannot read slot {key}: {e}") from e
        finally:
            db.close()

    def write(self, key: str, value: str) -> None:
        db: Session = self.session_factory()
        try:
            db.merge(CartSlotModel(key=_slot_key(self.namespace, key), value=value))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Cannot write slot {key}: {e}") from e
        finally:
            db.close()


class RedisSlotStore:
    """Slot w Redisie, wygasa po CART_SLOT_TTL_SECONDS od ostatniego zapisu."""

    def __init__(
        self,
        client: redis.Redis | None = None,
        namespace: str | None = None,
        ttl: int = CART_SLOT_TTL_SECONDS,
    ):
        self.redis = client or redis.Redis.from_url(REDIS_URL, decode_responses=True)
        self.namespace = namespace
        self.ttl = ttl

    def read(self, key: str) -> Optional[str]:
        try:
            return self._get(_slot_key(self.namespace, key))
        except (RedisError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Cannot read slot {key}: {e}") from e

    def write(self, key: str, value: str) -> None:
        try:
            self._set(_slot_key(self.namespace, key), value)
        except RedisError as e:
            raise PersistenceError(f"Cannot write slot {key}: {e}") from e

    @redis_retry()
    def _get(self, name: str) -> Optional[str]:
        value = self.redis.get(name)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    @redis_retry()
    def _set(self, name: str, value: str) -> None:
        #SET <session>:cart "<json>" EX ttl
        self.redis.set(name=name, value=value, ex=self.ttl)
