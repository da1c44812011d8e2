# portal/api/deps.py
import threading
from collections import OrderedDict
from typing import Callable, Dict, Literal, Optional

from fastapi import Depends, Header

from portal.data.database import SessionLocal
from portal.domain.schemas import Identity
from portal.repos.cart_repo import InMemorySlotStore, RedisSlotStore, SlotStore, SqlSlotStore
from portal.services.cart_aggregator import CartAggregator
from portal.services.catalog_client import CatalogClient
from portal.services.order_client import OrderClient
from portal.utils.settings import CART_REGISTRY_MAX_SESSIONS, CART_STORE_BACKEND
from portal.utils.logging import get_logger

logger = get_logger(__name__)

# wspolne dla wszystkich sesji, zeby usuniety z rejestru koszyk dalo sie odczytac
_memory_slots: Dict[str, str] = {}


def make_store(namespace: str, backend: str = CART_STORE_BACKEND) -> SlotStore:
    if backend == "sql":
        return SqlSlotStore(SessionLocal, namespace=namespace)
    if backend == "redis":
        return RedisSlotStore(namespace=namespace)
    if backend == "memory":
        return InMemorySlotStore(namespace=namespace, slots=_memory_slots)
    raise ValueError(f"Unknown CART_STORE_BACKEND: {backend}")


class CartRegistry:
    """
    Jeden CartAggregator na sesje przegladania.
    Tworzony przy pierwszym uzyciu (wtedy czyta slot), potem reuzywany.

    Rejestr trzyma najwyzej max_sessions koszykow (LRU). Slot jest trwaly,
    wiec usuniety koszyk przy nastepnym uzyciu wczyta sie od nowa.
    """

    def __init__(
        self,
        store_factory: Callable[[str], SlotStore] = make_store,
        max_sessions: int = CART_REGISTRY_MAX_SESSIONS,
    ):
        self.store_factory = store_factory
        self.max_sessions = max(1, max_sessions)
        self._carts: "OrderedDict[str, CartAggregator]" = OrderedDict()
        #endpointy sync ida przez threadpool
        self._lock = threading.Lock()

    def get(self, session_id: str) -> CartAggregator:
        with self._lock:
            cart = self._carts.get(session_id)
            if cart is not None:
                self._carts.move_to_end(session_id)
                return cart

            logger.info(f"Otwieram koszyk dla sesji {session_id}")
            cart = CartAggregator(self.store_factory(session_id))
            self._carts[session_id] = cart

            while len(self._carts) > self.max_sessions:
                evicted, _ = self._carts.popitem(last=False)
                logger.info(f"Zwalniam koszyk sesji {evicted} z pamieci")
            return cart

    def __len__(self) -> int:
        return len(self._carts)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._carts


registry = CartRegistry()


def get_session_id(x_session_id: str = Header(..., min_length=1)) -> str:
    return x_session_id


def get_cart(session_id: str = Depends(get_session_id)) -> CartAggregator:
    return registry.get(session_id)


def get_identity(
    x_user_id: Optional[str] = Header(None),
    x_user_role: Literal["customer", "admin"] = Header("customer"),
) -> Optional[Identity]:
    # tozsamosc rozwiazana przez dostawce auth, tutaj tylko odczyt
    if not x_user_id:
        return None
    return Identity(user_id=x_user_id, role=x_user_role)


def get_catalog_client() -> CatalogClient:
    return CatalogClient()


def get_order_client() -> OrderClient:
    return OrderClient()
