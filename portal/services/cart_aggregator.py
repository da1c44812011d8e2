# portal/services/cart_aggregator.py
import json
from typing import List

from pydantic import TypeAdapter

from portal.domain.errors import DuplicateLineItem, InvalidQuantity, PersistenceError
from portal.domain.pricing import PROCESSING_FEE, TAX_RATE, ZERO
from portal.domain.schemas import Cart, CartLineItem
from portal.repos.cart_repo import SlotStore
from portal.utils.logging import get_logger

logger = get_logger(__name__)

CART_SLOT_KEY = "cart"

_line_items = TypeAdapter(List[CartLineItem])


class CartAggregator:
    """
    Koszyk jednej sesji przegladania.

    commands (add, remove, set_quantity, clear) zmieniaja liste pozycji
    i od razu zapisuja ja do slotu, query (snapshot) tylko liczy.
    Stan w pamieci jest nadrzedny - nieudany zapis nie psuje sesji.
    """

    def __init__(self, store: SlotStore, key: str = CART_SLOT_KEY):
        self.store = store
        self.key = key
        self._items: List[CartLineItem] = self._load()

    # query
    def snapshot(self) -> Cart:
        subtotal = ZERO
        monthly = ZERO

        for item in self._items:
            option = item.selected_pricing_option
            qty = item.quantity

            subtotal += option.down_payment * qty
            monthly += (option.monthly_payment or ZERO) * qty

            if item.selected_rate_plan is not None:
                monthly += item.selected_rate_plan.monthly_cost * qty

            for feature in item.selected_features:
                monthly += feature.monthly_cost * qty

        taxes = subtotal * TAX_RATE
        fees = PROCESSING_FEE

        return Cart(
            items=list(self._items),
            subtotal=subtotal,
            taxes=taxes,
            fees=fees,
            total_due_now=subtotal + taxes + fees,
            total_monthly_charges=monthly,
            item_count=sum(i.quantity for i in self._items),
        )

    def get(self, line_item_id: str) -> CartLineItem | None:
        return next((i for i in self._items if i.id == line_item_id), None)

    def __len__(self) -> int:
        return len(self._items)

    # commands
    def add(self, line_item: CartLineItem) -> CartLineItem:
        #dwie identyczne konfiguracje to nadal dwie osobne pozycje
        if self.get(line_item.id) is not None:
            raise DuplicateLineItem(f"Line item {line_item.id} is already in the cart")

        self._items.append(line_item)
        logger.info(f"Dodano pozycje {line_item.id} (x{line_item.quantity}) do koszyka")
        self._persist()
        return line_item

    def remove(self, line_item_id: str) -> None:
        remaining = [i for i in self._items if i.id != line_item_id]
        if len(remaining) == len(self._items):
            return

        self._items = remaining
        logger.info(f"Usunieto pozycje {line_item_id} z koszyka")
        self._persist()

    def set_quantity(self, line_item_id: str, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise InvalidQuantity(f"Quantity must be an integer, got {quantity!r}")

        if quantity <= 0:
            self.remove(line_item_id)
            return

        for idx, item in enumerate(self._items):
            if item.id == line_item_id:
                self._items[idx] = item.model_copy(update={"quantity": quantity})
                logger.info(f"Pozycja {line_item_id}: ilosc {item.quantity} -> {quantity}")
                self._persist()
                return

    def clear(self) -> None:
        self._items = []
        logger.info("Koszyk wyczyszczony")
        self._persist()

    # persistence
    def _load(self) -> List[CartLineItem]:
        try:
            raw = self.store.read(self.key)
        except PersistenceError as e:
            logger.error(f"Nie mozna odczytac koszyka, start z pustym: {e}")
            return []

        if not raw:
            return []

        try:
            items = _line_items.validate_python(json.loads(raw))
        except (ValueError, TypeError, RecursionError) as e:
            # JSONDecodeError, pydantic ValidationError and UnicodeDecodeError are ValueErrors
            logger.error(f"Zapisany koszyk jest uszkodzony, start z pustym: {e}")
            return []

        # ids must stay unique, repeated entries keep the first occurrence
        seen = set()
        clean = []
        for item in items:
            if item.id in seen:
                continue
            seen.add(item.id)
            clean.append(item)
        return clean

    def _persist(self) -> None:
        payload = _line_items.dump_json(self._items).decode("utf-8")
        try:
            self.store.write(self.key, payload)
        except PersistenceError as e:
            logger.warning(f"Zapis koszyka nie powiodl sie, stan w pamieci zostaje: {e}")
