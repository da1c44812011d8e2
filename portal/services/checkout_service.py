# portal/services/checkout_service.py
from typing import Optional

from portal.domain.errors import EmptyCart, IncompleteCustomerInfo
from portal.domain.schemas import (
    CheckoutForm,
    CustomerInfo,
    Identity,
    OrderReceipt,
    OrderSubmission,
)
from portal.services.address_resolver import resolve_form
from portal.services.cart_aggregator import CartAggregator
from portal.services.notification_service import NotificationService
from portal.services.order_client import OrderClient
from portal.utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_CUSTOMER_FIELDS = ("first_name", "last_name", "email")


class CheckoutService:
    """
    Skladanie zamowienia z koszyka sesji.

    1. Sprawdza, czy koszyk nie jest pusty
    2. Waliduje dane klienta i adresy (kopie adresu wysylki robione teraz)
    3. Przekazuje payload do serwisu zamowien
    4. Czysci koszyk i wysyla potwierdzenie (async)
    """

    def __init__(
        self,
        cart: CartAggregator,
        order_client: OrderClient,
        notification_service: NotificationService | None = None,
    ):
        self.cart = cart
        self.order_client = order_client
        self.notification_service = notification_service or NotificationService()

    def build_submission(
        self,
        form: CheckoutForm,
        customer: CustomerInfo,
        identity: Identity,
        special_instructions: Optional[str] = None,
    ) -> OrderSubmission:
        snapshot = self.cart.snapshot()
        if not snapshot.items:
            raise EmptyCart("Your cart is empty")

        missing = [f for f in REQUIRED_CUSTOMER_FIELDS if not getattr(customer, f).strip()]
        if missing:
            raise IncompleteCustomerInfo(missing)

        return OrderSubmission(
            cart=snapshot,
            addresses=resolve_form(form),
            customer_info=customer,
            user_id=identity.user_id,
            special_instructions=special_instructions or None,
        )

    def submit(
        self,
        form: CheckoutForm,
        customer: CustomerInfo,
        identity: Identity,
        special_instructions: Optional[str] = None,
    ) -> OrderReceipt:
        submission = self.build_submission(form, customer, identity, special_instructions)

        logger.info(
            f"Skladanie zamowienia dla {identity.user_id}: "
            f"{submission.cart.item_count} szt., do zaplaty {submission.cart.total_due_now}"
        )
        response = self.order_client.submit(submission)

        order_id = str(response.get("id") or response.get("order_id") or "")
        self.cart.clear()
        self.notification_service.send_order_confirmation(
            identity.user_id, order_id, customer.email
        )

        logger.info(f"Zamowienie {order_id} przyjete, koszyk wyczyszczony")

        return OrderReceipt(
            order_id=order_id,
            status=str(response.get("status", "submitted")),
            total_due_now=submission.cart.total_due_now,
            total_monthly_charges=submission.cart.total_monthly_charges,
        )
