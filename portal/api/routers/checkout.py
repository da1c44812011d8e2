# portal/api/routers/checkout.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from requests import RequestException

from portal.api.deps import get_cart, get_identity, get_order_client
from portal.domain.errors import CartValidationError
from portal.domain.schemas import CheckoutIn, Identity, OrderReceipt
from portal.services.cart_aggregator import CartAggregator
from portal.services.checkout_service import CheckoutService
from portal.services.order_client import OrderClient
from portal.utils.money import to_cents

router = APIRouter(prefix="/checkout", tags=["checkout"])


def get_service(cart: CartAggregator, order_client: OrderClient):
    return CheckoutService(cart=cart, order_client=order_client)


def _require_identity(identity: Optional[Identity]) -> Identity:
    if identity is None:
        raise PermissionError("Sign in to place an order")
    return identity


@router.post("/", response_model=OrderReceipt, status_code=201)
def submit_order(
    payload: CheckoutIn,
    cart: CartAggregator = Depends(get_cart),
    identity: Optional[Identity] = Depends(get_identity),
    order_client: OrderClient = Depends(get_order_client),
):
    """
    Sklada zamowienie z koszyka sesji.
    Adresy oznaczone "jak wysylka" sa kopiowane w tym momencie.
    """
    svc = get_service(cart, order_client)
    try:
        receipt = svc.submit(
            form=payload.addresses,
            customer=payload.customer_info,
            identity=_require_identity(identity),
            special_instructions=payload.special_instructions,
        )
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except CartValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RequestException as e:
        raise HTTPException(status_code=502, detail=f"Order submission failed: {e}")

    return receipt.model_copy(
        update={
            "total_due_now": to_cents(receipt.total_due_now),
            "total_monthly_charges": to_cents(receipt.total_monthly_charges),
        }
    )
