#portal/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from requests import RequestException

from portal.api.deps import get_cart, get_catalog_client
from portal.domain.errors import CartValidationError, PricingOptionMismatch
from portal.domain.schemas import Cart, CartLineItem, CartOut, LineItemIn, LineItemOut, QuantityIn
from portal.services.cart_aggregator import CartAggregator
from portal.services.catalog_client import CatalogClient
from portal.services.configurator import LineItemConfigurator, monthly_preview
from portal.utils.money import to_cents

router = APIRouter(prefix="/cart", tags=["cart"])

configurator = LineItemConfigurator()


def _render_item(item: CartLineItem) -> LineItemOut:
    option = item.selected_pricing_option
    per_unit = monthly_preview(option, item.selected_rate_plan, item.selected_features)
    return LineItemOut(
        id=item.id,
        product_id=item.product.id,
        product_name=item.product.name,
        pricing_option=option.name,
        rate_plan=item.selected_rate_plan.name if item.selected_rate_plan else None,
        features=[f.name for f in item.selected_features],
        quantity=item.quantity,
        due_now=to_cents(option.down_payment * item.quantity),
        monthly=to_cents(per_unit * item.quantity),
    )


def render_cart(cart: Cart) -> CartOut:
    #zaokraglenie do 2 miejsc dopiero przy prezentacji
    return CartOut(
        items=[_render_item(i) for i in cart.items],
        item_count=cart.item_count,
        subtotal=to_cents(cart.subtotal),
        taxes=to_cents(cart.taxes),
        fees=to_cents(cart.fees),
        total_due_now=to_cents(cart.total_due_now),
        total_monthly_charges=to_cents(cart.total_monthly_charges),
    )


def _build_line_item(payload: LineItemIn, catalog: CatalogClient) -> CartLineItem:
    product = catalog.find("products", payload.product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")

    option = None
    if payload.pricing_option_id is not None:
        option = next((o for o in product.pricing_options if o.id == payload.pricing_option_id), None)
        if option is None:
            raise PricingOptionMismatch(
                f"Pricing option {payload.pricing_option_id} is not offered for product {product.id}"
            )

    rate_plan = None
    if payload.rate_plan_id is not None:
        rate_plan = catalog.find("rate_plans", payload.rate_plan_id)
        if rate_plan is None:
            raise HTTPException(status_code=404, detail="Rate plan not found")

    features = []
    if payload.feature_ids:
        available = {f.id: f for f in catalog.list_active("features")}
        for feature_id in payload.feature_ids:
            if feature_id not in available:
                raise HTTPException(status_code=404, detail=f"Feature {feature_id} not found")
            features.append(available[feature_id])

    return configurator.build(product, option, rate_plan, features, payload.quantity)


@router.get("/", response_model=CartOut)
def get_cart_view(cart: CartAggregator = Depends(get_cart)):
    return render_cart(cart.snapshot())


@router.post("/items", response_model=CartOut, status_code=201)
def add_item(
    payload: LineItemIn,
    cart: CartAggregator = Depends(get_cart),
    catalog: CatalogClient = Depends(get_catalog_client),
):
    try:
        cart.add(_build_line_item(payload, catalog))
    except CartValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RequestException as e:
        raise HTTPException(status_code=502, detail=f"Catalog unavailable: {e}")
    return render_cart(cart.snapshot())


@router.patch("/items/{item_id}", response_model=CartOut)
def set_quantity(
    item_id: str,
    payload: QuantityIn,
    cart: CartAggregator = Depends(get_cart),
):
    try:
        cart.set_quantity(item_id, payload.quantity)
    except CartValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return render_cart(cart.snapshot())


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_item(item_id: str, cart: CartAggregator = Depends(get_cart)):
    cart.remove(item_id)
    return render_cart(cart.snapshot())


@router.delete("/", response_model=CartOut)
def clear_cart(cart: CartAggregator = Depends(get_cart)):
    cart.clear()
    return render_cart(cart.snapshot())
