# portal/services/configurator.py
import uuid
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional

from pydantic import ValidationError

from portal.domain.errors import (
    InvalidQuantity,
    MalformedCatalogRecord,
    MissingPricingOption,
    PricingOptionMismatch,
)
from portal.domain.pricing import ZERO
from portal.domain.schemas import CartLineItem, Feature, PricingOption, Product, RatePlan

CATALOG_SCHEMAS = {
    "products": Product,
    "rate_plans": RatePlan,
    "features": Feature,
}


def parse_catalog_record(kind: str, raw: Dict[str, Any]):
    """Walidacja rekordu z katalogu zanim trafi do konfiguratora."""
    schema = CATALOG_SCHEMAS.get(kind)
    if schema is None:
        raise MalformedCatalogRecord(f"Unknown catalog kind: {kind}")
    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        raise MalformedCatalogRecord(f"Invalid {kind} record: {e.error_count()} error(s)") from e


def default_pricing_option(product: Product) -> Optional[PricingOption]:
    for option in product.pricing_options:
        if option.is_default:
            return option
    return product.pricing_options[0] if product.pricing_options else None


def monthly_preview(
    pricing_option: Optional[PricingOption],
    rate_plan: Optional[RatePlan] = None,
    features: Iterable[Feature] = (),
) -> Decimal:
    """Miesieczny koszt jednej sztuki, pokazywany podczas konfiguracji."""
    total = ZERO
    if pricing_option is not None and pricing_option.monthly_payment is not None:
        total += pricing_option.monthly_payment
    if rate_plan is not None:
        total += rate_plan.monthly_cost
    for feature in features:
        total += feature.monthly_cost
    return total


def _is_valid_quantity(quantity) -> bool:
    return isinstance(quantity, int) and not isinstance(quantity, bool) and quantity >= 1


class LineItemConfigurator:
    """
    Sprawdza wybor uzytkownika (produkt + opcja platnosci + plan + dodatki)
    zanim pozycja trafi do koszyka. Nie ufa wywolujacemu.
    """

    def build(
        self,
        product: Product,
        pricing_option: Optional[PricingOption],
        rate_plan: Optional[RatePlan] = None,
        features: Iterable[Feature] = (),
        quantity: int = 1,
    ) -> CartLineItem:
        if pricing_option is None:
            raise MissingPricingOption("Please select a pricing option")

        if pricing_option.product_id is not None and pricing_option.product_id != product.id:
            raise PricingOptionMismatch(
                f"Pricing option {pricing_option.id} belongs to product {pricing_option.product_id}"
            )
        listed = next((o for o in product.pricing_options if o.id == pricing_option.id), None)
        if listed is None:
            raise PricingOptionMismatch(
                f"Pricing option {pricing_option.id} is not offered for product {product.id}"
            )
        # ceny i warunki musza zgadzac sie z katalogiem
        if listed != pricing_option:
            raise PricingOptionMismatch(
                f"Pricing option {pricing_option.id} does not match the catalog terms of product {product.id}"
            )

        if not _is_valid_quantity(quantity):
            raise InvalidQuantity(f"Quantity must be a positive integer, got {quantity!r}")

        # set semantics, pierwsze wystapienie wygrywa
        unique: Dict[str, Feature] = {}
        for feature in features:
            unique.setdefault(feature.id, feature)

        return CartLineItem(
            id=self._new_id(product, pricing_option, rate_plan),
            product=product,
            selected_pricing_option=pricing_option,
            selected_rate_plan=rate_plan,
            selected_features=tuple(unique.values()),
            quantity=quantity,
        )

    @staticmethod
    def _new_id(product: Product, pricing_option: PricingOption, rate_plan: Optional[RatePlan]) -> str:
        plan = rate_plan.id if rate_plan else "no-plan"
        return f"{product.id}-{pricing_option.id}-{plan}-{uuid.uuid4().hex[:12]}"
