"""Shared pytest fixtures for the portal tests."""

from decimal import Decimal

import pytest

from portal.domain.schemas import Address, Feature, PricingOption, Product, RatePlan
from portal.repos.cart_repo import InMemorySlotStore
from portal.services.cart_aggregator import CartAggregator
from portal.services.configurator import LineItemConfigurator


@pytest.fixture
def financed_option():
    return PricingOption(
        id="po-financed",
        name="24 months",
        kind="financed",
        down_payment=Decimal("100"),
        monthly_payment=Decimal("20"),
        term_months=24,
        total_cost=Decimal("580"),
        is_default=True,
        product_id="p1",
    )


@pytest.fixture
def full_option():
    return PricingOption(
        id="po-full",
        name="Pay in full",
        kind="full_payment",
        down_payment=Decimal("549.99"),
        total_cost=Decimal("549.99"),
        product_id="p1",
    )


@pytest.fixture
def phone(financed_option, full_option):
    return Product(
        id="p1",
        name="Test Phone",
        category="phone",
        pricing_options=(full_option, financed_option),
        specifications={"storage": "128GB"},
    )


@pytest.fixture
def tablet():
    return Product(
        id="p2",
        name="Test Tablet",
        category="tablet",
        pricing_options=(
            PricingOption(
                id="po-tablet",
                name="Pay in full",
                kind="full_payment",
                down_payment=Decimal("0.10"),
                total_cost=Decimal("0.10"),
                product_id="p2",
            ),
        ),
    )


@pytest.fixture
def rate_plan():
    return RatePlan(id="rp1", name="Unlimited", monthly_cost=Decimal("65.00"))


@pytest.fixture
def feature_f1():
    return Feature(id="f1", name="Device Protection", monthly_cost=Decimal("10"), feature_type="insurance")


@pytest.fixture
def feature_f2():
    return Feature(id="f2", name="Hotspot Add-on", monthly_cost=Decimal("5.50"), feature_type="addon")


@pytest.fixture
def configurator():
    return LineItemConfigurator()


@pytest.fixture
def store():
    return InMemorySlotStore(namespace="session-1")


@pytest.fixture
def cart(store):
    return CartAggregator(store)


@pytest.fixture
def shipping():
    return Address(
        type="shipping",
        street_address="1 Main St",
        city="Springfield",
        state="IL",
        zip_code="62704",
        country="US",
    )


@pytest.fixture
def billing():
    return Address(
        type="billing",
        street_address="500 Billing Ave",
        city="Chicago",
        state="IL",
        zip_code="60601",
    )


@pytest.fixture
def ppu():
    return Address(
        type="ppu",
        street_address="42 Office Park",
        city="Peoria",
        state="IL",
        zip_code="61602",
    )
