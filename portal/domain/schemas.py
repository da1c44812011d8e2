# portal/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import Any, Dict, List, Literal, Optional, Tuple
from decimal import Decimal
from enum import Enum

Money = Decimal
AddressRole = Literal["shipping", "billing", "ppu", "e911"]


class ProductCategory(str, Enum):
    phone = "phone"
    tablet = "tablet"
    hotspot = "hotspot"
    iot = "iot"


class PricingKind(str, Enum):
    full_payment = "full_payment"
    financed = "financed"


class FeatureType(str, Enum):
    addon = "addon"
    service = "service"
    insurance = "insurance"
    accessory = "accessory"


# ---------------------------------------------------------------------------
# Catalog records (owned by the catalog store, immutable here)
# ---------------------------------------------------------------------------

class PricingOption(BaseModel):
    """Jedna opcja platnosci produktu (gotowka albo raty)."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    kind: PricingKind
    down_payment: Money = Field(..., ge=0)
    monthly_payment: Optional[Money] = Field(None, ge=0)
    term_months: Optional[int] = Field(None, gt=0)
    total_cost: Money = Field(..., ge=0)
    is_default: bool = False
    product_id: Optional[str] = None

    @model_validator(mode="after")
    def _financed_needs_monthly(self):
        if self.kind == PricingKind.financed and self.monthly_payment is None:
            raise ValueError("financed pricing option requires monthly_payment")
        return self


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    description: str = ""
    category: ProductCategory
    pricing_options: Tuple[PricingOption, ...] = ()
    specifications: Dict[str, Any] = Field(default_factory=dict)
    image_url: Optional[str] = None
    is_active: bool = True


class RatePlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    description: Optional[str] = None
    monthly_cost: Money = Field(..., ge=0)
    data_allowance: Optional[str] = None
    voice_allowance: Optional[str] = None
    text_allowance: Optional[str] = None
    is_active: bool = True


class Feature(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    description: Optional[str] = None
    monthly_cost: Money = Field(..., ge=0)
    feature_type: FeatureType = FeatureType.addon
    is_active: bool = True


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------

class CartLineItem(BaseModel):
    """
    Pozycja koszyka. Produkt, opcja platnosci, plan i dodatki sa osadzone
    jako kopia z chwili dodania - pozniejsze zmiany w katalogu nie zmieniaja
    cen pozycji ktore juz sa w koszyku.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    product: Product
    selected_pricing_option: PricingOption
    selected_rate_plan: Optional[RatePlan] = None
    selected_features: Tuple[Feature, ...] = ()
    quantity: int = Field(1, ge=1)


class Cart(BaseModel):
    """Snapshot koszyka, liczony od nowa przy kazdym odczycie."""

    model_config = ConfigDict(frozen=True)

    items: List[CartLineItem]
    subtotal: Money
    taxes: Money
    fees: Money
    total_due_now: Money
    total_monthly_charges: Money
    item_count: int


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------

class Address(BaseModel):
    type: AddressRole
    street_address: str = ""
    street_address_2: Optional[str] = None
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = "US"


class AddressBundle(BaseModel):
    shipping: Address
    billing: Address
    ppu: Address
    e911: Address


class CustomerInfo(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""


class Identity(BaseModel):
    user_id: str
    role: Literal["customer", "admin"] = "customer"


class CheckoutForm(BaseModel):
    """
    Stan formularza checkout. Flagi "uzyj adresu wysylki" sa tylko zapisane,
    kopiowanie dzieje sie dopiero przy resolve (late binding).
    """

    shipping: Address = Field(default_factory=lambda: Address(type="shipping"))
    billing: Address = Field(default_factory=lambda: Address(type="billing"))
    ppu: Address = Field(default_factory=lambda: Address(type="ppu"))
    e911: Address = Field(default_factory=lambda: Address(type="e911"))
    use_shipping_for_billing: bool = False
    use_shipping_for_ppu: bool = True
    use_shipping_for_e911: bool = True


class CheckoutIn(BaseModel):
    """Schema dla zlozenia zamowienia."""

    addresses: CheckoutForm = Field(default_factory=CheckoutForm)
    customer_info: CustomerInfo
    special_instructions: Optional[str] = None


class OrderSubmission(BaseModel):
    """Payload przekazywany do zewnetrznego serwisu zamowien."""

    cart: Cart
    addresses: AddressBundle
    customer_info: CustomerInfo
    user_id: str
    special_instructions: Optional[str] = None


class OrderReceipt(BaseModel):
    order_id: str
    status: str
    total_due_now: Money
    total_monthly_charges: Money


# ---------------------------------------------------------------------------
# HTTP in/out
# ---------------------------------------------------------------------------

class LineItemIn(BaseModel):
    """Schema dla dodawania skonfigurowanego produktu do koszyka."""

    product_id: str = Field(..., min_length=1)
    pricing_option_id: Optional[str] = None
    rate_plan_id: Optional[str] = None
    feature_ids: List[str] = Field(default_factory=list)
    quantity: int = 1


class QuantityIn(BaseModel):
    quantity: int


class LineItemOut(BaseModel):
    id: str
    product_id: str
    product_name: str
    pricing_option: str
    rate_plan: Optional[str] = None
    features: List[str]
    quantity: int
    due_now: Money
    monthly: Money


class CartOut(BaseModel):
    items: List[LineItemOut]
    item_count: int
    subtotal: Money
    taxes: Money
    fees: Money
    total_due_now: Money
    total_monthly_charges: Money
