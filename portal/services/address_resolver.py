# portal/services/address_resolver.py
from portal.domain.errors import IncompleteAddress
from portal.domain.schemas import Address, AddressBundle, CheckoutForm

REQUIRED_FIELDS = ("street_address", "city", "state", "zip_code")


def _copy_as(source: Address, role: str) -> Address:
    return source.model_copy(update={"type": role})


def _require_complete(address: Address, role: str) -> None:
    missing = [f for f in REQUIRED_FIELDS if not (getattr(address, f) or "").strip()]
    if missing:
        raise IncompleteAddress(role, missing)


def resolve_addresses(
    shipping: Address,
    billing: Address,
    ppu: Address,
    e911: Address,
    copy_to_billing: bool = False,
    copy_to_ppu: bool = False,
    copy_to_e911: bool = False,
) -> AddressBundle:
    """
    Build the four-address bundle for an order.

    Every flagged role becomes a copy of ``shipping`` with only its ``type``
    changed. The copy is taken here, at call time, so edits to the shipping
    address made after a flag was toggled are reflected. Only the addresses
    that end up in the bundle are checked for required fields.
    """
    bundle = AddressBundle(
        shipping=_copy_as(shipping, "shipping"),
        billing=_copy_as(shipping, "billing") if copy_to_billing else _copy_as(billing, "billing"),
        ppu=_copy_as(shipping, "ppu") if copy_to_ppu else _copy_as(ppu, "ppu"),
        e911=_copy_as(shipping, "e911") if copy_to_e911 else _copy_as(e911, "e911"),
    )

    for role in ("shipping", "billing", "ppu", "e911"):
        _require_complete(getattr(bundle, role), role)

    return bundle


def resolve_form(form: CheckoutForm) -> AddressBundle:
    return resolve_addresses(
        form.shipping,
        form.billing,
        form.ppu,
        form.e911,
        copy_to_billing=form.use_shipping_for_billing,
        copy_to_ppu=form.use_shipping_for_ppu,
        copy_to_e911=form.use_shipping_for_e911,
    )
