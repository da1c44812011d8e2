"""Tests for checkout address resolution."""

import pytest

from portal.domain.errors import IncompleteAddress
from portal.domain.schemas import Address, CheckoutForm
from portal.services.address_resolver import resolve_addresses, resolve_form


@pytest.fixture
def blank_e911():
    return Address(type="e911")


class TestResolveAddresses:
    def test_copy_to_e911_only(self, shipping, billing, ppu, blank_e911):
        bundle = resolve_addresses(
            shipping, billing, ppu, blank_e911,
            copy_to_billing=False, copy_to_ppu=False, copy_to_e911=True,
        )

        assert bundle.e911 == shipping.model_copy(update={"type": "e911"})
        assert bundle.billing == billing
        assert bundle.ppu == ppu
        assert bundle.shipping == shipping

    def test_copy_everything(self, shipping):
        bundle = resolve_addresses(
            shipping, Address(type="billing"), Address(type="ppu"), Address(type="e911"),
            copy_to_billing=True, copy_to_ppu=True, copy_to_e911=True,
        )

        for role in ("billing", "ppu", "e911"):
            resolved = getattr(bundle, role)
            assert resolved.type == role
            assert resolved.street_address == "1 Main St"
            assert resolved.zip_code == "62704"

    def test_copy_does_not_alias_shipping(self, shipping, billing, ppu):
        bundle = resolve_addresses(shipping, billing, ppu, Address(type="e911"), copy_to_e911=True)

        assert shipping.type == "shipping"
        assert bundle.e911 is not shipping

    def test_incomplete_shipping(self, billing, ppu):
        shipping = Address(type="shipping", street_address="1 Main St", city="Springfield")

        with pytest.raises(IncompleteAddress) as exc:
            resolve_addresses(shipping, billing, ppu, Address(type="e911"), copy_to_e911=True)

        assert exc.value.role == "shipping"
        assert exc.value.missing == ["state", "zip_code"]

    def test_whitespace_counts_as_missing(self, billing, ppu):
        shipping = Address(type="shipping", street_address="   ", city="Springfield", state="IL", zip_code="62704")

        with pytest.raises(IncompleteAddress):
            resolve_addresses(shipping, billing, ppu, Address(type="e911"), copy_to_e911=True)

    def test_supplied_address_must_be_complete(self, shipping, billing, ppu, blank_e911):
        with pytest.raises(IncompleteAddress) as exc:
            resolve_addresses(shipping, billing, ppu, blank_e911)

        assert exc.value.role == "e911"

    def test_overridden_address_is_not_validated(self, shipping, ppu):
        """A blank billing address is fine when billing is copied from shipping."""
        bundle = resolve_addresses(
            shipping, Address(type="billing"), ppu, Address(type="e911"),
            copy_to_billing=True, copy_to_e911=True,
        )

        assert bundle.billing.city == "Springfield"


class TestCheckoutForm:
    def test_defaults_copy_ppu_and_e911(self, shipping, billing):
        form = CheckoutForm(shipping=shipping, billing=billing)

        bundle = resolve_form(form)

        assert bundle.ppu.street_address == shipping.street_address
        assert bundle.e911.street_address == shipping.street_address
        assert bundle.billing == billing

    def test_shipping_edit_after_toggle_is_reflected(self, shipping, billing):
        form = CheckoutForm(shipping=shipping, billing=billing)
        form.use_shipping_for_billing = True

        form.shipping = Address(
            type="shipping",
            street_address="9 Elm St",
            city="Urbana",
            state="IL",
            zip_code="61801",
        )
        bundle = resolve_form(form)

        assert bundle.billing.street_address == "9 Elm St"
        assert bundle.billing.type == "billing"
        assert bundle.e911.city == "Urbana"

    def test_field_edit_after_toggle_is_reflected(self, shipping, billing):
        form = CheckoutForm(shipping=shipping, billing=billing, use_shipping_for_e911=True)

        form.shipping.zip_code = "62701"

        assert resolve_form(form).e911.zip_code == "62701"
