# portal/domain/errors.py


class CartValidationError(ValueError):
    """Raised synchronously to the caller; never corrected silently."""


class MissingPricingOption(CartValidationError):
    pass


class PricingOptionMismatch(CartValidationError):
    pass


class InvalidQuantity(CartValidationError):
    pass


class DuplicateLineItem(CartValidationError):
    pass


class IncompleteAddress(CartValidationError):
    def __init__(self, role: str, missing: list[str]):
        self.role = role
        self.missing = missing
        super().__init__(f"Address '{role}' is missing: {', '.join(missing)}")


class IncompleteCustomerInfo(CartValidationError):
    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Customer info is missing: {', '.join(missing)}")


class EmptyCart(CartValidationError):
    pass


class MalformedCatalogRecord(CartValidationError):
    pass


class PersistenceError(RuntimeError):
    """Slot store read/write failure. Recovered inside the cart aggregator."""
