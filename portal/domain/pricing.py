# portal/domain/pricing.py
from decimal import Decimal

# flat rate, single jurisdiction
TAX_RATE = Decimal("0.08")
# processing fee, charged once per cart
PROCESSING_FEE = Decimal("2.99")
ZERO = Decimal("0")
