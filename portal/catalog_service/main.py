# catalog_service/main.py
from fastapi import FastAPI, HTTPException, Query

app = FastAPI(title="Catalog Service (dev mock)")


PRODUCTS = [
    {
        "id": "p-pixel-9",
        "name": "Pixel 9",
        "category": "phone",
        "is_active": True,
        "specifications": {"storage": "128GB", "color": "Obsidian"},
        "pricing_options": [
            {"id": "pixel-full", "name": "Pay in full", "kind": "full_payment",
             "down_payment": "799.00", "total_cost": "799.00", "product_id": "p-pixel-9"},
            {"id": "pixel-24", "name": "24 months", "kind": "financed", "down_payment": "0.00",
             "monthly_payment": "33.29", "term_months": 24, "total_cost": "798.96",
             "is_default": True, "product_id": "p-pixel-9"},
        ],
    },
    {
        "id": "p-hotspot-5g",
        "name": "5G Hotspot",
        "category": "hotspot",
        "is_active": True,
        "pricing_options": [
            {"id": "hotspot-full", "name": "Pay in full", "kind": "full_payment",
             "down_payment": "199.99", "total_cost": "199.99", "is_default": True,
             "product_id": "p-hotspot-5g"},
        ],
    },
]

RATE_PLANS = [
    {"id": "rp-unlimited", "name": "Unlimited", "monthly_cost": "65.00",
     "data_allowance": "Unlimited", "voice_allowance": "Unlimited", "text_allowance": "Unlimited",
     "is_active": True},
    {"id": "rp-basic", "name": "Basic 5GB", "monthly_cost": "30.00", "data_allowance": "5GB",
     "is_active": True},
]

FEATURES = [
    {"id": "f-insurance", "name": "Device Protection", "monthly_cost": "12.00",
     "feature_type": "insurance", "is_active": True},
    {"id": "f-intl", "name": "International Calling", "monthly_cost": "10.00",
     "feature_type": "addon", "is_active": True},
    {"id": "f-legacy", "name": "Legacy Voicemail", "monthly_cost": "3.00",
     "feature_type": "service", "is_active": False},
]

TABLES = {"products": PRODUCTS, "rate_plans": RATE_PLANS, "features": FEATURES}


@app.get("/{kind}")
def list_records(kind: str, active: bool = Query(False)):
    rows = TABLES.get(kind)
    if rows is None:
        raise HTTPException(status_code=404, detail="Table not found")
    return [r for r in rows if r.get("is_active")] if active else rows
