# portal/api/routers/catalog.py
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from requests import RequestException

from portal.api.deps import get_catalog_client
from portal.services.catalog_client import CatalogClient

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/{kind}")
def list_active(
    kind: Literal["products", "rate_plans", "features"],
    catalog: CatalogClient = Depends(get_catalog_client),
):
    try:
        return catalog.list_active(kind)
    except RequestException as e:
        raise HTTPException(status_code=502, detail=f"Catalog unavailable: {e}")
