# portal/services/catalog_client.py
import requests

from portal.domain.errors import MalformedCatalogRecord
from portal.services.configurator import CATALOG_SCHEMAS, parse_catalog_record
from portal.utils.retry import http_retry
from portal.utils.settings import CATALOG_SERVICE_URL
from portal.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogClient:
    """
    Odczyt katalogu (produkty, plany, dodatki) z hostowanego backendu.
    Rekordy sa walidowane na granicy, zle rekordy nie wchodza dalej.
    """

    def __init__(self, base_url: str | None = None, timeout: int = 2):
        self.base_url = (base_url or CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @http_retry()
    def _fetch(self, kind: str) -> list:
        url = f"{self.base_url}/{kind}"
        logger.info(f"CatalogClient GET {url}")

        resp = requests.get(url, params={"active": "true"}, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def list_active(self, kind: str) -> list:
        if kind not in CATALOG_SCHEMAS:
            raise MalformedCatalogRecord(f"Unknown catalog kind: {kind}")

        records = []
        for raw in self._fetch(kind) or []:
            try:
                record = parse_catalog_record(kind, raw)
            except MalformedCatalogRecord as e:
                logger.warning(f"Pomijam rekord katalogu ({kind}): {e}")
                continue
            if record.is_active:
                records.append(record)
        return records

    def find(self, kind: str, record_id: str):
        return next((r for r in self.list_active(kind) if r.id == record_id), None)
