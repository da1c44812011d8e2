# portal/services/order_client.py
import requests

from portal.domain.schemas import OrderSubmission
from portal.utils.retry import submit_retry
from portal.utils.settings import ORDER_SERVICE_URL
from portal.utils.logging import get_logger

logger = get_logger(__name__)


class OrderClient:
    def __init__(self, base_url: str | None = None, timeout: int = 5):
        self.base_url = (base_url or ORDER_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    @submit_retry()
    def submit(self, submission: OrderSubmission) -> dict:
        url = f"{self.base_url}/orders"
        logger.info(f"OrderClient POST {url} for user {submission.user_id}")

        resp = requests.post(
            url,
            data=submission.model_dump_json(),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()
