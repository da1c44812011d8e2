# portal/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import requests
import redis

from portal.utils.settings import HTTP_RETRY_ATTEMPTS, REDIS_RETRY_ATTEMPTS


def http_retry(attempts: int = HTTP_RETRY_ATTEMPTS, on=requests.RequestException):
    """Odczyty z katalogu sa idempotentne, ponawiamy kazdy blad requests."""
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(on),
    )


def submit_retry(attempts: int = HTTP_RETRY_ATTEMPTS):
    # zamowienie ponawiamy tylko gdy request nie doszedl do serwera,
    # po timeoucie odczytu albo 5xx moglo juz zostac zapisane
    return http_retry(attempts, on=requests.ConnectionError)


def redis_retry(attempts: int = REDIS_RETRY_ATTEMPTS):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )
