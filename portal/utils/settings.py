# portal/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./portal.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", REDIS_URL)
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")
CATALOG_SERVICE_URL = os.getenv("CATALOG_SERVICE_URL", "http://catalog-service:8000")
ORDER_SERVICE_URL = os.getenv("ORDER_SERVICE_URL", "http://order-service:8000")
# sql | redis | memory
CART_STORE_BACKEND = os.getenv("CART_STORE_BACKEND", "sql")
CART_SLOT_TTL_SECONDS = int(os.getenv("CART_SLOT_TTL_SECONDS", 30*24*60*60))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CART_REGISTRY_MAX_SESSIONS = int(os.getenv("CART_REGISTRY_MAX_SESSIONS", 1000))

HTTP_RETRY_ATTEMPTS = int(os.getenv("HTTP_RETRY_ATTEMPTS", 3))
REDIS_RETRY_ATTEMPTS = int(os.getenv("REDIS_RETRY_ATTEMPTS", 3))
