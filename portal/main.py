# portal/main.py
from portal.api import create_app
from portal.data.database import Base, engine
from portal.utils.settings import CART_STORE_BACKEND
from portal.utils.logging import get_logger
import uvicorn

# import modeli przed create_all
from portal.data.models import CartSlotModel  # noqa: F401

logger = get_logger(__name__)

if CART_STORE_BACKEND == "sql":
    try:
        Base.metadata.create_all(bind=engine)
        logger.info(f"Tabele gotowe: {list(Base.metadata.tables.keys())}")
    except Exception as e:
        logger.error(f"Nie udalo sie utworzyc tabel: {e}")
        raise

app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
