# portal/api/__init__.py
from fastapi import FastAPI
from portal.api.routers import carts, catalog, checkout, health

def create_app():
    app = FastAPI(title="Reseller Portal", version="1.0.0")
    app.include_router(health.router)
    app.include_router(catalog.router)
    app.include_router(carts.router)
    app.include_router(checkout.router)
    return app
