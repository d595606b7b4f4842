from fastapi import FastAPI
from rx_companion.api.routes_catalog import router as catalog_router
from rx_companion.api.routes_doses import router as doses_router
from rx_companion.api.routes_guardians import router as guardians_router
from rx_companion.api.routes_medicines import router as medicines_router
from rx_companion.core.logging_config import setup_logging

setup_logging()

app = FastAPI(title="Medicine Companion", version="1.0")

app.include_router(medicines_router)
app.include_router(doses_router)
app.include_router(guardians_router)
app.include_router(catalog_router)

@app.get("/health")
def health():
    return {"ok": True}
@app.get("/")
def root():
    return {"ok": True, "service": "Medicine Companion"}
