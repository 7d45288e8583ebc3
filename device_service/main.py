import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .db import engine, Base
from .routers.device import router as device_router
from .routers.rpc import router as rpc_router
from device_service.setup_logging import setup_logging

# --------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------
setup_logging() # Init Logging
log = logging.getLogger(__name__)

# Create database tables if they don’t exist.
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Device channel service")


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    # Malformed body/query -> 400
    log.warning("invalid request %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": "Invalid request"})

# --------------------------------------------------------------------
# Routes
# --------------------------------------------------------------------
@app.get("/healthz")
def health():
    """Simple health probe for monitoring."""
    return {"ok": True, "service": "device", "version": 1}

# Register API routers:
app.include_router(device_router)
app.include_router(rpc_router)
