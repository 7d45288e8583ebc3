import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from device_service.db import get_db
from device_service.models import ApiKey
from device_service.settings import SERVICE_KEY

log = logging.getLogger(__name__)

WRITE_MODES = {"all", "write", "upload"}


def _bearer(value: Optional[str]) -> str:
    v = (value or "").strip()
    if v.lower().startswith("bearer "):
        v = v[7:].strip()
    return v


def require_api_key(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> ApiKey:
    """Resolve the raw key in `Authorization` to its ApiKey row, or 401."""
    key = _bearer(authorization)
    if not key:
        raise HTTPException(401, "Missing API key")
    row = db.get(ApiKey, key)
    if row is None:
        log.warning("rejected unknown api key")
        raise HTTPException(401, "Invalid API key")
    return row


def require_write_key(key: ApiKey = Depends(require_api_key)) -> ApiKey:
    if key.mode not in WRITE_MODES:
        log.warning("rejected %s-mode key for write", key.mode)
        raise HTTPException(401, "API key does not allow writes")
    return key


def require_service_key(
    apikey: Optional[str] = Header(None),
    authorization: Optional[str] = Header(None),
) -> None:
    """Guard for /rpc: accept the service key in either `apikey` or a Bearer token."""
    if not SERVICE_KEY or SERVICE_KEY not in (_bearer(apikey), _bearer(authorization)):
        raise HTTPException(401, "Invalid service key")
