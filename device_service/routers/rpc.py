import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from device_service.auth import require_service_key
from device_service.db import get_db
from device_service.seed import PROCEDURES

log = logging.getLogger(__name__)

router = APIRouter(prefix="/rpc", tags=["rpc"], dependencies=[Depends(require_service_key)])


@router.post("/{name}")
def call_procedure(name: str, db: Session = Depends(get_db)):
    """
    Run a named fixture procedure (no parameters).
    Returns JSON null on success, 404 for unknown names.
    """
    proc = PROCEDURES.get(name)
    if proc is None:
        raise HTTPException(404, f"Unknown procedure: {name}")
    try:
        proc(db)
    except Exception as e:
        db.rollback()
        log.exception("procedure %s failed", name)
        raise HTTPException(500, f"{name} failed: {e}")
    return None
