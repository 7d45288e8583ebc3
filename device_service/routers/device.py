import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from device_service.auth import require_api_key, require_write_key
from device_service.db import get_db
from device_service.models import ApiKey
from device_service.repositories import (
    DeviceNotFound, get_owned_app, list_devices, count_devices, get_device,
    link_device, unlink_device,
)
from device_service.settings import DEVICE_PAGE_SIZE, DEVICE_MAX_PAGE

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="", tags=["device"])


class DeviceLinkRequest(BaseModel):
    app_id: Optional[str] = None
    device_id: Optional[str] = None
    version_id: Optional[str] = None
    channel: Optional[str] = None


class DeviceUnlinkRequest(BaseModel):
    app_id: Optional[str] = None
    device_id: Optional[str] = None


def _check_app_access(db: Session, app_id: Optional[str], key: ApiKey) -> str:
    """400 unless the app exists and belongs to the caller's key owner."""
    app_id = (app_id or "").strip()
    if not app_id:
        raise HTTPException(400, "Missing app_id")
    if get_owned_app(db, app_id, key.user_id) is None:
        log.warning("app access denied: app_id=%s user_id=%s", app_id, key.user_id)
        raise HTTPException(400, f"You can't access this app: {app_id}")
    return app_id


@router.post("/device")
def post_device(
    req: DeviceLinkRequest,
    key: ApiKey = Depends(require_write_key),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """
    Link a device to a channel.

    Request body:
      {"app_id": "com.demo.app", "device_id": "...", "version_id": "1.0.0", "channel": "no_access"}

    The device row is created if needed; its previous channel link is replaced.
    """
    app_id = _check_app_access(db, req.app_id, key)
    if not (req.device_id or "").strip():
        raise HTTPException(400, "Missing device_id")
    if not (req.channel or "").strip():
        raise HTTPException(400, "Missing channel")

    try:
        link_device(db, app_id, req.device_id, req.channel.strip(), owner=key.user_id,
                    version_id=req.version_id)
        db.commit()
    except ValueError as e:
        # ChannelNotFound / VersionNotFound
        db.rollback()
        raise HTTPException(400, str(e))
    except Exception as e:
        db.rollback()
        log.exception("device link failed: app_id=%s device_id=%s", app_id, req.device_id)
        raise HTTPException(500, f"Link failed: {e}")
    return {"status": "ok"}


@router.get("/device")
def get_devices(
    app_id: Optional[str] = Query(None),
    device_id: Optional[str] = Query(None),
    api: Optional[str] = Query(None, description="'v2' returns a bare JSON array for lists"),
    page: int = Query(0, ge=0, le=DEVICE_MAX_PAGE),
    key: ApiKey = Depends(require_api_key),
    db: Session = Depends(get_db),
):
    """
    Without `device_id`: one page of the app's devices.
    With `device_id`: that single device, or 400 if it is unknown.
    """
    app_id = _check_app_access(db, app_id, key)

    if device_id:
        try:
            return get_device(db, app_id, device_id)
        except DeviceNotFound as e:
            raise HTTPException(400, str(e))

    rows = list_devices(db, app_id, page=page, page_size=DEVICE_PAGE_SIZE)
    if api == "v2":
        return rows
    return {"data": rows, "count": count_devices(db, app_id)}


@router.delete("/device")
def delete_device(
    req: DeviceUnlinkRequest,
    key: ApiKey = Depends(require_write_key),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Unlink a device from its channel. Unknown devices still return ok."""
    app_id = _check_app_access(db, req.app_id, key)
    if not (req.device_id or "").strip():
        raise HTTPException(400, "Missing device_id")

    try:
        unlink_device(db, app_id, req.device_id)
        db.commit()
    except Exception as e:
        db.rollback()
        log.exception("device unlink failed: app_id=%s device_id=%s", app_id, req.device_id)
        raise HTTPException(500, f"Unlink failed: {e}")
    return {"status": "ok"}
