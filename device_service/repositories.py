import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete, func
from sqlalchemy.orm import Session

from device_service.models import App, AppVersion, Channel, ChannelDevice, Device

log = logging.getLogger(__name__)


class DeviceNotFound(ValueError):
    pass


class ChannelNotFound(ValueError):
    pass


class VersionNotFound(ValueError):
    pass


def norm_device_id(device_id: Optional[str]) -> str:
    """Device ids are compared trimmed and lower-case."""
    return (device_id or "").strip().lower()


def get_owned_app(db: Session, app_id: str, user_id: str) -> Optional[App]:
    """Return the app only if it exists and belongs to `user_id`."""
    return db.execute(
        select(App).where(App.app_id == app_id, App.owner == user_id)
    ).scalar_one_or_none()


def _channel_names(db: Session, app_id: str, device_ids: List[str]) -> Dict[str, str]:
    """Map device_id -> linked channel name for the given devices."""
    if not device_ids:
        return {}
    rows = db.execute(
        select(ChannelDevice.device_id, Channel.name)
        .join(Channel, Channel.id == ChannelDevice.channel_id)
        .where(ChannelDevice.app_id == app_id, ChannelDevice.device_id.in_(device_ids))
    ).all()
    return {did: name for did, name in rows}


def device_to_dict(d: Device, channel: Optional[str]) -> Dict[str, Any]:
    return {
        "app_id": d.app_id,
        "device_id": d.device_id,
        "version": d.version,
        "platform": d.platform,
        "os_version": d.os_version,
        "plugin_version": d.plugin_version,
        "custom_id": d.custom_id,
        "is_emulator": d.is_emulator,
        "is_prod": d.is_prod,
        "updated_at": d.updated_at,
        "channel": channel,
    }


def list_devices(db: Session, app_id: str, page: int, page_size: int) -> List[Dict[str, Any]]:
    """One page of devices for an app, most recently updated first."""
    rows = db.execute(
        select(Device)
        .where(Device.app_id == app_id)
        .order_by(Device.updated_at.desc(), Device.device_id)
        .offset(page * page_size)
        .limit(page_size)
    ).scalars().all()
    channels = _channel_names(db, app_id, [d.device_id for d in rows])
    return [device_to_dict(d, channels.get(d.device_id)) for d in rows]


def count_devices(db: Session, app_id: str) -> int:
    return db.execute(
        select(func.count()).select_from(Device).where(Device.app_id == app_id)
    ).scalar_one()


def get_device(db: Session, app_id: str, device_id: str) -> Dict[str, Any]:
    did = norm_device_id(device_id)
    d = db.get(Device, (app_id, did))
    if d is None:
        raise DeviceNotFound(f"Cannot find device {did}")
    return device_to_dict(d, _channel_names(db, app_id, [did]).get(did))


def link_device(
    db: Session,
    app_id: str,
    device_id: str,
    channel: str,
    owner: str,
    version_id: Optional[str] = None,
) -> None:
    """
    Upsert the device row and point its single channel link at `channel`.
    Caller commits.
    """
    did = norm_device_id(device_id)

    ch = db.execute(
        select(Channel).where(Channel.app_id == app_id, Channel.name == channel)
    ).scalar_one_or_none()
    if ch is None:
        raise ChannelNotFound(f"Cannot find channel {channel}")

    if version_id:
        v = db.execute(
            select(AppVersion).where(AppVersion.app_id == app_id, AppVersion.name == version_id)
        ).scalar_one_or_none()
        if v is None:
            raise VersionNotFound(f"Cannot find version {version_id}")

    now = datetime.now(timezone.utc)
    row = db.get(Device, (app_id, did))
    if row is None:
        row = Device(app_id=app_id, device_id=did, platform="unknown", version="unknown")
        db.add(row)
    if version_id:
        row.version = version_id
    row.updated_at = now

    link = db.execute(
        select(ChannelDevice).where(ChannelDevice.app_id == app_id, ChannelDevice.device_id == did)
    ).scalar_one_or_none()
    if link is None:
        link = ChannelDevice(app_id=app_id, device_id=did)
        db.add(link)
    link.channel_id = ch.id
    link.owner = owner
    log.info("linked device app_id=%s device_id=%s channel=%s", app_id, did, channel)


def unlink_device(db: Session, app_id: str, device_id: str) -> int:
    """
    Remove the channel link of a device. Unknown devices are a no-op.
    Returns the number of links removed. Caller commits.
    """
    did = norm_device_id(device_id)
    res = db.execute(
        delete(ChannelDevice).where(ChannelDevice.app_id == app_id, ChannelDevice.device_id == did)
    )
    log.info("unlinked device app_id=%s device_id=%s removed=%d", app_id, did, res.rowcount)
    return res.rowcount
