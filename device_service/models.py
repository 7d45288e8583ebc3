from sqlalchemy import (
    Column, String, Integer, Boolean, Date, DateTime, ForeignKey, UniqueConstraint, func,
)
from .db import Base

# -----------------------------
# ORM models (tables) for the device service
# -----------------------------
class User(Base):
    __tablename__ = "users"
    user_id = Column(String, primary_key=True)
    email   = Column(String, unique=True, index=True, nullable=False)


class ApiKey(Base):
    __tablename__ = "apikeys"
    # Sent raw in the Authorization header
    key     = Column(String, primary_key=True)
    user_id = Column(String, ForeignKey("users.user_id"), nullable=False)
    mode    = Column(String, nullable=False, default="all")   # all/write/read/upload
    name    = Column(String)


class App(Base):
    __tablename__ = "apps"
    app_id = Column(String, primary_key=True)                 # reverse-DNS id, e.g. com.demo.app
    owner  = Column(String, ForeignKey("users.user_id"), nullable=False)
    name   = Column(String)


class AppVersion(Base):
    __tablename__ = "app_versions"
    __table_args__ = (UniqueConstraint("app_id", "name"),)
    id     = Column(Integer, primary_key=True, autoincrement=True)
    app_id = Column(String, ForeignKey("apps.app_id"), nullable=False, index=True)
    name   = Column(String, nullable=False)                   # semver or builtin/unknown


class Channel(Base):
    __tablename__ = "channels"
    __table_args__ = (UniqueConstraint("app_id", "name"),)
    id         = Column(Integer, primary_key=True, autoincrement=True)
    app_id     = Column(String, ForeignKey("apps.app_id"), nullable=False, index=True)
    name       = Column(String, nullable=False)
    version_id = Column(Integer, ForeignKey("app_versions.id"))
    public     = Column(Boolean, default=False)


class Device(Base):
    __tablename__ = "devices"
    app_id         = Column(String, ForeignKey("apps.app_id"), primary_key=True)
    device_id      = Column(String, primary_key=True)         # lower-cased on write
    version        = Column(String)                           # version name
    platform       = Column(String)                           # ios/android/unknown
    os_version     = Column(String)
    plugin_version = Column(String)
    custom_id      = Column(String, default="")
    is_emulator    = Column(Boolean, default=False)
    is_prod        = Column(Boolean, default=True)
    updated_at     = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Device(app_id={self.app_id}, device_id={self.device_id}, version={self.version})>"


class ChannelDevice(Base):
    __tablename__ = "channel_devices"
    # One channel link per device per app
    __table_args__ = (UniqueConstraint("app_id", "device_id"),)
    id         = Column(Integer, primary_key=True, autoincrement=True)
    app_id     = Column(String, ForeignKey("apps.app_id"), nullable=False, index=True)
    device_id  = Column(String, nullable=False)
    channel_id = Column(Integer, ForeignKey("channels.id"), nullable=False)
    owner      = Column(String, ForeignKey("users.user_id"))


class DailyStat(Base):
    __tablename__ = "daily_stats"
    app_id    = Column(String, ForeignKey("apps.app_id"), primary_key=True)
    date      = Column(Date, primary_key=True)
    mau       = Column(Integer, default=0)
    storage   = Column(Integer, default=0)                    # bytes
    bandwidth = Column(Integer, default=0)                    # bytes
    get       = Column(Integer, default=0)                    # update checks served
