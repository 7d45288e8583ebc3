"""
Fixture procedures exposed through POST /rpc/{name}.

Both procedures wipe what they own and re-insert a fixed baseline, so calling
them repeatedly always leaves the database in the same state.
"""
import logging
import random
from datetime import date, datetime, timedelta, timezone

from sqlalchemy import delete
from sqlalchemy.orm import Session

from device_service.models import (
    User, ApiKey, App, AppVersion, Channel, Device, ChannelDevice, DailyStat,
)

log = logging.getLogger(__name__)

DEMO_USER_ID = "6aa76066-55ef-4238-ade6-0b32334a4097"
OTHER_USER_ID = "c591b04e-cf29-4945-b9a0-776d0672061e"

ALL_KEY = "ae6e7458-c46d-4c00-aa3b-153b0b8520ea"
READ_KEY = "c591b04e-cf29-4945-b9a0-776d0672061a"
OTHER_KEY = "67eeaff4-ae4c-49a6-8eb1-0875f5369de0"

DEMO_APP_ID = "com.demo.app"
PRIVATE_APP_ID = "com.private.app"
SEEDED_DEVICE_ID = "00000000-0000-0000-0000-000000000000"

DEMO_VERSIONS = ["builtin", "unknown", "1.0.0", "1.0.1", "1.359.0"]
STATS_DAYS = 30


def _clear_all(db: Session):
    # child → parent order
    for model in (DailyStat, ChannelDevice, Device, Channel, AppVersion, App, ApiKey, User):
        db.execute(delete(model))


def reset_and_seed_data(db: Session) -> None:
    """Wipe every table and insert the baseline users, keys, apps, channels and device."""
    _clear_all(db)

    db.add_all([
        User(user_id=DEMO_USER_ID, email="demo@example.com"),
        User(user_id=OTHER_USER_ID, email="other@example.com"),
    ])
    db.flush()

    db.add_all([
        ApiKey(key=ALL_KEY, user_id=DEMO_USER_ID, mode="all", name="demo all"),
        ApiKey(key=READ_KEY, user_id=DEMO_USER_ID, mode="read", name="demo read"),
        ApiKey(key=OTHER_KEY, user_id=OTHER_USER_ID, mode="all", name="other all"),
        App(app_id=DEMO_APP_ID, owner=DEMO_USER_ID, name="Demo app"),
        App(app_id=PRIVATE_APP_ID, owner=OTHER_USER_ID, name="Private app"),
    ])
    db.flush()

    versions = {name: AppVersion(app_id=DEMO_APP_ID, name=name) for name in DEMO_VERSIONS}
    db.add_all(versions.values())
    db.add(AppVersion(app_id=PRIVATE_APP_ID, name="1.0.0"))
    db.flush()

    db.add_all([
        Channel(app_id=DEMO_APP_ID, name="production", version_id=versions["1.0.0"].id, public=True),
        Channel(app_id=DEMO_APP_ID, name="no_access", version_id=versions["1.359.0"].id, public=False),
        Channel(app_id=DEMO_APP_ID, name="two_default", version_id=versions["1.0.0"].id, public=False),
    ])

    db.add(Device(
        app_id=DEMO_APP_ID,
        device_id=SEEDED_DEVICE_ID,
        version="1.0.0",
        platform="android",
        os_version="9",
        plugin_version="4.15.3",
        custom_id="",
        is_emulator=True,
        is_prod=True,
        updated_at=datetime(2023, 1, 29, 8, 9, 32, tzinfo=timezone.utc),
    ))
    db.commit()
    log.info("seeded baseline data: apps=%s", [DEMO_APP_ID, PRIVATE_APP_ID])


def reset_and_seed_stats_data(db: Session, today: date | None = None) -> None:
    """Replace daily statistics with STATS_DAYS days of deterministic numbers per app."""
    db.execute(delete(DailyStat))
    today = today or date.today()

    app_ids = [a for (a,) in db.query(App.app_id).order_by(App.app_id).all()]
    for app_id in app_ids:
        rng = random.Random(app_id)  # same numbers on every reseed
        for i in range(STATS_DAYS):
            db.add(DailyStat(
                app_id=app_id,
                date=today - timedelta(days=STATS_DAYS - 1 - i),
                mau=rng.randint(1, 1000),
                storage=rng.randint(0, 10**9),
                bandwidth=rng.randint(0, 10**9),
                get=rng.randint(0, 5000),
            ))
    db.commit()
    log.info("seeded stats data: apps=%d days=%d", len(app_ids), STATS_DAYS)


# Procedures callable by name over /rpc
PROCEDURES = {
    "reset_and_seed_data": reset_and_seed_data,
    "reset_and_seed_stats_data": reset_and_seed_stats_data,
}
