from datetime import date

from device_service.models import App, ApiKey, Channel, Device, ChannelDevice, DailyStat
from device_service.seed import (
    reset_and_seed_data, reset_and_seed_stats_data, STATS_DAYS, SEEDED_DEVICE_ID,
)


def test_seed_baseline(db_session):
    reset_and_seed_data(db_session)
    assert {a.app_id for a in db_session.query(App).all()} == {"com.demo.app", "com.private.app"}
    assert {c.name for c in db_session.query(Channel).filter_by(app_id="com.demo.app")} == {
        "production", "no_access", "two_default",
    }
    assert db_session.get(ApiKey, "ae6e7458-c46d-4c00-aa3b-153b0b8520ea").mode == "all"
    assert db_session.get(Device, ("com.demo.app", SEEDED_DEVICE_ID)) is not None


def test_seed_wipes_previous_state(db_session):
    reset_and_seed_data(db_session)
    db_session.add(Device(app_id="com.demo.app", device_id="leftover"))
    db_session.add(ChannelDevice(app_id="com.demo.app", device_id="leftover", channel_id=1))
    db_session.commit()

    reset_and_seed_data(db_session)
    assert db_session.get(Device, ("com.demo.app", "leftover")) is None
    assert db_session.query(ChannelDevice).count() == 0
    assert db_session.query(Device).count() == 1


def test_stats_seed_is_deterministic(db_session):
    reset_and_seed_data(db_session)
    today = date(2024, 5, 1)
    reset_and_seed_stats_data(db_session, today=today)
    first = [(s.app_id, s.date, s.mau, s.get) for s in db_session.query(DailyStat).order_by(DailyStat.app_id, DailyStat.date)]

    reset_and_seed_stats_data(db_session, today=today)
    second = [(s.app_id, s.date, s.mau, s.get) for s in db_session.query(DailyStat).order_by(DailyStat.app_id, DailyStat.date)]

    assert first == second
    assert len(first) == 2 * STATS_DAYS
    assert max(d for _, d, _, _ in first) == today


def test_rpc_requires_service_key(client, seed_sample):
    r = client.post("/rpc/reset_and_seed_data")
    assert r.status_code == 401
    r = client.post("/rpc/reset_and_seed_data", headers={"apikey": "wrong"})
    assert r.status_code == 401


def test_rpc_runs_procedure(client, db_session):
    from device_service.settings import SERVICE_KEY
    r = client.post("/rpc/reset_and_seed_data", headers={"Authorization": f"Bearer {SERVICE_KEY}"})
    assert r.status_code == 200
    assert r.json() is None
    assert db_session.query(App).count() == 2


def test_rpc_unknown_procedure(client):
    from device_service.settings import SERVICE_KEY
    r = client.post("/rpc/drop_everything", headers={"apikey": SERVICE_KEY})
    assert r.status_code == 404
