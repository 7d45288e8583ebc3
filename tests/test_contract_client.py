import pytest

from contract import RpcSeeder, SeedError, SEED_PROCEDURES


class _Boom:
    def request(self, *a, **kw):
        raise ConnectionError("connection refused")


class _Recorder:
    """Records calls and answers with a fixed status."""
    def __init__(self, status=200):
        self.calls = []
        self.status = status

    def request(self, method, url, **kw):
        self.calls.append((method, url, kw.get("headers")))
        status = self.status
        return type("R", (), {"status_code": status, "text": "null"})()


def test_seeder_calls_both_procedures_in_order():
    http = _Recorder()
    RpcSeeder(http, "http://db.local/", "svc").reset_and_seed()
    assert [u for _, u, _ in http.calls] == [f"http://db.local/rpc/{n}" for n in SEED_PROCEDURES]
    assert all(m == "POST" for m, _, _ in http.calls)
    assert http.calls[0][2]["Authorization"] == "Bearer svc"


def test_seeder_stops_at_first_failure():
    http = _Recorder(status=500)
    with pytest.raises(SeedError) as ei:
        RpcSeeder(http, "http://db.local", "svc").reset_and_seed()
    assert ei.value.procedure == "reset_and_seed_data"
    assert ei.value.status == 500
    assert len(http.calls) == 1


def test_seeder_transport_error():
    with pytest.raises(SeedError) as ei:
        RpcSeeder(_Boom(), "http://db.local", "svc").call("reset_and_seed_data")
    assert ei.value.status is None
    assert "connection refused" in str(ei.value)


def test_seeder_wrong_key_against_service(client):
    with pytest.raises(SeedError) as ei:
        RpcSeeder(client, "http://testserver", "wrong").reset_and_seed()
    assert ei.value.status == 401


def test_device_api_sends_fixed_headers(device_api):
    assert device_api.headers["Content-Type"] == "application/json"
    assert device_api.headers["Authorization"]
    assert device_api.url.endswith("/device")
