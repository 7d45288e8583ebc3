# contract/api.py
from typing import Any, Dict, Optional

from contract.settings import TIMEOUT


class DeviceApi:
    """
    Thin client for the /device endpoint.

    `http` is anything with a requests-style `request()`: a requests.Session
    against a live server, or FastAPI's TestClient in-process.
    Responses are returned as-is so callers can assert on status codes.
    """
    def __init__(self, http, base_url: str, api_key: str, timeout: float = TIMEOUT):
        self.http = http
        self.url = f"{base_url.rstrip('/')}/device"
        self.headers = {"Content-Type": "application/json", "Authorization": api_key}
        self.timeout = timeout

    def _send(self, method: str, params: Optional[Dict[str, Any]] = None,
              body: Optional[Dict[str, Any]] = None):
        return self.http.request(method, self.url, params=params, json=body,
                                 headers=self.headers, timeout=self.timeout)

    def link(self, app_id: str, device_id: str, version_id: str | None = None,
             channel: str | None = None):
        body = {"app_id": app_id, "device_id": device_id}
        if version_id is not None: body["version_id"] = version_id
        if channel is not None: body["channel"] = channel
        return self._send("POST", body=body)

    def list(self, app_id: str, v2: bool = True, **extra):
        params = {"app_id": app_id, **extra}
        if v2: params["api"] = "v2"
        return self._send("GET", params=params)

    def get(self, app_id: str, device_id: str, v2: bool = True):
        params = {"app_id": app_id, "device_id": device_id}
        if v2: params["api"] = "v2"
        return self._send("GET", params=params)

    def unlink(self, app_id: str, device_id: str):
        return self._send("DELETE", body={"device_id": device_id, "app_id": app_id})
