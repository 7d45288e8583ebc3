# contract/seeding.py
import logging

from contract.settings import TIMEOUT

log = logging.getLogger(__name__)

SEED_PROCEDURES = ("reset_and_seed_data", "reset_and_seed_stats_data")


class SeedError(RuntimeError):
    """A fixture procedure failed; the test using it must abort."""
    def __init__(self, procedure: str, status: int | None, body: str):
        self.procedure = procedure
        self.status = status
        self.body = body
        super().__init__(f"{procedure} failed (status={status}): {body}")


class RpcSeeder:
    """Calls the parameterless fixture procedures at POST {rpc_url}/rpc/<name>."""
    def __init__(self, http, rpc_url: str, service_key: str, timeout: float = TIMEOUT):
        self.http = http
        self.rpc_url = rpc_url.rstrip("/")
        self.headers = {
            "Content-Type": "application/json",
            "apikey": service_key,
            "Authorization": f"Bearer {service_key}",
        }
        self.timeout = timeout

    def call(self, name: str) -> None:
        try:
            r = self.http.request("POST", f"{self.rpc_url}/rpc/{name}", json={},
                                  headers=self.headers, timeout=self.timeout)
        except Exception as e:
            log.warning("rpc %s unreachable: %s", name, e)
            raise SeedError(name, None, str(e)) from e
        if r.status_code >= 300:
            log.warning("rpc %s returned %s", name, r.status_code)
            raise SeedError(name, r.status_code, r.text)

    def reset_and_seed(self) -> None:
        """Run every seeding procedure in order; stop at the first failure."""
        for name in SEED_PROCEDURES:
            self.call(name)
