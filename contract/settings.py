# contract/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

# Server under test. Unset -> tests run against device_service in-process.
BASE_URL = os.getenv("CONTRACT_BASE_URL", "").rstrip("/")

# Where the fixture procedures live (POST {RPC_URL}/rpc/<name>)
RPC_URL = os.getenv("CONTRACT_RPC_URL", BASE_URL).rstrip("/")
SERVICE_KEY = os.getenv("CONTRACT_SERVICE_KEY", "local-service-key")

# Fixed Authorization value sent with every /device request
API_KEY = os.getenv("CONTRACT_API_KEY", "ae6e7458-c46d-4c00-aa3b-153b0b8520ea")

TIMEOUT = float(os.getenv("CONTRACT_TIMEOUT", "30"))
