# device_service/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./devices.sqlite3")

# Key required by the /rpc seeding procedures
SERVICE_KEY = os.getenv("SERVICE_KEY", "local-service-key")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEVICE_PAGE_SIZE = int(os.getenv("DEVICE_PAGE_SIZE", "50"))
# Highest accepted ?page=; keeps page * size inside a 64-bit OFFSET
DEVICE_MAX_PAGE = int(os.getenv("DEVICE_MAX_PAGE", "100000"))

# `device-service` entry point
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))
