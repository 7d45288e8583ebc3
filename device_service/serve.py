# device_service/serve.py
import uvicorn

from device_service.settings import HOST, PORT, LOG_LEVEL


def main():
    """Entry point for the `device-service` script."""
    uvicorn.run("device_service.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
