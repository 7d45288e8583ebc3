import logging, sys

from device_service.settings import LOG_LEVEL

# Third-party loggers and the level they run at regardless of LOG_LEVEL
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,   # SQL echo only when asked for
    "uvicorn.access": logging.WARNING,      # per-request lines duplicate our warnings
}

def setup_logging(level: str = LOG_LEVEL):
    """Install a single stdout handler on the root logger for the service."""
    root = logging.getLogger()
    if root.handlers:  # already configured (reload / second import)
        return
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s :: %(message)s"))
    root.addHandler(h)

    for name, lvl in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(lvl)
    # uvicorn installs its own handlers; route through ours instead
    for name in ("uvicorn", "uvicorn.error"):
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True
