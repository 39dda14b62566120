"""
Root logger setup shared by the store server and its clients.

The server calls :func:`setup_logging` from ``create_app`` with
``settings.log_level`` (``LOG_LEVEL``) and ``settings.log_file``
(``LOG_FILE``), so product and bill mutations are logged at INFO.  The
storefront and product-admin consoles call it at WARNING: their
output is the console itself, and only the offline fallback and failed
stock syncs should reach stderr.

The first call wins.  Later calls, including those made when tests
build several applications in one process, leave the existing handlers
alone.
"""

import logging
from pathlib import Path
from typing import List, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach a stderr handler, plus a file handler when ``logfile`` is set.

    ``level`` is a level name such as ``"INFO"`` or ``"warning"``; an
    unknown name means INFO.  The directory holding ``logfile`` is
    created if it does not exist yet.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
