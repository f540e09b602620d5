"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)`; this only installs the
stdout handler (Railway / Render capture stdout) and sets the level.
"""
import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if not any(getattr(h, "_wellness", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._wellness = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level.upper())
