import json
import logging
import os
import sys
import time
from typing import Any, Dict, Optional

TEXT_FORMAT = "%(message)s"
DEBUG_TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        # Optional structured fields
        for k in ("op", "iface", "cmd", "rc"):
            if hasattr(record, k):
                payload[k] = getattr(record, k)

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, separators=(",", ":"))


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    lvl = (level or os.environ.get("WFC_HOTSPOT_LOG_LEVEL") or "INFO").upper()
    style = (fmt or os.environ.get("WFC_HOTSPOT_LOG_FORMAT") or "text").lower()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, lvl, logging.INFO))

    handler = logging.StreamHandler(stream=sys.stdout)
    if style == "json":
        handler.setFormatter(JsonFormatter())
    elif root.level <= logging.DEBUG:
        handler.setFormatter(logging.Formatter(DEBUG_TEXT_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)
