import logging
import logging.handlers
import json
import os
from typing import Optional

_HANDLER_MARK = "_taskchat_handler"

# JSON-shaped record layout shared by every handler
JSON_FORMAT = json.dumps({
    "timestamp": "%(asctime)s",
    "level": "%(levelname)s",
    "logger": "%(name)s",
    "message": "%(message)s",
}, ensure_ascii=False)


def configure_logging(level: str = "INFO", log_file: Optional[str] = None, max_log_days: int = 7) -> logging.Logger:
    """
    Attach stdout (and optionally daily-rotated file) handlers to the root logger.

    Calling it again only updates the level: handlers are installed once per process
    so that repeated app construction (tests, reloads) does not duplicate output.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if any(getattr(h, _HANDLER_MARK, False) for h in root.handlers):
        return root

    formatter = logging.Formatter(JSON_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    setattr(stream_handler, _HANDLER_MARK, True)
    root.addHandler(stream_handler)

    if log_file:
        # Ensure log directory exists
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.TimedRotatingFileHandler(
            filename=log_file,
            when="midnight",
            interval=1,
            backupCount=max_log_days,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        setattr(file_handler, _HANDLER_MARK, True)
        root.addHandler(file_handler)

    return root
