import logging

from chat_client.config import settings

_ROOT = "chat_client"
_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"

_root_logger = logging.getLogger(_ROOT)
_root_logger.setLevel(settings.LOG_LEVEL)

# Avoid stacking handlers when the module is reloaded (uvicorn --reload, tests).
if not _root_logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    _root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{_ROOT}.{name}")
