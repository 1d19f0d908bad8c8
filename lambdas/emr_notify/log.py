# lambdas/emr_notify/log.py
import logging
import sys

ROOT_LOGGER_NAME = 'emr_notify'
LOG_FORMAT = '[%(asctime)s] %(levelname)s: %(message)s'


def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger under the emr_notify hierarchy.

    The Lambda runtime installs a handler on the root logger. When that is
    missing (local runs, the CLI) a stdout handler is attached instead.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.level == logging.NOTSET:
        root.setLevel(logging.INFO)
    if not root.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    return root.getChild(name.rsplit('.', 1)[-1])


def set_log_level(level: str) -> None:
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level.upper())
