import logging

from flowcheck.core.config import settings

logger = logging.getLogger("flowcheck")
logger.setLevel(settings.FLOWCHECK_LOG_LEVEL.upper())

handler = logging.StreamHandler()
formatter = logging.Formatter("[%(levelname)s] %(asctime)s - %(message)s")
handler.setFormatter(formatter)

if not logger.handlers:
    logger.addHandler(handler)
