import logging

from app.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # uvicorn trae sus propios handlers, solo alineamos el nivel
    logging.getLogger("uvicorn").setLevel(level.upper())
