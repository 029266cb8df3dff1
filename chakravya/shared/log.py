import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # uvicorn/sqlalchemy stay at their own defaults unless asked
    logging.getLogger("chakravya").setLevel(level.upper())
