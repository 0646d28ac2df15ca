import logging

logger = logging.getLogger("pychip8")

LOG_FORMAT = "%(asctime)s,%(msecs)d %(name)s %(levelname)s %(message)s"


def setup_logging(debug=False):
    logging.basicConfig(format=LOG_FORMAT, datefmt="%H:%M:%S")
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)


def logs_on():
    return logger.isEnabledFor(logging.DEBUG)


def toggle_logs():
    """Flip per-instruction tracing on or off (bound to F1 in the window)."""
    logger.setLevel(logging.WARNING if logs_on() else logging.DEBUG)
    logger.warning("logsOn: %s", logs_on())
    return logs_on()
