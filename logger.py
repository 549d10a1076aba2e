import logging
import os


def _default_path() -> str:
    return os.getenv("BOOKING_LOG_FILE") or os.path.join(os.path.dirname(__file__), "cabin_booking.log")


def get_logger(name: str = "cabin_booking", log_file: str = None) -> logging.Logger:
    """Return the named logger writing to a single log file.

    An explicit log_file replaces the file the logger currently writes to.
    """
    log = logging.getLogger(name)
    if log.handlers and not log_file:
        return log

    path = os.path.abspath(log_file or _default_path())
    for h in list(log.handlers):
        if isinstance(h, logging.FileHandler):
            if h.baseFilename == path:
                return log
            log.removeHandler(h)
            h.close()

    log.setLevel(logging.INFO)
    fh = logging.FileHandler(path)
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    fh.setFormatter(fmt)
    log.addHandler(fh)
    return log
