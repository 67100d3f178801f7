import logging, json, sys, time, os


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, name, msg (and exc when present)."""
    converter = time.gmtime  # UTC timestamps

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%SZ")

    def format(self, record):
        entry = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def get_logger(name="Heritage", level=None, to_file=None):
    """Unified structured logger for all heritage_core components."""
    logger = logging.getLogger(name)
    logger.setLevel(level or os.getenv("HERITAGE_LOG_LEVEL", "INFO").upper())

    if not logger.handlers:
        formatter = JsonFormatter()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        to_file = to_file or os.getenv("HERITAGE_LOG_FILE")
        if to_file:
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            file_handler = logging.FileHandler(to_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
