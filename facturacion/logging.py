"""Logging setup for the engine with phone-number redaction."""

import logging
import re

PACKAGE_LOGGER = "facturacion"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class PhoneRedactionFilter(logging.Filter):
    """Mask phone-like digit runs in log messages and string args."""

    phone_pattern = re.compile(r"(\+?\d[\d \-/()]{6,}\d)")

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.redact(record.msg)
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                self.redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True

    def redact(self, text: str) -> str:
        return self.phone_pattern.sub(self._mask_phone, text)

    @staticmethod
    def _mask_phone(match) -> str:
        """Keep the first two characters, mask the rest."""
        phone = match.group(1)
        return phone[:2] + "*" * (len(phone) - 2)


class RedactingStreamHandler(logging.StreamHandler):
    """Stream handler with the package format and phone redaction."""

    def __init__(self, stream=None):
        super().__init__(stream)
        self.setFormatter(logging.Formatter(LOG_FORMAT))
        self.addFilter(PhoneRedactionFilter())


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())
    if not any(isinstance(h, RedactingStreamHandler) for h in logger.handlers):
        logger.addHandler(RedactingStreamHandler())
    return logger
