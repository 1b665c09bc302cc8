import logging

from facturacion.logging import PhoneRedactionFilter, RedactingStreamHandler, configure_logging


def test_phone_numbers_are_masked():
    redactor = PhoneRedactionFilter()
    assert redactor.redact("call 300 123 4567 now") == "call 30********** now"
    assert redactor.redact("total 30.24") == "total 30.24"


def test_filter_masks_record_args():
    record = logging.LogRecord(
        "facturacion", logging.INFO, __file__, 1, "phone %s", ("3001234567",), None
    )
    PhoneRedactionFilter().filter(record)
    assert record.getMessage() == "phone 30********"


def test_configure_logging_is_idempotent():
    logger = configure_logging("debug")
    configure_logging("debug")
    assert logger.level == logging.DEBUG
    assert len([h for h in logger.handlers if isinstance(h, RedactingStreamHandler)]) == 1


def test_configure_logging_installs_redacting_handler():
    logger = configure_logging("info")
    handler = next(h for h in logger.handlers if isinstance(h, RedactingStreamHandler))
    assert isinstance(handler, logging.StreamHandler)
    assert any(isinstance(f, PhoneRedactionFilter) for f in handler.filters)
