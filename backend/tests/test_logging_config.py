import io
import logging

from rebase_ledger.core.logging_config import configure_logging, reset_logging


def test_configure_logging_is_idempotent_and_routes_package_loggers():
    reset_logging()
    stream = io.StringIO()
    try:
        configure_logging("debug", stream=stream)
        configure_logging("error", stream=stream)

        root = logging.getLogger("rebase_ledger")
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG

        logging.getLogger("rebase_ledger.services.ledger").warning("debit clamped at zero")
        assert "debit clamped at zero" in stream.getvalue()
    finally:
        reset_logging()


def test_package_records_still_reach_caplog(caplog):
    reset_logging()
    stream = io.StringIO()
    try:
        configure_logging("info", stream=stream)
        assert logging.getLogger("rebase_ledger").propagate is True

        with caplog.at_level(logging.WARNING, logger="rebase_ledger"):
            logging.getLogger("rebase_ledger.services.ledger").warning("debit clamped at zero")

        assert "debit clamped at zero" in caplog.text
        assert "debit clamped at zero" in stream.getvalue()
    finally:
        reset_logging()


def test_importing_the_app_leaves_logging_alone():
    reset_logging()
    import rebase_ledger.main  # noqa: F401

    root = logging.getLogger("rebase_ledger")
    assert root.handlers == []
    assert root.propagate is True
