"""Replay a JSON-lines file of transfer events into the ledger, in file order."""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from rebase_ledger.core.config import settings
from rebase_ledger.core.errors import LedgerError
from rebase_ledger.core.logging_config import configure_logging
from rebase_ledger.schemas.event import TransferEventIn
from rebase_ledger.services.ledger import LedgerProcessor
from rebase_ledger.services.rates import DbRateProvider, StaticRateProvider
from rebase_ledger.services.store import LedgerStore

logger = logging.getLogger("rebase_ledger.ingest")


def ingest_lines(s, lines) -> int:
    """Process each non-blank line as one event. Returns the number processed."""
    rates = DbRateProvider(s, fallback=StaticRateProvider.from_settings(settings).params)
    processor = LedgerProcessor(LedgerStore(s), rates, max_accrual_epochs=settings.max_accrual_epochs)

    n = 0
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            ev = TransferEventIn.model_validate(json.loads(line)).to_event()
        except (json.JSONDecodeError, ValidationError) as e:
            raise ValueError(f"line {lineno}: invalid transfer event: {e}") from e
        result = processor.process(ev)
        if result.duplicate:
            logger.info("line %d: audit record for tx=%s already present", lineno, ev.transaction_hash)
        n += 1
    return n


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Apply transfer events to the rebase ledger.")
    p.add_argument("path", nargs="?", default="-", help="JSON-lines file, '-' for stdin")
    args = p.parse_args(argv)

    configure_logging(settings.log_level)

    from rebase_ledger.db.session import SessionLocal

    db = SessionLocal()
    try:
        if args.path == "-":
            n = ingest_lines(db, sys.stdin)
        else:
            with open(args.path, "r", encoding="utf-8") as f:
                n = ingest_lines(db, f)
    except (ValueError, LedgerError) as e:
        logger.error("ingest stopped: %s", e)
        return 1
    finally:
        db.close()

    logger.info("ingest finished events=%d", n)
    return 0


if __name__ == "__main__":
    sys.exit(main())
