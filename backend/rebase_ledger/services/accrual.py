"""Lazy rebase accrual.

Balances compound once per REBASE_PERIOD. Nothing runs on a timer: the
owed periods are applied the next time a holder shows up in an event, using
the event's timestamp as the clock.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from rebase_ledger.core.errors import AccrualHorizonExceeded
from rebase_ledger.services.types import HolderState

logger = logging.getLogger(__name__)

REBASE_PERIOD = 900


def epoch_start_for(at: int, anchor: int, period: int = REBASE_PERIOD) -> int:
    """Most recent period boundary at or before `at`, on the grid anchored at `anchor`."""
    return at - ((at - anchor) % period)


def elapsed_epochs(last_epoch_start: int, at: int, period: int = REBASE_PERIOD) -> int:
    """Complete periods between `last_epoch_start` and `at`.

    The period containing `at` is still open and never counts. Periods are
    counted on the grid the holder was bootstrapped onto (see epoch_start_for),
    not on absolute multiples of the period: with an anchor that is not itself
    a multiple of the period, `(at - at % period - last) // period` can come out
    one lower than this.
    """
    if at <= last_epoch_start:
        return 0
    return (at - last_epoch_start) // period


def compound(cumulative: int, rate: int, rate_decimals: int, epochs: int) -> tuple[int, int]:
    """Apply `epochs` compounding steps, flooring after every step.

    Returns the new cumulative balance and the interest earned. Flooring per
    step means there is no closed form, so the steps are applied one by one;
    once a step leaves the balance unchanged every later step would too.
    """
    if epochs <= 0 or cumulative == 0 or rate == 0:
        return cumulative, 0

    scale = 10 ** rate_decimals
    factor = scale + rate
    c = cumulative
    for _ in range(epochs):
        grown = c * factor // scale
        if grown == c:
            break
        c = grown
    return c, c - cumulative


def _can_grow(cumulative: int, rate: int, rate_decimals: int) -> bool:
    scale = 10 ** rate_decimals
    return cumulative * (scale + rate) // scale != cumulative


def accrue(
    holder: HolderState,
    at: int,
    rate: int,
    rate_decimals: int,
    anchor: int,
    period: int = REBASE_PERIOD,
    max_epochs: int | None = None,
) -> HolderState:
    """Bring `holder` up to date with every period completed before `at`."""
    if holder.last_accrual_epoch_start == 0:
        return replace(holder, last_accrual_epoch_start=epoch_start_for(at, anchor, period))

    epochs = elapsed_epochs(holder.last_accrual_epoch_start, at, period)
    if epochs == 0:
        return holder

    if max_epochs is not None and epochs > max_epochs and _can_grow(holder.cumulative_balance, rate, rate_decimals):
        logger.error(
            "accrual horizon exceeded address=%s epochs=%d max_epochs=%d",
            holder.address,
            epochs,
            max_epochs,
        )
        raise AccrualHorizonExceeded(holder.address, epochs, max_epochs)

    cumulative, earned = compound(holder.cumulative_balance, rate, rate_decimals, epochs)
    return replace(
        holder,
        cumulative_balance=cumulative,
        total_earned=holder.total_earned + earned,
        last_accrual_epoch_start=holder.last_accrual_epoch_start + epochs * period,
    )
