from random import Random

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker

from rebase_ledger.db.base import Base
from rebase_ledger.models.debit_clamp import DebitClampRow
from rebase_ledger.models.holder import Holder
from rebase_ledger.services.accrual import compound
from rebase_ledger.services.ledger import LedgerProcessor
from rebase_ledger.services.rates import StaticRateProvider
from rebase_ledger.services.store import LedgerStore
from rebase_ledger.services.types import ADDRESS_ZERO, RateParams, TransferEvent

TOKEN = "0x00000000000000000000000000000000000000c0"
HOLDERS = [f"0x{i:040x}" for i in range(1, 6)]


@pytest.fixture(scope="session")
def engine():
    eng = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(eng)
    return eng


@pytest.fixture()
def session(engine):
    connection = engine.connect()
    trans = connection.begin()
    Session = sessionmaker(bind=connection, autoflush=False, autocommit=False, future=True)
    s = Session()
    try:
        yield s
    finally:
        s.close()
        trans.rollback()
        connection.close()


def _random_events(rng: Random, n: int, start: int, overdraft: bool):
    ts = start
    out = []
    for i in range(n):
        ts += rng.choice([0, 0, 30, 450, 900, 901, 1800, 5000])
        kind = rng.random()
        if kind < 0.3:
            frm, to = ADDRESS_ZERO, rng.choice(HOLDERS)
        elif kind < 0.4:
            frm, to = rng.choice(HOLDERS), ADDRESS_ZERO
        else:
            frm, to = rng.choice(HOLDERS), rng.choice(HOLDERS)
        value = rng.choice([1, 10, 99, 500, 1000, 25_000]) if overdraft else rng.randint(0, 200)
        out.append(
            TransferEvent(
                contract_address=TOKEN,
                transaction_hash="0x" + format(start * 10_000 + i, "064x"),
                block_timestamp=ts,
                from_address=frm,
                to_address=to,
                value=value,
            )
        )
    return out


def test_randomized_balances_never_negative(session):
    rng = Random(1337)
    p = LedgerProcessor(
        LedgerStore(session),
        StaticRateProvider(RateParams(rebase_start_time=1_000, rate=37, rate_decimals=4)),
    )

    clamped: set[str] = set()
    for ev in _random_events(rng, 400, 10_000, overdraft=True):
        r = p.process(ev)
        for h in (r.receiver, r.sender):
            if h is None:
                continue
            assert h.balance >= 0
            assert h.cumulative_balance >= 0
            assert h.total_earned >= 0
        if r.clamp is not None:
            clamped.add(r.clamp.address)

    assert clamped

    store = LedgerStore(session)
    for a in HOLDERS:
        h = store.load_holder(a)
        if h is None:
            continue
        if a not in clamped:
            assert h.is_consistent

    n_clamps = session.execute(select(func.count()).select_from(DebitClampRow)).scalar_one()
    assert n_clamps >= len(clamped)


def test_randomized_transfers_conserve_value(session):
    rng = Random(2025)
    p = LedgerProcessor(
        LedgerStore(session),
        StaticRateProvider(RateParams(rebase_start_time=0, rate=5, rate_decimals=3)),
    )
    store = LedgerStore(session)

    # Seed every holder with enough principal that no debit can overdraw.
    for i, a in enumerate(HOLDERS):
        p.process(
            TransferEvent(TOKEN, "0x" + format(900_000 + i, "064x"), 9_000, ADDRESS_ZERO, a, 1_000_000)
        )

    for ev in _random_events(rng, 300, 9_000, overdraft=False):
        before_to = store.load_holder(ev.to_address) if ev.to_address != ADDRESS_ZERO else None
        before_from = store.load_holder(ev.from_address) if ev.from_address != ADDRESS_ZERO else None

        r = p.process(ev)
        assert r.clamp is None

        if ev.from_address == ev.to_address:
            assert r.sender.balance == before_from.balance
            continue
        if r.receiver is not None:
            prev = before_to.balance if before_to is not None else 0
            assert r.receiver.balance - prev == ev.value
        if r.sender is not None:
            assert before_from.balance - r.sender.balance == ev.value

    total_balance = sum(int(b) for b in session.execute(select(Holder.balance)).scalars().all())
    assert total_balance > 0
    for a in HOLDERS:
        assert store.load_holder(a).is_consistent


def test_accrual_is_independent_of_event_spacing(session):
    # A holder touched every period ends up where one touched once ends up.
    rate = RateParams(rebase_start_time=0, rate=1, rate_decimals=2)
    p = LedgerProcessor(LedgerStore(session), StaticRateProvider(rate))
    busy, idle = HOLDERS[0], HOLDERS[1]

    p.process(TransferEvent(TOKEN, "0x" + "1" * 64, 900, ADDRESS_ZERO, busy, 10_000))
    p.process(TransferEvent(TOKEN, "0x" + "2" * 64, 900, ADDRESS_ZERO, idle, 10_000))

    for k in range(1, 21):
        p.process(TransferEvent(TOKEN, "0x" + format(k, "064x"), 900 + k * 900, ADDRESS_ZERO, busy, 0))
    p.process(TransferEvent(TOKEN, "0x" + "3" * 64, 900 + 20 * 900, ADDRESS_ZERO, idle, 0))

    store = LedgerStore(session)
    b, i = store.load_holder(busy), store.load_holder(idle)
    assert b.cumulative_balance == i.cumulative_balance == compound(10_000, 1, 2, 20)[0]
    assert b.total_earned == i.total_earned
    assert b.last_accrual_epoch_start == i.last_accrual_epoch_start == 900 + 20 * 900
