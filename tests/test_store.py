import asyncio
from decimal import Decimal

import pytest

from securewallet_client.domain import User, UserStatus, Wallet, WalletStatus, WalletType
from securewallet_client.store import LedgerState, SessionState, StateStore
from securewallet_client.store import ledger as ledger_transitions
from securewallet_client.store import session as session_transitions


def _wallet(wallet_id: int, balance: str) -> Wallet:
    amount = Decimal(balance)
    return Wallet(
        id=wallet_id,
        wallet_number=f"SW{wallet_id:08d}",
        name=f"Wallet {wallet_id}",
        wallet_type=WalletType.SAVINGS,
        balance=amount,
        available_balance=amount,
        minimum_balance=Decimal("0"),
        daily_transaction_limit=Decimal("10000"),
        currency="USD",
        status=WalletStatus.ACTIVE,
    )


def test_update_replaces_only_the_named_slice():
    store = StateStore()
    session_before = store.session

    store.update("ledger", ledger_transitions.wallets_fetched, [_wallet(1, "5.00")])

    assert store.session is session_before
    assert len(store.ledger.wallets) == 1
    assert store.state.ledger is store.ledger


def test_wallets_fetched_repoints_or_drops_selection():
    selected = _wallet(1, "5.00")
    state = LedgerState(wallets=(selected,), selected_wallet=selected)

    refreshed = ledger_transitions.wallets_fetched(state, [_wallet(1, "7.50"), _wallet(2, "1.00")])
    assert refreshed.selected_wallet.balance == Decimal("7.50")

    dropped = ledger_transitions.wallets_fetched(refreshed, [_wallet(2, "1.00")])
    assert dropped.selected_wallet is None


def test_generation_tracking():
    state = ledger_transitions.mutation_committed(LedgerState())
    state = ledger_transitions.mutation_committed(state)
    assert state.is_stale

    state = ledger_transitions.synced(state, 2)
    state = ledger_transitions.synced(state, 1)
    assert state.synced_generation == 2
    assert not state.is_stale


def test_signed_out_resets_session():
    user = User(1, "a@example.com", "A", "B", UserStatus.ACTIVE, True)
    state = session_transitions.login_fulfilled(SessionState(is_loading=True), user)
    assert state.is_authenticated and not state.is_loading

    assert session_transitions.signed_out(state) == SessionState()


def test_subscribers_see_every_update_until_unsubscribed():
    store = StateStore()
    seen = []
    unsubscribe = store.subscribe(lambda state: seen.append(state.session.is_loading))

    store.update("session", session_transitions.pending)
    unsubscribe()
    store.update("session", session_transitions.rejected, "nope")

    assert seen == [True]
    assert store.session.error == "nope"


@pytest.mark.asyncio
async def test_wait_for_resolves_after_matching_update():
    store = StateStore()
    waiter = asyncio.ensure_future(store.wait_for("ledger", lambda state: state.generation >= 2))

    store.update("ledger", ledger_transitions.mutation_committed)
    await asyncio.sleep(0)
    assert not waiter.done()

    store.update("ledger", ledger_transitions.mutation_committed)
    state = await asyncio.wait_for(waiter, timeout=1)
    assert state.generation == 2


def test_failing_listener_does_not_break_updates(caplog):
    store = StateStore()
    seen = []

    def broken(state):
        raise RuntimeError("listener bug")

    store.subscribe(broken)
    store.subscribe(lambda state: seen.append(state.ledger.generation))

    updated = store.update("ledger", ledger_transitions.mutation_committed)

    assert updated.generation == 1
    assert store.ledger.generation == 1
    assert seen == [1]
    assert "listener bug" in caplog.text
