"""The ledger store: authoritative in-memory ledger with save-on-mutation.

Mutations are read-modify-write with no locking. Callers that share a store
between threads must serialize access to it.
"""

import warnings
from decimal import Decimal
from typing import Any

from purse.domain.models import Money
from purse.domain.transactions import (
    LedgerSnapshot,
    Transaction,
    is_valid_balance,
    new_transaction,
    parse_balance,
    transaction_from_record,
    transaction_to_record,
)
from purse.errors import PersistenceError, PersistenceWarning, ValidationError
from purse.logging_setup import get_logger
from purse.store.persistence import LedgerPersistence, LedgerState

logger = get_logger(__name__)


def _warn(message: str) -> None:
    logger.warning(message)
    warnings.warn(message, PersistenceWarning, stacklevel=3)


def _load_transactions(raw: Any) -> dict[str, Transaction]:
    """Rebuild the ordered transaction mapping from persisted records.

    Raises:
        ValidationError: If the field is not a list, any record is malformed,
            or two records share an id.
    """
    if not isinstance(raw, list):
        raise ValidationError(f"transactions must be a list, got {type(raw).__name__}")

    transactions: dict[str, Transaction] = {}
    for record in raw:
        txn = transaction_from_record(record)
        if txn.id in transactions:
            raise ValidationError(f"Duplicate transaction id {txn.id!r}")
        transactions[txn.id] = txn
    return transactions


class LedgerStore:
    """Owns the transactions and starting balance for a session.

    State is saved through the persistence collaborator after every
    mutation. Save failures are reported as PersistenceWarning and never
    undo the in-memory change.
    """

    def __init__(self, persistence: LedgerPersistence) -> None:
        self._persistence = persistence
        self._starting_balance = Money(Decimal(0))
        # Newest first; dicts keep insertion order
        self._transactions: dict[str, Transaction] = {}

    @classmethod
    def open(cls, persistence: LedgerPersistence) -> "LedgerStore":
        """Create a store and load its persisted state."""
        store = cls(persistence)
        store.load()
        return store

    @property
    def persistence(self) -> LedgerPersistence:
        return self._persistence

    @property
    def starting_balance(self) -> Money:
        return self._starting_balance

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, txn_id: object) -> bool:
        return txn_id in self._transactions

    def load(self) -> None:
        """Replace in-memory state with the persisted state.

        Missing state gives an empty ledger. Unreadable state, or a malformed
        field, resets that field to its default with a PersistenceWarning.
        """
        self._transactions = {}
        self._starting_balance = Money(Decimal(0))

        try:
            state = self._persistence.load_ledger_state()
        except PersistenceError as e:
            _warn(f"Could not load ledger, starting empty: {e}")
            return

        if state is None:
            logger.debug("No saved ledger at %s", self._persistence.describe())
            return

        if not isinstance(state, dict):
            _warn(f"Saved ledger is not a mapping ({type(state).__name__}), starting empty")
            return

        if "transactions" in state:
            try:
                self._transactions = _load_transactions(state["transactions"])
            except ValidationError as e:
                _warn(f"Saved transactions are malformed, starting with none: {e}")

        if "starting_balance" in state:
            raw_balance = state["starting_balance"]
            if is_valid_balance(raw_balance):
                self._starting_balance = parse_balance(raw_balance)
            else:
                _warn(f"Saved starting balance {raw_balance!r} is malformed, using 0")

        logger.debug(
            "Loaded %d transactions (starting balance %s) from %s",
            len(self._transactions),
            self._starting_balance,
            self._persistence.describe(),
        )

    def add_transaction(
        self,
        kind: Any,
        date: Any,
        amount: Any,
        description: str | None = None,
        category: str | None = None,
    ) -> Transaction:
        """Record a new transaction at the head of the ledger.

        Args:
            kind: TransactionKind or "income"/"expense".
            date: Transaction date (YYYY-MM-DD or datetime.date).
            amount: Non-negative amount.
            description: Optional label, defaults to "Income"/"Expense".
            category: Optional label, defaults to "Uncategorized".

        Returns:
            The stored transaction.

        Raises:
            ValidationError: If kind, date or amount is invalid. The ledger
                is left unchanged.
        """
        txn = new_transaction(kind, date, amount, description, category)
        while txn.id in self._transactions:
            txn = new_transaction(kind, date, amount, description, category)

        self._transactions = {txn.id: txn, **self._transactions}
        logger.debug("Added %s %s on %s (%s)", txn.kind.value, txn.amount, txn.date, txn.id)

        self._save()
        return txn

    def delete_transaction(self, txn_id: str) -> bool:
        """Remove a transaction if present.

        Args:
            txn_id: Transaction id.

        Returns:
            True if a transaction was removed, False if the id was unknown.
        """
        removed = self._transactions.pop(txn_id, None) is not None
        if removed:
            logger.debug("Deleted transaction %s", txn_id)
        else:
            logger.debug("Delete of unknown transaction %s ignored", txn_id)

        self._save()
        return removed

    def set_starting_balance(self, value: Any) -> Money:
        """Set the starting balance, storing 0 if the value can't be parsed.

        Args:
            value: Decimal, number or numeric string. Any sign is allowed.

        Returns:
            The stored starting balance.
        """
        self._starting_balance = parse_balance(value)
        logger.debug("Starting balance set to %s", self._starting_balance)

        self._save()
        return self._starting_balance

    def get_transaction(self, txn_id: str) -> Transaction | None:
        """Look up a transaction by id."""
        return self._transactions.get(txn_id)

    def find_transactions(self, id_prefix: str) -> list[Transaction]:
        """Find transactions whose id starts with the given prefix."""
        return [txn for txn_id, txn in self._transactions.items() if txn_id.startswith(id_prefix)]

    def snapshot(self) -> LedgerSnapshot:
        """Immutable view of the current state."""
        return LedgerSnapshot(
            starting_balance=self._starting_balance,
            transactions=tuple(self._transactions.values()),
        )

    def to_state(self) -> LedgerState:
        """Current state as a persistable document."""
        return {
            "transactions": [transaction_to_record(txn) for txn in self._transactions.values()],
            "starting_balance": str(self._starting_balance),
        }

    def _save(self) -> None:
        try:
            self._persistence.save_ledger_state(self.to_state())
        except PersistenceError as e:
            _warn(f"Could not save ledger, changes kept in memory only: {e}")
