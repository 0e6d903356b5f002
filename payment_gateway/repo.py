from datetime import datetime
from typing import List, Optional

from payment_gateway.models import (
    PROVIDERS,
    STATUS_SUCCESS,
    STATUSES,
    Transaction,
)

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 50


class TransactionStore:
    """
    Append-only, in-memory transaction ledger.

    `append` is the only mutation (a single list.append, atomic on the event
    loop). Reads take a copy of the list in one step, so they never observe a
    half-written record. There is no update or delete; `clear` exists for tests.
    """

    def __init__(self):
        self._rows: List[Transaction] = []

    def append(self, txn: Transaction) -> None:
        self._rows.append(txn)

    def get_all(self) -> List[Transaction]:
        return sorted(self._rows, key=lambda t: t.timestamp, reverse=True)

    def get_by_id(self, txn_id: str) -> Optional[Transaction]:
        for t in self._rows:
            if t.id == txn_id:
                return t
        return None

    def get_by_status(self, status: str) -> List[Transaction]:
        status = status.lower()
        return [t for t in self.get_all() if t.status.lower() == status]

    def get_by_email_substring(self, text: str) -> List[Transaction]:
        text = text.lower()
        return [t for t in self.get_all() if text in t.email.lower()]

    def get_in_range(self, start: datetime, end: datetime) -> List[Transaction]:
        return [t for t in self.get_all() if start <= t.timestamp <= end]

    def count(self) -> int:
        return len(self._rows)

    def clear(self) -> None:
        self._rows = []


def list_transactions(
    store: TransactionStore,
    status: Optional[str] = None,
    email: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
) -> dict:
    rows = store.get_all()

    # unknown status values are ignored rather than matching nothing
    if status and status.lower() in STATUSES:
        rows = [t for t in rows if t.status == status.lower()]

    if email:
        needle = email.lower()
        rows = [t for t in rows if needle in t.email.lower()]

    if start is not None and end is not None:
        rows = [t for t in rows if start <= t.timestamp <= end]

    limit = min(limit, MAX_PAGE_SIZE)
    total = len(rows)
    page = rows[offset:offset + limit]

    return {
        "transactions": [t.to_dict() for t in page],
        "pagination": {
            "total": total,
            "limit": limit,
            "offset": offset,
            "hasMore": offset + limit < total,
        },
    }


def get_transaction(store: TransactionStore, txn_id: str) -> Optional[dict]:
    t = store.get_by_id(txn_id)
    if not t:
        return None
    return t.to_dict()


def transaction_stats(store: TransactionStore) -> dict:
    rows = store.get_all()

    by_status = {s: 0 for s in STATUSES}
    by_provider = {p: 0 for p in PROVIDERS}
    for t in rows:
        by_status[t.status] = by_status.get(t.status, 0) + 1
        by_provider[t.provider] = by_provider.get(t.provider, 0) + 1

    avg_risk = (sum(t.risk_score for t in rows) / len(rows)) if rows else 0
    total_amount = sum(t.amount for t in rows if t.status == STATUS_SUCCESS)

    return {
        "total": len(rows),
        "byStatus": by_status,
        "byProvider": by_provider,
        "averageRiskScore": avg_risk,
        "totalAmount": total_amount,
    }
