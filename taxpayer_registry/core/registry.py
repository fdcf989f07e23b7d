import logging
import threading
from typing import Dict, List, Optional

from taxpayer_registry.core.errors import DuplicateTaxPayerError
from taxpayer_registry.db.snapshot import JsonSnapshotStore
from taxpayer_registry.schemas.taxpayer import TaxPayer

logger = logging.getLogger(__name__)

APPEND = "append"
REJECT = "reject"
DUPLICATE_POLICIES = (APPEND, REJECT)


class TaxPayerRegistry:
    """
    Authoritative store of taxpayer records.

    Records are kept in insertion order. Under the ``append`` policy a
    repeated tid is stored again and ``lookup`` returns the newest one;
    under ``reject`` the second insert raises ``DuplicateTaxPayerError``.
    Every operation holds ``_lock``, so readers never see a partial insert.
    The HTTP handlers are sync functions run on FastAPI's threadpool, which
    means calls can arrive on several threads at once.
    """

    def __init__(self, duplicate_policy: str = APPEND, snapshot: Optional[JsonSnapshotStore] = None):
        if duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(f"Unknown duplicate policy '{duplicate_policy}'")

        self.duplicate_policy = duplicate_policy
        self._snapshot = snapshot
        self._lock = threading.Lock()
        self._records: List[TaxPayer] = []
        # tid -> position of the newest record with that tid
        self._index: Dict[str, int] = {}

        if snapshot is not None:
            for record in snapshot.load():
                self._append(record)

    def _append(self, record: TaxPayer) -> None:
        self._index[record.tid] = len(self._records)
        self._records.append(record)

    def insert(self, tid: str, first_name: str, last_name: str, address: str) -> None:
        record = TaxPayer(tid=tid, firstName=first_name, lastName=last_name, address=address)

        with self._lock:
            previous = self._index.get(tid)
            if previous is not None and self.duplicate_policy == REJECT:
                logger.warning(f"Duplicate tid rejected: {tid}")
                raise DuplicateTaxPayerError(tid)

            self._append(record)

            if self._snapshot is not None:
                try:
                    self._snapshot.save(self._records)
                except Exception:
                    self._records.pop()
                    if previous is None:
                        del self._index[tid]
                    else:
                        self._index[tid] = previous
                    logger.error(f"Snapshot write failed, insert of {tid} rolled back")
                    raise

            count = len(self._records)

        logger.info(f"TaxPayer registered: {tid}. Count: {count}")

    def list(self) -> List[TaxPayer]:
        with self._lock:
            return list(self._records)

    def lookup(self, tid: str) -> Optional[TaxPayer]:
        with self._lock:
            position = self._index.get(tid)
            if position is None:
                return None
            return self._records[position]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
