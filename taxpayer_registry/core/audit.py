from collections import deque
from typing import Deque, List
from taxpayer_registry.schemas.audit import AuditLogEntry
import logging

logger = logging.getLogger(__name__)

DEFAULT_AUDIT_LOG_LIMIT = 10000

class InMemoryAuditRepository:
    """
    Bounded request audit trail. Once ``limit`` entries are held, each new
    entry evicts the oldest one.
    """

    def __init__(self, limit: int = DEFAULT_AUDIT_LOG_LIMIT):
        if limit < 1:
            raise ValueError(f"Audit log limit must be positive, got {limit}")
        self.limit = limit
        self._entries: Deque[AuditLogEntry] = deque(maxlen=limit)

    def save(self, entry: AuditLogEntry):
        self._entries.append(entry)
        logger.debug(f"Audit Logged: {entry.action_type.value} {entry.method} {entry.endpoint} -> {entry.status.value}")

    def get_all(self) -> List[AuditLogEntry]:
        """Held entries, oldest first."""
        return list(self._entries)
