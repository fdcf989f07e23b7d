import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Sequence

from taxpayer_registry.core.errors import SnapshotError
from taxpayer_registry.schemas.taxpayer import TaxPayer

logger = logging.getLogger(__name__)


class JsonSnapshotStore:
    """
    Keeps the full record list in a single JSON file so the registry
    survives a restart. The file is a JSON array of wire-format records,
    in insertion order.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    def load(self) -> List[TaxPayer]:
        if not self.path.exists():
            logger.info(f"No snapshot at {self.path}, starting empty")
            return []

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            records = [TaxPayer.model_validate(item) for item in raw]
        except (ValueError, TypeError) as e:
            # JSONDecodeError and pydantic's ValidationError are both ValueErrors
            raise SnapshotError(f"Unreadable snapshot {self.path}: {e}") from e

        logger.info(f"Loaded {len(records)} taxpayer(s) from {self.path}")
        return records

    def save(self, records: Sequence[TaxPayer]) -> None:
        payload = [r.model_dump(by_alias=True) for r in records]
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Write beside the target then swap, never leaving a half-written file
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except Exception:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug(f"Snapshot written: {len(payload)} record(s) to {self.path}")
