# signature_api/physicians.py
import logging
import threading
from typing import List, Optional

from .models import Physician
from .storage import RecordStorage

logger = logging.getLogger(__name__)

DEFAULT_PHYSICIAN_NAME = "Physician"

SEED_PHYSICIANS = [
    {"id": "phys-001", "name": "Dr. John Smith"},
    {"id": "phys-002", "name": "Dr. Sarah Johnson"},
    {"id": "phys-003", "name": "Dr. Michael Brown"},
]


class PhysicianDirectory:
    """Read-only lookup of physicians."""

    def __init__(self, storage: RecordStorage, seed: bool = True):
        self.storage = storage
        self._seed = seed
        self._seeded = False
        self._lock = threading.Lock()

    def _ensure_seeded(self):
        if not self._seed or self._seeded:
            return
        with self._lock:
            if self._seeded:
                return
            if not self.storage.load_all():
                logger.info("Seeding default physicians into %r", self.storage)
                self.storage.save_all(list(SEED_PHYSICIANS))
            self._seeded = True

    def list(self) -> List[Physician]:
        self._ensure_seeded()
        return [Physician.model_validate(r) for r in self.storage.load_all()]

    def get(self, physician_id: str) -> Optional[Physician]:
        return next((p for p in self.list() if p.id == physician_id), None)

    def display_name(self, physician_id: Optional[str]) -> str:
        if not physician_id:
            return DEFAULT_PHYSICIAN_NAME
        physician = self.get(physician_id)
        if physician is None:
            logger.warning("Physician %s not found, signing as %r", physician_id, DEFAULT_PHYSICIAN_NAME)
            return DEFAULT_PHYSICIAN_NAME
        return physician.name
