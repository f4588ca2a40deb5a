# signature_api/documents.py
import logging
import os
import threading
from typing import Dict, List, Optional

from pydantic import ValidationError

from .models import Document, DocumentStatus, utcnow
from .storage import RecordStorage

logger = logging.getLogger(__name__)

SAMPLE_PDF = "Storage/pdfs/sample-consent.pdf"


def seed_documents():
    now = utcnow()
    return [
        Document(id="doc-001", name="Patient Consent Form", file_path=SAMPLE_PDF,
                 physician_id="phys-001", created_at=now),
        Document(id="doc-002", name="Surgical Consent Form", file_path=SAMPLE_PDF,
                 physician_id="phys-001", created_at=now),
        Document(id="doc-003", name="Medication Authorization", file_path=SAMPLE_PDF,
                 physician_id="phys-002", created_at=now),
    ]


def ensure_storage_dirs(storage_root: str):
    # layout expected by the seed records and the signature stamper
    os.makedirs(os.path.join(storage_root, "pdfs"), exist_ok=True)
    os.makedirs(os.path.join(storage_root, "signatures"), exist_ok=True)


class DocumentStore:
    """Documents backed by a whole-collection record storage."""

    def __init__(self, storage: RecordStorage, seed: bool = True):
        self.storage = storage
        self._seed = seed
        self._seeded = False
        # serializes read-modify-write of the snapshot
        self._lock = threading.RLock()

    def _ensure_seeded(self):
        if not self._seed or self._seeded:
            return
        with self._lock:
            if self._seeded:
                return
            if not self.storage.load_all():
                logger.info("Seeding sample documents into %r", self.storage)
                self.storage.save_all([d.to_dict() for d in seed_documents()])
            self._seeded = True

    def _load(self) -> List[Document]:
        self._ensure_seeded()
        docs = []
        for record in self.storage.load_all():
            try:
                docs.append(Document.model_validate(record))
            except ValidationError as e:
                # a broken record must not hide the others
                logger.warning("Skipping invalid document record %r: %s", record.get("id"), e)
        return docs

    def list(self) -> List[Document]:
        return self._load()

    def list_by_physician(self, physician_id: str) -> List[Document]:
        return [d for d in self._load() if d.physician_id == physician_id]

    def list_by_physician_and_status(self, physician_id: str, status: DocumentStatus) -> List[Document]:
        status = DocumentStatus(status)
        return [d for d in self.list_by_physician(physician_id) if d.status == status]

    def get(self, document_id: str) -> Optional[Document]:
        return next((d for d in self._load() if d.id == document_id), None)

    def counts_by_physician(self, physician_id: str) -> Dict[str, int]:
        docs = self.list_by_physician(physician_id)
        signed = sum(1 for d in docs if d.status == DocumentStatus.SIGNED)
        unsigned = sum(1 for d in docs if d.status == DocumentStatus.PENDING)
        return {"signed": signed, "unsigned": unsigned}

    def update(self, document: Document) -> bool:
        """Replace the stored record with the same id.

        Returns False (and writes nothing) when no such record exists.
        """
        with self._lock:
            self._ensure_seeded()
            # raw records, so entries that fail validation are written back untouched
            records = self.storage.load_all()
            for index, record in enumerate(records):
                if record.get("id") == document.id:
                    records[index] = document.to_dict()
                    break
            else:
                logger.warning("Update skipped, document %s not in store", document.id)
                return False
            self.storage.save_all(records)
        return True
