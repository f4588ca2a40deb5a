# signature_api/signing.py
import logging
import os
from typing import Iterable, List, Optional

from .documents import DocumentStore
from .errors import DocumentNotFound, SignatureServiceError, SourceFileMissing, StampingFailed
from .models import Document, SignResult, utcnow
from .paths import resolve_stored_path, signed_output_path, to_stored_path
from .pdf_utils import SignatureStamper
from .physicians import PhysicianDirectory

logger = logging.getLogger(__name__)


class SigningService:
    """Signs documents and serves their pdf bytes."""

    def __init__(
        self,
        documents: DocumentStore,
        physicians: PhysicianDirectory,
        stamper: SignatureStamper,
        storage_root: str,
        storage_marker: str = "Storage",
    ):
        self.documents = documents
        self.physicians = physicians
        self.stamper = stamper
        self.storage_root = os.path.abspath(storage_root)
        self.storage_marker = storage_marker

    def resolve(self, stored_path: str) -> str:
        return resolve_stored_path(stored_path, self.storage_root, self.storage_marker)

    def sign_one(self, document_id: str) -> Document:
        doc = self.documents.get(document_id)
        if doc is None:
            raise DocumentNotFound(document_id)

        # always stamp the original so signing twice does not stack signatures
        source_path = self.resolve(doc.file_path)
        if not os.path.isfile(source_path):
            logger.warning("Source file for %s missing at %s", document_id, source_path)
            raise SourceFileMissing(document_id, source_path)

        physician_name = self.physicians.display_name(doc.physician_id)
        output_path = signed_output_path(source_path)

        try:
            self.stamper.stamp_file(source_path, output_path, physician_name)
        except Exception as e:
            logger.exception("Stamping failed for document %s", document_id)
            raise StampingFailed(document_id, str(e)) from e

        signed = doc.mark_signed(to_stored_path(output_path, self.storage_root), utcnow())
        self.documents.update(signed)
        logger.info("Document %s signed by %s", document_id, physician_name)
        return signed

    def sign_bulk(self, document_ids: Iterable[str]) -> List[SignResult]:
        results = []
        for document_id in document_ids:
            try:
                self.sign_one(document_id)
            except SignatureServiceError as e:
                results.append(SignResult(document_id=document_id, success=False, error=str(e)))
            except Exception as e:
                # one broken record must not abort the rest of the batch
                logger.exception("Unexpected error signing document %s", document_id)
                results.append(SignResult(document_id=document_id, success=False, error=str(e)))
            else:
                results.append(SignResult(document_id=document_id, success=True))
        failed = sum(1 for r in results if not r.success)
        logger.info("Bulk signing done: %d ok, %d failed", len(results) - failed, failed)
        return results

    def get_pdf_bytes(self, document_id: str) -> Optional[bytes]:
        doc = self.documents.get(document_id)
        if doc is None:
            logger.info("Document %s not found", document_id)
            return None

        path = self.resolve(doc.active_file_path)
        if not os.path.isfile(path):
            logger.warning("PDF for %s not found at %s", document_id, path)
            return None
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError:
            logger.exception("Error reading PDF for %s at %s", document_id, path)
            return None
