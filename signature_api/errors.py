# signature_api/errors.py


class SignatureServiceError(Exception):
    """Base class for every error raised by the signing service."""


class NotFound(SignatureServiceError):
    pass


class DocumentNotFound(NotFound):
    def __init__(self, document_id: str):
        super().__init__(f"Document {document_id} not found")
        self.document_id = document_id


class PhysicianNotFound(NotFound):
    def __init__(self, physician_id: str):
        super().__init__(f"Physician {physician_id} not found")
        self.physician_id = physician_id


class SourceFileMissing(NotFound):
    def __init__(self, document_id: str, path: str):
        super().__init__(f"Source file for document {document_id} not found at {path}")
        self.document_id = document_id
        self.path = path


class SignatureAssetMissing(SignatureServiceError):
    pass


class SourceUnreadable(SignatureServiceError):
    pass


class StampingFailed(SignatureServiceError):
    def __init__(self, document_id: str, reason: str):
        super().__init__(f"Failed to sign document {document_id}: {reason}")
        self.document_id = document_id


class ValidationError(SignatureServiceError):
    pass
