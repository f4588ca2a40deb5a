"""Shared fixtures: a storage root with real PDFs, a signature image and services."""

import io

import pytest
from PIL import Image
from PyPDF2 import PdfWriter
from PyPDF2.generic import NameObject, NumberObject
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from config import Settings
from signature_api import create_app
from signature_api.documents import DocumentStore
from signature_api.pdf_utils import SignatureStamper
from signature_api.physicians import PhysicianDirectory
from signature_api.signing import SigningService
from signature_api.storage import InMemoryStorage


def _pdf_bytes(pages, pagesize=letter):
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=pagesize)
    for number in range(1, pages + 1):
        c.setFont("Helvetica", 14)
        c.drawString(72, pagesize[1] - 72, f"Page {number} of the consent form")
        c.showPage()
    c.save()
    return buf.getvalue()


def _png_bytes(size=(300, 100)):
    buf = io.BytesIO()
    Image.new("RGBA", size, (10, 30, 160, 200)).save(buf, format="PNG")
    return buf.getvalue()


def _broken_pdf_bytes(key):
    # parses fine, but the page entry under ``key`` is a bare number
    writer = PdfWriter()
    page = writer.add_blank_page(width=612, height=792)
    page[NameObject(key)] = NumberObject(5)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


@pytest.fixture
def broken_pdf_bytes():
    return _broken_pdf_bytes


@pytest.fixture
def pdf_bytes():
    return _pdf_bytes


@pytest.fixture
def png_bytes():
    return _png_bytes()


@pytest.fixture
def storage_root(tmp_path):
    root = tmp_path / "Storage"
    (root / "pdfs").mkdir(parents=True)
    (root / "signatures").mkdir()
    (root / "signatures" / "signatures.png").write_bytes(_png_bytes())
    (root / "pdfs" / "consent.pdf").write_bytes(_pdf_bytes(3))
    (root / "pdfs" / "intake.pdf").write_bytes(_pdf_bytes(1))
    return root


@pytest.fixture
def document_records():
    return [
        {"id": "doc-A", "name": "Consent Form", "status": "Pending",
         "filePath": "Storage/pdfs/consent.pdf", "physicianId": "phys-001",
         "createdAt": "2024-01-01T08:00:00+00:00"},
        {"id": "doc-B", "name": "Lost Form", "status": "Pending",
         "filePath": "pdfs/missing.pdf", "physicianId": "phys-001",
         "createdAt": "2024-01-01T08:00:00+00:00"},
        {"id": "doc-C", "name": "Intake Form", "status": "Pending",
         "filePath": "pdfs/intake.pdf", "physicianId": "phys-002",
         "createdAt": "2024-01-01T08:00:00+00:00"},
        {"id": "doc-D", "name": "Orphan Form", "status": "Pending",
         "filePath": "pdfs/intake.pdf", "physicianId": "phys-999",
         "createdAt": "2024-01-01T08:00:00+00:00"},
    ]


@pytest.fixture
def physician_records():
    return [
        {"id": "phys-001", "name": "Dr. John Smith"},
        {"id": "phys-002", "name": "Dr. Sarah Johnson"},
    ]


@pytest.fixture
def document_storage(document_records):
    return InMemoryStorage(document_records)


@pytest.fixture
def store(document_storage):
    return DocumentStore(document_storage)


@pytest.fixture
def directory(physician_records):
    return PhysicianDirectory(InMemoryStorage(physician_records))


@pytest.fixture
def service(store, directory, storage_root):
    stamper = SignatureStamper(str(storage_root / "signatures" / "signatures.png"))
    return SigningService(store, directory, stamper, str(storage_root))


@pytest.fixture
def app_settings(storage_root):
    return Settings(STORAGE_ROOT=str(storage_root), FLASK_ENV="development")


@pytest.fixture
def app(app_settings, storage_root):
    app = create_app(app_settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
