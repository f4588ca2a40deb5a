# signature_api/pdf_utils.py
import io
import logging
import os
from datetime import datetime
from typing import Optional
from xml.sax.saxutils import escape

from PIL import Image, UnidentifiedImageError
from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.errors import PdfReadError
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph

from .errors import SignatureAssetMissing, SourceUnreadable
from .storage import write_atomic

logger = logging.getLogger(__name__)

# signature block geometry, in pdf units from the bottom-left corner of the page
MARGIN_LEFT = 50
MARGIN_BOTTOM = 40
MARGIN_RIGHT = 40
FONT_SIZE = 10
LINE_HEIGHT = 14
TEXT_IMAGE_GAP = 8
SIGNATURE_WIDTH = 150
SIGNATURE_HEIGHT = 50

TEXT_STYLE = ParagraphStyle("attribution", fontName="Helvetica", fontSize=FONT_SIZE, leading=12)


def attribution_text(physician_name: str, when: Optional[datetime] = None) -> str:
    when = when or datetime.now()
    return f"Electronically Signed by {physician_name} on {when:%m/%d/%Y}"


def load_signature_image(image_bytes: bytes) -> Image.Image:
    if not image_bytes:
        raise SignatureAssetMissing("Signature image is empty")
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise SignatureAssetMissing(f"Signature image cannot be read: {e}") from e
    return img.convert("RGBA")


def create_overlay(page_box, signature: ImageReader, text: str) -> bytes:
    # one overlay page carrying the attribution line and the signature above it
    left, bottom = float(page_box.left), float(page_box.bottom)
    width, height = float(page_box.width), float(page_box.height)
    x = left + MARGIN_LEFT
    y = bottom + MARGIN_BOTTOM

    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=(width, height), invariant=1)

    paragraph = Paragraph(escape(text), TEXT_STYLE)
    paragraph.wrap(max(width - MARGIN_LEFT - MARGIN_RIGHT, 1), height)
    paragraph.drawOn(c, x, y)

    image_y = y + LINE_HEIGHT + TEXT_IMAGE_GAP
    c.drawImage(signature, x, image_y, width=SIGNATURE_WIDTH, height=SIGNATURE_HEIGHT, mask="auto")
    c.save()
    return buffer.getvalue()


def _merge_overlays(source_bytes: bytes, signature: ImageReader, text: str) -> bytes:
    reader = PdfReader(io.BytesIO(source_bytes))
    pages = list(reader.pages)
    logger.info("Stamping %d page(s)", len(pages))
    writer = PdfWriter()
    for page in pages:
        overlay = PdfReader(io.BytesIO(create_overlay(page.mediabox, signature, text)))
        page.merge_page(overlay.pages[0])
        writer.add_page(page)

    output = io.BytesIO()
    writer.write(output)
    return output.getvalue()


def stamp_pdf(source_bytes: bytes, signature_image_bytes: bytes, text: str) -> bytes:
    """Overlay the signature block on every page of ``source_bytes``.

    Returns the bytes of a new pdf. Raises SignatureAssetMissing when the
    image is unusable and SourceUnreadable when the pdf cannot be parsed
    or its pages cannot be merged.
    """
    signature = ImageReader(load_signature_image(signature_image_bytes))
    try:
        return _merge_overlays(source_bytes, signature, text)
    except PdfReadError as e:
        raise SourceUnreadable(f"Source pdf cannot be read: {e}") from e
    except Exception as e:
        # parses but breaks on a bad page tree, resources or boxes
        raise SourceUnreadable(f"Source pdf is malformed: {type(e).__name__}: {e}") from e


class SignatureStamper:
    """Stamps pdf files with the signature image found at ``signature_image_path``."""

    def __init__(self, signature_image_path: str):
        self.signature_image_path = signature_image_path

    def load_signature(self) -> bytes:
        if not os.path.isfile(self.signature_image_path):
            raise SignatureAssetMissing(f"Signature image not found at {self.signature_image_path}")
        with open(self.signature_image_path, "rb") as f:
            return f.read()

    def stamp(self, source_bytes: bytes, physician_name: str) -> bytes:
        return stamp_pdf(source_bytes, self.load_signature(), attribution_text(physician_name))

    def stamp_file(self, source_path: str, output_path: str, physician_name: str):
        logger.info("Signing %s as %s -> %s", source_path, physician_name, output_path)
        with open(source_path, "rb") as f:
            stamped = self.stamp(f.read(), physician_name)
        # the previous artifact stays in place until the new one is complete
        write_atomic(output_path, stamped)
