"""
Screenshot-to-PDF Assembly

Each screenshot becomes one page sized to the image's pixel dimensions
(1 px = 1 pt) rather than a fixed paper size, so tall slides are never cut off.
"""

from pathlib import Path
from typing import Union

try:
    import fitz  # PyMuPDF
except ImportError:
    raise ImportError("PyMuPDF (fitz) is required for PDF assembly. Install with: pip install PyMuPDF")


def image_to_pdf(png_bytes: bytes) -> "fitz.Document":
    """Wrap one PNG screenshot into a new single-page PDF document.

    Raises:
        RuntimeError: (PyMuPDF error subclasses) if the image cannot be decoded
    """
    pixmap = fitz.Pixmap(png_bytes)
    width, height = pixmap.width, pixmap.height

    doc = fitz.open()
    page = doc.new_page(width=width, height=height)
    page.insert_image(page.rect, stream=png_bytes)
    return doc


class PdfAssembler:
    """Append-only PDF built from screenshots, written to disk once."""

    def __init__(self):
        self.document = fitz.open()

    @property
    def page_count(self) -> int:
        return self.document.page_count

    def add_screenshot(self, png_bytes: bytes) -> None:
        """Convert a screenshot and append its page."""
        single = image_to_pdf(png_bytes)
        try:
            self.document.insert_pdf(single)
        finally:
            single.close()

    def save(self, output_path: Union[str, Path]) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.document.save(str(output_path))
        return output_path

    def close(self) -> None:
        self.document.close()
