"""
Pytest configuration for local imports and fixture PDFs.
"""

# Standard Library
import io
import os
import sys

# PIP3 modules
import pytest
import reportlab.lib.pagesizes
import reportlab.pdfgen.canvas

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
def build_pdf(page_sizes: list[tuple[float, float]]) -> bytes:
	"""
	Build a PDF with one labelled page per size.

	Args:
		page_sizes: List of (width, height) tuples.

	Returns:
		PDF bytes.
	"""
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, invariant=1)
	for index, (width, height) in enumerate(page_sizes):
		pdf.setPageSize((width, height))
		pdf.setFont("Helvetica", 14)
		pdf.drawString(36, 36, f"Original page {index + 1}")
		pdf.showPage()
	pdf.save()
	return buffer.getvalue()


@pytest.fixture
def a4_pdf() -> bytes:
	return build_pdf([reportlab.lib.pagesizes.A4])


@pytest.fixture
def mixed_pdf() -> bytes:
	return build_pdf([
		reportlab.lib.pagesizes.A4,
		reportlab.lib.pagesizes.landscape(reportlab.lib.pagesizes.letter),
		(300.0, 200.0),
	])
