"""
Overlay rendering and document processing.
"""

# Standard Library
import asyncio
import io

# PIP3 modules
import pypdf
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts
import reportlab.pdfgen.canvas

# local repo modules
import pdf_identity_watermark as piw
import pdf_identity_watermark.config
import pdf_identity_watermark.errors
import pdf_identity_watermark.layout
import pdf_identity_watermark.sanitize
import pdf_identity_watermark.tiling


WatermarkRequest = piw.config.WatermarkRequest
PageGeometry = piw.config.PageGeometry
LineAnchor = piw.config.LineAnchor

MalformedDocumentError = piw.errors.MalformedDocumentError
FontEmbeddingError = piw.errors.FontEmbeddingError
SerializationError = piw.errors.SerializationError

PROGRESS_BAR_WIDTH = piw.config.PROGRESS_BAR_WIDTH


#============================================
def print_progress(page_number: int, total: int, geometry: PageGeometry) -> None:
	"""
	Print a one-line progress bar naming the page being watermarked.

	Args:
		page_number: 1-based page number just finished.
		total: Page count of the document.
		geometry: Geometry of the finished page.
	"""
	if total <= 0:
		return
	filled = (PROGRESS_BAR_WIDTH * page_number) // total
	bar = "#" * filled + "." * (PROGRESS_BAR_WIDTH - filled)
	size_text = f"{geometry.width:.0f}x{geometry.height:.0f} pt"
	print(f"Watermarking page {page_number}/{total} ({size_text}) [{bar}]", end="\r")


#============================================
def resolve_font(request: WatermarkRequest) -> str:
	"""
	Register the request font with ReportLab and return its name.

	Args:
		request: Watermark request.

	Returns:
		Registered ReportLab font name.

	Raises:
		FontEmbeddingError: When the font file or name cannot be loaded.
	"""
	if request.font_path:
		# truncated font files fail with struct.error rather than TTFError
		try:
			font = reportlab.pdfbase.ttfonts.TTFont(request.font_name, request.font_path)
			reportlab.pdfbase.pdfmetrics.registerFont(font)
		except Exception as error:
			raise FontEmbeddingError(
				f"Cannot load font {request.font_name!r} from {request.font_path}: {error}"
			) from error
	try:
		reportlab.pdfbase.pdfmetrics.getFont(request.font_name)
	except KeyError as error:
		raise FontEmbeddingError(f"Unknown font: {request.font_name!r}") from error
	return request.font_name


#============================================
def prepare_lines(lines: list[str], font_name: str) -> list[str]:
	"""
	Transliterate lines and replace anything the font cannot draw.
	"""
	prepared: list[str] = []
	for line in lines:
		sanitized = piw.sanitize.sanitize_text(line)
		prepared.append(piw.sanitize.coerce_to_font(sanitized, font_name))
	return prepared


#============================================
def load_document(pdf_bytes: bytes) -> pypdf.PdfWriter:
	"""
	Parse PDF bytes into an editable document.

	Args:
		pdf_bytes: Raw PDF bytes.

	Returns:
		PdfWriter holding a clone of the input document.

	Raises:
		MalformedDocumentError: When the bytes are not a readable PDF.
	"""
	if not pdf_bytes:
		raise MalformedDocumentError("Input is empty, expected PDF bytes.")
	try:
		reader = pypdf.PdfReader(io.BytesIO(bytes(pdf_bytes)))
		if reader.is_encrypted:
			# some restricted PDFs open with an empty user password
			result = reader.decrypt("")
			if result == pypdf.PasswordType.NOT_DECRYPTED:
				raise MalformedDocumentError("PDF is encrypted and needs a password.")
		writer = pypdf.PdfWriter(clone_from=reader)
	except MalformedDocumentError:
		raise
	except Exception as error:
		raise MalformedDocumentError(f"Failed to load PDF: {error}") from error
	return writer


#============================================
def page_geometry(page: pypdf.PageObject) -> PageGeometry:
	"""
	Read a page's MediaBox geometry.

	Args:
		page: pypdf page.

	Returns:
		PageGeometry.
	"""
	mediabox = page.mediabox
	return PageGeometry(
		width=float(mediabox.width),
		height=float(mediabox.height),
		left=float(mediabox.left),
		bottom=float(mediabox.bottom),
	)


#============================================
def draw_text_run(
	pdf: reportlab.pdfgen.canvas.Canvas,
	anchor: LineAnchor,
	font_name: str,
	font_size: float,
	color: tuple[float, float, float],
	opacity: float,
	angle: float,
) -> None:
	"""
	Draw one line of text rotated about its own origin.

	Args:
		pdf: ReportLab canvas.
		anchor: Line origin and text.
		font_name: ReportLab font name.
		font_size: Font size in points.
		color: RGB fill color.
		opacity: Fill alpha.
		angle: Rotation in degrees.
	"""
	pdf.saveState()
	pdf.setFont(font_name, font_size)
	pdf.setFillColorRGB(color[0], color[1], color[2])
	pdf.setFillAlpha(opacity)
	pdf.translate(anchor.x, anchor.y)
	pdf.rotate(angle)
	pdf.drawString(0, 0, anchor.text)
	pdf.restoreState()


#============================================
def draw_watermark(
	pdf: reportlab.pdfgen.canvas.Canvas,
	lines: list[str],
	font_name: str,
	request: WatermarkRequest,
	geometry: PageGeometry,
) -> int:
	"""
	Draw the primary block and its tiles onto a page-sized canvas.

	Args:
		pdf: ReportLab canvas sized to the page.
		lines: Prepared text lines.
		font_name: Registered font name.
		request: Watermark request.
		geometry: Page geometry.

	Returns:
		Number of text runs drawn.
	"""
	width_fn = piw.layout.build_width_function(font_name)
	block = piw.layout.compute_anchor(
		lines,
		width_fn,
		request.font_size,
		request.line_spacing,
		request.angle,
		geometry,
	)
	runs = 0
	for anchor in block.per_line:
		draw_text_run(
			pdf,
			anchor,
			font_name,
			request.font_size,
			request.color,
			request.opacity,
			request.angle,
		)
		runs += 1

	tiles = piw.tiling.plan_tiles(block.base_x, block.base_y, geometry, request.tile_spacing)
	tile_font_size, tile_opacity = piw.tiling.tile_style(request.font_size, request.opacity)
	for tile in tiles:
		for anchor in piw.tiling.tile_line_anchors(tile, block):
			draw_text_run(
				pdf,
				anchor,
				font_name,
				tile_font_size,
				request.color,
				tile_opacity,
				request.angle,
			)
			runs += 1
	return runs


#============================================
def build_overlay_page(
	lines: list[str],
	font_name: str,
	request: WatermarkRequest,
	geometry: PageGeometry,
) -> pypdf.PageObject:
	"""
	Render the watermark for one page size into a single-page PDF.

	Args:
		lines: Prepared text lines.
		font_name: Registered font name.
		request: Watermark request.
		geometry: Page geometry.

	Returns:
		Overlay page object.
	"""
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(
		buffer,
		pagesize=(geometry.width, geometry.height),
		invariant=1,
	)
	draw_watermark(pdf, lines, font_name, request, geometry)
	pdf.save()
	buffer.seek(0)
	reader = pypdf.PdfReader(buffer)
	return reader.pages[0]


#============================================
def serialize_document(writer: pypdf.PdfWriter) -> bytes:
	"""
	Write the document to bytes.

	Raises:
		SerializationError: When pypdf cannot write the document.
	"""
	buffer = io.BytesIO()
	try:
		writer.write(buffer)
	except Exception as error:
		raise SerializationError(f"Failed to save watermarked PDF: {error}") from error
	return buffer.getvalue()


#============================================
def apply_watermark(pdf_bytes: bytes, request: WatermarkRequest, verbose: bool = False) -> bytes:
	"""
	Overlay a tiled, rotated text watermark on every page of a PDF.

	Pages are processed in order, each with its own size. The original
	content stays underneath the overlay and page boxes are unchanged. A
	failure on any page aborts the call without returning output.

	One overlay is rendered per distinct page size and shared by every
	page of that size. The font is resolved once per call, but each overlay
	carries its own copy of an embedded TrueType subset, so a document with
	three page sizes holds three subsets.

	Args:
		pdf_bytes: Input PDF bytes.
		request: Watermark request.
		verbose: Print page progress.

	Returns:
		Watermarked PDF bytes.
	"""
	writer = load_document(pdf_bytes)
	font_name = resolve_font(request)
	lines = prepare_lines(request.lines, font_name)

	overlay_cache: dict[PageGeometry, pypdf.PageObject] = {}
	total = len(writer.pages)
	for index, page in enumerate(writer.pages):
		try:
			geometry = page_geometry(page)
		except Exception as error:
			raise MalformedDocumentError(f"Failed to process page {index + 1}: {error}") from error
		# origin is not part of the overlay, only its placement
		size_key = PageGeometry(width=round(geometry.width, 2), height=round(geometry.height, 2))
		if size_key not in overlay_cache:
			overlay_cache[size_key] = build_overlay_page(lines, font_name, request, geometry)
		transform = pypdf.Transformation().translate(geometry.left, geometry.bottom)
		try:
			page.merge_transformed_page(overlay_cache[size_key], transform)
		except Exception as error:
			raise MalformedDocumentError(f"Failed to process page {index + 1}: {error}") from error
		if verbose:
			print_progress(index + 1, total, geometry)
	if verbose and total > 0:
		print()

	return serialize_document(writer)


#============================================
async def apply_watermark_async(pdf_bytes: bytes, request: WatermarkRequest) -> bytes:
	"""
	Run apply_watermark in a worker thread.
	"""
	return await asyncio.to_thread(apply_watermark, pdf_bytes, request)
