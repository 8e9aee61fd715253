"""
Rotated text block geometry.

Places a multi-line text block so that its rotated bounding box is
centered on the page. The block center is corrected as a whole and each
line is recentered horizontally; lines do not get an independent
rotational correction, so placement is close to but not exactly centered
line by line. Existing outputs depend on this placement.
"""

# Standard Library
import math
import typing

# PIP3 modules
import reportlab.pdfbase.pdfmetrics

# local repo modules
import pdf_identity_watermark as piw
import pdf_identity_watermark.config


PageGeometry = piw.config.PageGeometry
LineAnchor = piw.config.LineAnchor
BlockAnchor = piw.config.BlockAnchor

FALLBACK_CHAR_WIDTH_FACTOR = piw.config.FALLBACK_CHAR_WIDTH_FACTOR

WidthFunction = typing.Callable[[str, float], float]


#============================================
def build_width_function(font_name: str) -> WidthFunction:
	"""
	Build a glyph metric function for a registered ReportLab font.

	Args:
		font_name: ReportLab font name.

	Returns:
		Callable mapping (text, font_size) to a width in points.
	"""
	def width_fn(text: str, font_size: float) -> float:
		return reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, font_size)
	return width_fn


#============================================
def estimate_line_width(line: str, font_size: float) -> float:
	return len(line) * font_size * FALLBACK_CHAR_WIDTH_FACTOR


#============================================
def measure_line_width(width_fn: WidthFunction, line: str, font_size: float) -> float:
	"""
	Measure a line, estimating from the character count if the font fails.

	Args:
		width_fn: Glyph metric function.
		line: Text to measure.
		font_size: Font size in points.

	Returns:
		Width in points.
	"""
	try:
		return float(width_fn(line, font_size))
	except (UnicodeError, KeyError, ValueError):
		return estimate_line_width(line, font_size)


#============================================
def compute_block_height(line_count: int, font_size: float, line_spacing: float) -> float:
	return line_count * font_size + (line_count - 1) * (line_spacing - font_size)


#============================================
def rotated_anchor(
	center: tuple[float, float],
	block_size: tuple[float, float],
	angle: float,
) -> tuple[float, float]:
	"""
	Compute the draw origin that puts a rotated block's center on a point.

	Args:
		center: Target center (x, y).
		block_size: Block (width, height) before rotation.
		angle: Rotation in degrees, counter-clockwise.

	Returns:
		Anchor (x, y) for the block.
	"""
	center_x, center_y = center
	block_width, block_height = block_size
	theta = math.radians(angle)
	offset_x = (block_width * math.cos(theta) + block_height * math.sin(theta)) / 2.0
	offset_y = (block_width * math.sin(theta) - block_height * math.cos(theta)) / 2.0
	return (center_x - offset_x, center_y - offset_y)


#============================================
def compute_line_anchors(
	lines: list[str],
	widths: list[float],
	anchor: tuple[float, float],
	center_x: float,
	total_height: float,
	line_spacing: float,
	angle: float,
) -> list[LineAnchor]:
	"""
	Compute per-line draw origins for a block anchored at a point.

	Lines run top to bottom. Each line is recentered horizontally around
	center_x by half of its rotated width.

	Args:
		lines: Text lines.
		widths: Width of each line.
		anchor: Block anchor (x, y).
		center_x: Horizontal center used for per-line recentering.
		total_height: Block height.
		line_spacing: Distance between baselines.
		angle: Rotation in degrees.

	Returns:
		List of LineAnchor.
	"""
	cos_theta = math.cos(math.radians(angle))
	anchors: list[LineAnchor] = []
	for index, line in enumerate(lines):
		line_y = anchor[1] + total_height / 2.0 - index * line_spacing
		line_x = center_x - (widths[index] * cos_theta) / 2.0
		anchors.append(LineAnchor(x=line_x, y=line_y, text=line))
	return anchors


#============================================
def compute_anchor(
	lines: list[str],
	width_fn: WidthFunction,
	font_size: float,
	line_spacing: float,
	angle: float,
	page: PageGeometry,
) -> BlockAnchor:
	"""
	Compute the primary block anchor and line positions for one page.

	Args:
		lines: Text lines, first line on top.
		width_fn: Glyph metric function.
		font_size: Font size in points.
		line_spacing: Distance between baselines.
		angle: Rotation in degrees.
		page: Page geometry.

	Returns:
		BlockAnchor.
	"""
	if not lines:
		raise ValueError("compute_anchor needs at least one line")
	widths = [measure_line_width(width_fn, line, font_size) for line in lines]
	max_width = max(widths)
	total_height = compute_block_height(len(lines), font_size, line_spacing)

	center_x, center_y = page.center
	base_x, base_y = rotated_anchor((center_x, center_y), (max_width, total_height), angle)
	per_line = compute_line_anchors(
		lines,
		widths,
		(base_x, base_y),
		center_x,
		total_height,
		line_spacing,
		angle,
	)
	return BlockAnchor(
		base_x=base_x,
		base_y=base_y,
		per_line=per_line,
		max_width=max_width,
		total_height=total_height,
	)
