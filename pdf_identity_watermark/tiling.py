"""
Tile planning for full page watermark coverage.
"""

# local repo modules
import pdf_identity_watermark as piw
import pdf_identity_watermark.config


PageGeometry = piw.config.PageGeometry
BlockAnchor = piw.config.BlockAnchor
LineAnchor = piw.config.LineAnchor
TilePlacement = piw.config.TilePlacement

DEFAULT_TILE_SPACING = piw.config.DEFAULT_TILE_SPACING
TILE_FONT_SCALE = piw.config.TILE_FONT_SCALE
TILE_OPACITY_SCALE = piw.config.TILE_OPACITY_SCALE
TILE_STEPS = (-1, 0, 1)


#============================================
def plan_tiles(
	base_x: float,
	base_y: float,
	page: PageGeometry,
	spacing: float = DEFAULT_TILE_SPACING,
) -> list[TilePlacement]:
	"""
	Plan the extra tiles around the primary block.

	The primary tile at offset (0, 0) is excluded. Tiles whose origin falls
	outside the page box are dropped, so at most eight tiles are returned.

	Args:
		base_x: Primary block anchor x.
		base_y: Primary block anchor y.
		page: Page geometry.
		spacing: Grid step in points.

	Returns:
		List of TilePlacement in column order.
	"""
	tiles: list[TilePlacement] = []
	for step_x in TILE_STEPS:
		for step_y in TILE_STEPS:
			if step_x == 0 and step_y == 0:
				continue
			x = base_x + step_x * spacing
			y = base_y + step_y * spacing
			if not page.contains(x, y):
				continue
			tiles.append(TilePlacement(x=x, y=y))
	return tiles


#============================================
def tile_line_anchors(tile: TilePlacement, block: BlockAnchor) -> list[LineAnchor]:
	"""
	Shift the primary block's line anchors onto a tile origin.

	Args:
		tile: Tile origin.
		block: Primary block anchor.

	Returns:
		List of LineAnchor for the tile.
	"""
	shift_x = tile.x - block.base_x
	shift_y = tile.y - block.base_y
	return [
		LineAnchor(x=anchor.x + shift_x, y=anchor.y + shift_y, text=anchor.text)
		for anchor in block.per_line
	]


#============================================
def tile_style(font_size: float, opacity: float) -> tuple[float, float]:
	"""
	Scale the primary font size and opacity for secondary tiles.

	Returns:
		Tuple of (font_size, opacity).
	"""
	return (font_size * TILE_FONT_SCALE, opacity * TILE_OPACITY_SCALE)
