import pytest

import pdf_identity_watermark.config
import pdf_identity_watermark.layout
import pdf_identity_watermark.tiling as tiling


PageGeometry = pdf_identity_watermark.config.PageGeometry
TilePlacement = pdf_identity_watermark.config.TilePlacement


#============================================
def test_tiles_within_page_bounds() -> None:
	"""
	Every planned tile origin lies inside the page box.
	"""
	pages = [
		PageGeometry(width=595.0, height=842.0),
		PageGeometry(width=792.0, height=612.0),
		PageGeometry(width=300.0, height=200.0),
		PageGeometry(width=100.0, height=100.0),
	]
	bases = [(-50.0, -50.0), (0.0, 0.0), (150.0, 420.0), (600.0, 900.0), (297.5, 421.0)]
	for page in pages:
		for base_x, base_y in bases:
			tiles = tiling.plan_tiles(base_x, base_y, page)
			assert len(tiles) <= 8
			for tile in tiles:
				assert 0.0 <= tile.x <= page.width
				assert 0.0 <= tile.y <= page.height
				assert (tile.x, tile.y) != (base_x, base_y)


#============================================
def test_full_grid_on_large_page() -> None:
	page = PageGeometry(width=1000.0, height=1000.0)
	tiles = tiling.plan_tiles(500.0, 500.0, page)
	assert len(tiles) == 8
	assert tiles[0] == TilePlacement(x=300.0, y=300.0)
	assert tiles[-1] == TilePlacement(x=700.0, y=700.0)


#============================================
def test_corner_base_keeps_inward_tiles() -> None:
	"""
	Tiles on the page edge are kept, tiles past it are dropped.
	"""
	page = PageGeometry(width=400.0, height=400.0)
	tiles = tiling.plan_tiles(0.0, 0.0, page)
	assert tiles == [
		TilePlacement(x=0.0, y=200.0),
		TilePlacement(x=200.0, y=0.0),
		TilePlacement(x=200.0, y=200.0),
	]


#============================================
def test_custom_spacing() -> None:
	page = PageGeometry(width=100.0, height=100.0)
	assert tiling.plan_tiles(50.0, 50.0, page, spacing=200.0) == []
	assert len(tiling.plan_tiles(50.0, 50.0, page, spacing=50.0)) == 8


#============================================
def test_tile_lines_follow_primary_block() -> None:
	"""
	Tile lines keep the primary per-line offsets relative to the anchor.
	"""
	page = PageGeometry(width=595.0, height=842.0)
	block = pdf_identity_watermark.layout.compute_anchor(
		["one", "three"],
		lambda text, size: len(text) * size * 0.5,
		42.0,
		50.0,
		-45.0,
		page,
	)
	tile = TilePlacement(x=block.base_x + 200.0, y=block.base_y - 200.0)
	anchors = tiling.tile_line_anchors(tile, block)
	assert len(anchors) == 2
	for primary, shifted in zip(block.per_line, anchors):
		assert shifted.x == pytest.approx(primary.x + 200.0)
		assert shifted.y == pytest.approx(primary.y - 200.0)
		assert shifted.text == primary.text


#============================================
def test_tile_style() -> None:
	font_size, opacity = tiling.tile_style(42.0, 0.25)
	assert font_size == pytest.approx(33.6)
	assert opacity == pytest.approx(0.15)
