import math

import pytest

import pdf_identity_watermark.config
import pdf_identity_watermark.layout as layout


PageGeometry = pdf_identity_watermark.config.PageGeometry

A4 = PageGeometry(width=595.0, height=842.0)
LINES = ["Nguyen Van Anh", "Phong Ke hoach", "19/10/2026 08:30:00"]


#============================================
def fixed_width(text: str, font_size: float) -> float:
	return len(text) * font_size * 0.5


#============================================
def failing_width(text: str, font_size: float) -> float:
	raise UnicodeEncodeError("cp1252", text, 0, 1, "unsupported glyph")


#============================================
def test_anchor_offset_recovers_page_center() -> None:
	"""
	Undoing the rotation offset lands back on the page center.
	"""
	width_fn = layout.build_width_function("Helvetica")
	block = layout.compute_anchor(LINES, width_fn, 42.0, 50.0, -45.0, A4)
	theta = math.radians(-45.0)
	offset_x = (block.max_width * math.cos(theta) + block.total_height * math.sin(theta)) / 2.0
	offset_y = (block.max_width * math.sin(theta) - block.total_height * math.cos(theta)) / 2.0
	assert block.base_x + offset_x == pytest.approx(595.0 / 2.0)
	assert block.base_y + offset_y == pytest.approx(842.0 / 2.0)


#============================================
def test_block_height_and_width() -> None:
	block = layout.compute_anchor(LINES, fixed_width, 42.0, 50.0, -45.0, A4)
	assert block.total_height == pytest.approx(3 * 42.0 + 2 * 8.0)
	assert block.max_width == pytest.approx(max(fixed_width(line, 42.0) for line in LINES))
	assert [anchor.text for anchor in block.per_line] == LINES


#============================================
def test_line_positions() -> None:
	"""
	Lines step down by the line spacing and recenter on the page center.
	"""
	angle = -45.0
	block = layout.compute_anchor(LINES, fixed_width, 42.0, 50.0, angle, A4)
	cos_theta = math.cos(math.radians(angle))
	for index, anchor in enumerate(block.per_line):
		expected_y = block.base_y + block.total_height / 2.0 - index * 50.0
		expected_x = 595.0 / 2.0 - fixed_width(LINES[index], 42.0) * cos_theta / 2.0
		assert anchor.y == pytest.approx(expected_y)
		assert anchor.x == pytest.approx(expected_x)


#============================================
def test_unrotated_single_line_anchor() -> None:
	block = layout.compute_anchor(["CONFIDENTIAL"], fixed_width, 40.0, 48.0, 0.0, A4)
	width = fixed_width("CONFIDENTIAL", 40.0)
	assert block.base_x == pytest.approx((595.0 - width) / 2.0)
	assert block.base_y == pytest.approx(421.0 + 20.0)
	assert block.per_line[0].x == pytest.approx(block.base_x)


#============================================
def test_width_fallback_on_glyph_failure() -> None:
	"""
	A failing metric falls back to the character count estimate.
	"""
	assert layout.measure_line_width(failing_width, "abcd", 10.0) == pytest.approx(24.0)
	block = layout.compute_anchor(["abcd", "ab"], failing_width, 10.0, 12.0, 0.0, A4)
	assert block.max_width == pytest.approx(24.0)


#============================================
def test_rotated_anchor_is_pure() -> None:
	anchor = layout.rotated_anchor((100.0, 200.0), (80.0, 40.0), 90.0)
	assert anchor[0] == pytest.approx(100.0 - 20.0)
	assert anchor[1] == pytest.approx(200.0 - 40.0)
	assert layout.rotated_anchor((100.0, 200.0), (80.0, 40.0), 90.0) == anchor


#============================================
def test_compute_anchor_rejects_empty_lines() -> None:
	with pytest.raises(ValueError):
		layout.compute_anchor([], fixed_width, 10.0, 12.0, 0.0, A4)
