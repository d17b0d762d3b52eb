import pytest

import foldover_badge.geometry
import foldover_badge.model


PageSettings = foldover_badge.model.PageSettings
TextElement = foldover_badge.model.TextElement
PageBox = foldover_badge.geometry.PageBox


#============================================
def _element(y: float, height: float = 0.5, x: float = 0.5, width: float = 3.0) -> TextElement:
	return TextElement(id="t", x=x, y=y, width=width, height=height, content="x")


#============================================
def test_mirror_is_an_involution() -> None:
	"""
	Verify mirroring twice returns the original top edge.
	"""
	for y_in, height_in in ((3.0, 0.5), (4.0, 1.25), (5.5, 0.5), (3.2, 0.0)):
		once = foldover_badge.geometry.mirror_y(y_in, height_in, 6.0)
		assert once != pytest.approx(y_in)
		assert foldover_badge.geometry.mirror_y(once, height_in, 6.0) == pytest.approx(y_in)


#============================================
def test_lower_half_element_is_mirrored() -> None:
	"""
	Verify a lower-half element lands reflected into the upper half.
	"""
	box = foldover_badge.geometry.to_page_coordinates(_element(4.0), PageSettings())
	assert box.mirrored
	assert box.y == pytest.approx((6.0 - 4.0 - 0.5) * 72.0)
	assert box.x == pytest.approx(36.0)
	assert box.width == pytest.approx(216.0)
	assert box.height == pytest.approx(36.0)


#============================================
def test_upper_half_element_is_unchanged() -> None:
	"""
	Verify an upper-half element keeps its position.
	"""
	box = foldover_badge.geometry.to_page_coordinates(_element(1.0), PageSettings())
	assert not box.mirrored
	assert box.y == pytest.approx(72.0)


#============================================
def test_fold_line_belongs_to_lower_half() -> None:
	"""
	Verify an element starting exactly on the fold is mirrored.
	"""
	box = foldover_badge.geometry.to_page_coordinates(_element(3.0, height=1.0), PageSettings())
	assert box.mirrored
	assert box.y == pytest.approx(2.0 * 72.0)


#============================================
def test_fold_disabled_or_not_applied() -> None:
	"""
	Verify no mirroring without fold-over or when the caller skips it.
	"""
	flat_page = PageSettings(fold_over_enabled=False)
	box = foldover_badge.geometry.to_page_coordinates(_element(4.0), flat_page)
	assert not box.mirrored
	assert box.y == pytest.approx(288.0)

	box = foldover_badge.geometry.to_page_coordinates(_element(4.0), PageSettings(), apply_fold=False)
	assert not box.mirrored
	assert box.y == pytest.approx(288.0)


#============================================
def test_pixel_design_units_scale_per_axis() -> None:
	"""
	Verify designer canvas pixels map onto the physical page.
	"""
	page = PageSettings(design_units="px")
	element = _element(144.0, height=72.0, x=144.0, width=288.0)
	box = foldover_badge.geometry.to_page_coordinates(element, page)
	assert not box.mirrored
	assert box.x == pytest.approx(72.0)
	assert box.y == pytest.approx(72.0)
	assert box.width == pytest.approx(144.0)
	assert box.height == pytest.approx(36.0)


#============================================
def test_pixel_design_units_lower_half() -> None:
	"""
	Verify the fold test uses inches after pixel conversion.
	"""
	page = PageSettings(design_units="px", canvas_width_px=400.0, canvas_height_px=600.0)
	element = _element(400.0, height=50.0, x=0.0, width=100.0)
	box = foldover_badge.geometry.to_page_coordinates(element, page)
	# 400px of 600px on a 6in page is 4in; 50px is 0.5in
	assert box.mirrored
	assert box.y == pytest.approx(1.5 * 72.0)
	assert box.width == pytest.approx(72.0)


#============================================
def test_page_size_points() -> None:
	"""
	Verify the default 4x6 page is 288x432 points.
	"""
	assert foldover_badge.geometry.page_size_points(PageSettings()) == (288.0, 432.0)


#============================================
def test_dash_tiling_clips_last_dash() -> None:
	"""
	Verify dashes start at zero and the last dash stops at the end.
	"""
	assert foldover_badge.geometry.tile_dashes(30.0) == [(0.0, 10.0), (15.0, 25.0)]
	assert foldover_badge.geometry.tile_dashes(22.0) == [(0.0, 10.0), (15.0, 22.0)]
	assert foldover_badge.geometry.tile_dashes(0.0) == []


#============================================
def test_dot_tiling() -> None:
	"""
	Verify dot centers are spaced by the pitch from the run start.
	"""
	assert foldover_badge.geometry.tile_dots(16.0) == [0.0, 8.0, 16.0]
	assert foldover_badge.geometry.tile_dots(20.0) == [0.0, 8.0, 16.0]


#============================================
def test_box_edges_are_clockwise_and_connected() -> None:
	"""
	Verify each edge starts where the previous one ended.
	"""
	edges = foldover_badge.geometry.box_edges(PageBox(10.0, 20.0, 30.0, 40.0))
	assert edges[0] == ((10.0, 20.0), (40.0, 20.0))
	assert edges[2] == ((40.0, 60.0), (10.0, 60.0))
	for index, (_start, end) in enumerate(edges):
		next_start = edges[(index + 1) % len(edges)][0]
		assert end == next_start
