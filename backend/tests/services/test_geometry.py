import pytest

from canvas_layout.services import geometry
from canvas_layout.services.geometry import (
    DEFAULT_NODE_HEIGHT,
    DEFAULT_NODE_WIDTH,
    GRID_PADDING,
    MAX_NODE_HEIGHT,
    MAX_NODE_WIDTH,
    MIN_NODE_HEIGHT,
    MIN_NODE_WIDTH,
    clamp_node_dimensions,
    column_for_x,
    column_x,
    node_height,
    node_width,
    rects_overlap,
)


def test_dimension_constants_match_card_stylesheet():
    # --card-min-width / --card-max-width / --card-min-height / --card-max-height
    assert MIN_NODE_WIDTH == 180
    assert MAX_NODE_WIDTH == 900
    assert MIN_NODE_HEIGHT == 100
    assert MAX_NODE_HEIGHT == 800


def test_grid_constants():
    assert geometry.GRID_COLUMNS == 4
    assert geometry.GRID_GAP == 40
    assert geometry.GRID_PADDING == 32
    assert geometry.RESIZE_INCREMENT_PX == 96


def test_defaults_within_bounds():
    assert MIN_NODE_WIDTH <= DEFAULT_NODE_WIDTH <= MAX_NODE_WIDTH
    assert MIN_NODE_HEIGHT <= DEFAULT_NODE_HEIGHT <= MAX_NODE_HEIGHT


@pytest.mark.parametrize(
    "width,height,expected",
    [
        (100, 200, (MIN_NODE_WIDTH, 200)),
        (1500, 200, (MAX_NODE_WIDTH, 200)),
        (300, 50, (300, MIN_NODE_HEIGHT)),
        (300, 1000, (300, MAX_NODE_HEIGHT)),
        (400, 300, (400, 300)),
        (50, 1000, (MIN_NODE_WIDTH, MAX_NODE_HEIGHT)),
        (MIN_NODE_WIDTH, MIN_NODE_HEIGHT, (MIN_NODE_WIDTH, MIN_NODE_HEIGHT)),
        (MAX_NODE_WIDTH, MAX_NODE_HEIGHT, (MAX_NODE_WIDTH, MAX_NODE_HEIGHT)),
        (-20, -20, (MIN_NODE_WIDTH, MIN_NODE_HEIGHT)),
    ],
)
def test_clamp_node_dimensions(width, height, expected):
    assert clamp_node_dimensions(width, height) == expected


def test_node_dimensions_default_when_missing(make_node):
    node = make_node("n1")
    assert node_width(node) == DEFAULT_NODE_WIDTH
    assert node_height(node) == DEFAULT_NODE_HEIGHT


def test_node_dimensions_clamped_from_malformed_data(make_node):
    node = make_node("n1", width=5000, height=1)
    assert node_width(node) == MAX_NODE_WIDTH
    assert node_height(node) == MIN_NODE_HEIGHT


def test_column_x_and_back():
    for column in range(geometry.GRID_COLUMNS):
        assert column_for_x(column_x(column)) == column
    assert column_x(0) == GRID_PADDING
    assert column_x(1) == GRID_PADDING + DEFAULT_NODE_WIDTH + geometry.GRID_GAP


def test_column_for_x_is_bounded():
    assert column_for_x(-10_000) == 0
    assert column_for_x(10_000) == geometry.GRID_COLUMNS - 1


def test_rects_overlap():
    assert rects_overlap((0, 0, 10, 10), (5, 5, 10, 10))
    # Touching edges do not overlap
    assert not rects_overlap((0, 0, 10, 10), (10, 0, 10, 10))
    assert not rects_overlap((0, 0, 10, 10), (0, 10, 10, 10))
    assert not rects_overlap((0, 0, 10, 10), (50, 50, 10, 10))
