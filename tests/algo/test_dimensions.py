"""Unit tests for thumbnail dimension resolution.

Covers orientation classification, the portrait/landscape/square formulas,
the no-shrink policies, forced orientation and argument validation.
"""

import pytest

from cl_thumbnail_tools import (
    InvalidArgumentError,
    NoShrinkNeededError,
    NoShrinkPolicy,
    Orientation,
    ResizeAction,
    classify_orientation,
    resolve_dimensions,
)

# ============================================================================
# ORIENTATION
# ============================================================================


@pytest.mark.parametrize(
    ("width", "height", "expected"),
    [
        (1920, 1080, Orientation.LANDSCAPE),
        (480, 1920, Orientation.PORTRAIT),
        (500, 500, Orientation.SQUARE),
        (10.5, 10.5, Orientation.SQUARE),
    ],
)
def test_classify_orientation(width: float, height: float, expected: Orientation):
    assert classify_orientation(width, height) == expected


# ============================================================================
# SCENARIOS
# ============================================================================


def test_landscape_scenario():
    outcome = resolve_dimensions(1920, 1080, 480)

    assert outcome.action == ResizeAction.RESIZE
    assert outcome.size == (480, 270)
    assert outcome.orientation == Orientation.LANDSCAPE


def test_portrait_scenario():
    outcome = resolve_dimensions(480, 1920, 240)

    assert outcome.size == (60, 240)
    assert outcome.orientation == Orientation.PORTRAIT


def test_square_shrinks_both_axes():
    outcome = resolve_dimensions(500, 500, 128)

    assert outcome.size == (128, 128)
    assert outcome.orientation == Orientation.SQUARE


def test_square_at_target_passes_through():
    outcome = resolve_dimensions(500, 500, 500)

    assert outcome.action == ResizeAction.PASS_THROUGH
    assert outcome.is_pass_through
    assert outcome.size == (500, 500)


def test_square_at_target_rejected():
    with pytest.raises(NoShrinkNeededError) as exc_info:
        _ = resolve_dimensions(500, 500, 500, on_no_shrink=NoShrinkPolicy.REJECT)

    assert exc_info.value.target_size == 500
    assert exc_info.value.width == 500


# ============================================================================
# PROPERTIES
# ============================================================================


@pytest.mark.parametrize(
    ("width", "height", "target"),
    [(480, 1920, 240), (333, 1000, 7), (999, 1000, 500), (2, 3, 2), (1080, 1921, 1920)],
)
def test_portrait_formula(width: int, height: int, target: int):
    outcome = resolve_dimensions(width, height, target)

    assert outcome.height == target
    assert outcome.width == width * target // height
    assert outcome.width <= target


@pytest.mark.parametrize(
    ("width", "height", "target"),
    [(1920, 1080, 480), (1000, 333, 7), (1000, 999, 500), (3, 2, 2), (4000, 3000, 4)],
)
def test_landscape_formula(width: int, height: int, target: int):
    outcome = resolve_dimensions(width, height, target)

    assert outcome.width == target
    assert outcome.height == height * target // width
    assert outcome.height <= target


@pytest.mark.parametrize(
    ("width", "height", "target"),
    [(1920, 1080, 480), (480, 1920, 240), (1000, 999, 500), (700, 700, 699), (1234, 5678, 99)],
)
def test_resolving_again_at_constrained_axis_needs_no_shrink(
    width: int, height: int, target: int
):
    first = resolve_dimensions(width, height, target)

    again = resolve_dimensions(first.width, first.height, target)
    assert again.action == ResizeAction.PASS_THROUGH
    assert again.size == first.size

    with pytest.raises(NoShrinkNeededError):
        _ = resolve_dimensions(first.width, first.height, target, on_no_shrink=NoShrinkPolicy.REJECT)


def test_target_larger_than_source_passes_through():
    outcome = resolve_dimensions(640, 480, 10_000)

    assert outcome.action == ResizeAction.PASS_THROUGH
    assert outcome.size == (640, 480)


def test_float_dimensions_are_truncated():
    outcome = resolve_dimensions(1000.0, 333.5, 100)

    assert outcome.size == (100, 33)


# ============================================================================
# FORCED ORIENTATION
# ============================================================================


def test_forced_portrait_on_landscape_constrains_height():
    outcome = resolve_dimensions(1920, 1080, 540, orientation_override=Orientation.PORTRAIT)

    assert outcome.orientation == Orientation.PORTRAIT
    assert outcome.size == (960, 540)


def test_forced_landscape_on_portrait_constrains_width():
    outcome = resolve_dimensions(480, 1920, 240, orientation_override=Orientation.LANDSCAPE)

    assert outcome.size == (240, 960)


def test_forced_portrait_no_shrink_uses_height():
    # Width 1920 would shrink, but height 1080 is the constrained axis.
    outcome = resolve_dimensions(1920, 1080, 1080, orientation_override=Orientation.PORTRAIT)

    assert outcome.action == ResizeAction.PASS_THROUGH


def test_forced_square_is_rejected():
    with pytest.raises(InvalidArgumentError, match="landscape or portrait"):
        _ = resolve_dimensions(1920, 1080, 480, orientation_override=Orientation.SQUARE)


# ============================================================================
# VALIDATION
# ============================================================================


@pytest.mark.parametrize("target", [0, -5, True, 2.5, "10", None])
def test_invalid_target_size(target: object):
    with pytest.raises(InvalidArgumentError):
        _ = resolve_dimensions(100, 100, target)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("width", "height"),
    [(0, 100), (100, -1), (float("inf"), 100), (100, float("nan")), (None, 100)],
)
def test_invalid_source_dimensions(width: object, height: object):
    with pytest.raises(InvalidArgumentError):
        _ = resolve_dimensions(width, height, 10)  # type: ignore[arg-type]


def test_scaled_axis_collapsing_to_zero_is_rejected():
    with pytest.raises(InvalidArgumentError, match="0 pixels"):
        _ = resolve_dimensions(10_000, 10, 50)


def test_invalid_argument_is_a_value_error():
    with pytest.raises(ValueError):
        _ = resolve_dimensions(100, 100, 0)
