"""Pure thumbnail dimension computation logic."""

import math

from loguru import logger
from pydantic import ValidationError

from ..common.errors import InvalidArgumentError, NoShrinkNeededError
from ..common.schemas import (
    ImageDimensions,
    NoShrinkPolicy,
    Orientation,
    ResizeAction,
    ResizeOutcome,
)


def classify_orientation(width: float, height: float) -> Orientation:
    return _dimensions(width, height).orientation


def _dimensions(width: float, height: float) -> ImageDimensions:
    try:
        return ImageDimensions(width=width, height=height)
    except ValidationError as exc:
        raise InvalidArgumentError(
            f"Image dimensions must be positive finite numbers, got {width!r}x{height!r}"
        ) from exc


def _scale(other: float, constrained: float, target_size: int) -> int:
    """floor(other / constrained * target_size), exact for integral inputs."""
    if float(other).is_integer() and float(constrained).is_integer():
        return int(other) * target_size // int(constrained)
    return math.floor(other * target_size / constrained)


def resolve_dimensions(
    width: float,
    height: float,
    target_size: int,
    *,
    orientation_override: Orientation | None = None,
    on_no_shrink: NoShrinkPolicy = NoShrinkPolicy.PASS_THROUGH,
) -> ResizeOutcome:
    """
    Compute thumbnail dimensions for a source image.

    The constrained axis (height for portrait, width for landscape) is pinned
    to ``target_size`` and the other axis is scaled proportionally and
    truncated. Square images get ``target_size`` on both axes.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        target_size: Requested size of the constrained axis
        orientation_override: Constrain this axis (landscape or portrait)
            instead of deriving it from the source shape
        on_no_shrink: Whether a target that does not shrink the source is
            passed through or rejected

    Returns:
        ResizeOutcome with the output size, or the source size when passed
        through

    Raises:
        InvalidArgumentError: If an input is not positive, the override is
            square, or the scaled axis would collapse to zero pixels
        NoShrinkNeededError: If the target does not shrink the source and the
            policy is ``REJECT``
    """
    dims = _dimensions(width, height)
    if isinstance(target_size, bool) or not isinstance(target_size, int) or target_size <= 0:
        raise InvalidArgumentError(f"Thumbnail size must be a positive integer, got {target_size!r}")
    if orientation_override == Orientation.SQUARE:
        raise InvalidArgumentError(
            "Orientation override must be landscape or portrait; square would distort the image"
        )

    orientation = orientation_override if orientation_override is not None else dims.orientation

    if orientation == Orientation.PORTRAIT:
        constrained = dims.height
    else:
        constrained = dims.width

    if constrained <= target_size:
        if on_no_shrink == NoShrinkPolicy.REJECT:
            raise NoShrinkNeededError(dims.width, dims.height, target_size)
        logger.debug(
            f"No shrink needed for {dims.width:g}x{dims.height:g} at size {target_size}; "
            + "passing through"
        )
        return ResizeOutcome(
            action=ResizeAction.PASS_THROUGH,
            width=max(int(dims.width), 1),
            height=max(int(dims.height), 1),
            orientation=orientation,
        )

    if orientation == Orientation.PORTRAIT:
        out_width = _scale(dims.width, dims.height, target_size)
        out_height = target_size
    elif orientation == Orientation.LANDSCAPE:
        out_width = target_size
        out_height = _scale(dims.height, dims.width, target_size)
    else:
        out_width = out_height = target_size

    if out_width < 1 or out_height < 1:
        raise InvalidArgumentError(
            f"Thumbnail size {target_size} is too small for a "
            + f"{dims.width:g}x{dims.height:g} image: scaled side would be 0 pixels"
        )

    logger.debug(
        f"Resolved {dims.width:g}x{dims.height:g} ({orientation}) at size {target_size} "
        + f"-> {out_width}x{out_height}"
    )
    return ResizeOutcome(
        action=ResizeAction.RESIZE,
        width=out_width,
        height=out_height,
        orientation=orientation,
    )
