"""Pillow backed decode, resample and encode steps of thumbnail creation."""

from io import BytesIO
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from ..common.errors import DecodeFailureError, EncodeFailureError
from ..common.schemas import NoShrinkPolicy, Orientation, OutputFormat, ResizeOutcome
from ..utils.profiling import timed
from .dimensions import resolve_dimensions

# ICO directory entries store each side in a single byte.
MAX_ICON_SIZE = 256

# Pixel modes each encoder can write without conversion.
_ENCODER_MODES: dict[OutputFormat, tuple[str, ...]] = {
    OutputFormat.JPEG: ("1", "L", "RGB", "CMYK"),
    OutputFormat.BMP: ("1", "L", "P", "RGB"),
    OutputFormat.PNG: ("1", "L", "LA", "P", "RGB", "RGBA", "I"),
    OutputFormat.GIF: ("1", "L", "P", "RGB", "RGBA"),
    OutputFormat.TIFF: ("1", "L", "LA", "P", "RGB", "RGBA", "CMYK", "I", "F"),
    OutputFormat.ICON: ("RGB", "RGBA"),
}


def decode_image(stream: BinaryIO) -> Image.Image:
    """Open and fully load an image from ``stream``.

    Raises:
        DecodeFailureError: If the bytes are empty, truncated, or not a
            raster format Pillow recognizes
    """
    try:
        img = Image.open(stream)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise DecodeFailureError(f"Source could not be decoded as an image: {exc}") from exc

    try:
        img.load()
    except (Image.DecompressionBombError, OSError, ValueError, SyntaxError, EOFError) as exc:
        img.close()
        raise DecodeFailureError(f"Image data is corrupt or truncated: {exc}") from exc

    # 16-bit modes are widened to "I", which every resampling filter handles.
    if img.mode.startswith("I;16"):
        with img:
            return img.convert("I")
    return img


def resample_image(
    img: Image.Image,
    outcome: ResizeOutcome,
    resample: Image.Resampling = Image.Resampling.BICUBIC,
) -> Image.Image:
    if outcome.is_pass_through:
        return img
    return img.resize(outcome.size, resample)


def _prepare_mode(img: Image.Image, format: OutputFormat) -> Image.Image:
    if img.mode in _ENCODER_MODES[format]:
        return img
    if img.mode == "I":
        # 16-bit samples scaled down for 8-bit encoders; convert() would clip.
        with img.point(lambda v: v * (1 / 256)) as scaled:
            img = scaled.convert("L")
        if img.mode in _ENCODER_MODES[format]:
            return img
    if format in (OutputFormat.JPEG, OutputFormat.BMP):
        return img.convert("RGB")
    has_alpha = "A" in img.mode or "transparency" in img.info
    return img.convert("RGBA" if has_alpha else "RGB")


def _require_supported(format: OutputFormat) -> str:
    pil_format = format.pil_format
    if pil_format is None:
        raise EncodeFailureError(
            format.value,
            f"Output format '{format.value}' is not supported; "
            + f"use one of {[fmt.value for fmt in OutputFormat.supported()]}",
        )
    return pil_format


def encode_image(img: Image.Image, format: OutputFormat, *, quality: int = 90) -> bytes:
    """
    Serialize ``img`` in ``format``.

    Args:
        img: Image to write
        format: Target encoding
        quality: JPEG quality (1-100), ignored by other encoders

    Returns:
        Encoded bytes

    Raises:
        EncodeFailureError: If Pillow has no writer for the format, the image
            exceeds the format's limits, or the encoder fails
    """
    pil_format = _require_supported(format)

    save_kwargs: dict[str, object] = {}
    if format == OutputFormat.JPEG:
        save_kwargs["quality"] = quality
    elif format == OutputFormat.PNG:
        save_kwargs["optimize"] = True
    elif format == OutputFormat.ICON:
        if img.width > MAX_ICON_SIZE or img.height > MAX_ICON_SIZE:
            raise EncodeFailureError(
                format.value,
                f"Icons are limited to {MAX_ICON_SIZE}x{MAX_ICON_SIZE} pixels, "
                + f"got {img.width}x{img.height}",
            )
        save_kwargs["sizes"] = [img.size]

    prepared = img
    buffer = BytesIO()
    try:
        prepared = _prepare_mode(img, format)
        prepared.save(buffer, format=pil_format, **save_kwargs)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeFailureError(
            format.value, f"Failed to encode thumbnail as {pil_format}: {exc}"
        ) from exc
    finally:
        if prepared is not img:
            prepared.close()
    return buffer.getvalue()


@timed
def image_thumbnail(
    *,
    stream: BinaryIO,
    target_size: int,
    format: OutputFormat,
    orientation_override: Orientation | None = None,
    on_no_shrink: NoShrinkPolicy = NoShrinkPolicy.PASS_THROUGH,
    resample: Image.Resampling = Image.Resampling.BICUBIC,
    quality: int = 90,
) -> bytes:
    """
    Thumbnail a single image read from ``stream`` and return encoded bytes.

    Framework-agnostic, single-image operation. ``stream`` is read but not
    closed.

    Args:
        stream: Readable binary stream positioned at the image data
        target_size: Size of the constrained axis in pixels
        format: Output encoding
        orientation_override: Force the constrained axis
        on_no_shrink: Pass through or reject targets that do not shrink
        resample: Pillow resampling filter
        quality: JPEG quality

    Returns:
        Encoded thumbnail bytes

    Raises:
        DecodeFailureError: If the source is not a decodable image
        NoShrinkNeededError: If the target does not shrink and policy is REJECT
        EncodeFailureError: If the thumbnail cannot be written in ``format``
        InvalidArgumentError: If the size is not positive
    """
    # Fail before decoding anything.
    _ = _require_supported(format)

    with decode_image(stream) as img:
        outcome = resolve_dimensions(
            img.width,
            img.height,
            target_size,
            orientation_override=orientation_override,
            on_no_shrink=on_no_shrink,
        )
        thumbnail = resample_image(img, outcome, resample)
        try:
            return encode_image(thumbnail, format, quality=quality)
        finally:
            if thumbnail is not img:
                thumbnail.close()
