"""Image preparation for model requests.

Images at or under the service limit are sent as-is. Larger images are
downscaled once with Pillow and re-encoded as JPEG.

The downscale factor assumes encoded size grows with pixel area, so the
width is scaled by ``sqrt(target / current)``. This is an approximation:
already well-compressed inputs (some PNGs) can still exceed the budget
after the single pass, which is logged but not retried.
"""

from __future__ import annotations

import io
import logging
import math
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .constants import MAX_IMAGE_BYTES, RESIZE_JPEG_QUALITY, TARGET_IMAGE_BYTES
from .exceptions import FileFormatError, ImageNotFoundError
from .misc import format_megabytes
from .types import MediaType, PreparedImage

logger = logging.getLogger(__name__)

__all__ = [
    "prepare_image",
    "scaled_width",
    "downscale_to_jpeg",
]


def scaled_width(width: int, current_bytes: int, target_bytes: int) -> int:
    """Width that should bring ``current_bytes`` down to roughly ``target_bytes``.

    Never larger than the original width and never below one pixel.

    Example:
        >>> scaled_width(4000, 18 * 1024 * 1024, int(4.5 * 1024 * 1024))
        2000
    """
    scale = math.sqrt(target_bytes / current_bytes)
    return max(1, min(width, math.floor(width * scale)))


def downscale_to_jpeg(data: bytes, target_bytes: int, quality: int = RESIZE_JPEG_QUALITY) -> tuple[bytes, int, int]:
    """Resize encoded image bytes proportionally and re-encode as JPEG.

    Args:
        data: Encoded source image
        target_bytes: Byte budget used to derive the scale factor
        quality: JPEG quality (1-100)

    Returns:
        Tuple of (jpeg_bytes, original_width, new_width)

    Raises:
        FileFormatError: If Pillow cannot decode the source bytes
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            new_width = scaled_width(width, len(data), target_bytes)
            new_height = max(1, round(height * new_width / width))

            resized = img.resize((new_width, new_height), Image.Resampling.LANCZOS) if new_width < width else img
            # JPEG has no alpha or palette
            if resized.mode not in ("RGB", "L"):
                resized = resized.convert("RGB")

            out = io.BytesIO()
            resized.save(out, format="JPEG", quality=quality, optimize=True)
    except (UnidentifiedImageError, OSError) as e:
        raise FileFormatError(f"Could not decode image for resizing: {e}") from e

    return out.getvalue(), width, new_width


def prepare_image(
    path: str | Path,
    max_bytes: int = MAX_IMAGE_BYTES,
    target_bytes: int = TARGET_IMAGE_BYTES,
    quality: int = RESIZE_JPEG_QUALITY,
) -> PreparedImage:
    """Load an image and shrink it if it exceeds ``max_bytes``.

    Args:
        path: Image file path
        max_bytes: Largest size sent without resizing
        target_bytes: Budget aimed for when resizing
        quality: JPEG quality used for resized output

    Returns:
        PreparedImage with the bytes to send and their media type

    Raises:
        ImageNotFoundError: If the path is not a readable file
        FileFormatError: If resizing is needed and the image cannot be decoded
    """
    image_path = Path(path).expanduser()
    if not image_path.is_file():
        raise ImageNotFoundError(path)

    try:
        data = image_path.read_bytes()
    except OSError as e:
        raise ImageNotFoundError(path) from e

    original_size = len(data)
    print(f"Original image size: {format_megabytes(original_size)}")

    if original_size <= max_bytes:
        print("Image size is within limits\n")
        return PreparedImage(
            data=data,
            media_type=MediaType.from_extension(image_path.suffix),
            size_bytes=original_size,
            original_size_bytes=original_size,
        )

    print(f"Image exceeds {format_megabytes(max_bytes)} limit, resizing...")
    resized, width, new_width = downscale_to_jpeg(data, target_bytes, quality)
    print(f"Resized from {width}px to {new_width}px width")
    print(f"Resized image size: {format_megabytes(len(resized))}\n")

    if len(resized) > max_bytes:
        logger.warning(
            "Resized image is still %d bytes (limit %d); sending it anyway",
            len(resized),
            max_bytes,
        )
    logger.debug("Resized %s: %d -> %d bytes", image_path.name, original_size, len(resized))

    return PreparedImage(
        data=resized,
        media_type=MediaType.JPEG,
        size_bytes=len(resized),
        resized=True,
        original_size_bytes=original_size,
    )
