from pathlib import Path
from typing import Tuple

from PIL import Image, ImageOps

from .layout import Size


def fit_dimensions(size: Size, box: Size) -> Size:
    """
    Largest size with the aspect ratio of `size` that fits inside `box`.

    The limiting side is set to the box side and the other side is scaled and
    floored, never below 1 pixel. Images smaller than the box are scaled up.
    """
    width, height = size
    box_w, box_h = box
    if width <= 0 or height <= 0 or box_w <= 0 or box_h <= 0:
        raise ValueError(f"Cannot fit {size} into {box}")

    # box_w / width <= box_h / height, without floats
    if box_w * height <= box_h * width:
        return (box_w, max(1, height * box_w // width))
    return (max(1, width * box_h // height), box_h)


def resize_to_fit(img: Image.Image, width: int, height: int) -> Image.Image:
    """
    Resize while preserving the aspect ratio so the result fits the box.
    """
    new_size = fit_dimensions(img.size, (width, height))
    if new_size == img.size:
        return img.copy()
    return img.resize(new_size, Image.LANCZOS)


def resize_to_fill(img: Image.Image, width: int, height: int) -> Image.Image:
    """
    Resize + crop around the center so the result is exactly width x height.
    """
    return ImageOps.fit(img, (width, height), method=Image.LANCZOS, centering=(0.5, 0.5))


def overlay(base: Image.Image, foreground: Image.Image, x: int, y: int) -> None:
    """
    Alpha-composite `foreground` onto `base` in place with its top-left
    corner at (x, y). Offsets may be negative; whatever falls outside the
    base is clipped.
    """
    if base.mode != "RGBA":
        raise ValueError(f"Overlay base must be RGBA, got {base.mode}")
    if foreground.mode != "RGBA":
        foreground = foreground.convert("RGBA")

    left, top, right, bottom = _visible_box(base.size, foreground.size, x, y)
    if right <= left or bottom <= top:
        return

    base.alpha_composite(
        foreground,
        dest=(left, top),
        source=(left - x, top - y, right - x, bottom - y),
    )


def _visible_box(
    base_size: Size, fg_size: Size, x: int, y: int
) -> Tuple[int, int, int, int]:
    base_w, base_h = base_size
    fg_w, fg_h = fg_size
    return (
        max(x, 0),
        max(y, 0),
        min(x + fg_w, base_w),
        min(y + fg_h, base_h),
    )


def save_png(img: Image.Image, path: Path) -> None:
    img.save(path, format="PNG")
