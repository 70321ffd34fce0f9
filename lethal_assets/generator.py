from concurrent.futures import Executor, ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from PIL import Image

from .layout import (
    PAINTING_OFFSET,
    PAINTING_SIZE,
    POSTER_SLOTS,
    TIPS_SIZE,
    Position,
    SlotRect,
)
from .render import overlay, resize_to_fill, resize_to_fit

Overlay = Tuple[Image.Image, Position]


def generate_atlas(
    template: Image.Image,
    sources: Sequence[Image.Image],
    executor: Optional[Executor] = None,
) -> Image.Image:
    """
    Build a poster atlas: one source image per slot of POSTER_SLOTS.

    Resizing runs in parallel on `executor` (a private pool when omitted).
    Every resize finishes before the first overlay; the overlays are then
    applied one at a time in slot order since they all draw on one canvas.
    """
    if len(sources) != len(POSTER_SLOTS):
        raise ValueError(
            f"An atlas needs exactly {len(POSTER_SLOTS)} source images, got {len(sources)}"
        )

    base = template.convert("RGBA")

    if executor is None:
        with ThreadPoolExecutor(max_workers=len(POSTER_SLOTS)) as pool:
            overlays = _resize_for_slots(pool, sources)
    else:
        overlays = _resize_for_slots(executor, sources)

    for resized, (x, y) in overlays:
        overlay(base, resized, x, y)

    return base


def _resize_for_slots(executor: Executor, sources: Sequence[Image.Image]) -> List[Overlay]:
    futures = [
        executor.submit(_fit_into_slot, source, slot)
        for source, slot in zip(sources, POSTER_SLOTS)
    ]
    return [future.result() for future in futures]


def _fit_into_slot(source: Image.Image, slot: SlotRect) -> Overlay:
    resized = resize_to_fit(source, slot.width, slot.height)
    # Right-aligned and top-aligned inside the slot
    x = slot.right - resized.width
    y = slot.y
    return resized, (x, y)


def generate_tips(source: Image.Image) -> Image.Image:
    width, height = TIPS_SIZE
    base = Image.new("RGBA", TIPS_SIZE, (0, 0, 0, 0))

    resized = resize_to_fit(source, width, height)
    overlay(base, resized, width - resized.width, 0)

    return base


def generate_painting(template: Image.Image, source: Image.Image) -> Image.Image:
    base = template.convert("RGBA")

    resized = resize_to_fill(source, *PAINTING_SIZE)
    overlay(base, resized, *PAINTING_OFFSET)

    return base
