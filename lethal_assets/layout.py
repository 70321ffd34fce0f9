from dataclasses import dataclass
from typing import Tuple

Size = Tuple[int, int]
Position = Tuple[int, int]


@dataclass(frozen=True)
class SlotRect:
    """A placement region on the poster template, in template pixels."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def size(self) -> Size:
        return (self.width, self.height)


# Slot order is also the overlay order on the atlas.
POSTER_SLOTS: Tuple[SlotRect, ...] = (
    SlotRect(0, 0, 341, 559),
    SlotRect(346, 0, 284, 559),
    SlotRect(641, 58, 274, 243),
    SlotRect(184, 620, 411, 364),
    SlotRect(632, 320, 372, 672),
)

TIPS_SIZE: Size = (796, 1024)

PAINTING_SIZE: Size = (243, 324)
PAINTING_OFFSET: Position = (264, 19)

TEMPLATE_POSTER = "poster_template.png"
TEMPLATE_PAINTING = "painting_template.png"

POSTERS_OUT_DIR = "BepInEx/plugins/LethalPosters/posters"
TIPS_OUT_DIR = "BepInEx/plugins/LethalPosters/tips"
PAINTINGS_OUT_DIR = "BepInEx/plugins/LethalPaintings/paintings"


def poster_min_size() -> Size:
    """Smallest poster template that contains every slot."""
    return (
        max(slot.right for slot in POSTER_SLOTS),
        max(slot.bottom for slot in POSTER_SLOTS),
    )


def painting_min_size() -> Size:
    """Smallest painting template that contains the painting block."""
    return (
        PAINTING_OFFSET[0] + PAINTING_SIZE[0],
        PAINTING_OFFSET[1] + PAINTING_SIZE[1],
    )
