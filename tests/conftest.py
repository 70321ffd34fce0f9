"""Shared pytest fixtures for lethal_assets tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator, List, Sequence, Tuple

import pytest
from PIL import Image

Color = Tuple[int, int, int, int]

POSTER_TEMPLATE_COLOR: Color = (90, 90, 90, 255)
PAINTING_TEMPLATE_COLOR: Color = (30, 60, 90, 255)

PALETTE: List[Color] = [
    (255, 0, 0, 255),
    (0, 255, 0, 255),
    (0, 0, 255, 255),
    (255, 255, 0, 255),
    (255, 0, 255, 255),
    (0, 255, 255, 255),
    (255, 128, 0, 255),
]


def assert_color_close(actual: Sequence[int], expected: Sequence[int], tolerance: int = 2) -> None:
    """Compare RGBA pixels allowing for resampling rounding."""
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert abs(a - e) <= tolerance, f"{tuple(actual)} != {tuple(expected)}"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def solid_image() -> Callable[..., Image.Image]:
    """Factory for single-color RGBA images."""

    def _make(size: Tuple[int, int] = (500, 500), color: Color = PALETTE[0]) -> Image.Image:
        return Image.new("RGBA", size, color)

    return _make


@pytest.fixture
def poster_template() -> Image.Image:
    return Image.new("RGBA", (1024, 1024), POSTER_TEMPLATE_COLOR)


@pytest.fixture
def painting_template() -> Image.Image:
    return Image.new("RGBA", (507, 343), PAINTING_TEMPLATE_COLOR)


@pytest.fixture
def templates_dir(temp_dir: Path, poster_template, painting_template) -> Path:
    """Templates folder holding a 1024x1024 poster and a 507x343 painting template."""
    path = temp_dir / "templates"
    path.mkdir()
    poster_template.save(path / "poster_template.png")
    painting_template.save(path / "painting_template.png")
    return path


@pytest.fixture
def make_input_dir(temp_dir: Path) -> Callable[..., Path]:
    """Factory writing `count` distinct solid 500x500 PNGs into a fresh input folder.

    Files are named so that sorted order matches PALETTE order.
    """

    def _make(count: int = 5, name: str = "input", size: Tuple[int, int] = (500, 500)) -> Path:
        path = temp_dir / name
        path.mkdir()
        for i in range(count):
            Image.new("RGBA", size, PALETTE[i % len(PALETTE)]).save(path / f"img_{i:02d}.png")
        return path

    return _make
