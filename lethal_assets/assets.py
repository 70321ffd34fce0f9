from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from PIL import Image

from .errors import EmptyImageStoreError, InputDirectoryError, TemplateError

DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


class ImageStore:
    """
    Read-only collection of decoded input images, indexed 0..N-1.

    Images are shared by every generation task of a run and are never
    mutated after the store is built, so no locking is needed to read them.
    """

    def __init__(self, images: Iterable[Image.Image]) -> None:
        self._images: Tuple[Image.Image, ...] = tuple(images)
        if not self._images:
            raise EmptyImageStoreError("No input images could be decoded.")

    def __len__(self) -> int:
        return len(self._images)

    def __getitem__(self, index: int) -> Image.Image:
        return self._images[index % len(self._images)]

    def __iter__(self):
        return iter(self._images)

    def window(self, start: int, count: int) -> List[Image.Image]:
        """
        `count` consecutive images starting at `start`, wrapping around the
        end of the store. Stores smaller than `count` repeat images.
        """
        return [self[start + offset] for offset in range(count)]


def list_input_files(input_dir: Path) -> List[Path]:
    """
    Every regular file directly inside `input_dir`, sorted by name so that
    output indices are stable between runs.
    """
    try:
        entries = list(input_dir.iterdir())
    except OSError as e:
        raise InputDirectoryError(
            f'Failed to read input directory "{input_dir}": {e}', path=input_dir
        ) from e

    return sorted(path for path in entries if path.is_file())


def decode_image(path: Path) -> Optional[Image.Image]:
    """
    Fully decode `path` to RGBA. Returns None when the file is not an image
    Pillow can read.
    """
    try:
        with Image.open(path) as img:
            return _to_rgba(img)
    except DECODE_ERRORS:
        return None


def load_input_images(
    paths: Sequence[Path],
    max_workers: Optional[int] = None,
) -> ImageStore:
    """
    Decode all `paths` in parallel, keeping their order and silently dropping
    the ones that fail to decode.
    """
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        decoded = list(executor.map(decode_image, paths))

    images = [img for img in decoded if img is not None]
    skipped = len(decoded) - len(images)
    if skipped:
        print(f"⚠️  Skipped {skipped} of {len(decoded)} input files that could not be decoded")

    return ImageStore(images)


def load_template(path: Path) -> Image.Image:
    if not path.is_file():
        raise TemplateError(f'Template image not found: "{path}"', path=path)

    try:
        with Image.open(path) as img:
            return _to_rgba(img)
    except DECODE_ERRORS as e:
        raise TemplateError(f'Failed to open template image "{path}": {e}', path=path) from e


def _to_rgba(img: Image.Image) -> Image.Image:
    # 16/32-bit integer modes would clip at 255 when converted directly
    if img.mode.startswith("I"):
        img = img.convert("I").point(lambda v: v * (1 / 256)).convert("L")
    return img.convert("RGBA")
