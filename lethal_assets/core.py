from concurrent.futures import Executor, Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Literal, Optional

from PIL import Image
from tqdm import tqdm

from .assets import ImageStore, list_input_files, load_input_images, load_template
from .errors import AssetWriteError, OutputDirectoryError
from .generator import generate_atlas, generate_painting, generate_tips
from .layout import (
    PAINTINGS_OUT_DIR,
    POSTER_SLOTS,
    POSTERS_OUT_DIR,
    TEMPLATE_PAINTING,
    TEMPLATE_POSTER,
    TIPS_OUT_DIR,
    Size,
    painting_min_size,
    poster_min_size,
)
from .render import save_png


VariantKey = Literal["poster", "tips", "painting"]

VARIANTS: List[VariantKey] = ["poster", "tips", "painting"]


@dataclass
class GenerationSummary:
    count: int
    output_root: Path
    posters_dir: Path
    tips_dir: Path
    paintings_dir: Path


@dataclass(frozen=True)
class VariantJob:
    index: int
    variant: VariantKey
    output_path: Path


class AssetPipeline:
    """
    Orchestrates asset generation for a folder of input images:
    - load the poster and painting templates
    - decode every input image into a shared, read-only store
    - for each image index, generate in parallel:
        * a poster atlas from that image and the next four (wrapping)
        * a tips card from that image
        * a painting from that image
    - save under {output_root}/BepInEx/plugins/.../{index}.png

    Any template, directory or write failure aborts the whole run with a
    PipelineError. Input files that fail to decode are skipped.
    """

    def __init__(
        self,
        templates_dir: Path,
        input_dir: Path,
        output_root: Path,
        max_workers: Optional[int] = None,
        show_progress: bool = True,
    ) -> None:
        self.templates_dir = Path(templates_dir)
        self.input_dir = Path(input_dir)
        self.output_root = Path(output_root)
        self.max_workers = max_workers
        self.show_progress = show_progress

        self.posters_dir = self.output_root / POSTERS_OUT_DIR
        self.tips_dir = self.output_root / TIPS_OUT_DIR
        self.paintings_dir = self.output_root / PAINTINGS_OUT_DIR

    def run(self) -> GenerationSummary:
        poster_template_path = self.templates_dir / TEMPLATE_POSTER
        painting_template_path = self.templates_dir / TEMPLATE_PAINTING

        print("📁 Loading images...")
        poster_template = load_template(poster_template_path)
        painting_template = load_template(painting_template_path)
        _warn_if_smaller("Poster", poster_template, poster_min_size())
        _warn_if_smaller("Painting", painting_template, painting_min_size())

        # Inputs are decoded before any output folder exists, so a run with
        # nothing to generate leaves the output root untouched.
        store = load_input_images(list_input_files(self.input_dir), self.max_workers)

        for out_dir in (self.posters_dir, self.tips_dir, self.paintings_dir):
            _create_output_dir(out_dir)

        print(f"🎨 Generating {len(store)} posters and paintings...")
        self._generate_all(store, poster_template, painting_template)

        print(f"✅ Operation complete! Images output to: {self.output_root}")
        return GenerationSummary(
            count=len(store),
            output_root=self.output_root,
            posters_dir=self.posters_dir,
            tips_dir=self.tips_dir,
            paintings_dir=self.paintings_dir,
        )

    def jobs_for_index(self, index: int) -> List[VariantJob]:
        filename = f"{index}.png"
        out_dirs: Dict[VariantKey, Path] = {
            "poster": self.posters_dir,
            "tips": self.tips_dir,
            "painting": self.paintings_dir,
        }
        return [VariantJob(index, variant, out_dirs[variant] / filename) for variant in VARIANTS]

    def _generate_all(
        self,
        store: ImageStore,
        poster_template: Image.Image,
        painting_template: Image.Image,
    ) -> None:
        count = len(store)
        pending = {index: len(VARIANTS) for index in range(count)}

        bar = tqdm(total=count, desc="Generating", unit="img", disable=not self.show_progress)

        # Variant tasks block on atlas slot resizes, so those get their own pool.
        with bar, ThreadPoolExecutor(max_workers=self.max_workers) as resize_pool:
            with ThreadPoolExecutor(max_workers=self.max_workers) as variant_pool:
                futures: Dict[Future, VariantJob] = {}
                for index in range(count):
                    for job in self.jobs_for_index(index):
                        future = variant_pool.submit(
                            _render_job,
                            job,
                            store,
                            poster_template,
                            painting_template,
                            resize_pool,
                        )
                        futures[future] = job

                try:
                    for future in as_completed(futures):
                        job = futures[future]
                        future.result()

                        # Each index counts once, after all of its variants are written.
                        pending[job.index] -= 1
                        if pending[job.index] == 0:
                            bar.update(1)
                except BaseException:
                    for future in futures:
                        future.cancel()
                    raise

        if self.show_progress:
            print("Image generation complete!")


def _render_job(
    job: VariantJob,
    store: ImageStore,
    poster_template: Image.Image,
    painting_template: Image.Image,
    resize_pool: Executor,
) -> Path:
    if job.variant == "poster":
        sources = store.window(job.index, len(POSTER_SLOTS))
        img = generate_atlas(poster_template, sources, executor=resize_pool)
    elif job.variant == "tips":
        img = generate_tips(store[job.index])
    else:
        img = generate_painting(painting_template, store[job.index])

    try:
        save_png(img, job.output_path)
    except (OSError, ValueError) as e:
        raise AssetWriteError(
            f'Failed to write {job.variant} #{job.index} to "{job.output_path}": {e}',
            path=job.output_path,
        ) from e

    return job.output_path


def _create_output_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(
            f'Failed to create output directory "{path}": {e}', path=path
        ) from e


def _warn_if_smaller(name: str, template: Image.Image, min_size: Size) -> None:
    width, height = template.size
    min_w, min_h = min_size
    if width < min_w or height < min_h:
        print(
            f"⚠️  {name} template is {width}x{height}, smaller than the "
            f"{min_w}x{min_h} its layout needs; overflowing images will be clipped."
        )
