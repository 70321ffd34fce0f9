import argparse
from pathlib import Path

from lethal_assets import __version__
from lethal_assets.core import AssetPipeline
from lethal_assets.errors import PipelineError


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="A poster/painting generation tool for Lethal Posters and Lethal Paintings."
    )
    parser.add_argument(
        "-t",
        "--templates",
        type=Path,
        default=Path("./templates"),
        help="The directory containing the poster and painting template images.",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        default=Path("./input"),
        help="The directory containing the images to generate posters and paintings for.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("./output"),
        help="Root folder where the generated plugin assets will be stored.",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=None,
        help="Number of worker threads (defaults to the CPU count).",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not display the progress bar.",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)
    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be at least 1")
    return args


def main(argv=None) -> None:
    args = parse_args(argv)
    print(f"Parsed args: {args}")

    pipeline = AssetPipeline(
        templates_dir=args.templates,
        input_dir=args.input,
        output_root=args.output,
        max_workers=args.workers,
        show_progress=not args.no_progress,
    )

    try:
        pipeline.run()
    except PipelineError as e:
        # SystemExit with a message prints it to stderr and exits with status 1
        raise SystemExit(f"❌ {e}") from e


if __name__ == "__main__":
    main()
