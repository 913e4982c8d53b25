"""Batch border cropping over files and directories."""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Config, apply_overrides, get_default_config, load_config
from .exceptions import AutocropError, ConfigurationError
from .processors import BorderCropProcessor, get_image_files, load_image, save_image
from .utils.logging_utils import (
    ProcessingProgress,
    get_logger,
    log_processing_stats,
    log_system_info,
    setup_logging,
)

logger = get_logger(__name__)


class AutocropPipeline:
    """Crops the margins off every image of an input file or directory."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_default_config()
        self.processor = BorderCropProcessor(self.config)

    def output_path_for(self, image_path: Path, output_dir: Path) -> Path:
        """Return where the cropped version of ``image_path`` is written."""
        suffix = self.config.output.suffix
        image_format = self.config.output.image_format
        extension = f".{image_format}" if image_format else image_path.suffix
        return output_dir / f"{image_path.stem}{suffix}{extension}"

    def debug_dir_for(self, output_dir: Path) -> Path:
        if self.config.output.debug_dir:
            return Path(self.config.output.debug_dir)
        return output_dir / "debug"

    def process_image(self, image_path: Path, output_dir: Optional[Path] = None) -> Dict[str, Any]:
        """Process a single image.

        Args:
            image_path: Input image
            output_dir: Where to write the cropped image; None only detects
                the bounds

        Returns:
            Analysis dictionary with an added ``output_path`` (None when
            nothing was written)
        """
        image = load_image(image_path)
        cropped, analysis = self.processor.process(image, return_analysis=True)
        analysis["input_path"] = image_path
        analysis["output_path"] = None

        if output_dir is None:
            return analysis

        if analysis["empty"]:
            logger.warning(f"No content found in {image_path.name}, nothing written")
            return analysis

        output_path = self.output_path_for(image_path, output_dir)
        save_image(cropped, output_path, quality=self.config.output.jpeg_quality)
        analysis["output_path"] = output_path

        if self.processor.debug_enabled():
            self.processor.save_debug_images_to_dir(self.debug_dir_for(output_dir), prefix=image_path.stem)

        logger.info(f"Cropped {image_path.name}: {analysis['crop_bounds']} -> {output_path.name}")
        return analysis

    def process_directory(self, input_dir: Path, output_dir: Optional[Path] = None) -> Dict[str, Any]:
        """Process every image in ``input_dir``.

        Failures on individual files are logged and counted; they do not
        stop the batch.

        Returns:
            Statistics dictionary with per-file ``results`` and ``errors``
        """
        if not input_dir.is_dir():
            raise ValueError(f"Input directory does not exist: {input_dir}")

        image_files = get_image_files(input_dir)
        results: List[Dict[str, Any]] = []
        errors: Dict[str, str] = {}

        with log_processing_stats(f"border cropping of {input_dir}", logger) as stats:
            with ProcessingProgress("Cropping", len(image_files)) as progress:
                for image_path in image_files:
                    try:
                        analysis = self.process_image(image_path, output_dir)
                    except AutocropError as e:
                        logger.error(f"Failed to process {image_path.name}: {e}")
                        errors[str(image_path)] = str(e)
                        stats.failed += 1
                        progress.update(success=False)
                        continue

                    results.append(analysis)
                    if analysis["empty"]:
                        stats.skipped += 1
                    else:
                        stats.processed += 1
                    progress.update()

        return {**stats.as_dict(), "results": results, "errors": errors}

    def process(self, input_path: Path, output_dir: Optional[Path] = None) -> Dict[str, Any]:
        """Process a single file or a whole directory."""
        if input_path.is_dir():
            return self.process_directory(input_path, output_dir)

        try:
            analysis = self.process_image(input_path, output_dir)
        except AutocropError as e:
            logger.error(f"Failed to process {input_path.name}: {e}")
            return {"results": [], "errors": {str(input_path): str(e)}, "files_failed": 1}
        return {"results": [analysis], "errors": {}, "files_failed": 0}


def main(argv: Optional[List[str]] = None) -> int:
    """Command line interface."""
    parser = argparse.ArgumentParser(
        description="Crop uniform margins off scanned pages and screenshots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  autocrop scan.png -o cropped/              # Crop one image
  autocrop scans/ -o cropped/                # Crop a directory
  autocrop scans/ --bounds-only              # Print the content rectangles
  autocrop scans/ -o out/ --method naive     # Stop at the first dark pixel
        """,
    )
    parser.add_argument("input", type=Path, help="Input image file or directory")
    parser.add_argument("-o", "--output", type=Path, help="Output directory")
    parser.add_argument("--method", choices=["hash", "naive"], help="Border scanner (default: hash)")
    parser.add_argument("--profile", choices=["extended", "simple"], help="Line hash profile")
    parser.add_argument("--config", type=Path, help="Path to JSON, YAML or TOML configuration file")
    parser.add_argument("--bounds-only", action="store_true", help="Print bounds, write nothing")
    parser.add_argument("--debug", action="store_true", help="Save debug images")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else get_default_config()
        apply_overrides(config, {
            "scan.method": args.method,
            "scan.profile": args.profile,
            "output.save_debug_images": True if args.debug else None,
            "logging.level": "DEBUG" if args.verbose else None,
        })
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(
        level=config.logging.level,
        log_file=config.logging.log_file,
        use_rich=config.logging.use_rich,
        format_style=config.logging.format_style,
    )
    if args.verbose:
        log_system_info(logger)

    if not args.bounds_only and args.output is None:
        parser.error("an output directory is required unless --bounds-only is given")

    if not args.input.exists():
        print(f"Error: Input path does not exist: {args.input}", file=sys.stderr)
        return 1

    pipeline = AutocropPipeline(config)
    output_dir = None if args.bounds_only else args.output
    summary = pipeline.process(args.input, output_dir)

    if args.bounds_only:
        for analysis in summary["results"]:
            x0, y0, x1, y1 = analysis["crop_bounds"]
            print(f"{analysis['input_path']}\t{x0}\t{y0}\t{x1}\t{y1}")

    return 1 if summary["files_failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
