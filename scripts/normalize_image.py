"""Normalise product photos from disk the same way the upload form does."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable

from sellerdesk.imgproc import ImageNormalizer, NormalizedImage, PhotoUploadError, RawSelection
from sellerdesk.monitoring.logging import configure_logging


def _format_result(source: Path, image: NormalizedImage, target: Path) -> str:
    return (
        f"✅ {source.name} -> {target.name}: {image.width}x{image.height}, "
        f"quality {image.quality_used:.1f}, ~{image.approx_size_bytes // 1024} KB"
    )


def normalize_files(paths: Iterable[Path], output_dir: Path) -> int:
    """Normalise every file and return the number of failures."""

    normalizer = ImageNormalizer()
    output_dir.mkdir(parents=True, exist_ok=True)
    failures = 0
    for path in paths:
        try:
            image = normalizer.normalize(RawSelection.from_path(path))
        except PhotoUploadError as exc:
            failures += 1
            print(f"❌ {path.name}: {exc.message} ({exc.kind.value})")
            continue
        except OSError as exc:
            failures += 1
            print(f"❌ {path.name}: {exc.strerror or exc}")
            continue
        target = output_dir / f"{path.stem}.jpg"
        target.write_bytes(image.encoded_bytes)
        print(_format_result(path, image, target))
    return failures


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("files", nargs="+", type=Path)
    parser.add_argument("-o", "--output-dir", type=Path, default=Path("normalized"))
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL.")
    args = parser.parse_args()

    configure_logging(args.log_level)
    failures = normalize_files(args.files, args.output_dir)
    raise SystemExit(1 if failures else 0)


if __name__ == "__main__":
    main()
