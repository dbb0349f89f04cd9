#!/usr/bin/env python3
"""Standalone layout benchmark / quality evaluator.

Generates a set of photos with realistic camera aspect ratios (or loads a
directory of images), distributes them over spreads, and prints a suite of
quality metrics per spread.

Usage:
    python layout_bench.py                  # 40 photos over 8 spreads, seed 42
    python layout_bench.py -n 60 -s 10      # 60 photos, 10 spreads
    python layout_bench.py --min 3 --max 6  # density mode
    python layout_bench.py --photos DIR     # real photos
    python layout_bench.py --verbose        # per-layer details
"""

import argparse
import logging
import random
import sys

from distribution import distribute
from models import GeometryConfig, Layer, Photo
from photos import load_photos
from suggestions import SuggestionHistory, generate_more, generate_suggestions

# ---------------------------------------------------------------------------
# Photo generation
# ---------------------------------------------------------------------------

# Typical camera and phone aspect ratios (width / height).
ASPECT_POOL = [
    3 / 2, 2 / 3,       # 35 mm / DSLR
    4 / 3, 3 / 4,       # compact / phone
    16 / 9, 9 / 16,     # video stills, phone portrait
    1.0,                # square crops
    5 / 4, 4 / 5,       # medium format
    3.0,                # panoramas
]

# Placed aspect ratios may differ from the source by at most this much.
AR_TOLERANCE = 0.005
# Percent-space slack when comparing edges.
EPS = 1e-6


def generate_photos(n: int, rng: random.Random) -> list[Photo]:
    """Return *n* photos with plausible aspect ratios."""
    return [Photo(id=f"photo-{i:03d}", aspect_ratio=rng.choice(ASPECT_POOL)) for i in range(n)]


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------

class LayoutMetrics:
    """Compute and hold quality metrics for one spread's layers."""

    def __init__(self, photos: list[Photo], config: GeometryConfig, layers: list[Layer]):
        self.photos = photos
        self.config = config
        self.layers = layers
        self.by_id = {p.id: p for p in photos}

        self._compute_coverage()
        self._compute_overlaps()
        self._compute_aspect_ratio_fidelity()
        self._compute_spacing()
        self._compute_fill()

    # -- (a) Coverage --------------------------------------------------------

    def _compute_coverage(self):
        placed = sorted(l.photo_id for l in self.layers)
        expected = sorted(self.by_id)
        self.coverage_ok = placed == expected

    # -- (b) Overlaps --------------------------------------------------------

    def _compute_overlaps(self):
        self.overlaps = check_overlaps(self.layers)

    # -- (c) Aspect-ratio fidelity --------------------------------------------

    def _compute_aspect_ratio_fidelity(self):
        """Relative AR error of each placed layer, measured in pixels."""
        pw, ph = self.config.page_width, self.config.page_height
        self.ar_errors: list[tuple[str, float, float, float]] = []
        for layer in self.layers:
            photo = self.by_id.get(layer.photo_id)
            if photo is None:
                continue
            placed = (layer.width * pw) / (layer.height * ph)
            err = abs(placed - photo.aspect_ratio) / photo.aspect_ratio
            self.ar_errors.append((photo.id, photo.aspect_ratio, placed, err))
        self.ar_max_error = max((e for *_, e in self.ar_errors), default=0.0)

    # -- (d) Spacing -----------------------------------------------------------

    def _compute_spacing(self):
        """Smallest horizontal gap between layers sharing a row (percent)."""
        gaps = []
        for a in self.layers:
            for b in self.layers:
                if a is b or abs(a.y - b.y) > EPS or abs(a.height - b.height) > EPS:
                    continue
                gap = b.x - (a.x + a.width)
                if gap > -EPS:
                    gaps.append(gap)
        self.min_horizontal_gap = min(gaps) if gaps else None

    # -- (e) Fill ------------------------------------------------------------

    def _compute_fill(self):
        region = self.config.content_region
        filled = sum(l.width * l.height for l in self.layers)
        self.fill_ratio = filled / (region.width * region.height)

    # -- Report ------------------------------------------------------------

    @property
    def passed(self) -> bool:
        spacing_ok = (self.min_horizontal_gap is None
                      or self.min_horizontal_gap >= self.config.gap_pct_x - 1e-6)
        return (self.coverage_ok and not self.overlaps
                and self.ar_max_error < AR_TOLERANCE and spacing_ok)

    def print_report(self, index: int, verbose: bool = False) -> bool:
        gap_txt = ("n/a" if self.min_horizontal_gap is None
                   else f"{self.min_horizontal_gap:.3f} %")
        print(f"Spread {index:>2}: {len(self.layers):>2} photos  "
              f"fill={self.fill_ratio:>6.1%}  "
              f"ar_err={self.ar_max_error:.4%}  "
              f"min_gap={gap_txt}  "
              f"{'PASS' if self.passed else 'FAIL'}")
        if not self.coverage_ok:
            print("    coverage mismatch between photos and layers")
        if self.overlaps:
            print(f"    OVERLAP between: {self.overlaps}")
        if verbose:
            for layer in self.layers:
                print(f"    [{layer.photo_id}] pos=({layer.x:.2f},{layer.y:.2f})  "
                      f"size={layer.width:.2f}x{layer.height:.2f}")
        return self.passed


# ---------------------------------------------------------------------------
# Overlap detection
# ---------------------------------------------------------------------------

def check_overlaps(layers: list[Layer]) -> list[tuple[str, str]]:
    """Return pairs of photo ids whose boxes overlap."""
    overlaps = []
    for i in range(len(layers)):
        a = layers[i]
        for j in range(i + 1, len(layers)):
            b = layers[j]
            # Two rects overlap iff they overlap on both axes
            if (a.x < b.x + b.width - EPS and a.x + a.width > b.x + EPS and
                    a.y < b.y + b.height - EPS and a.y + a.height > b.y + EPS):
                overlaps.append((a.photo_id, b.photo_id))
    return overlaps


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def run_bench(n_photos: int, spreads: int, seed: int, variation: int = 0,
              min_density: int | None = None, max_density: int | None = None,
              photo_dir: str | None = None, verbose: bool = False) -> bool:
    rng = random.Random(seed)
    config = GeometryConfig()

    photos = load_photos(photo_dir) if photo_dir else generate_photos(n_photos, rng)
    if not photos:
        print("ERROR: no photos to lay out.")
        return False
    print(f"{len(photos)} photos on {config.page_width}x{config.page_height}px spreads "
          f"(gap {config.gap}px, margin {config.margin}px, seed={seed}, variation={variation})")

    result = distribute(photos, spreads, config, variation, min_density, max_density, rng=rng)
    print(f"Distribution: {[len(s.layers) for s in result]}\n")

    passed = True
    by_id = {p.id: p for p in photos}
    for spread in result:
        spread_photos = [by_id[pid] for pid in spread.photo_ids]
        metrics = LayoutMetrics(spread_photos, config, spread.layers)
        passed = metrics.print_report(spread.index, verbose) and passed

    first = [by_id[pid] for pid in result[0].photo_ids] if result else []
    if first:
        history = SuggestionHistory()
        menu = generate_suggestions(first, config, history)
        batch = generate_more(first, config, history, count=6, rng=rng)
        print(f"\nSuggestions for spread 1: {len(menu)} standard, "
              f"{len(batch.results)} more, {len(history)} unique geometries")

    print("\n" + ("ALL CHECKS PASSED" if passed else "SOME CHECKS FAILED"))
    return passed


def main():
    parser = argparse.ArgumentParser(description="Spread layout quality benchmark")
    parser.add_argument("-n", "--num-photos", type=int, default=40,
                        help="Number of photos to generate (default 40)")
    parser.add_argument("-s", "--spreads", type=int, default=8,
                        help="Target number of spreads (default 8)")
    parser.add_argument("--seed", type=int, default=42,
                        help="Random seed for reproducibility (default 42)")
    parser.add_argument("--variation", type=int, default=0,
                        help="Distribution pattern index (default 0)")
    parser.add_argument("--min", dest="min_density", type=int, default=None,
                        help="Minimum photos per spread (density mode)")
    parser.add_argument("--max", dest="max_density", type=int, default=None,
                        help="Maximum photos per spread (density mode)")
    parser.add_argument("--photos", dest="photo_dir", default=None,
                        help="Directory of images to use instead of generated photos")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print per-layer details")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    passed = run_bench(args.num_photos, args.spreads, args.seed, args.variation,
                       args.min_density, args.max_density, args.photo_dir, args.verbose)
    sys.exit(0 if passed else 1)


if __name__ == "__main__":
    main()
