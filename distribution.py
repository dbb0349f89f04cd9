"""Distribution planner: spread photos across album spreads.

Two ways to decide how many photos each spread gets:

* target-count mode: a fixed number of spreads, with per-spread shares
  taken from one of ``PATTERN_COUNT`` named weight patterns selected by a
  variation index, rounded with the largest-remainder method;
* density mode: random counts between a minimum and maximum per spread.

Each contiguous slice of photos is then packed with the mosaic packer.
"""

import logging
import math
import random
from dataclasses import replace

from geometry import bounding_region
from models import GeometryConfig, Photo, Spread, UnknownPhotoError
from mosaic import mosaic_layout
from structured import structured_layout

logger = logging.getLogger(__name__)

WEIGHT_PATTERNS = (
    'uniform',
    'ascending',
    'descending',
    'sparse-first',
    'sparse-last',
    'front-heavy',
    'center-peak',
    'center-valley',
    'alternating-low-high',
    'alternating-high-low',
    'stepped',
    'clustered',
    'tri-level',
    'ramped',
    'cyclic',
)
PATTERN_COUNT = len(WEIGHT_PATTERNS)

# Weights below this still get a sliver of the share.
MIN_WEIGHT = 0.1


def weight_pattern(variation_index: int, spread_count: int) -> list[float]:
    """Relative photo weights per spread for the pattern at *variation_index*."""
    n = spread_count
    name = WEIGHT_PATTERNS[variation_index % PATTERN_COUNT]
    center = n / 2

    if name == 'uniform':
        return [10.0] * n
    if name == 'ascending':
        return [float(1 + i) for i in range(n)]
    if name == 'descending':
        return [float(n - i) for i in range(n)]
    if name == 'sparse-first':
        return [0.5] + [5.0] * (n - 1)
    if name == 'sparse-last':
        return [5.0] * (n - 1) + [0.5]
    if name == 'front-heavy':
        return [10.0] + [3.0] * (n - 1)
    if name == 'center-peak':
        return [10 - abs(i - center) * (10 / center) for i in range(n)]
    if name == 'center-valley':
        return [1 + abs(i - center) * (10 / center) for i in range(n)]
    if name == 'alternating-low-high':
        return [2.0 if i % 2 == 0 else 6.0 for i in range(n)]
    if name == 'alternating-high-low':
        return [6.0 if i % 2 == 0 else 2.0 for i in range(n)]
    if name == 'stepped':
        return [float(3 + i % 3) for i in range(n)]
    if name == 'clustered':
        return [6.0 if i % 3 == 0 else 3.0 for i in range(n)]
    if name == 'tri-level':
        return [(1.0, 2.0, 4.0)[i % 3] for i in range(n)]
    if name == 'ramped':
        return [float(min(8, math.ceil((i + 1) * 1.5))) for i in range(n)]
    # cyclic
    return [float(1 + (i * 7) % 8) for i in range(n)]


def distribution_counts(total_photos: int, spread_count: int, variation_index: int = 0) -> list[int]:
    """Integer photo count per spread, summing to *total_photos*.

    Every spread gets at least one photo when there are enough to go round;
    the rest is shared by weight with largest-remainder rounding.
    """
    if spread_count <= 0:
        return []
    if spread_count == 1:
        return [total_photos]

    weights = [max(MIN_WEIGHT, w) for w in weight_pattern(variation_index, spread_count)]
    floor = 1 if total_photos // spread_count > 0 else 0
    counts = [floor] * spread_count
    remaining = total_photos - floor * spread_count

    total_weight = sum(weights)
    shares = [w / total_weight * remaining for w in weights]
    for i, share in enumerate(shares):
        whole = int(share)
        counts[i] += whole
        shares[i] -= whole
    remaining = total_photos - sum(counts)

    by_remainder = sorted(range(spread_count), key=lambda i: -shares[i])
    for i in range(remaining):
        counts[by_remainder[i % spread_count]] += 1

    # Sparse patterns open/close on a single photo; the excess moves next door.
    name = WEIGHT_PATTERNS[variation_index % PATTERN_COUNT]
    if name == 'sparse-first' and counts[0] > 1:
        counts[1] += counts[0] - 1
        counts[0] = 1
    elif name == 'sparse-last' and counts[-1] > 1:
        counts[-2] += counts[-1] - 1
        counts[-1] = 1
    return counts


def density_counts(total_photos: int, min_density: int, max_density: int,
                   rng: random.Random | None = None) -> list[int]:
    """Random per-spread counts in ``[min_density, max_density]``.

    The tail is merged into the previous spread when that stays within
    *max_density*, otherwise the two are split evenly.
    """
    if min_density < 1 or max_density < min_density:
        raise ValueError("density bounds must satisfy 1 <= min <= max")
    rng = rng or random

    counts: list[int] = []
    remaining = total_photos
    while remaining > 0:
        if remaining <= max_density:
            if remaining < min_density and counts:
                combined = counts[-1] + remaining
                if combined <= max_density:
                    counts[-1] = combined
                else:
                    counts[-1] = combined // 2
                    counts.append(combined - combined // 2)
            else:
                counts.append(remaining)
            break

        count = rng.randint(min_density, max_density)
        if remaining - count < min_density:
            feasible = remaining - min_density
            count = rng.randint(min_density, feasible) if feasible >= min_density else min_density
        counts.append(count)
        remaining -= count
    return counts


def distribute(photos: list[Photo], target_spread_count: int, config: GeometryConfig,
               variation_index: int = 0, min_density: int | None = None,
               max_density: int | None = None, shuffle: bool = True,
               rng: random.Random | None = None) -> list[Spread]:
    """Split *photos* into consecutive spreads and lay each one out."""
    if not photos:
        return []

    if min_density is not None and max_density is not None and min_density > 0:
        counts = density_counts(len(photos), min_density, max_density, rng)
    else:
        counts = distribution_counts(len(photos), target_spread_count, variation_index)
    logger.debug("distribution counts (variation %d): %s", variation_index, counts)

    spreads = []
    offset = 0
    for i, count in enumerate(counts):
        chunk = photos[offset:offset + count]
        offset += count
        layers = mosaic_layout(chunk, config, shuffle=shuffle, rng=rng) if chunk else []
        if layers is None:
            logger.warning("spread %d left empty: no mosaic fits %d photos", i + 1, len(chunk))
            layers = []
        spreads.append(Spread(index=i + 1, layers=layers))
    return spreads


# ---------------------------------------------------------------------------
# Redistribution of existing spreads
# ---------------------------------------------------------------------------

def resolve_photos(photo_ids: list[str], photos_by_id: dict[str, Photo]) -> list[Photo]:
    """Map ids back to photos, in order. Unknown ids are an error, not a skip."""
    resolved = []
    for photo_id in photo_ids:
        try:
            resolved.append(photos_by_id[photo_id])
        except KeyError:
            raise UnknownPhotoError(f"no photo with id {photo_id!r}") from None
    return resolved


def _photos_in(spreads: list[Spread], photos: list[Photo]) -> list[Photo]:
    """Photos referenced by *spreads*, in photo-set order."""
    wanted = {pid for s in spreads for pid in s.photo_ids}
    known = {p.id for p in photos}
    missing = wanted - known
    if missing:
        raise UnknownPhotoError(f"no photo with id {sorted(missing)[0]!r}")
    return [p for p in photos if p.id in wanted]


def distribute_from_index(spreads: list[Spread], photos: list[Photo], start_index: int,
                          total_spreads: int, config: GeometryConfig,
                          variation_index: int, rng: random.Random | None = None) -> list[Spread]:
    """Keep spreads before *start_index*; redistribute the photos of the rest."""
    fixed = spreads[:start_index]
    to_move = _photos_in(spreads[start_index:], photos)
    if not to_move:
        return list(spreads)

    fresh = distribute(to_move, max(1, total_spreads - start_index), config,
                       variation_index, rng=rng)
    for i, spread in enumerate(fresh):
        spread.index = start_index + 1 + i
    return fixed + fresh


def redistribute_unlocked(spreads: list[Spread], photos: list[Photo], total_spreads: int,
                          config: GeometryConfig, variation_index: int,
                          rng: random.Random | None = None) -> list[Spread]:
    """Redistribute every photo not held by a locked spread.

    Locked spreads keep their slot; generated spreads fill the other slots in
    order, empty spreads pad unused slots and surplus ones are appended.
    Locked spreads beyond *total_spreads* are appended before the surplus.
    """
    locked = [s for s in spreads if s.locked]
    held = {pid for s in locked for pid in s.photo_ids}
    available = [p for p in photos if p.id not in held]
    in_range = sum(1 for s in spreads[:total_spreads] if s.locked)
    fresh = distribute(available, max(1, total_spreads - in_range), config,
                       variation_index, rng=rng)

    result = []
    gen = iter(fresh)
    for i in range(total_spreads):
        original = spreads[i] if i < len(spreads) else None
        if original is not None and original.locked:
            result.append(replace(original, index=i + 1))
            continue
        spread = next(gen, None) or Spread(index=i + 1)
        if original is not None:
            spread = replace(spread, id=original.id)
        result.append(replace(spread, index=i + 1))
    for spread in spreads[total_spreads:]:
        if spread.locked:
            result.append(replace(spread, index=len(result) + 1))
    for spread in gen:
        result.append(replace(spread, index=len(result) + 1))
    return result


def redistribute_spread(spread: Spread, photos: list[Photo], config: GeometryConfig,
                        variation_index: int = 0, rng: random.Random | None = None) -> Spread:
    """Re-lay one spread's unlocked photos, keeping locked layers in place.

    Returns the spread unchanged when it is locked, has nothing to move, or
    the free region is degenerate.
    """
    if spread.locked:
        return spread

    locked_layers = [l for l in spread.layers if l.locked]
    unlocked_layers = [l for l in spread.layers if not l.locked]
    if not unlocked_layers:
        return spread
    to_move = resolve_photos([l.photo_id for l in unlocked_layers],
                             {p.id: p for p in photos})

    if not locked_layers:
        if variation_index % 2 == 0:
            layers = structured_layout(to_move, config)
        else:
            layers = mosaic_layout(to_move, config, shuffle=True, rng=rng)
    else:
        region = bounding_region(unlocked_layers)
        if region.is_degenerate:
            logger.warning("spread %d left unchanged: free region is degenerate", spread.index)
            return spread
        layers = structured_layout(to_move, config, bounds=region)

    if layers is None:
        return spread
    return replace(spread, layers=locked_layers + layers)
