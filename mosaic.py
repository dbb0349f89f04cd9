"""Mosaic packer: row-based, crop-free layout engine.

Photos are grouped into rows by cumulative aspect ratio. Each row spans the
available width and takes the exact height at which all of its photos fit
uncropped. Candidate row counts are scored by how much of the available
height they use, without ever scaling up, and the best one is placed
centred in the region.
"""

import logging
import random
from dataclasses import dataclass, field

from geometry import pixel_layer, rect_to_pixels
from models import GeometryConfig, Layer, Photo, Rect

logger = logging.getLogger(__name__)

MAX_ROW_SEARCH = 10
INFEASIBLE = float('-inf')


@dataclass
class RowPlan:
    """Row assignment for one candidate row count, at full available width."""
    rows: list[list[Photo]] = field(default_factory=list)
    heights: list[float] = field(default_factory=list)
    total_height: float = 0.0
    scale: float = 1.0
    fill_score: float = 0.0


class MosaicPacker:
    """Row-based packer with a fill-maximising row-count search.

    All math runs in page pixels; layers come out in percent of the page.
    """

    def __init__(self, config: GeometryConfig | None = None, rng: random.Random | None = None):
        self.config = config or GeometryConfig()
        self.gap = self.config.gap
        self.rng = rng or random

    # ------------------------------------------------------------------ #
    #  Public API                                                         #
    # ------------------------------------------------------------------ #

    def layout(self, photos: list[Photo], shuffle: bool = False,
               force_row_count: int | None = None,
               bounds: Rect | None = None) -> list[Layer] | None:
        """Pack *photos* into rows inside *bounds* (default: content area).

        Returns ``None`` for degenerate bounds, or when the gaps leave a row
        no width for its photos.
        """
        if not photos:
            return []

        region_pct = bounds if bounds is not None else self.config.content_region
        if region_pct.is_degenerate:
            logger.warning("mosaic layout skipped: degenerate bounds %s", region_pct)
            return None
        region = rect_to_pixels(region_pct, self.config)

        working = list(photos)
        if shuffle:
            self.rng.shuffle(working)

        if force_row_count and force_row_count > 0:
            plan = self.plan_rows(working, force_row_count, region.width, region.height)
        else:
            plan = self.search(working, region.width, region.height)

        if plan.fill_score == INFEASIBLE:
            logger.warning("mosaic layout skipped: gap %s leaves no room in a row of %d photos",
                           self.gap, max(len(row) for row in plan.rows))
            return None

        logger.debug("mosaic: %d photos in %d rows, fill %.3f",
                     len(working), len(plan.rows), plan.fill_score)
        return self._place(plan, region)

    def search(self, photos: list[Photo], avail_w: float, avail_h: float) -> RowPlan:
        """Try 1..min(n, MAX_ROW_SEARCH) rows; first strictly-best fill wins."""
        best = None
        for row_count in range(1, min(len(photos), MAX_ROW_SEARCH) + 1):
            plan = self.plan_rows(photos, row_count, avail_w, avail_h)
            if best is None or plan.fill_score > best.fill_score:
                best = plan
        return best

    # ------------------------------------------------------------------ #
    #  Row assignment & scoring                                           #
    # ------------------------------------------------------------------ #

    def assign_rows(self, photos: list[Photo], row_count: int) -> list[list[Photo]]:
        """Greedy partition of *photos* (kept in order) into *row_count* rows.

        A row keeps taking photos while that brings its aspect-ratio sum
        closer to the per-row average; the last row takes the remainder.
        Rows left empty because photos ran out are dropped.
        """
        target = sum(p.aspect_ratio for p in photos) / row_count
        rows: list[list[Photo]] = []
        idx = 0
        for r in range(row_count):
            if r == row_count - 1:
                rows.append(photos[idx:])
                break
            row: list[Photo] = []
            row_ar = 0.0
            while idx < len(photos):
                ar = photos[idx].aspect_ratio
                if row and abs(row_ar + ar - target) > abs(row_ar - target):
                    break
                row.append(photos[idx])
                row_ar += ar
                idx += 1
            rows.append(row)
        return [row for row in rows if row]

    def plan_rows(self, photos: list[Photo], row_count: int,
                  avail_w: float, avail_h: float) -> RowPlan:
        rows = self.assign_rows(photos, row_count)
        heights = [
            (avail_w - self.gap * (len(row) - 1)) / sum(p.aspect_ratio for p in row)
            for row in rows
        ]
        total = sum(heights) + self.gap * max(0, len(rows) - 1)

        if any(h <= 0 for h in heights):
            # Gaps alone fill the width of some row.
            return RowPlan(rows=rows, heights=heights, total_height=total,
                           scale=1.0, fill_score=INFEASIBLE)

        if total > avail_h:
            scale = avail_h / total
            fill = scale
        else:
            # Never scale up: rows already span the full width.
            scale = 1.0
            fill = total / avail_h
        return RowPlan(rows=rows, heights=heights, total_height=total,
                       scale=scale, fill_score=fill)

    # ------------------------------------------------------------------ #
    #  Placement                                                          #
    # ------------------------------------------------------------------ #

    def _fitted_heights(self, plan: RowPlan, avail_h: float) -> tuple[list[float], float, float | None]:
        """Row heights, gap and block width after shrinking to fit *avail_h*.

        Shrinking narrows the block while keeping the configured gap, so the
        rows fill the height exactly. If the gaps alone leave no room, the
        gaps shrink with the photos instead.
        """
        if plan.scale >= 1.0:
            return plan.heights, self.gap, None

        gap = self.gap
        sums = [sum(p.aspect_ratio for p in row) for row in plan.rows]
        width = (
            (avail_h - gap * (len(plan.rows) - 1)
             + gap * sum((len(row) - 1) / s for row, s in zip(plan.rows, sums)))
            / sum(1 / s for s in sums)
        )
        heights = [(width - gap * (len(row) - 1)) / s for row, s in zip(plan.rows, sums)]
        if all(h > 0 for h in heights):
            return heights, gap, width
        return [h * plan.scale for h in plan.heights], gap * plan.scale, None

    def _place(self, plan: RowPlan, region: Rect) -> list[Layer]:
        heights, gap, block_w = self._fitted_heights(plan, region.height)
        if block_w is None:
            block_w = region.width * min(plan.scale, 1.0)
        block_h = sum(heights) + gap * max(0, len(heights) - 1)

        x0 = region.x + (region.width - block_w) / 2
        y = region.y + (region.height - block_h) / 2

        layers = []
        for row, row_h in zip(plan.rows, heights):
            x = x0
            for photo in row:
                w = row_h * photo.aspect_ratio
                layers.append(pixel_layer(photo, x, y, w, row_h, self.config))
                x += w + gap
            y += row_h + gap
        return layers


def mosaic_layout(photos: list[Photo], config: GeometryConfig, shuffle: bool = False,
                  force_row_count: int | None = None, bounds: Rect | None = None,
                  rng: random.Random | None = None) -> list[Layer] | None:
    """Convenience wrapper around :class:`MosaicPacker`."""
    return MosaicPacker(config, rng).layout(photos, shuffle, force_row_count, bounds)
