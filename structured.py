"""
Structured (BSP) layout: orientation-aware recursive partitioning.

Photos are sorted by aspect ratio and split in half; the region is cut
vertically or horizontally, whichever leaves the two halves with slots whose
shape best matches the mean aspect ratio of the photos they receive. The
recursion stops at one photo per slot, so every photo gets its own box.

Partitioning runs in pixel units so slot aspect ratios are true shapes even
on non-square pages; boxes are converted to percent at the end.
"""
import logging

from geometry import inset_interior_edges, pixel_layer, rect_to_pixels
from models import GeometryConfig, Layer, Photo, Rect

logger = logging.getLogger(__name__)

# A leaf edge within this many pixels of the region edge is a boundary edge.
EDGE_TOLERANCE = 0.001


def _mean_aspect(photos: list[Photo]) -> float:
    return sum(p.aspect_ratio for p in photos) / len(photos)


def _partition(photos: list[Photo], box: Rect) -> list[tuple[Rect, Photo]]:
    """Recursively split *box* until each photo owns one leaf."""
    if not photos:
        return []
    if len(photos) == 1:
        return [(box, photos[0])]

    ordered = sorted(photos, key=lambda p: p.aspect_ratio)
    split = len(ordered) // 2
    group_a = ordered[:split]    # lower AR, more vertical
    group_b = ordered[split:]    # higher AR, more horizontal
    ratio = split / len(ordered)

    target_a = _mean_aspect(group_a)
    target_b = _mean_aspect(group_b)
    box_ar = box.width / box.height

    # Vertical cut narrows the slots, horizontal cut flattens them.
    err_vertical = abs(box_ar * ratio - target_a) + abs(box_ar * (1 - ratio) - target_b)
    err_horizontal = abs(box_ar / ratio - target_a) + abs(box_ar / (1 - ratio) - target_b)

    # Ties go to the vertical cut.
    if err_vertical <= err_horizontal:
        wa = box.width * ratio
        box_a = Rect(box.x, box.y, wa, box.height)
        box_b = Rect(box.x + wa, box.y, box.width - wa, box.height)
    else:
        ha = box.height * ratio
        box_a = Rect(box.x, box.y, box.width, ha)
        box_b = Rect(box.x, box.y + ha, box.width, box.height - ha)

    return _partition(group_a, box_a) + _partition(group_b, box_b)


def structured_layout(photos: list[Photo], config: GeometryConfig,
                      bounds: Rect | None = None) -> list[Layer] | None:
    """Lay *photos* out with the BSP partitioner.

    *bounds* (percent of page) confines the layout; it defaults to the
    margin-inset page. Returns ``None`` when the region, or a box after gap
    inset, is degenerate: callers keep whatever they had before.
    """
    if not photos:
        return []

    region_pct = bounds if bounds is not None else config.content_region
    if region_pct.is_degenerate:
        logger.warning("structured layout skipped: degenerate bounds %s", region_pct)
        return None
    region = rect_to_pixels(region_pct, config)

    leaves = _partition(list(photos), Rect(0, 0, region.width, region.height))

    layers = []
    for box, photo in leaves:
        x, y, w, h = inset_interior_edges(
            box.x, box.y, box.width, box.height,
            left=box.x <= EDGE_TOLERANCE,
            top=box.y <= EDGE_TOLERANCE,
            right=box.right >= region.width - EDGE_TOLERANCE,
            bottom=box.bottom >= region.height - EDGE_TOLERANCE,
            gap_x=config.gap,
            gap_y=config.gap,
        )
        if w <= 0 or h <= 0:
            logger.warning("structured layout skipped: box for photo %s collapsed under gap %s",
                           photo.id, config.gap)
            return None
        layers.append(pixel_layer(photo, region.x + x, region.y + y, w, h, config))
    return layers
