"""Template catalog: hand-authored arrangements for 2 to 8 photos.

Boxes are ``(x, y, w, h)`` in normalized page units (0 to 1) and are mapped
onto the margin-inset content area when applied.
"""

import logging

from geometry import inset_interior_edges, make_layer
from models import GeometryConfig, Layer, Photo

logger = logging.getLogger(__name__)

Box = tuple[float, float, float, float]

# A box edge within this distance of 0 or 1 counts as a page boundary.
EDGE_TOLERANCE = 0.01

TEMPLATES: dict[int, list[list[Box]]] = {
    2: [
        [(0, 0, 0.5, 1), (0.5, 0, 0.5, 1)],
        [(0, 0, 1, 0.5), (0, 0.5, 1, 0.5)],
        [(0, 0, 0.66, 1), (0.66, 0, 0.34, 1)],
        [(0, 0, 0.34, 1), (0.34, 0, 0.66, 1)],
        [(0.05, 0.1, 0.425, 0.8), (0.525, 0.1, 0.425, 0.8)],
    ],
    3: [
        [(0, 0, 0.333, 1), (0.333, 0, 0.333, 1), (0.666, 0, 0.333, 1)],
        [(0, 0, 0.5, 1), (0.5, 0, 0.5, 0.5), (0.5, 0.5, 0.5, 0.5)],
        [(0, 0, 0.5, 0.5), (0, 0.5, 0.5, 0.5), (0.5, 0, 0.5, 1)],
        [(0, 0, 1, 0.6), (0, 0.6, 0.5, 0.4), (0.5, 0.6, 0.5, 0.4)],
        [(0, 0, 1, 0.333), (0, 0.333, 1, 0.333), (0, 0.666, 1, 0.333)],
    ],
    4: [
        [(0, 0, 0.5, 0.5), (0.5, 0, 0.5, 0.5), (0, 0.5, 0.5, 0.5), (0.5, 0.5, 0.5, 0.5)],
        [(0, 0, 0.25, 1), (0.25, 0, 0.25, 1), (0.5, 0, 0.25, 1), (0.75, 0, 0.25, 1)],
        [(0, 0, 0.5, 1), (0.5, 0, 0.5, 0.333), (0.5, 0.333, 0.5, 0.333), (0.5, 0.666, 0.5, 0.333)],
        [(0, 0, 0.5, 0.5), (0, 0.5, 0.25, 0.5), (0.25, 0.5, 0.25, 0.5), (0.5, 0, 0.5, 1)],
        [(0, 0, 0.25, 0.5), (0.25, 0, 0.25, 0.5), (0, 0.5, 0.5, 0.5), (0.5, 0, 0.5, 1)],
        [(0, 0, 1, 0.65), (0, 0.65, 0.333, 0.35), (0.333, 0.65, 0.333, 0.35), (0.666, 0.65, 0.333, 0.35)],
    ],
    5: [
        [(0, 0, 0.5, 1), (0.5, 0, 0.25, 0.5), (0.75, 0, 0.25, 0.5), (0.5, 0.5, 0.25, 0.5), (0.75, 0.5, 0.25, 0.5)],
        [(0, 0, 0.5, 0.5), (0.5, 0, 0.5, 0.5), (0, 0.5, 0.333, 0.5), (0.333, 0.5, 0.333, 0.5), (0.666, 0.5, 0.333, 0.5)],
        [(0, 0, 0.2, 1), (0.2, 0, 0.2, 1), (0.4, 0, 0.2, 1), (0.6, 0, 0.2, 1), (0.8, 0, 0.2, 1)],
        [(0, 0, 0.25, 0.5), (0.25, 0, 0.25, 0.5), (0, 0.5, 0.25, 0.5), (0.25, 0.5, 0.25, 0.5), (0.5, 0, 0.5, 1)],
        [(0, 0, 0.5, 0.5), (0.5, 0, 0.25, 0.5), (0.75, 0, 0.25, 0.5), (0, 0.5, 0.5, 0.5), (0.5, 0.5, 0.5, 0.5)],
        [(0, 0, 0.5, 0.5), (0.5, 0, 0.5, 0.5), (0, 0.5, 0.25, 0.5), (0.25, 0.5, 0.25, 0.5), (0.5, 0.5, 0.5, 0.5)],
    ],
    6: [
        [(0, 0, 0.5, 0.6), (0.5, 0, 0.5, 0.6),
         (0, 0.6, 0.25, 0.4), (0.25, 0.6, 0.25, 0.4), (0.5, 0.6, 0.25, 0.4), (0.75, 0.6, 0.25, 0.4)],
        [(0, 0, 0.333, 0.5), (0.333, 0, 0.333, 0.5), (0.666, 0, 0.333, 0.5),
         (0, 0.5, 0.333, 0.5), (0.333, 0.5, 0.333, 0.5), (0.666, 0.5, 0.333, 0.5)],
        [(0, 0, 0.5, 0.333), (0.5, 0, 0.5, 0.333), (0, 0.333, 0.5, 0.333),
         (0.5, 0.333, 0.5, 0.333), (0, 0.666, 0.5, 0.333), (0.5, 0.666, 0.5, 0.333)],
        [(0, 0, 0.5, 1), (0.5, 0, 0.25, 0.5), (0.75, 0, 0.25, 0.5),
         (0.5, 0.5, 0.1667, 0.5), (0.6667, 0.5, 0.1667, 0.5), (0.8334, 0.5, 0.1666, 0.5)],
    ],
    7: [
        [(0, 0, 0.333, 0.5), (0.333, 0, 0.333, 0.5), (0.666, 0, 0.333, 0.5),
         (0, 0.5, 0.25, 0.5), (0.25, 0.5, 0.25, 0.5), (0.5, 0.5, 0.25, 0.5), (0.75, 0.5, 0.25, 0.5)],
    ],
    8: [
        [(0, 0, 0.25, 0.5), (0.25, 0, 0.25, 0.5), (0.5, 0, 0.25, 0.5), (0.75, 0, 0.25, 0.5),
         (0, 0.5, 0.25, 0.5), (0.25, 0.5, 0.25, 0.5), (0.5, 0.5, 0.25, 0.5), (0.75, 0.5, 0.25, 0.5)],
    ],
}


def lookup_templates(count: int) -> list[list[Box]]:
    """Box sets for *count* photos; empty when the catalog has none."""
    return [list(boxes) for boxes in TEMPLATES.get(count, [])]


def apply_template(boxes: list[Box], photos: list[Photo],
                   config: GeometryConfig) -> list[Layer] | None:
    """Map photos (in order) onto *boxes* inside the content area.

    Returns ``None`` when a box collapses under the gap inset.
    """
    if len(boxes) != len(photos):
        raise ValueError(f"template has {len(boxes)} boxes for {len(photos)} photos")

    region = config.content_region
    gap_x, gap_y = config.gap_pct_x, config.gap_pct_y

    layers = []
    for photo, (bx, by, bw, bh) in zip(photos, boxes):
        x, y, w, h = inset_interior_edges(
            region.x + bx * region.width,
            region.y + by * region.height,
            bw * region.width,
            bh * region.height,
            left=bx <= EDGE_TOLERANCE,
            top=by <= EDGE_TOLERANCE,
            right=bx + bw >= 1 - EDGE_TOLERANCE,
            bottom=by + bh >= 1 - EDGE_TOLERANCE,
            gap_x=gap_x,
            gap_y=gap_y,
        )
        if w <= 0 or h <= 0:
            logger.warning("template skipped: box for photo %s collapsed under gap %s",
                           photo.id, config.gap)
            return None
        layers.append(make_layer(photo, x, y, w, h))
    return layers
