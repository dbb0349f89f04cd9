"""Fixed-geometry layouts: uniform grid and one-photo focus.

Both return ``None`` when the gaps leave a cell with no area.
"""

import logging
import math

from geometry import make_layer, mirror_x
from models import GeometryConfig, Layer, Photo
from mosaic import mosaic_layout

logger = logging.getLogger(__name__)

# Share of the content width (minus one gap) given to the focus photo.
FOCUS_SHARE = 0.6


def grid_layout(photos: list[Photo], config: GeometryConfig, columns: int) -> list[Layer] | None:
    """Equal cells, filled row by row."""
    if not photos:
        return []
    columns = max(1, columns)
    rows = math.ceil(len(photos) / columns)
    region = config.content_region
    gap_x, gap_y = config.gap_pct_x, config.gap_pct_y
    cell_w = (region.width - gap_x * (columns - 1)) / columns
    cell_h = (region.height - gap_y * (rows - 1)) / rows
    if cell_w <= 0 or cell_h <= 0:
        logger.warning("grid skipped: %d x %d cells do not fit gap %s", columns, rows, config.gap)
        return None

    layers = []
    for i, photo in enumerate(photos):
        r, c = divmod(i, columns)
        layers.append(make_layer(
            photo,
            region.x + c * (cell_w + gap_x),
            region.y + r * (cell_h + gap_y),
            cell_w,
            cell_h,
        ))
    return layers


def square_grid_layout(photos: list[Photo], config: GeometryConfig) -> list[Layer] | None:
    return grid_layout(photos, config, math.ceil(math.sqrt(len(photos))))


def focus_layout(photos: list[Photo], config: GeometryConfig,
                 focus_index: int = 0) -> list[Layer] | None:
    """One large photo on the left, the others stacked in a column beside it.

    With fewer than two photos there is nothing to stack, so the mosaic
    packer handles it.
    """
    if len(photos) < 2:
        return mosaic_layout(photos, config)

    main = photos[focus_index]
    others = [p for i, p in enumerate(photos) if i != focus_index]
    region = config.content_region
    gap_x, gap_y = config.gap_pct_x, config.gap_pct_y

    main_w = (region.width - gap_x) * FOCUS_SHARE
    side_w = (region.width - gap_x) * (1 - FOCUS_SHARE)
    side_h = (region.height - gap_y * (len(others) - 1)) / len(others)
    if main_w <= 0 or side_w <= 0 or side_h <= 0:
        logger.warning("focus layout skipped: %d side photos do not fit gap %s",
                       len(others), config.gap)
        return None

    layers = [make_layer(main, region.x, region.y, main_w, region.height)]
    for i, photo in enumerate(others):
        layers.append(make_layer(
            photo,
            region.x + main_w + gap_x,
            region.y + i * (side_h + gap_y),
            side_w,
            side_h,
        ))
    return layers


def right_focus_layout(photos: list[Photo], config: GeometryConfig,
                       focus_index: int = 0) -> list[Layer] | None:
    layers = focus_layout(photos, config, focus_index)
    return mirror_x(layers) if layers is not None else None
