"""Shared geometry helpers: percent/pixel conversion and gap insets."""

from models import GeometryConfig, Layer, Photo, Rect


def rect_to_pixels(rect: Rect, config: GeometryConfig) -> Rect:
    """Percent-of-page rect -> pixel rect."""
    return Rect(
        rect.x / 100 * config.page_width,
        rect.y / 100 * config.page_height,
        rect.width / 100 * config.page_width,
        rect.height / 100 * config.page_height,
    )


def make_layer(photo: Photo, x: float, y: float, w: float, h: float) -> Layer:
    """Fresh layer with identity adjustments, geometry in percent."""
    return Layer(photo_id=photo.id, x=x, y=y, width=w, height=h)


def pixel_layer(photo: Photo, x: float, y: float, w: float, h: float,
                config: GeometryConfig) -> Layer:
    """Build a layer from a pixel-space box."""
    pw, ph = config.page_width, config.page_height
    return make_layer(photo, x / pw * 100, y / ph * 100, w / pw * 100, h / ph * 100)


def inset_interior_edges(x: float, y: float, w: float, h: float,
                         left: bool, top: bool, right: bool, bottom: bool,
                         gap_x: float, gap_y: float) -> tuple[float, float, float, float]:
    """Shrink a box by half a gap on each edge that is *not* on the boundary.

    Two neighbours each give up half, so the visible gap between them is one
    full gap while boundary edges stay flush with the margin.
    """
    if not left:
        x += gap_x / 2
        w -= gap_x / 2
    if not right:
        w -= gap_x / 2
    if not top:
        y += gap_y / 2
        h -= gap_y / 2
    if not bottom:
        h -= gap_y / 2
    return x, y, w, h


def bounding_region(layers: list[Layer]) -> Rect | None:
    """Smallest rect enclosing *layers*, or None when there is nothing to enclose."""
    if not layers:
        return None
    min_x = min(l.x for l in layers)
    min_y = min(l.y for l in layers)
    max_x = max(l.x + l.width for l in layers)
    max_y = max(l.y + l.height for l in layers)
    return Rect(min_x, min_y, max_x - min_x, max_y - min_y)


def mirror_x(layers: list[Layer]) -> list[Layer]:
    """Mirror layers horizontally about the page centre."""
    return [
        Layer(photo_id=l.photo_id, x=100 - l.x - l.width, y=l.y,
              width=l.width, height=l.height)
        for l in layers
    ]
