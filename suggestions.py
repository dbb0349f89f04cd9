"""Alternative layouts for one spread, with duplicate detection.

``generate_suggestions`` returns the fixed menu of arrangements for a photo
set. ``generate_more`` draws random mosaic/structured layouts and keeps only
geometries the caller has not been shown yet, tracked in a caller-owned
:class:`SuggestionHistory`.
"""

import logging
import random

from grid import focus_layout, grid_layout, right_focus_layout, square_grid_layout
from models import GeometryConfig, Layer, Photo, Suggestion, SuggestionBatch
from mosaic import mosaic_layout
from structured import structured_layout
from templates import apply_template, lookup_templates

logger = logging.getLogger(__name__)

MAX_SUGGESTION_ROWS = 6
MAX_ATTEMPTS = 100
MOSAIC_PROBABILITY = 0.7
HASH_SEPARATOR = '|'


def geometry_hash(layers: list[Layer]) -> str:
    """Order-independent fingerprint of a layout's boxes (photo ids ignored)."""
    ordered = sorted(layers, key=lambda l: (l.y, l.x))
    return HASH_SEPARATOR.join(
        f"{l.x:.1f}:{l.y:.1f}:{l.width:.1f}:{l.height:.1f}" for l in ordered
    )


class SuggestionHistory:
    """Geometry hashes already shown for a spread.

    Owned by the caller and passed into :func:`generate_more`; not safe to
    share between threads without external locking.
    """

    def __init__(self, hashes=None):
        self._seen: set[str] = set(hashes or ())

    def __contains__(self, layout_hash: str) -> bool:
        return layout_hash in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def add(self, layout_hash: str) -> None:
        self._seen.add(layout_hash)

    def remember(self, layers: list[Layer]) -> bool:
        """Record *layers*; True if their geometry had not been seen before."""
        layout_hash = geometry_hash(layers)
        if layout_hash in self._seen:
            return False
        self._seen.add(layout_hash)
        return True

    def reset(self) -> None:
        self._seen.clear()


def generate_suggestions(photos: list[Photo], config: GeometryConfig,
                         history: SuggestionHistory | None = None) -> list[Suggestion]:
    """The standard menu of arrangements for *photos*.

    Templates for this photo count, the best mosaic, the structured layout,
    a mosaic per row count, grids and (for three or more photos) left and
    right focus layouts. If *history* is given, every geometry is recorded
    so later :func:`generate_more` calls skip them.
    """
    if not photos:
        return []
    count = len(photos)
    candidates = []

    for i, boxes in enumerate(lookup_templates(count), start=1):
        candidates.append(('template', f"Template {i}", apply_template(boxes, photos, config)))

    candidates.append(('mosaic', "Mosaic", mosaic_layout(photos, config)))
    candidates.append(('structured', "Structured", structured_layout(photos, config)))

    for rows in range(1, min(count, MAX_SUGGESTION_ROWS) + 1):
        label = "1 row" if rows == 1 else f"{rows} rows"
        candidates.append(('rows', label, mosaic_layout(photos, config, force_row_count=rows)))

    if count > 1:
        candidates.append(('grid', "Square grid", square_grid_layout(photos, config)))
        if count % 2 == 0:
            candidates.append(('grid', "2-column grid", grid_layout(photos, config, 2)))

    if count >= 3:
        candidates.append(('focus', "Left focus", focus_layout(photos, config)))
        candidates.append(('focus', "Right focus", right_focus_layout(photos, config)))

    # Generators that could not fit the photos return None and are left out.
    suggestions = [Suggestion(kind, label, layers)
                   for kind, label, layers in candidates if layers is not None]

    if history is not None:
        for suggestion in suggestions:
            history.remember(suggestion.layers)
    return suggestions


def generate_more(photos: list[Photo], config: GeometryConfig, history: SuggestionHistory,
                  count: int = 4, rng: random.Random | None = None) -> SuggestionBatch:
    """Up to *count* layouts whose geometry is not yet in *history*.

    When ``MAX_ATTEMPTS`` draws do not turn up enough new geometries the batch
    is topped up with shuffled mosaics that may repeat, so the caller gets
    *count* results whenever a mosaic fits the photos. ``exhausted`` stays
    False.
    """
    if not photos:
        return SuggestionBatch()
    rng = rng or random

    results = []
    attempts = 0
    while len(results) < count and attempts < MAX_ATTEMPTS:
        attempts += 1
        if rng.random() < MOSAIC_PROBABILITY:
            layers = mosaic_layout(photos, config, shuffle=True, rng=rng)
        else:
            layers = structured_layout(photos, config)
        if layers and history.remember(layers):
            results.append(Suggestion('variation', f"Option {len(history)}", layers))

    missing = count - len(results)
    if missing > 0:
        logger.warning("only %d new layouts after %d attempts; repeating %d",
                       len(results), attempts, missing)
        for i in range(missing):
            layers = mosaic_layout(photos, config, shuffle=True, rng=rng)
            if layers is None:
                break
            results.append(Suggestion('variation', f"Variation {len(history) + i + 1}", layers))

    return SuggestionBatch(results=results, exhausted=False)
