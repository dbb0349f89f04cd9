"""Data model classes and constants for the spread layout engine.

Page geometry is configured in pixels; every generated Layer is expressed
in percent of the page width/height (0-100).
"""

import uuid
from dataclasses import dataclass, field


# === Constants ===
DPI = 300
DEFAULT_GAP = 40       # px between photos
DEFAULT_MARGIN = 100   # px around the page content

# Units per inch; 'px' is handled separately since it depends on nothing.
UNITS_PER_INCH = {
    'in': 1.0,
    'cm': 2.54,
    'mm': 25.4,
    'm': 0.0254,
    'pt': 72.0,
}

# Standard album sizes as (name, width, height, unit)
ALBUM_PRESETS = [
    ("Square album (30 × 30 cm)", 30.0, 30.0, 'cm'),
    ("Landscape album (40 × 30 cm)", 40.0, 30.0, 'cm'),
    ("Portrait album (20 × 30 cm)", 20.0, 30.0, 'cm'),
]


def to_pixels(value: float, unit: str, dpi: int = DPI) -> int:
    """Convert a physical length to whole pixels at *dpi*."""
    if unit == 'px':
        return int(round(value))
    if unit not in UNITS_PER_INCH:
        raise ValueError(f"unknown unit: {unit!r}")
    return int(round(value / UNITS_PER_INCH[unit] * dpi))


def from_pixels(px: float, unit: str, dpi: int = DPI) -> float:
    if unit == 'px':
        return float(px)
    if unit not in UNITS_PER_INCH:
        raise ValueError(f"unknown unit: {unit!r}")
    return px / dpi * UNITS_PER_INCH[unit]


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


class UnknownPhotoError(LookupError):
    """A layer references a photo id that is not in the supplied photo set."""


# === Data Model ===

@dataclass(frozen=True)
class GeometryConfig:
    """Page geometry: pixel size of a spread plus gap and margin in pixels."""
    page_width: int = 3543       # 30 cm at 300 DPI
    page_height: int = 3543
    gap: float = DEFAULT_GAP
    margin: float = DEFAULT_MARGIN

    def __post_init__(self):
        if self.page_width <= 0 or self.page_height <= 0:
            raise ValueError("page dimensions must be > 0")
        if self.gap < 0:
            raise ValueError("gap must be >= 0")
        if self.margin < 0:
            raise ValueError("margin must be >= 0")
        if 2 * self.margin >= min(self.page_width, self.page_height):
            raise ValueError("margins leave no content area on the page")

    @classmethod
    def from_physical(cls, width: float, height: float, unit: str = 'cm',
                      dpi: int = DPI, gap: float = DEFAULT_GAP,
                      margin: float = DEFAULT_MARGIN) -> "GeometryConfig":
        return cls(
            page_width=to_pixels(width, unit, dpi),
            page_height=to_pixels(height, unit, dpi),
            gap=gap,
            margin=margin,
        )

    @classmethod
    def from_preset(cls, index: int, dpi: int = DPI, **kwargs) -> "GeometryConfig":
        _, w, h, unit = ALBUM_PRESETS[index]
        return cls.from_physical(w, h, unit, dpi, **kwargs)

    @property
    def gap_pct_x(self) -> float:
        return self.gap / self.page_width * 100

    @property
    def gap_pct_y(self) -> float:
        return self.gap / self.page_height * 100

    @property
    def margin_pct_x(self) -> float:
        return self.margin / self.page_width * 100

    @property
    def margin_pct_y(self) -> float:
        return self.margin / self.page_height * 100

    @property
    def content_region(self) -> "Rect":
        """The margin-inset page area, in percent."""
        mx, my = self.margin_pct_x, self.margin_pct_y
        return Rect(mx, my, 100 - 2 * mx, 100 - 2 * my)


@dataclass(frozen=True)
class Photo:
    """A photo as the layout engine sees it: an id and an aspect ratio (w / h)."""
    id: str
    aspect_ratio: float
    path: str | None = None

    @classmethod
    def from_size(cls, photo_id: str, width: int, height: int,
                  path: str | None = None) -> "Photo":
        aspect = width / height if height > 0 else 1.0
        return cls(id=photo_id, aspect_ratio=aspect, path=path)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; units depend on context (percent or pixels)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass
class Adjustments:
    """Per-photo presentation values. Generated layers always get the identity."""
    exposure: float = 0.0
    brightness: float = 0.0
    contrast: float = 0.0
    saturation: float = 0.0
    highlights: float = 0.0
    shadows: float = 0.0
    blacks: float = 0.0
    temperature: float = 0.0
    rotation: float = 0.0
    scale: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0


@dataclass
class Layer:
    """A photo placed on a spread, in percent of page width/height."""
    photo_id: str
    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0
    adjustments: Adjustments = field(default_factory=Adjustments)
    locked: bool = False
    id: str = field(default_factory=_new_id)

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


@dataclass
class Spread:
    """One page of the album: ordered layers plus a 1-based index."""
    index: int
    layers: list[Layer] = field(default_factory=list)
    locked: bool = False
    id: str = field(default_factory=_new_id)

    @property
    def photo_ids(self) -> list[str]:
        return [layer.photo_id for layer in self.layers]


@dataclass
class Suggestion:
    """An alternative arrangement offered for a fixed photo set."""
    kind: str
    label: str
    layers: list[Layer] = field(default_factory=list)


@dataclass
class SuggestionBatch:
    """Result of asking for more suggestions. Never reports exhaustion."""
    results: list[Suggestion] = field(default_factory=list)
    exhausted: bool = False
