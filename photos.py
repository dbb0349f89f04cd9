"""Photo intake: read pixel size and orientation with Pillow."""

import io
import logging
import os

from PIL import Image, UnidentifiedImageError

from models import Photo

logger = logging.getLogger(__name__)

EXIF_ORIENTATION = 0x0112
# EXIF orientations 5-8 store the image rotated by 90 degrees.
TRANSPOSED_ORIENTATIONS = {5, 6, 7, 8}

PHOTO_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.tif', '.tiff', '.webp', '.bmp', '.gif')


def displayed_size(img: Image.Image) -> tuple[int, int]:
    """(width, height) as the photo is meant to be viewed."""
    w, h = img.size
    if img.getexif().get(EXIF_ORIENTATION) in TRANSPOSED_ORIENTATIONS:
        return h, w
    return w, h


def photo_from_image(img: Image.Image, photo_id: str, path: str | None = None) -> Photo:
    w, h = displayed_size(img)
    return Photo.from_size(photo_id, w, h, path=path)


def load_photo(path: str, photo_id: str | None = None) -> Photo:
    """Read one image file; the id defaults to the file name."""
    with Image.open(path) as img:
        return photo_from_image(img, photo_id or os.path.basename(path), path=str(path))


def photo_from_bytes(data: bytes, photo_id: str) -> Photo:
    with Image.open(io.BytesIO(data)) as img:
        return photo_from_image(img, photo_id)


def load_photos(directory: str) -> list[Photo]:
    """All readable photos in *directory*, sorted by file name."""
    photos = []
    for name in sorted(os.listdir(directory)):
        if not name.lower().endswith(PHOTO_EXTENSIONS):
            continue
        path = os.path.join(directory, name)
        try:
            photos.append(load_photo(path))
        except (OSError, UnidentifiedImageError) as exc:
            logger.warning("skipping %s: %s", path, exc)
    return photos
