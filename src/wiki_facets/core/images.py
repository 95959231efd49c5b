# ABOUTME: Primary-image resolution for a page from infobox fields, the image listing, and raw text
# ABOUTME: Infobox filename match first; text-position fallback only when no infobox image field exists

from collections.abc import Awaitable, Callable, Mapping, Sequence

from wiki_facets.core.lookup import bare_filename, normalize_title
from wiki_facets.core.models import FieldValue, ImageCandidate
from wiki_facets.utils.logging import get_logger

logger = get_logger(__name__)

# Translations of "image" used by infoboxes across language editions, in priority order
IMAGE_FIELD_KEYS: tuple[str, ...] = ("image", "bildname", "imagen", "Immagine", "badge", "logo")

RawTextLoader = Callable[[], Awaitable[str | None]]


def infobox_image_name(fields: Mapping[str, FieldValue]) -> str | None:
    """Bare filename named by the first non-empty image-bearing infobox field, if any."""
    for key in IMAGE_FIELD_KEYS:
        value = fields.get(key)
        if value:
            return bare_filename(value)
    return None


def titles_match(title: str, filename: str) -> bool:
    """Compare an image title with an infobox filename, ignoring namespace and space/underscore style."""
    name = bare_filename(title)
    if name is None:
        return False
    return name == filename or normalize_title(name) == normalize_title(filename)


def find_image(images: Sequence[ImageCandidate], filename: str) -> ImageCandidate | None:
    """First listing entry whose title matches ``filename``."""
    return next((image for image in images if titles_match(image.title, filename)), None)


def rank_by_text_position(images: Sequence[ImageCandidate], text: str) -> list[ImageCandidate]:
    """Order images by descending position of their first mention in ``text``.

    Titles that never occur sort last (position -1). Ties keep listing order.
    """
    return sorted(images, key=lambda image: text.find(bare_filename(image.title) or image.title), reverse=True)


async def resolve_main_image(
    images: Sequence[ImageCandidate],
    fields: Mapping[str, FieldValue],
    raw_text: RawTextLoader,
) -> str | None:
    """Resolve the single most likely primary image URL of a page.

    Args:
        images: The page's raw image listing
        fields: General infobox fields of the page
        raw_text: Loads the page's raw wikitext; awaited only for the fallback

    Returns:
        Image URL, or None when no image can be determined
    """
    filename = infobox_image_name(fields)

    if filename is None:
        # No infobox image field: guess from where images are mentioned in the page text
        text = await raw_text()
        if not images:
            logger.debug("No infobox image field and no images listed")
            return None
        ranked = rank_by_text_position(images, text or "")
        logger.debug("Resolved main image by text position", title=ranked[0].title)
        return ranked[0].url

    image = find_image(images, filename)
    if image is None:
        logger.debug("Infobox image not found in listing", filename=filename, listed=len(images))
        return None
    return image.url
