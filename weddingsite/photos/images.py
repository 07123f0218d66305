import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

from weddingsite.exceptions import WorkflowValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessedImage:
    width: int
    height: int
    thumbnail: bytes


def make_thumbnail(image_bytes: bytes, max_width: int = 400) -> ProcessedImage:
    """Decode an upload and render a JPEG thumbnail no wider than `max_width`.

    Raises WorkflowValidationError when the bytes are not a decodable image.
    """
    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        logger.info("Rejected undecodable upload: %s", e)
        raise WorkflowValidationError("file", "file is not a valid image") from e

    width, height = image.size
    # Phones store rotation in EXIF; bake it in before resizing
    thumbnail = ImageOps.exif_transpose(image)
    if thumbnail.width > max_width:
        ratio = max_width / thumbnail.width
        thumbnail = thumbnail.resize((max_width, max(int(thumbnail.height * ratio), 1)), Image.LANCZOS)
    if thumbnail.mode != "RGB":
        thumbnail = thumbnail.convert("RGB")

    output = io.BytesIO()
    thumbnail.save(output, format="JPEG", quality=85)
    return ProcessedImage(width=width, height=height, thumbnail=output.getvalue())
