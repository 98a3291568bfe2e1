import io
import base64
import logging
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from plantcare.config import MAX_IMAGE_BYTES
from plantcare.errors import InputFailure

logger = logging.getLogger(__name__)

_MIME_TYPES = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "BMP": "image/bmp",
}


@dataclass(frozen=True)
class EncodedImage:
    data: str  # base64, no data: prefix
    mime_type: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


def encode_image(image_bytes: bytes, max_bytes: int = MAX_IMAGE_BYTES) -> EncodedImage:
    """Validate an uploaded image and encode it for the AI request."""
    if not image_bytes:
        raise InputFailure("Please select a photo to analyze.")
    if len(image_bytes) > max_bytes:
        raise InputFailure(
            f"The photo is too large. Please upload an image under {max_bytes // (1024 * 1024)} MB.",
            details={"size": len(image_bytes), "max_size": max_bytes},
        )

    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            img.verify()
            image_format = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        logger.warning(f"Rejected unreadable image upload: {e}")
        raise InputFailure("The file is not a readable image. Please upload a JPEG or PNG photo.") from e

    mime_type = _MIME_TYPES.get(image_format or "", "image/jpeg")
    return EncodedImage(
        data=base64.b64encode(image_bytes).decode("utf-8"),
        mime_type=mime_type,
    )
