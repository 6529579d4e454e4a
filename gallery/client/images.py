import base64
import mimetypes
from pathlib import Path


def encode_data_uri(path: str | Path) -> str:
    """
    Read a local image and return it as `data:<mime>;base64,<payload>`,
    ready to be stored in an author's imageUrl.
    """
    path = Path(path)
    media_type, _ = mimetypes.guess_type(path.name)
    if media_type is None or not media_type.startswith("image/"):
        raise ValueError(f"Not an image file: {path.name}")

    with open(path, "rb") as f:
        payload = base64.standard_b64encode(f.read()).decode("utf-8")
    return f"data:{media_type};base64,{payload}"


def describe_image(image_url: str | None) -> str:
    """Short human label for an imageUrl value."""
    if not image_url:
        return "no image"
    if image_url.startswith("data:"):
        header, _, payload = image_url.partition(",")
        media_type = header[len("data:"):].split(";", 1)[0] or "unknown"
        size_kb = len(payload) * 3 / 4 / 1024
        return f"embedded {media_type} ({size_kb:.1f} KB)"
    return image_url
