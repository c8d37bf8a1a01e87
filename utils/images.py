import base64
import mimetypes
from typing import Optional


def image_to_data_url(filename: str, content: bytes, mime: Optional[str] = None) -> str:
    """Encode an uploaded image the way the question builder submits it."""
    mime = mime or mimetypes.guess_type(filename)[0] or 'application/octet-stream'
    encoded = base64.b64encode(content).decode('ascii')
    return f"data:{mime};base64,{encoded}"


def is_data_url(value: Optional[str]) -> bool:
    return isinstance(value, str) and value.startswith('data:')
