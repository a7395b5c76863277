import base64

from klse_blogger.exceptions import InvalidDataUriError
from klse_blogger.schemas.analyze import DATA_URI_PATTERN


def encode_data_uri(content: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def parse_data_uri(data_uri: str) -> tuple[str, bytes]:
    """Split a 'data:<mimetype>;base64,<encoded_data>' URI into its MIME type and decoded bytes."""
    match = DATA_URI_PATTERN.match(data_uri)
    if not match:
        raise InvalidDataUriError("Expected format: 'data:<mimetype>;base64,<encoded_data>'.")
    try:
        content = base64.b64decode(match.group("payload"), validate=True)
    except ValueError as e:
        raise InvalidDataUriError(f"Invalid base64 payload: {e}") from e
    return match.group("mime_type"), content
