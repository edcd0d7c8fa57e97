import hashlib

from pydantic import ValidationError


def validation_error_parser(error: ValidationError) -> list[dict[str, str]]:
    parsed_error = [
        {
            "component": "config.settings",
            "path": ".".join(map(str, err["loc"])),
            "message": err["msg"],
            "error_type": err["type"],
        }
        for err in error.errors()
    ]
    return parsed_error


def content_hash(content: str) -> str:
    """Hex SHA256 of the rendered text; identical output gives an identical hash."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
