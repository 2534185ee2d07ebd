"""Read an OpenAPI/Swagger file from disk and decode it."""

import json
from pathlib import Path

import yaml


class DocumentError(ValueError):
    """Raised when a file decodes to something other than a mapping."""


def load_document(file_path: Path) -> dict:
    """Decode a JSON or YAML API document into a mapping."""
    text = file_path.read_text(encoding="utf-8")

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as yaml_error:
        # Some valid JSON (e.g. tab-indented) is not valid YAML
        try:
            data = json.loads(text)
        except ValueError:
            raise yaml_error from None

    if not isinstance(data, dict):
        raise DocumentError(f"{file_path} does not contain an API document object")
    return data
