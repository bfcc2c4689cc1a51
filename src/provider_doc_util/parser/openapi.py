"""OpenAPI / Swagger document loader.

Reads OpenAPI 3.x and Swagger 2.0 documents (YAML or JSON) into plain
mappings. External references are left untouched.
"""

from collections.abc import Iterator
from pathlib import Path

import yaml

from provider_doc_util.errors import InvalidSourceError

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def load_openapi(file_path: Path) -> dict:
    """Load an OpenAPI/Swagger file and check it looks like one."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidSourceError(f"cannot parse {file_path}: {e}") from e

    if not isinstance(doc, dict) or not ("openapi" in doc or "swagger" in doc):
        raise InvalidSourceError(f"{file_path} is not an OpenAPI document")
    if not isinstance(doc.get("paths"), dict):
        raise InvalidSourceError(f"{file_path} has no paths")
    return doc


def iter_operations(doc: dict) -> Iterator[tuple[str, str, dict]]:
    """Yield (path_key, verb_key, operation) in source order.

    Path-level keys such as ``parameters`` or ``summary`` are skipped.
    """
    for path_key, path_item in doc.get("paths", {}).items():
        if not isinstance(path_item, dict):
            continue
        for verb_key, operation in path_item.items():
            if verb_key.lower() not in HTTP_METHODS:
                continue
            yield path_key, verb_key, operation
