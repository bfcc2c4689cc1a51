"""Encode and decode documents as YAML, JSON, TOML or HCL."""

import json
import re
import tomllib
from pathlib import Path

import hcl
import tomli_w
import yaml

from provider_doc_util.errors import CodecError

FORMATS = ("yaml", "json", "toml", "hcl")
DEFAULT_FORMAT = "toml"

_SUFFIX_FORMATS = {".yaml": "yaml", ".yml": "yaml", ".json": "json", ".toml": "toml", ".hcl": "hcl"}


def format_for_path(path: Path) -> str:
    """Return the format implied by a file suffix."""
    try:
        return _SUFFIX_FORMATS[path.suffix.lower()]
    except KeyError:
        raise CodecError(f"unknown document format {path.suffix!r} ({path})") from None


def encode(data: dict, fmt: str) -> str:
    """Serialize ``data`` in the given format."""
    try:
        if fmt == "yaml":
            return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
        if fmt == "json":
            return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        if fmt == "toml":
            return tomli_w.dumps(data)
        if fmt == "hcl":
            return _dump_hcl(data)
    except (TypeError, ValueError, yaml.YAMLError) as e:
        raise CodecError(f"cannot encode document as {fmt}: {e}") from e
    raise CodecError(f"unknown format {fmt!r}, expected one of {', '.join(FORMATS)}")


def decode(text: str, fmt: str) -> dict:
    """Parse text in the given format."""
    try:
        if fmt == "yaml":
            return yaml.safe_load(text)
        if fmt == "json":
            return json.loads(text)
        if fmt == "toml":
            return tomllib.loads(text)
        if fmt == "hcl":
            return hcl.loads(text)
    except (ValueError, yaml.YAMLError) as e:
        raise CodecError(f"cannot decode {fmt} document: {e}") from e
    raise CodecError(f"unknown format {fmt!r}, expected one of {', '.join(FORMATS)}")


# HCL1 attribute syntax: every key quoted, objects and lists always use "=".
# Multi-line strings are written as heredocs, which cannot appear inside lists.
# Lists cannot nest.

_INDENT = "  "
_ESCAPES = {"\\": "\\\\", '"': '\\"'}
_HEREDOC_MARKERS = ("EOF", "EOT", "END")


def _dump_hcl(data: dict) -> str:
    if not isinstance(data, dict):
        raise TypeError(f"top-level HCL value must be a mapping, not {type(data).__name__}")
    lines = _hcl_items(data, 0)
    return "\n".join(lines) + "\n" if lines else ""


def _hcl_items(data: dict, depth: int) -> list[str]:
    pad = _INDENT * depth
    items = []
    for key, value in data.items():
        key = str(key)
        if "\n" in key:
            raise TypeError(f"cannot represent multi-line key {key!r} in HCL")
        items.append(f"{pad}{_hcl_string(key)} = {_hcl_value(value, depth)}")
    return items


def _hcl_value(value, depth: int, in_list: bool = False) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        if "\n" not in value:
            return _hcl_string(value)
        if in_list:
            raise TypeError("cannot represent a multi-line string inside an HCL list")
        return _hcl_heredoc(value)
    if isinstance(value, dict):
        if not value:
            return "{}"
        inner = "\n".join(_hcl_items(value, depth + 1))
        return "{\n" + inner + "\n" + _INDENT * depth + "}"
    if isinstance(value, (list, tuple)):
        if in_list:
            raise TypeError("cannot represent a list nested in a list in HCL")
        if not value:
            return "[]"
        pad = _INDENT * (depth + 1)
        inner = ",\n".join(pad + _hcl_value(item, depth + 1, in_list=True) for item in value)
        return "[\n" + inner + "\n" + _INDENT * depth + "]"
    raise TypeError(f"cannot represent {type(value).__name__} in HCL")


def _hcl_string(value: str) -> str:
    return '"' + re.sub(r'[\\"]', lambda m: _ESCAPES[m.group(0)], value) + '"'


def _hcl_heredoc(value: str) -> str:
    lines = {line.strip() for line in value.split("\n")}
    marker = next(m for m in _HEREDOC_MARKERS + tuple(f"EOF{n}" for n in range(len(lines) + 1)) if m not in lines)
    return f"<<{marker}\n{value}\n{marker}"
