"""Front matter parsing and rendering for post documents."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

import yaml

FRONTMATTER_DELIM = "---"

_DOCUMENT_RE = re.compile(r"\A---\n(.*?)\n---\n(.*)\Z", re.DOTALL)
_EDGE_QUOTE_RE = re.compile(r"\A['\"]|['\"]\Z")

MetadataValue = str | list[str]


@dataclass(frozen=True, slots=True)
class ParsedDocument:
    """Outcome of splitting a raw post document."""

    metadata: dict[str, MetadataValue] = field(default_factory=dict)
    body: str = ""


def parse_front_matter(raw: str) -> ParsedDocument:
    """Split ``raw`` into its metadata block and body.

    Documents without a leading ``---`` block are returned whole as the body.
    Malformed lines inside the block are skipped, never reported.
    """

    match = _DOCUMENT_RE.match(raw)
    if match is None:
        return ParsedDocument(metadata={}, body=raw)

    block, body = match.group(1), match.group(2)
    metadata: dict[str, MetadataValue] = {}

    for line in block.split("\n"):
        colon = line.find(":")
        if colon <= 0:
            continue
        key = line[:colon].strip()
        metadata[key] = _normalize_value(key, line[colon + 1 :].strip())

    return ParsedDocument(metadata=metadata, body=body)


def _normalize_value(key: str, value: str) -> MetadataValue:
    if (
        (value.startswith('"') and value.endswith('"'))
        or (value.startswith("'") and value.endswith("'"))
    ):
        value = value[1:-1]

    if key == "tags" and value.startswith("[") and value.endswith("]"):
        return _parse_tag_list(value)
    return value


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _parse_tag_list(value: str) -> list[str]:
    try:
        loaded = json.loads(value, parse_constant=_reject_constant)
    except ValueError:
        loaded = None
    if isinstance(loaded, list):
        return loaded

    # Lenient path for YAML-ish lists such as ``[python, 'til']``.
    return [_EDGE_QUOTE_RE.sub("", part.strip()) for part in value[1:-1].split(",")]


def dump_metadata(metadata: Mapping[str, Any]) -> str:
    """Return ``metadata`` as a YAML block suitable for terminal display."""

    if not metadata:
        return ""
    return yaml.safe_dump(
        dict(metadata),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    ).strip()
