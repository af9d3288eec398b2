"""Plain-text extraction from Atlassian Document Format descriptions."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from jit.errors import RenderError
from jit.models import DocNode

logger = logging.getLogger(__name__)

# Node kinds whose children are each followed by a newline.
BLOCK_KINDS = frozenset({"paragraph", "listItem"})

MAX_DEPTH = 100


def parse_document(value: Any) -> DocNode | None:
    """Validate a raw JSON description into a DocNode tree.

    Returns None when the value is not a document at all (plain string, null,
    list, or a mapping with the wrong shape). Raises RenderError when the tree
    nests deeper than MAX_DEPTH.
    """
    if not isinstance(value, Mapping):
        return None
    _check_depth(value)
    try:
        return DocNode.model_validate(value)
    except ValidationError as exc:
        logger.debug("Description is not a document tree: %s", exc)
        return None


def _check_depth(value: Mapping) -> None:
    stack = [(value, 0)]
    while stack:
        node, depth = stack.pop()
        if depth > MAX_DEPTH:
            raise RenderError(f"Description nesting exceeds {MAX_DEPTH} levels")
        content = node.get("content")
        if isinstance(content, list):
            stack.extend((child, depth + 1) for child in content if isinstance(child, Mapping))


def extract_plain_text(document: Any) -> str:
    """Linearize a document into plain text, one trailing newline per top-level block.

    Returns "" for a missing or empty document; callers treat that as "no text".
    """
    root = document if isinstance(document, DocNode) else parse_document(document)
    if root is None or not root.content:
        return ""

    parts: list[str] = []
    for child in root.content:
        _linearize(child, parts, depth=1)
        parts.append("\n")
    return "".join(parts)


def _linearize(node: DocNode, parts: list[str], depth: int) -> None:
    if depth > MAX_DEPTH:
        raise RenderError(f"Description nesting exceeds {MAX_DEPTH} levels")

    if node.text is not None:
        parts.append(node.text)

    # The newline is keyed on this node's kind, once per child, so a paragraph
    # without children contributes no newline of its own.
    for child in node.content:
        _linearize(child, parts, depth + 1)
        if node.kind in BLOCK_KINDS:
            parts.append("\n")
