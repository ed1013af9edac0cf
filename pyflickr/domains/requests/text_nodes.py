"""Collapse the API's text-node wrappers.

Flickr's JSON serializes text-bearing fields as ``{"_content": value}``.
After decoding, every such wrapper is replaced by its value so callers read
``photo["title"]`` instead of ``photo["title"]["_content"]``.
"""

from typing import Any

from pyflickr.core.constants import TEXT_NODE_KEY


def normalize_text_nodes(node: Any) -> Any:
    """Return ``node`` with every ``{"_content": x}`` collapsed to ``x``.

    Scalars and empty containers pass through. A collapsed value is returned
    as-is, without a further pass.
    """
    if isinstance(node, dict):
        if not node:
            return node
        if len(node) == 1 and TEXT_NODE_KEY in node:
            return node[TEXT_NODE_KEY]
        return {key: normalize_text_nodes(value) for key, value in node.items()}
    if isinstance(node, list):
        if not node:
            return node
        return [normalize_text_nodes(value) for value in node]
    return node
