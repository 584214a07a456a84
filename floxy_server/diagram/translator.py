from __future__ import annotations

import json
import logging
from typing import List, Optional

from floxy_server.diagram.mermaid import (
    HEADER,
    PLACEHOLDER_DIAGRAM,
    render_edges,
    render_node,
    render_start_edge,
    render_start_node,
)
from floxy_server.diagram.normalizer import SchemaError, normalize_document
from floxy_server.schemas.flow import FlowDocument

logger = logging.getLogger(__name__)


def error_diagram(message: str) -> str:
    text = message.replace('"', "#quot;")
    return f'{HEADER}\nerror(["{text}"])'


def render_document(document: FlowDocument) -> str:
    nodes: List[str] = []
    links: List[str] = []

    if document.has_start():
        nodes.append(render_start_node())
        links.append(render_start_edge(document.start))

    for name, step in document.steps.items():
        nodes.append(render_node(name, step))

    for name, step in document.steps.items():
        links.extend(render_edges(name, step))

    node_block = "".join(f"{node}\n" for node in nodes)
    link_block = "".join(f"{link}\n" for link in links)
    return f"{HEADER}\n{node_block}\n{link_block}"


def translate(raw_text: Optional[str] = None) -> str:
    if not raw_text:
        return PLACEHOLDER_DIAGRAM

    try:
        raw = json.loads(raw_text)
    except (ValueError, RecursionError) as exc:
        logger.info("flow source is not valid JSON: %s", exc)
        return error_diagram(f"Invalid JSON: {exc}")

    try:
        document = normalize_document(raw)
    except SchemaError as exc:
        logger.info("flow source has no steps collection: %s", exc)
        return error_diagram("Invalid JSON format")

    return render_document(document)
