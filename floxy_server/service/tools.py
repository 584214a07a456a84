from __future__ import annotations

import html
import json
import logging
from typing import Any, Dict, Optional

import yaml

from floxy_server.diagram.normalizer import SchemaError, normalize_document
from floxy_server.diagram.translator import translate
from floxy_server.service.resources import load_configs

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("mermaid", "json", "yaml")

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{title}</title>
    <style>
        body {{ background: {background}; color: {foreground}; padding: 0; margin: 0; }}
        .mermaid {{ text-align: center; }}
    </style>
</head>
<body>
    <div class="mermaid">{diagram}</div>
    <script type="module">
        import mermaid from '{mermaid_src}';
        mermaid.initialize({{ startOnLoad: true, theme: '{theme}' }});
    </script>
</body>
</html>
"""


def _error(code: str, message: str, details: Any = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return error


def show_flow(source: Optional[str] = None) -> Dict[str, Any]:
    logger.info("tool invoked: show_flow")
    return {"format": "Mermaid", "output": translate(source)}


def export_to_format(source: Optional[str], format_type: str) -> Dict[str, Any]:
    logger.info("tool invoked: export_to_format")
    configs = load_configs()
    formats = {f.lower() for f in configs["output_formats"]}

    fmt = format_type.strip().lower()
    if fmt not in formats or fmt not in SUPPORTED_FORMATS:
        return {
            "format": format_type,
            "output": None,
            "errors": [_error("unsupported_format", f"Unsupported format: {format_type}")],
        }

    if fmt == "mermaid":
        return {"format": "Mermaid", "output": translate(source)}

    try:
        raw = json.loads(source or "")
    except (ValueError, RecursionError) as exc:
        return {
            "format": format_type,
            "output": None,
            "errors": [_error("parse_error", "Flow source is not valid JSON", str(exc))],
        }

    try:
        document = normalize_document(raw)
    except SchemaError as exc:
        return {
            "format": format_type,
            "output": None,
            "errors": [_error("schema_error", "Flow source has no steps collection", str(exc))],
        }

    canonical = document.model_dump(mode="json", by_alias=True)
    if fmt == "json":
        return {"format": "JSON", "output": canonical}

    return {
        "format": "YAML",
        "output": yaml.safe_dump(canonical, sort_keys=False),
    }


def render_page(source: Optional[str] = None) -> str:
    logger.info("tool invoked: render_page")
    settings = load_configs()["visualizer"]
    return PAGE_TEMPLATE.format(
        title=html.escape(settings.get("title", "Floxy Flow")),
        background=settings.get("background", "#1e1e1e"),
        foreground=settings.get("foreground", "#ddd"),
        mermaid_src=settings.get("mermaid_src", ""),
        theme=settings.get("theme", "dark"),
        diagram=html.escape(translate(source), quote=False),
    )
