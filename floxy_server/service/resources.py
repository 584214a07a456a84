from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

_CONFIG_CACHE: Dict[str, Any] | None = None

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs"


def _load_json_file(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as file:
        return json.load(file)


def _config_dir() -> Path:
    override_dir = os.getenv("FLOXY_CONFIG_DIR")
    if override_dir and Path(override_dir).exists():
        return Path(override_dir)
    return DEFAULT_CONFIG_DIR


def load_configs() -> Dict[str, Any]:
    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    config_dir = _config_dir()
    output_formats = _load_json_file(config_dir / "output_formats.json")
    visualizer = _load_json_file(config_dir / "visualizer.json")

    _CONFIG_CACHE = {
        "output_formats": output_formats.get("formats", []),
        "visualizer": visualizer,
    }

    logger.info("configs loaded from %s", config_dir)
    return _CONFIG_CACHE


def reset_configs() -> None:
    global _CONFIG_CACHE
    _CONFIG_CACHE = None


def list_resources() -> list[Dict[str, Any]]:
    configs = load_configs()
    return [
        {
            "name": "output_formats",
            "uri": "floxy://resources/output-formats",
            "data": configs["output_formats"],
        },
        {
            "name": "visualizer",
            "uri": "floxy://resources/visualizer",
            "data": configs["visualizer"],
        },
    ]


def get_resource(resource_name: str) -> Dict[str, Any] | None:
    for resource in list_resources():
        if resource["name"] == resource_name:
            return resource
    return None
