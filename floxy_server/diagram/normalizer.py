from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator

from floxy_server.schemas.flow import FlowDocument, Step, StepType

logger = logging.getLogger(__name__)

STEPS_SHAPE: Dict[str, Any] = {
    "type": "object",
    "required": ["steps"],
    "properties": {"steps": {"type": "object"}},
}

LEGACY_SHAPE: Dict[str, Any] = {
    "type": "object",
    "required": ["Definition"],
    "properties": {
        "Definition": {
            "type": "object",
            "anyOf": [
                {"required": ["steps"], "properties": {"steps": {"type": "object"}}},
                {"required": ["Steps"], "properties": {"Steps": {"type": "object"}}},
            ],
        }
    },
}

_steps_validator = Draft7Validator(STEPS_SHAPE)
_legacy_validator = Draft7Validator(LEGACY_SHAPE)


class SchemaError(ValueError):
    pass


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, list) and not value)


def resolve_field(mapping: Dict[str, Any], *candidates: str) -> Any:
    for key in candidates:
        value = mapping.get(key)
        if not _is_empty(value):
            return value
    return None


def _as_names(value: Any) -> List[str]:
    if value is None:
        return []
    items = value if isinstance(value, (list, tuple)) else [value]
    return [str(item) for item in items if item]


def _first_name(value: Any) -> Optional[str]:
    names = _as_names(value)
    return names[0] if names else None


def parse_step(raw: Any) -> Step:
    if not isinstance(raw, dict):
        raw = {}
    label = resolve_field(raw, "label", "Label")
    return Step(
        type=StepType.parse(resolve_field(raw, "type", "Type")),
        label=str(label) if label else None,
        next=_as_names(resolve_field(raw, "next", "Next")),
        else_=_first_name(resolve_field(raw, "else", "Else")),
        on_failure=_first_name(resolve_field(raw, "on_failure", "OnFailure")),
        parallel=_as_names(resolve_field(raw, "parallel", "Parallel")),
        wait_for=_as_names(resolve_field(raw, "wait_for", "WaitFor")),
    )


def _locate_steps(raw: Any) -> tuple[Dict[str, Any], Any]:
    if _steps_validator.is_valid(raw):
        return raw["steps"], raw.get("start")

    if _legacy_validator.is_valid(raw):
        definition = raw["Definition"]
        steps = resolve_field(definition, "steps", "Steps")
        if not isinstance(steps, dict):
            # "steps" may be set to something unusable while "Steps" holds the mapping
            steps = definition.get("Steps")
        if isinstance(steps, dict):
            return steps, resolve_field(definition, "start", "Start")

    raise SchemaError("Document has no 'steps' or 'Definition.Steps' object")


def normalize_document(raw: Any) -> FlowDocument:
    steps, start = _locate_steps(raw)
    parsed = {str(name): parse_step(step) for name, step in steps.items()}
    logger.debug("normalized %d steps (start=%r)", len(parsed), start)
    return FlowDocument(steps=parsed, start=str(start) if start else "")
