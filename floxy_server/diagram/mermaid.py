from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional

from floxy_server.schemas.flow import Step, StepType

HEADER = "flowchart TD"
START_MARKER = "_start_"
START_LABEL = "Start"

PLACEHOLDER_DIAGRAM = (
    "flowchart TD\n"
    "    step1((Start)) --> step2[Task]\n"
    "    step2 --> step3{Condition?}\n"
    "    step3 -->|yes| step4[Handler]\n"
    "    step3 -->|no| step5[/ Review /]\n"
    "    step4 -.->|on failure| step7[( Compensation )]\n"
    "    step4 ==> step6[ParallelTask]\n"
    "    step5 --> step6\n"
    "    step6 -.- step8((Complete))"
)

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_]")

_NODE_TEMPLATES = {
    StepType.CONDITION: "{id}{{{label}}}",
    StepType.JOIN: "{id}(({label}))",
    StepType.SAVE_POINT: "{id}[( {label} )]",
    StepType.HUMAN: "{id}[/ {label} /]",
}
_DEFAULT_NODE_TEMPLATE = "{id}[{label}]"


class EdgeStyle(str, Enum):
    SOLID = "solid"
    DASHED = "dashed"
    THICK = "thick"
    DOTTED = "dotted"


def sanitize_id(name: str) -> str:
    return _UNSAFE_ID_CHARS.sub("_", name)


def render_node(name: str, step: Step) -> str:
    template = _NODE_TEMPLATES.get(step.type, _DEFAULT_NODE_TEMPLATE)
    return template.format(id=sanitize_id(name), label=step.display_label(name))


def render_start_node() -> str:
    return f"{sanitize_id(START_MARKER)}(({START_LABEL}))"


def render_edge(
    source: str,
    target: str,
    style: EdgeStyle = EdgeStyle.SOLID,
    label: Optional[str] = None,
) -> str:
    src = sanitize_id(source)
    dst = sanitize_id(target)
    if style == EdgeStyle.DASHED:
        return f"{src} -.->|{label or ''}| {dst}"
    if style == EdgeStyle.THICK:
        arrow = f"==>|{label}|" if label else "==>"
        return f"{src} {arrow} {dst}"
    if style == EdgeStyle.DOTTED:
        return f"{src} -.- {dst}"
    arrow = f"-->|{label}|" if label else "-->"
    return f"{src} {arrow} {dst}"


def render_start_edge(start: str) -> str:
    return render_edge(START_MARKER, start)


def render_edges(name: str, step: Step) -> List[str]:
    edges: List[str] = []

    if step.type == StepType.CONDITION:
        if step.next:
            edges.append(render_edge(name, step.next[0], label="yes"))
        if step.else_:
            edges.append(render_edge(name, step.else_, label="no"))
    else:
        for target in step.next:
            edges.append(render_edge(name, target))

    if step.on_failure:
        edges.append(render_edge(name, step.on_failure, EdgeStyle.DASHED, "on failure"))

    for child in step.parallel:
        edges.append(render_edge(name, child, EdgeStyle.THICK))

    # dependency -> this step
    for dependency in step.wait_for:
        edges.append(render_edge(dependency, name, EdgeStyle.DOTTED))

    return edges
