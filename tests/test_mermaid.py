import re

import pytest

from floxy_server.diagram.mermaid import (
    PLACEHOLDER_DIAGRAM,
    EdgeStyle,
    render_edge,
    render_edges,
    render_node,
    render_start_edge,
    render_start_node,
    sanitize_id,
)
from floxy_server.schemas.flow import Step, StepType


class TestSanitizeId:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("step_1", "step_1"),
            ("step-1", "step_1"),
            ("a b.c", "a_b_c"),
            ("step_1's", "step_1_s"),
            ("ünïcode", "_n_code"),
        ],
    )
    def test_replaces_unsafe_characters(self, name, expected):
        assert sanitize_id(name) == expected

    @pytest.mark.parametrize("name", ["plain", "with space", "x->y", "{braces}", ""])
    def test_idempotent(self, name):
        assert sanitize_id(sanitize_id(name)) == sanitize_id(name)


class TestRenderNode:
    @pytest.mark.parametrize(
        "step_type, expected",
        [
            (StepType.TASK, "s[Label]"),
            (StepType.FORK, "s[Label]"),
            (StepType.PARALLEL, "s[Label]"),
            (StepType.CONDITION, "s{Label}"),
            (StepType.JOIN, "s((Label))"),
            (StepType.SAVE_POINT, "s[( Label )]"),
            (StepType.HUMAN, "s[/ Label /]"),
        ],
    )
    def test_shape_by_type(self, step_type, expected):
        assert render_node("s", Step(type=step_type, label="Label")) == expected

    def test_label_defaults_to_unsanitized_name(self):
        assert render_node("my-step", Step()) == "my_step[my-step]"

    def test_start_node(self):
        assert render_start_node() == "_start_((Start))"


class TestRenderEdge:
    def test_styles(self):
        assert render_edge("a", "b") == "a --> b"
        assert render_edge("a", "b", label="yes") == "a -->|yes| b"
        assert render_edge("a", "b", EdgeStyle.DASHED, "on failure") == "a -.->|on failure| b"
        assert render_edge("a", "b", EdgeStyle.DASHED) == "a -.->|| b"
        assert render_edge("a", "b", EdgeStyle.THICK) == "a ==> b"
        assert render_edge("a", "b", EdgeStyle.DOTTED) == "a -.- b"

    def test_endpoints_are_sanitized(self):
        assert render_edge("step-1", "step 2") == "step_1 --> step_2"

    def test_start_edge(self):
        assert render_start_edge("first-step") == "_start_ --> first_step"


class TestRenderEdges:
    def test_condition_uses_first_next_and_else(self):
        step = Step(type=StepType.CONDITION, next=["A", "B"], else_="C")
        assert render_edges("check", step) == ["check -->|yes| A", "check -->|no| C"]

    def test_condition_without_targets(self):
        assert render_edges("check", Step(type=StepType.CONDITION)) == []

    def test_sequential_next(self):
        step = Step(next=["b", "c"])
        assert render_edges("a", step) == ["a --> b", "a --> c"]

    def test_else_is_ignored_outside_conditions(self):
        assert render_edges("a", Step(else_="c")) == []

    def test_wait_for_points_at_the_waiting_step(self):
        step = Step(type=StepType.JOIN, wait_for=["X", "Y"])
        assert render_edges("join", step) == ["X -.- join", "Y -.- join"]

    def test_relationship_order(self):
        step = Step(
            next=["n"],
            on_failure="h",
            parallel=["p1", "p2"],
            wait_for=["w"],
        )
        assert render_edges("s", step) == [
            "s --> n",
            "s -.->|on failure| h",
            "s ==> p1",
            "s ==> p2",
            "w -.- s",
        ]

    def test_failure_on_condition(self):
        step = Step(type=StepType.CONDITION, next=["ok"], on_failure="undo")
        assert render_edges("c", step) == ["c -->|yes| ok", "c -.->|on failure| undo"]


def test_placeholder_has_eight_nodes():
    nodes = set(re.findall(r"\bstep\d\b", PLACEHOLDER_DIAGRAM))
    assert len(nodes) == 8
    assert PLACEHOLDER_DIAGRAM.startswith("flowchart TD\n")
    for token in ("-->|yes|", "-.->|on failure|", "==>", "-.-", "{", "((", "[(", "[/"):
        assert token in PLACEHOLDER_DIAGRAM
