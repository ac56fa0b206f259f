"""
Tests for the declarative flow table.
"""

import pytest

from apps.conversations.flows import (
    ADD_USER,
    COMPLETE,
    CREATE_TEAM,
    FLOWS,
    Flow,
    Step,
    render_prompt,
)
from apps.conversations.models import SessionState


def _targets(flow: Flow) -> list:
    targets = []
    for index, step in enumerate(flow.steps):
        targets.append(flow.next_target(index))
        if step.skippable:
            targets.append(flow.next_target(index, skipped=True))
    return targets


class TestFlowTable:
    """Structural invariants of every flow."""

    def test_every_non_idle_state_has_a_flow(self) -> None:
        assert set(FLOWS) == set(SessionState) - {SessionState.IDLE}

    @pytest.mark.parametrize("flow", FLOWS.values(), ids=lambda f: f.state)
    def test_flow_is_keyed_by_its_state(self, flow: Flow) -> None:
        assert FLOWS[flow.state] is flow
        assert flow.steps

    @pytest.mark.parametrize("flow", FLOWS.values(), ids=lambda f: f.state)
    def test_every_target_is_valid(self, flow: Flow) -> None:
        for target in _targets(flow):
            if isinstance(target, SessionState):
                assert target in FLOWS
            elif isinstance(target, int):
                assert 0 <= target < len(flow.steps)
            else:
                assert target is COMPLETE

    @pytest.mark.parametrize("flow", FLOWS.values(), ids=lambda f: f.state)
    def test_targets_only_move_forward(self, flow: Flow) -> None:
        for index in range(len(flow.steps)):
            for skipped in (False, True):
                target = flow.next_target(index, skipped=skipped)
                if isinstance(target, int) and not isinstance(target, SessionState):
                    assert target > index

    @pytest.mark.parametrize("flow", FLOWS.values(), ids=lambda f: f.state)
    def test_every_step_reachable(self, flow: Flow) -> None:
        reachable = {0}
        frontier = [0]
        while frontier:
            index = frontier.pop()
            for skipped in (False, True):
                target = flow.next_target(index, skipped=skipped)
                if isinstance(target, int) and target not in reachable:
                    reachable.add(target)
                    frontier.append(target)

        assert reachable == set(range(len(flow.steps)))

    @pytest.mark.parametrize("flow", FLOWS.values(), ids=lambda f: f.state)
    def test_fields_unique_within_flow(self, flow: Flow) -> None:
        fields = [step.field for step in flow.steps]
        assert len(fields) == len(set(fields))

    def test_standup_states_chain_to_completion(self) -> None:
        assert FLOWS[SessionState.STANDUP_YESTERDAY].next_target(0) == SessionState.STANDUP_TODAY
        assert FLOWS[SessionState.STANDUP_TODAY].next_target(0) == SessionState.STANDUP_BLOCKERS
        assert FLOWS[SessionState.STANDUP_BLOCKERS].next_target(0) is COMPLETE


class TestNextTarget:
    def test_add_user_github_skip_jumps_to_jira(self) -> None:
        assert ADD_USER.next_target(2, skipped=True) == 4
        assert ADD_USER.next_target(2) == 3

    def test_add_user_jira_skip_completes(self) -> None:
        assert ADD_USER.next_target(4, skipped=True) is COMPLETE
        assert ADD_USER.next_target(5, skipped=True) is COMPLETE
        assert ADD_USER.next_target(6, skipped=True) is COMPLETE

    def test_last_step_completes(self) -> None:
        assert CREATE_TEAM.next_target(len(CREATE_TEAM.steps) - 1) is COMPLETE

    def test_plain_skip_defaults_to_next(self) -> None:
        assert CREATE_TEAM.next_target(1, skipped=True) == 2

    def test_explicit_next(self) -> None:
        flow = Flow(
            state=SessionState.CREATING_TEAM,
            steps=(Step("a", "A?", next=COMPLETE), Step("b", "B?")),
            restart_command="/x",
            cancelled_reply="cancelled",
        )
        assert flow.next_target(0) is COMPLETE


class TestRenderPrompt:
    def test_interpolates_collected_fields(self) -> None:
        assert render_prompt("What is {new_user_name}'s email?", {"new_user_name": "Jane"}) == "What is Jane's email?"

    def test_missing_fields_render_empty(self) -> None:
        assert render_prompt("Hi {name}!", {}) == "Hi !"
