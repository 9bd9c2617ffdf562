import asyncio
import signal

import pytest

from concierge.agent.loop import ShoppingAgent
from concierge.agent.runner import AgentRunner
from concierge.cli import ConciergeShell, is_exit_command, parse_args
from concierge.memory.models import EntryRole
from concierge.planner.base import Planner
from concierge.planner.types import PlannerDecision


class InterruptedPlanner(Planner):
    """Planner that receives Ctrl+C midway through its decision and still answers."""

    def __init__(self, decision: dict) -> None:
        self.decision = decision
        self.completed = False

    def describe(self) -> str:
        return "Interrupted planner"

    async def decide(self, user_request: str, conversation_history: str) -> PlannerDecision:
        signal.raise_signal(signal.SIGINT)
        await asyncio.sleep(0.05)
        self.completed = True
        return PlannerDecision.model_validate(self.decision)


def scripted_input(*lines):
    remaining = list(lines)

    def read(prompt: str) -> str:
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return read


def test_ctrl_c_lets_turn_in_flight_finish(router, session, decision):
    planner = InterruptedPlanner(decision(thought="Answering anyway", final_response="All done"))
    agent = ShoppingAgent(planner, router, session)
    runner = AgentRunner(agent)
    output = []

    ConciergeShell(runner, read=scripted_input("find boots", "exit"), write=output.append).run()

    assert planner.completed
    assert [entry.role for entry in agent.transcript] == [EntryRole.USER, EntryRole.THOUGHT]
    assert any("Cancelling current operation..." in line for line in output)
    assert any("All done" in line for line in output)
    assert runner.cancelled is True
    assert runner.busy is False


def test_shell_skips_blank_input_and_stops_on_exit(router, session, scripted_planner, decision):
    planner = scripted_planner([decision(final_response="hello back")])
    runner = AgentRunner(ShoppingAgent(planner, router, session))
    output = []

    ConciergeShell(runner, read=scripted_input("   ", "hi", "quit", "never read"), write=output.append).run()

    assert len(planner.calls) == 1
    assert any("hello back" in line for line in output)


def test_shell_exits_on_end_of_input(router, session, scripted_planner):
    runner = AgentRunner(ShoppingAgent(scripted_planner([]), router, session))
    output = []

    ConciergeShell(runner, read=scripted_input(), write=output.append).run()

    # Banner and farewell only.
    assert len(output) == 2


@pytest.mark.parametrize("text", ["exit", "QUIT", " bye ", "q", ":q", ":wq"])
def test_exit_commands(text):
    assert is_exit_command(text)


def test_parse_args_overrides():
    args = parse_args(["--planner", "rule", "--model", "x/y", "--debug"])

    assert (args.planner, args.model, args.debug) == ("rule", "x/y", True)
