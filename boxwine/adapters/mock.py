"""
Mock command runner — test double for every external program.

Records each invocation and returns success unless told otherwise.
Side effects let a test emulate what a real tool leaves on disk
(e.g. ``tar`` creating a directory).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from boxwine.adapters.base import CommandRunner
from boxwine.core.models.command import CommandResult


@dataclass
class CommandCall:
    """One recorded invocation."""

    program: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)
    cwd: str | None = None

    @property
    def program_name(self) -> str:
        """Last path component of the program (``/x/bin/wine`` → ``wine``)."""
        return self.program.replace("\\", "/").rsplit("/", 1)[-1]


SideEffect = Callable[[CommandCall], None]


class MockCommandRunner(CommandRunner):
    """Universal mock runner for testing.

    By default every program succeeds. Failures and side effects are
    configured per program name (the last path component).
    """

    def __init__(self, runner_name: str = "mock"):
        self._name = runner_name
        self._failures: dict[str, CommandResult] = {}
        self._side_effects: dict[str, SideEffect] = {}
        self._call_log: list[CommandCall] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[CommandCall]:
        """All invocations this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls_to(self, program_name: str) -> list[CommandCall]:
        """Invocations of a given program name."""
        return [c for c in self._call_log if c.program_name == program_name]

    def set_failure(
        self,
        program_name: str,
        exit_code: int = 1,
        stderr: str = "Mock failure",
    ) -> None:
        """Configure a program to exit non-zero."""
        self._failures[program_name] = CommandResult.failure(
            command=[program_name],
            exit_code=exit_code,
            stderr=stderr,
        )

    def set_side_effect(self, program_name: str, effect: SideEffect) -> None:
        """Run ``effect`` whenever ``program_name`` is invoked successfully."""
        self._side_effects[program_name] = effect

    def execute(
        self,
        program: str,
        args: Sequence[str] = (),
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
    ) -> CommandResult:
        call = CommandCall(
            program=program,
            args=list(args),
            env=dict(env or {}),
            cwd=cwd,
        )
        self._call_log.append(call)
        command = [program, *call.args]

        failure = self._failures.get(call.program_name)
        if failure is not None:
            return failure.model_copy(update={"command": command})

        effect = self._side_effects.get(call.program_name)
        if effect is not None:
            effect(call)

        return CommandResult.success(command=command, metadata={"mock": True})

    def reset(self) -> None:
        """Clear call log, failures and side effects."""
        self._call_log.clear()
        self._failures.clear()
        self._side_effects.clear()
