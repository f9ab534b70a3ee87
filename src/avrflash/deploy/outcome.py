"""
Phase outcomes and pipeline status for a deployment run.

Each pipeline phase returns a PhaseOutcome instead of raising. The
PipelineStatus collects those outcomes in order and tracks the state
machine:

    IDLE -> PREFLIGHTING -> PROGRAMMING -> VERIFYING -> DONE
                 |               |             |
                 +---------------+-------------+--> ABORTED
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .errors import PipelineStateError


class ErrorKind(Enum):
    """Failure kinds a deployment phase can report."""

    TOOL_NOT_FOUND = "ToolNotFound"
    ARTIFACT_MISSING = "ArtifactMissing"
    DEVICE_NOT_FOUND = "DeviceNotFound"
    FLASH_WRITE_ERROR = "FlashWriteError"
    FLASH_VERIFY_ERROR = "FlashVerifyError"


class Phase(Enum):
    """Pipeline phases, in execution order."""

    PREFLIGHT = "preflight"
    PROGRAM = "program"
    VERIFY = "verify"


PHASE_ORDER = [Phase.PREFLIGHT, Phase.PROGRAM, Phase.VERIFY]


class PipelineState(Enum):
    """Pipeline state enumeration."""

    IDLE = "idle"
    PREFLIGHTING = "preflighting"
    PROGRAMMING = "programming"
    VERIFYING = "verifying"
    DONE = "done"
    ABORTED = "aborted"


# State entered while each phase runs
PHASE_STATES = {
    Phase.PREFLIGHT: PipelineState.PREFLIGHTING,
    Phase.PROGRAM: PipelineState.PROGRAMMING,
    Phase.VERIFY: PipelineState.VERIFYING,
}


@dataclass(frozen=True)
class PhaseOutcome:
    """Result of one pipeline phase: success, or a failure kind with a diagnostic."""

    phase: Phase
    kind: Optional[ErrorKind] = None
    diagnostic: str = ""

    @property
    def success(self) -> bool:
        return self.kind is None

    @classmethod
    def ok(cls, phase: Phase) -> "PhaseOutcome":
        """Create a successful outcome."""
        return cls(phase=phase)

    @classmethod
    def fail(cls, phase: Phase, kind: ErrorKind, diagnostic: str) -> "PhaseOutcome":
        """Create a failed outcome."""
        return cls(phase=phase, kind=kind, diagnostic=diagnostic)


@dataclass
class PipelineStatus:
    """Ordered outcomes of a single run.

    Attributes:
        state: Current pipeline state
        outcomes: Outcomes recorded so far, in phase order
    """

    state: PipelineState = PipelineState.IDLE
    outcomes: List[PhaseOutcome] = field(default_factory=list)

    @property
    def next_phase(self) -> Optional[Phase]:
        """Phase allowed to run next, or None if the run is finished."""
        if self.state in (PipelineState.DONE, PipelineState.ABORTED):
            return None
        return PHASE_ORDER[len(self.outcomes)]

    @property
    def success(self) -> bool:
        return self.state == PipelineState.DONE

    @property
    def failure(self) -> Optional[PhaseOutcome]:
        """The failed outcome that aborted the run, if any."""
        for outcome in self.outcomes:
            if not outcome.success:
                return outcome
        return None

    def begin(self, phase: Phase) -> None:
        """Enter the state for a phase about to run.

        Raises:
            PipelineStateError: If the phase is not the next one allowed
        """
        if phase != self.next_phase:
            raise PipelineStateError(
                f"Cannot start {phase.value} in state {self.state.value}"
            )
        self.state = PHASE_STATES[phase]

    def record(self, outcome: PhaseOutcome) -> None:
        """Record the outcome of the running phase and advance the state.

        Raises:
            PipelineStateError: If the outcome does not belong to the running phase
        """
        if self.state != PHASE_STATES.get(outcome.phase):
            raise PipelineStateError(
                f"Cannot record {outcome.phase.value} outcome in state {self.state.value}"
            )
        self.outcomes.append(outcome)

        if not outcome.success:
            self.state = PipelineState.ABORTED
        elif len(self.outcomes) == len(PHASE_ORDER):
            self.state = PipelineState.DONE
