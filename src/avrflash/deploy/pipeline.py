"""
Deployment pipeline: preflight, program, verify.

Phases run strictly in order and the run aborts at the first failure. There
is no retry of any phase, and nothing is kept between runs.
"""

import logging
from typing import Callable, List, Optional, Protocol, Tuple

from avrflash.config import DeploymentRequest

from .outcome import ErrorKind, Phase, PhaseOutcome, PipelineStatus
from .preflight import PreflightChecker
from .programmer import AvrdudeProgrammer, IProgrammer
from .verifier import Verifier


class PhaseListener(Protocol):
    """Receives phase progress from the pipeline."""

    def phase_started(self, phase: Phase, request: DeploymentRequest) -> None: ...

    def phase_finished(self, outcome: PhaseOutcome) -> None: ...


class DeploymentPipeline:
    """Runs one flash-and-verify deployment.

    Usage:
        pipeline = DeploymentPipeline()
        status = pipeline.run(resolve_request("/dev/ttyUSB1"))
        if status.success:
            ...
    """

    def __init__(
        self,
        preflight: Optional[PreflightChecker] = None,
        programmer: Optional[IProgrammer] = None,
        verifier: Optional[Verifier] = None,
        listener: Optional[PhaseListener] = None,
    ):
        """Initialize deployment pipeline.

        Args:
            preflight: Environment checker (default: avrdude on /dev/ttyUSB*)
            programmer: Programmer backend (default: AvrdudeProgrammer)
            verifier: Read-back verifier (default: uses the programmer backend)
            listener: Optional receiver of phase progress, e.g. a Reporter
        """
        self.preflight = preflight or PreflightChecker()
        self.programmer = programmer or AvrdudeProgrammer()
        self.verifier = verifier or Verifier(self.programmer)
        self.listener = listener

    def run(self, request: DeploymentRequest) -> PipelineStatus:
        """Run all phases against a deployment request.

        Args:
            request: Deployment parameters, shared read-only by every phase

        Returns:
            PipelineStatus with the outcome of each phase that ran
        """
        status = PipelineStatus()
        phases: List[Tuple[Phase, Callable[[DeploymentRequest], PhaseOutcome]]] = [
            (Phase.PREFLIGHT, self.preflight.check),
            (Phase.PROGRAM, self.program),
            (Phase.VERIFY, self.verifier.verify),
        ]

        for phase, step in phases:
            status.begin(phase)
            if self.listener:
                self.listener.phase_started(phase, request)

            outcome = step(request)
            status.record(outcome)
            if self.listener:
                self.listener.phase_finished(outcome)

            if not outcome.success:
                logging.info(f"Deployment aborted at {phase.value}: {outcome.kind.value}")
                return status

        logging.info(f"Deployment to {request.port} completed")
        return status

    def program(self, request: DeploymentRequest) -> PhaseOutcome:
        """Write the firmware image to the device, single attempt.

        Args:
            request: Deployment parameters

        Returns:
            Success, or FlashWriteError if the programmer reported failure
        """
        result = self.programmer.write(request)
        if result.success:
            return PhaseOutcome.ok(Phase.PROGRAM)
        profile = request.device_profile
        return PhaseOutcome.fail(
            Phase.PROGRAM,
            ErrorKind.FLASH_WRITE_ERROR,
            f"Writing {request.target_image_path} to {profile.name} on "
            f"{request.port} at {request.baud_rate} baud failed\n"
            + result.describe("Check that the board is powered and its bootloader is running, then retry"),
        )

