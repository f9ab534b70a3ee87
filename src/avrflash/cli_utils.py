"""CLI utility functions for avrflash.

This module provides the terminal output used by the command surface:
- Phase-tagged progress and result reporting
- Error handling and formatting
"""

import sys

from avrflash.config import DeploymentRequest
from avrflash.deploy import Phase, PhaseOutcome, PipelineStatus

PHASE_LABELS = {
    Phase.PREFLIGHT: "Preflight",
    Phase.PROGRAM: "Flash",
    Phase.VERIFY: "Verify",
}

IN_PROGRESS_MESSAGES = {
    Phase.PREFLIGHT: "Checking environment...",
    Phase.PROGRAM: "Flashing firmware...",
    Phase.VERIFY: "Verifying flash...",
}

SUCCESS_MESSAGES = {
    Phase.PREFLIGHT: "Environment ready",
    Phase.PROGRAM: "Flash successful!",
    Phase.VERIFY: "Verification successful!",
}


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message.

        Args:
            title: Error title (e.g., "Flash failed")
            message: Error message details
        """
        print()
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}")
        print()
        print(message)
        print()

    @staticmethod
    def print_success(message: str) -> None:
        print(f"{ErrorFormatter.GREEN}✓ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def print_progress(message: str) -> None:
        print(f"{ErrorFormatter.YELLOW}{message}{ErrorFormatter.RESET}")

    @staticmethod
    def print_warning(message: str) -> None:
        print()
        print(f"{ErrorFormatter.YELLOW}✗ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle KeyboardInterrupt with standard formatting."""
        ErrorFormatter.print_warning("Deployment interrupted")
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(error: Exception) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
        """
        message = f"{type(error).__name__}: {error}"
        ErrorFormatter.print_error("Unexpected error", message)
        sys.exit(1)


class Reporter:
    """Renders pipeline progress and derives the process exit code.

    Implements the pipeline's PhaseListener.
    """

    def print_banner(self, request: DeploymentRequest) -> None:
        """Print the run header with the target and link settings."""
        ErrorFormatter.print_progress(f"{request.device_profile.name} Firmware Flasher")
        print(f"Port: {request.port}")
        print(f"Baud: {request.baud_rate}")
        print(f"Image: {request.target_image_path}")
        print()

    def phase_started(self, phase: Phase, request: DeploymentRequest) -> None:
        ErrorFormatter.print_progress(f"[{PHASE_LABELS[phase]}] {IN_PROGRESS_MESSAGES[phase]}")

    def phase_finished(self, outcome: PhaseOutcome) -> None:
        label = PHASE_LABELS[outcome.phase]
        if outcome.success:
            ErrorFormatter.print_success(f"[{label}] {SUCCESS_MESSAGES[outcome.phase]}")
        else:
            ErrorFormatter.print_error(f"[{label}] Error: {outcome.kind.value}", outcome.diagnostic)

    def print_summary(self, status: PipelineStatus) -> None:
        """Print the final pass/fail line for the run."""
        if status.success:
            print()
            ErrorFormatter.print_success("Deployment successful!")
        else:
            failure = status.failure
            phase = PHASE_LABELS[failure.phase] if failure else "unknown"
            print(f"{ErrorFormatter.RED}✗ Deployment failed at {phase}{ErrorFormatter.RESET}")

    @staticmethod
    def exit_code(status: PipelineStatus) -> int:
        """Exit code for a finished run: 0 if every phase passed, else 1."""
        return 0 if status.success else 1
