"""Programmer backends for writing and verifying device flash.

This module defines the interface to the external programming tool, so
other programmer backends or chip families can be used without changing
the pipeline. Each operation blocks until the tool exits and reports
whether it succeeded, with a message when it did not.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from avrflash.config import DeploymentRequest


@dataclass
class ProgrammerResult:
    """Result of a single programmer operation."""

    success: bool
    message: str = ""
    tool_started: bool = True  # False if the tool could not be launched

    def describe(self, hint: str) -> str:
        """Format the failure message and a remediation hint for a diagnostic.

        A tool that never started gets an installation hint instead of the
        device-side one.
        """
        lines = [self.message] if self.message else []
        if self.tool_started:
            lines.append(hint)
        else:
            lines.append("Check that the programmer tool is installed and executable")
        return "\n".join(lines)


class IProgrammer(ABC):
    """Interface for device programmers.

    Programmers handle the serial bootloader protocol:
    1. Write the image to flash
    2. Read flash back and compare it with the image
    """

    @abstractmethod
    def write(self, request: DeploymentRequest) -> ProgrammerResult:
        """Write the firmware image to device flash.

        Args:
            request: Deployment parameters

        Returns:
            ProgrammerResult with success status and failure message
        """
        pass

    @abstractmethod
    def verify(self, request: DeploymentRequest) -> ProgrammerResult:
        """Read device flash back and compare it with the firmware image.

        Args:
            request: Deployment parameters

        Returns:
            ProgrammerResult with success status and failure message
        """
        pass


class AvrdudeProgrammer(IProgrammer):
    """Programs AVR devices through avrdude."""

    def __init__(self, executable: str = "avrdude"):
        """Initialize avrdude programmer.

        Args:
            executable: avrdude executable name or path
        """
        self.executable = executable

    def write(self, request: DeploymentRequest) -> ProgrammerResult:
        return self._run(request, "w")

    def verify(self, request: DeploymentRequest) -> ProgrammerResult:
        return self._run(request, "v")

    def build_command(self, request: DeploymentRequest, mode: str) -> List[str]:
        """Build the avrdude command line.

        Args:
            request: Deployment parameters
            mode: avrdude memory operation ('w' for write, 'v' for verify)

        Returns:
            Command as an argument list
        """
        profile = request.device_profile
        return [
            self.executable,
            "-p",
            profile.chip_id,
            "-c",
            profile.programmer_id,
            "-P",
            request.port,
            "-b",
            str(request.baud_rate),
            "-U",
            f"flash:{mode}:{request.target_image_path}",
        ]

    def _run(self, request: DeploymentRequest, mode: str) -> ProgrammerResult:
        cmd = self.build_command(request, mode)
        logging.debug(f"Running: {' '.join(cmd)}")

        # avrdude output goes straight to the terminal
        try:
            result = subprocess.run(cmd)
        except OSError as e:
            message = f"Could not run {self.executable}: {e}"
            logging.warning(message)
            return ProgrammerResult(success=False, message=message, tool_started=False)

        if result.returncode != 0:
            message = f"{self.executable} exited with status {result.returncode}"
            logging.warning(message)
            return ProgrammerResult(success=False, message=message)

        return ProgrammerResult(success=True)
