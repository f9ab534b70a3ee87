"""
Preflight checks run before any device I/O.

Checks, in order, stopping at the first failure:
1. The programmer tool is on PATH
2. The firmware image exists
3. The serial port is a character device
"""

import glob
import logging
import os
import shutil
import stat
from typing import Dict, List, Optional

import serial.tools.list_ports

from avrflash.config import DeploymentRequest

from .outcome import ErrorKind, Phase, PhaseOutcome

DEFAULT_TOOL = "avrdude"
DEFAULT_DEVICE_GLOB = "/dev/ttyUSB*"
INSTALL_HINT = "sudo apt install avrdude"
BUILD_HINT = "cargo build --release --target avr-atmega128.json"


class PreflightChecker:
    """Validates the workstation environment before the device is touched."""

    def __init__(
        self,
        tool_name: str = DEFAULT_TOOL,
        device_glob: str = DEFAULT_DEVICE_GLOB,
        install_hint: str = INSTALL_HINT,
        build_hint: str = BUILD_HINT,
    ):
        """Initialize preflight checker.

        Args:
            tool_name: Executable that must be resolvable on PATH
            device_glob: Pattern of adapter device nodes to list on failure
            install_hint: Command suggested when the tool is missing
            build_hint: Command suggested when the image is missing
        """
        self.tool_name = tool_name
        self.device_glob = device_glob
        self.install_hint = install_hint
        self.build_hint = build_hint

    def check(self, request: DeploymentRequest) -> PhaseOutcome:
        """Run all checks against a deployment request.

        Args:
            request: Deployment parameters

        Returns:
            Success, or the first failing check's outcome
        """
        for check in (self.check_tool, self.check_artifact, self.check_device):
            outcome = check(request)
            if not outcome.success:
                return outcome
        return PhaseOutcome.ok(Phase.PREFLIGHT)

    def check_tool(self, request: DeploymentRequest) -> PhaseOutcome:
        tool_path = shutil.which(self.tool_name)
        if tool_path is None:
            return PhaseOutcome.fail(
                Phase.PREFLIGHT,
                ErrorKind.TOOL_NOT_FOUND,
                f"{self.tool_name} not found\nPlease install with: {self.install_hint}",
            )
        logging.debug(f"Found {self.tool_name} at {tool_path}")
        return PhaseOutcome.ok(Phase.PREFLIGHT)

    def check_artifact(self, request: DeploymentRequest) -> PhaseOutcome:
        if not request.target_image_path.is_file():
            return PhaseOutcome.fail(
                Phase.PREFLIGHT,
                ErrorKind.ARTIFACT_MISSING,
                f"Target image not found: {request.target_image_path}\n"
                f"Please build first with: {self.build_hint}",
            )
        return PhaseOutcome.ok(Phase.PREFLIGHT)

    def check_device(self, request: DeploymentRequest) -> PhaseOutcome:
        if not is_char_device(request.port):
            return PhaseOutcome.fail(
                Phase.PREFLIGHT,
                ErrorKind.DEVICE_NOT_FOUND,
                f"Port {request.port} not found\n{self.format_available_ports()}",
            )
        return PhaseOutcome.ok(Phase.PREFLIGHT)

    def list_device_nodes(self) -> List[str]:
        """List device nodes currently matching the adapter pattern."""
        return sorted(path for path in glob.glob(self.device_glob) if is_char_device(path))

    def format_available_ports(self) -> str:
        """Format the adapter device listing shown when the port is missing."""
        nodes = self.list_device_nodes()
        if not nodes:
            return f"Available ports: none matching {self.device_glob}"

        descriptions = _port_descriptions()
        lines = ["Available ports:"]
        for node in nodes:
            description = descriptions.get(node)
            if description and description != "n/a":
                lines.append(f"  {node} ({description})")
            else:
                lines.append(f"  {node}")
        return "\n".join(lines)


def is_char_device(path: str) -> bool:
    """Check whether a path exists and is a character-special file."""
    try:
        mode = os.stat(path).st_mode
    except OSError:
        return False
    return stat.S_ISCHR(mode)


def _port_descriptions() -> Dict[str, str]:
    """Map serial device paths to the adapter description pyserial reports."""
    descriptions: Dict[str, str] = {}
    for port in serial.tools.list_ports.comports():
        description: Optional[str] = port.description
        if description:
            descriptions[port.device] = description
    return descriptions
