"""
Deployment configuration for avrflash.

This module resolves the parameters of a single flash-and-verify run from the
positional command-line values, falling back to fixed defaults for the
ATmega128 target board.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

DEFAULT_PORT = "/dev/ttyUSB0"
DEFAULT_BAUD_RATE = 115200
TARGET_IMAGE_PATH = Path("target/avr-atmega128/release/atmega128_firmware.elf")


@dataclass(frozen=True)
class DeviceProfile:
    """Fixed identifiers for a target chip family and its programmer."""

    name: str
    chip_id: str  # avrdude part id (-p)
    programmer_id: str  # avrdude programmer id (-c)


ATMEGA128 = DeviceProfile(name="ATmega128", chip_id="m128", programmer_id="arduino")


@dataclass(frozen=True)
class DeploymentRequest:
    """Parameters of one deployment. Built once, shared read-only by every phase."""

    port: str
    baud_rate: int
    target_image_path: Path
    device_profile: DeviceProfile


def resolve_request(
    port: Optional[str] = None,
    baud_rate: Optional[Union[int, str]] = None,
    target_image_path: Path = TARGET_IMAGE_PATH,
    device_profile: DeviceProfile = ATMEGA128,
) -> DeploymentRequest:
    """Build the deployment request from positional values and defaults.

    Nothing is checked here; existence of the port and image is the
    preflight's job.

    Args:
        port: Serial device path (default: DEFAULT_PORT)
        baud_rate: Link speed (default: DEFAULT_BAUD_RATE)
        target_image_path: Firmware image to flash
        device_profile: Chip and programmer identifiers

    Returns:
        Immutable DeploymentRequest
    """
    return DeploymentRequest(
        port=port if port is not None else DEFAULT_PORT,
        baud_rate=int(baud_rate) if baud_rate is not None else DEFAULT_BAUD_RATE,
        target_image_path=Path(target_image_path),
        device_profile=device_profile,
    )
