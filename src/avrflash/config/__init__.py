"""Configuration modules for avrflash."""

from .deploy_config import (
    ATMEGA128,
    DEFAULT_BAUD_RATE,
    DEFAULT_PORT,
    TARGET_IMAGE_PATH,
    DeploymentRequest,
    DeviceProfile,
    resolve_request,
)

__all__ = [
    "ATMEGA128",
    "DEFAULT_BAUD_RATE",
    "DEFAULT_PORT",
    "TARGET_IMAGE_PATH",
    "DeploymentRequest",
    "DeviceProfile",
    "resolve_request",
]
