"""Read-back verification of device flash."""

from avrflash.config import DeploymentRequest

from .outcome import ErrorKind, Phase, PhaseOutcome
from .programmer import IProgrammer


class Verifier:
    """Confirms the device flash matches the firmware image.

    The comparison itself is done by the programmer backend.
    """

    def __init__(self, programmer: IProgrammer):
        self.programmer = programmer

    def verify(self, request: DeploymentRequest) -> PhaseOutcome:
        """Read the device back and compare it against the image.

        Args:
            request: Deployment parameters

        Returns:
            Success, or FlashVerifyError if the read-back did not match
        """
        result = self.programmer.verify(request)
        if result.success:
            return PhaseOutcome.ok(Phase.VERIFY)
        return PhaseOutcome.fail(
            Phase.VERIFY,
            ErrorKind.FLASH_VERIFY_ERROR,
            f"Device flash on {request.port} does not match "
            f"{request.target_image_path}\n"
            + result.describe(
                f"Check the serial link and retry, or lower the baud rate "
                f"(currently {request.baud_rate})"
            ),
        )
