"""Exceptions raised by the deployment pipeline."""


class DeploymentError(Exception):
    """Base exception for deployment errors."""

    pass


class PipelineStateError(DeploymentError):
    """Raised when a phase is started or recorded out of order."""

    pass
