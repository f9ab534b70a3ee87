"""
Firmware deployment functionality for avrflash.

This module provides the preflight, program and verify phases and the
pipeline that runs them.
"""

from .errors import DeploymentError, PipelineStateError
from .outcome import ErrorKind, Phase, PhaseOutcome, PipelineState, PipelineStatus
from .pipeline import DeploymentPipeline, PhaseListener
from .preflight import PreflightChecker
from .programmer import AvrdudeProgrammer, IProgrammer, ProgrammerResult
from .verifier import Verifier

__all__ = [
    "AvrdudeProgrammer",
    "DeploymentError",
    "DeploymentPipeline",
    "ErrorKind",
    "IProgrammer",
    "Phase",
    "PhaseListener",
    "PhaseOutcome",
    "PipelineState",
    "PipelineStateError",
    "PipelineStatus",
    "PreflightChecker",
    "ProgrammerResult",
    "Verifier",
]
