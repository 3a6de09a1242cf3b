"""
RankPilot — Domain exceptions.

Routes translate these into HTTP responses; everything else lets them
propagate with the original message intact.
"""


class RankPilotError(Exception):
    """Base class for all RankPilot errors."""


class ToolValidationError(RankPilotError):
    """Tool input failed its schema. Raised before any engine call."""

    def __init__(self, tool: str, message: str):
        self.tool = tool
        super().__init__(message)


class ToolInvocationError(RankPilotError):
    """The engine could not produce a usable result for a tool."""


class ToolOutputError(ToolInvocationError):
    """The engine answered but the output did not match the tool's schema."""


class AIConfigurationError(RankPilotError):
    """AI provider credentials are missing."""


class MigrationError(RankPilotError):
    """A maintenance migration aborted; nothing was committed."""
