"""Exceptions raised by the Kiro installer."""

from typing import List, Optional


class KiroSetupError(Exception):
    """Base class for installer failures."""


class BmadNotFoundError(KiroSetupError):
    """The compiled BMAD source tree is missing, so nothing can be generated."""

    def __init__(self, bmad_dir):
        self.bmad_dir = bmad_dir
        super().__init__(
            f"BMAD folder is required but was not found at {bmad_dir}. "
            "Install BMAD first before running Kiro setup."
        )


class AgentConfigValidationError(KiroSetupError, ValueError):
    """A generated agent config does not satisfy the Kiro agent schema."""

    def __init__(self, errors: Optional[List[str]] = None):
        self.errors = list(errors or [])
        super().__init__(f"Invalid agent schema: {'; '.join(self.errors)}")
