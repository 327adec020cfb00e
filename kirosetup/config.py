"""
Installer settings.

Defaults mirror the layout the BMAD installer produces. Any field can be
overridden with a KIROSETUP_<FIELD> environment variable, optionally set in
a .env file next to where the CLI is run.
"""

import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "KIROSETUP_"


class InstallerSettings(BaseModel):
    """Names and locations used by every installer component."""

    # Source tree
    bmad_folder_name: str = Field(default="_bmad", description="Compiled BMAD folder inside the project")
    core_module: str = Field(default="core", description="Module always listed first when present")
    marker_dir: str = Field(default="agents", description="Subdirectory that makes a directory a module")
    internal_prefix: str = Field(default="_", description="Directories starting with this are never modules")

    # Target tree
    config_dir: str = Field(default=".kiro")
    agents_dir: str = Field(default="agents")
    commands_dir: str = Field(default="commands")
    steering_dir: str = Field(default="steering")
    prefix: str = Field(default="bmad", description="Reserved prefix marking generated files")

    # Steering sources (relative to the project dir)
    planning_artifacts_dir: str = Field(default="_bmad-output/planning-artifacts")
    implementation_artifacts_dir: str = Field(default="_bmad-output/implementation-artifacts")

    # Host tool
    cli_command: str = Field(default="kiro-cli")
    default_icon: str = Field(default="🤖")

    @property
    def output_subdirs(self) -> list:
        """Target subdirectories that hold generated files."""
        return [self.agents_dir, self.commands_dir, self.steering_dir]

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "InstallerSettings":
        """Build settings from defaults overridden by KIROSETUP_* variables."""
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))

        overrides = {}
        for field_name in cls.model_fields:
            value = os.getenv(f"{ENV_PREFIX}{field_name.upper()}")
            if value:
                overrides[field_name] = value

        return cls(**overrides)
