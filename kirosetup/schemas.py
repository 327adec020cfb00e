"""
Pydantic schemas for the Kiro installer.

Architecture:
- MenuItem / AgentRecord: data recovered from a compiled agent's <agent> tag
- KiroAgentConfig: the Kiro agent JSON schema, used for validation
- AgentArtifact / CommandArtifact: units handed over by the artifact collectors
- GeneratedFilePair: the persisted JSON + prompt pair for one agent
- InstallState / InstallationDetection: target tree condition before a run
- SetupOptions / SetupResult / SteeringResult: orchestration inputs and summaries
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


# ============================================================================
# EXTRACTION SCHEMAS
# ============================================================================

class MenuItem(BaseModel):
    """One <item cmd="..."> entry from an agent's <menu> block."""
    trigger: str = Field(description="Command identifier from the cmd attribute")
    description: str = Field(description="Inline item text")


class AgentRecord(BaseModel):
    """
    Persona and menu metadata extracted from a compiled agent document.

    All text fields default to empty strings. A document without an <agent>
    tag never produces a record at all.
    """
    name: str = Field(description="Agent name (name attribute or artifact name)")
    title: str = Field(default="", description="Display title (title attribute or artifact description)")
    icon: str = Field(default="🤖", description="Icon glyph")
    role: str = Field(default="")
    identity: str = Field(default="")
    communication_style: str = Field(default="")
    principles: str = Field(default="")
    menu_items: List[MenuItem] = Field(default_factory=list)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "name": "pm",
            "title": "Product Manager",
            "icon": "🧭",
            "role": "Leads planning",
            "identity": "",
            "communication_style": "",
            "principles": "",
            "menu_items": [{"trigger": "plan", "description": "Create plan"}]
        }
    })


# ============================================================================
# KIRO AGENT SCHEMA
# ============================================================================

class KiroAgentConfig(BaseModel):
    """
    Kiro CLI agent configuration.

    Only `name` is required. Types are strict so a number is never accepted
    where the CLI expects a string, and a string never passes as an array.
    """
    model_config = ConfigDict(extra="allow")

    name: StrictStr = Field(min_length=1, description="Agent name, also the file stem")
    description: StrictStr = Field(default="", description="Human readable description")
    prompt: StrictStr = Field(default="", description="Prompt text or file:// reference")
    tools: List[StrictStr] = Field(default_factory=list)
    mcpServers: Dict[str, Any] = Field(default_factory=dict)
    useLegacyMcpJson: StrictBool = Field(default=False)
    resources: List[StrictStr] = Field(default_factory=list)


# ============================================================================
# ARTIFACT SCHEMAS
# ============================================================================

class AgentArtifact(BaseModel):
    """A compiled agent file discovered in a module."""
    module: str
    name: str
    source_path: Path
    description: str = ""


class CommandArtifact(BaseModel):
    """A workflow, task or tool that gets a command stub."""
    kind: Literal["workflow", "task", "tool"]
    module: str
    name: str
    display_name: str
    source_path: Path
    description: str = ""


class GeneratedFilePair(BaseModel):
    """Config + prompt files written for one agent."""
    name: str = Field(description="Sanitized agent name shared by both files")
    config_path: Path
    prompt_path: Path


# ============================================================================
# INSTALLATION SCHEMAS
# ============================================================================

class InstallState(str, Enum):
    """Condition of the project before a run."""
    ABSENT = "absent"
    FRESH = "fresh"
    EXISTING = "existing"


class InstallationDetection(BaseModel):
    state: InstallState
    target_exists: bool = False
    agents_exists: bool = False
    commands_exists: bool = False
    steering_exists: bool = False

    @property
    def can_proceed(self) -> bool:
        return self.state != InstallState.ABSENT


class SetupOptions(BaseModel):
    """Caller option bag for a setup run."""
    steering: bool = Field(default=False, description="Also generate steering files")


class SteeringResult(BaseModel):
    generated: List[str] = Field(default_factory=list, description="Steering filenames written")
    skipped: List[str] = Field(default_factory=list, description="Steering files with no source document")
    errors: List[str] = Field(default_factory=list)


class SetupResult(BaseModel):
    """Summary of one setup run, rendered by the CLI."""
    state: InstallState
    modules: List[str] = Field(default_factory=list)
    cleaned: int = Field(default=0, description="Previously generated entries removed")
    agents: List[str] = Field(default_factory=list, description="Generated agent names")
    agents_skipped: int = 0
    commands: Dict[str, List[str]] = Field(
        default_factory=lambda: {"workflow": [], "task": [], "tool": []},
        description="Generated command stems by artifact kind"
    )
    commands_skipped: int = 0
    warnings: List[str] = Field(default_factory=list)
    steering: Optional[SteeringResult] = None

    @property
    def commands_generated(self) -> int:
        return sum(len(stems) for stems in self.commands.values())
