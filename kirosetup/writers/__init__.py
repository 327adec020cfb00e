"""File writers for generated Kiro artifacts."""

from .file_pair import AgentFileWriter, write_agent_files

__all__ = ["AgentFileWriter", "write_agent_files"]
