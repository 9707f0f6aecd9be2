"""Rebuild pipeline driving the external image tools."""

from .orchestrator import Pipeline
from .tools import ExternalTools, SubprocessTools

__all__ = ["ExternalTools", "Pipeline", "SubprocessTools"]
