# osu-extract Orchestration
# Configuration and reporting; the run driver lives in orchestrator.orchestrator

from .config import ConfigManager, ConfigurationError, RunConfig
from .reporter import Level, Reporter

__all__ = [
    'ConfigManager',
    'ConfigurationError',
    'RunConfig',
    'Level',
    'Reporter'
]
