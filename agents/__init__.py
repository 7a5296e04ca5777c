# Processing Agents
# Specialized agents for scanning, muxing, and verifying

from .base import BaseAgent
from .scanner import ScannerAgent, ScanResult
from .muxer import MuxAgent
from .verifier import VerifierAgent, VerifyResult

__all__ = [
    'BaseAgent',
    'ScannerAgent',
    'ScanResult',
    'MuxAgent',
    'VerifierAgent',
    'VerifyResult'
]
