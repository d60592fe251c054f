"""
WhatsApp travel booking assistant
"""

from .orchestrator import TravelAgentOrchestrator

__version__ = "1.0.0"

__all__ = ["TravelAgentOrchestrator"]
