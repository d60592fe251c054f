"""
Engine package
"""

from .aggregator import BookingAggregator
from .intent_classifier import IntentClassifier, INTENT_RULES, package_topic
from .message_queue import UserMessageQueue
from .flow_controller import FlowController

__all__ = [
    "BookingAggregator",
    "IntentClassifier",
    "INTENT_RULES",
    "package_topic",
    "UserMessageQueue",
    "FlowController"
]
