"""
Conversation flow stages and per-user flow state
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class FlowStage(Enum):
    """Stages of the WhatsApp booking flow"""

    IDLE = "idle"
    COLLECTING_BOOKING_INFO = "collecting_booking_info"
    READY_TO_FINALIZE = "ready_to_finalize"
    FINALIZED = "finalized"
    QUOTES_RECEIVED = "quotes_received"

    def is_collecting(self) -> bool:
        """Check if the stage belongs to detail collection"""
        return self in (self.COLLECTING_BOOKING_INFO, self.READY_TO_FINALIZE)


class PerUserFlowState(BaseModel):
    """Ephemeral flow state, lives only in the flow-state cache"""

    stage: FlowStage = FlowStage.IDLE
    in_booking_process: bool = False
    duplicate_guard_at: Optional[float] = None
    last_logged_booking: Optional[str] = None
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def move_to(self, stage: FlowStage) -> None:
        """Switch stage and keep the booking flag consistent with it"""
        self.stage = stage
        self.in_booking_process = stage.is_collecting()
        self.updated_at = datetime.utcnow()
