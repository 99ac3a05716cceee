"""Pydantic schemas for the mailbox state API"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MailboxAckRequest(BaseModel):
    """Body of a mailbox state transition request"""
    model_config = ConfigDict(populate_by_name=True)

    correlation_id: str = Field(..., alias="correlationId", description="Caller correlation id")
    reference_id: Optional[str] = Field(
        None, alias="referenceId", description="Backend reference assigned to the handoff"
    )


class AckResponse(BaseModel):
    """Uniform acknowledgment: acknowledge is True exactly when message is None"""
    acknowledge: bool
    message: Optional[str] = None

    @model_validator(mode="after")
    def _message_iff_not_acknowledged(self):
        if self.acknowledge and self.message is not None:
            raise ValueError("An acknowledged response carries no message")
        if not self.acknowledge and not self.message:
            raise ValueError("A refused acknowledgment must carry a message")
        return self

    @classmethod
    def success(cls) -> "AckResponse":
        return cls(acknowledge=True)

    @classmethod
    def failure(cls, message: str) -> "AckResponse":
        return cls(acknowledge=False, message=message or "unknown error")
