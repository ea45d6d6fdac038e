"""Entities shared by the parser, the conversation store and the API."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

Direction = Literal["inbound", "outbound"]
Status = Literal["open", "resolved"]
RiskTier = Literal["Low", "Medium", "High"]


class Message(BaseModel):
    # Flags only change through the store, which swaps in a model_copy
    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    timestamp: str                  # "YYYY-MM-DD HH:MM:SS"
    body: str
    direction: Direction
    urgency_score: int = 0          # 0-100, fixed at creation
    is_read: bool = False
    status: Status = "open"
    agent_id: Optional[str] = None  # outbound only


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    name: str
    phone_number: str
    loan_balance: int
    credit_score: int
    risk_tier: RiskTier
    last_interaction: str


class Agent(BaseModel):
    id: str
    name: str
    avatar: str
    email: str
    role: str = "Support Agent"
    status: Literal["Online", "Away", "Busy"] = "Online"


class CannedResponse(BaseModel):
    id: str
    label: str
    text: str
