"""Account settings data model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_BASE_ACCOUNT_VALUE = 100000.0
DEFAULT_RISK_PERCENTAGE = 1.0
DEFAULT_PROFIT_RISK_RATIO = 2.0
DEFAULT_LOSS_RISK_RATIO = 1.0


class AccountSettings(BaseModel):
    """Per-user account configuration used by the analytics engine."""

    base_account_value: float = Field(
        default=DEFAULT_BASE_ACCOUNT_VALUE, gt=0, description="Starting capital"
    )
    risk_percentage: float = Field(
        default=DEFAULT_RISK_PERCENTAGE,
        gt=0,
        le=100,
        description="Percent of account value risked per trade",
    )
    profit_risk_ratio: float = Field(
        default=DEFAULT_PROFIT_RISK_RATIO, gt=0, description="Target reward in risk units"
    )
    loss_risk_ratio: float = Field(
        default=DEFAULT_LOSS_RISK_RATIO, gt=0, description="Planned loss in risk units"
    )
    setup_completed: bool = Field(default=False, description="First-run setup flag")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    model_config = {"frozen": True, "allow_inf_nan": False}
