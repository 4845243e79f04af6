from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import DocumentModel
from .timestamp import coerce_timestamp


def _number_or_zero(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


class BusinessInfo(BaseModel):
    """Business profile embedded in the user document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    business_name: str = Field(default="", alias="businessName")
    link_clicks: int = Field(
        default=0,
        alias="linkClicks",
        description="Cumulative clicks on the public review link.",
    )
    response_rate: float = Field(
        default=0,
        alias="responseRate",
        description="Percentage of reviews that received a reply.",
    )

    @field_validator("business_name", mode="before")
    @classmethod
    def _business_name(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("link_clicks", mode="before")
    @classmethod
    def _link_clicks(cls, value: Any) -> int:
        return int(_number_or_zero(value))

    @field_validator("response_rate", mode="before")
    @classmethod
    def _response_rate(cls, value: Any) -> float:
        return _number_or_zero(value)


class UserAccount(DocumentModel):
    """
    User document of a business owner, including trial and subscription
    fields written by the billing backend.
    """

    collection_name: ClassVar[str] = "users"

    business_info: BusinessInfo = Field(default_factory=BusinessInfo, alias="businessInfo")
    trial_end_date: Optional[datetime] = Field(default=None, alias="trialEndDate")
    subscription_active: bool = Field(default=False, alias="subscriptionActive")
    subscription_end_date: Optional[datetime] = Field(
        default=None, alias="subscriptionEndDate"
    )
    subscription_plan: str = Field(default="", alias="subscriptionPlan")

    @field_validator("business_info", mode="before")
    @classmethod
    def _business_info(cls, value: Any) -> Any:
        if isinstance(value, BusinessInfo):
            return value
        return value if isinstance(value, dict) else {}

    @field_validator("trial_end_date", "subscription_end_date", mode="before")
    @classmethod
    def _timestamps(cls, value: Any) -> Optional[datetime]:
        return coerce_timestamp(value)

    @field_validator("subscription_active", mode="before")
    @classmethod
    def _subscription_active(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("subscription_plan", mode="before")
    @classmethod
    def _subscription_plan(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @staticmethod
    def document_path(user_id: str) -> str:
        return f"{UserAccount.collection_name}/{user_id}"
