from pydantic import BaseModel
from typing import Literal, Optional

SubscriptionStatus = Literal["free", "pro"]


class UserProfile(BaseModel):
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    subscription_status: SubscriptionStatus = "free"

    @property
    def is_pro(self) -> bool:
        return self.subscription_status == "pro"
