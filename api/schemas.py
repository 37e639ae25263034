from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from storefront.domain import UserRole


class CartLineIn(BaseModel):
    """A cart line as the storefront sends it: product fields (wire shape) + cartId"""

    model_config = ConfigDict(extra="allow")

    cartId: str = Field(..., min_length=1, description="Cart-line identity")


class OrderIn(BaseModel):
    items: List[CartLineIn] = Field(..., min_length=1, description="Cart snapshot")
    total: int = Field(..., ge=0, description="Order total in whole rupees")


class OrderOut(BaseModel):
    success: bool = True
    orderId: str


class LoginIn(BaseModel):
    role: Optional[UserRole] = None


class UserOut(BaseModel):
    id: str
    name: str
    email: str
    role: UserRole
    avatar: Optional[str] = None
    walletBalance: int = 0


class HealthOut(BaseModel):
    status: str = "ok"
    mode: str
