"""Platform setting, product moderation and seller DTOs."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from campus_console.domain.entities.identity import Identity


class SettingUpdateInput(BaseModel):
    """Input DTO for changing a platform setting."""

    value: Any = Field(..., description="New value of the setting")

    model_config = {"frozen": True}


class SettingOutput(BaseModel):
    """Output DTO for a platform setting."""

    key: str
    value: Any

    model_config = {"frozen": True}


class ProductUpdateInput(BaseModel):
    """Input DTO for toggling a product's visibility."""

    is_active: bool = Field(..., description="Whether the product is listed")

    model_config = {"frozen": True}


class ProductOutput(BaseModel):
    """Output DTO for a moderated product."""

    id: str
    is_active: bool

    model_config = {"frozen": True}


class SellerOutput(BaseModel):
    """Output DTO for a seller listed to the operator."""

    id: str
    full_name: str
    role: str
    email: Optional[str] = None
    phone: Optional[str] = None
    faculty: Optional[str] = None
    department: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, identity: Identity) -> "SellerOutput":
        """Create DTO from an Identity entity."""
        return cls(
            id=identity.id,
            full_name=identity.full_name,
            role=identity.role.value,
            email=identity.email,
            phone=identity.phone,
            faculty=identity.faculty,
            department=identity.department,
        )
