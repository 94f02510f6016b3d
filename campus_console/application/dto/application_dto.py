"""Seller application DTOs (Data Transfer Objects)."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from campus_console.domain.entities.seller_application import SellerApplication


class RejectApplicationInput(BaseModel):
    """Input DTO for rejecting an application."""

    reason: Optional[str] = Field(None, max_length=1000, description="Rejection reason")

    model_config = {"frozen": True}


class ApplicationOutput(BaseModel):
    """Output DTO for a seller application."""

    id: str = Field(..., description="Application's unique identifier")
    user_id: str = Field(..., description="Applicant's identity id")
    applicant_name: Optional[str] = Field(None, description="Applicant's display name")
    business_name: str = Field(..., description="Business name")
    business_category: str = Field("", description="Business category")
    business_description: str = Field("", description="Business description")
    contact_phone: Optional[str] = Field(None, description="Contact phone")
    contact_email: Optional[str] = Field(None, description="Contact email")
    business_logo: Optional[str] = Field(None, description="Logo URL")
    status: str = Field(..., description="pending, approved, rejected or cancelled")
    created_at: Optional[datetime] = Field(None, description="Submission timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")
    reviewed_at: Optional[datetime] = Field(None, description="Review timestamp")
    reviewed_by: Optional[str] = Field(None, description="Reviewer identity id")
    rejection_reason: Optional[str] = Field(None, description="Rejection reason")

    model_config = {"frozen": True, "from_attributes": True}

    @classmethod
    def from_entity(cls, application: SellerApplication) -> "ApplicationOutput":
        """
        Create DTO from SellerApplication entity.

        Args:
            application: SellerApplication domain entity

        Returns:
            ApplicationOutput DTO
        """
        return cls(
            id=application.id,
            user_id=application.user_id,
            applicant_name=application.applicant_name,
            business_name=application.business_name,
            business_category=application.business_category,
            business_description=application.business_description,
            contact_phone=application.contact_phone,
            contact_email=application.contact_email,
            business_logo=application.business_logo,
            status=application.status.value,
            created_at=application.created_at,
            updated_at=application.updated_at,
            reviewed_at=application.reviewed_at,
            reviewed_by=application.reviewed_by,
            rejection_reason=application.rejection_reason,
        )


class ApplicationListOutput(BaseModel):
    """Output DTO for the application list."""

    items: list[ApplicationOutput] = Field(..., description="Applications, newest first")
    counts: dict[str, int] = Field(..., description="Number of applications per status")

    model_config = {"frozen": True}
