"""Domain services package."""

from campus_console.domain.services.role_merge_policy import merge_seller_role

__all__ = ["merge_seller_role"]
