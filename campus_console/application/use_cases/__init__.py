"""Use cases package."""
