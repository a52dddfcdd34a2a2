"""Pydantic models for VINQuoter."""
