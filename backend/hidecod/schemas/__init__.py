"""Schemas — Pydantic models for admin API boundaries."""
