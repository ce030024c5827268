"""Pydantic schemas for the feed app."""
