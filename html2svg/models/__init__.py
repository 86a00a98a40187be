"""
Data Models
===========

Pydantic models for render requests, outcomes and service configuration.
"""
