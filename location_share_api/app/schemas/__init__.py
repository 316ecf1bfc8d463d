"""
Pydantic schema definitions for API payloads.

Schemas are separated from the stored MongoDB documents so the API
representation can evolve independently of persistence.
"""
