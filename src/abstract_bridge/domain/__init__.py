"""Domain layer — descriptors, result records, errors, and argument building.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
