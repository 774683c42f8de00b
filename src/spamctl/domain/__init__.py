"""Domain layer: filter models, generation, reconciliation, aggregation.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
