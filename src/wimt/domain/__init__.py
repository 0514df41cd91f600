"""Domain layer: value objects, entities, aggregates, events, and rules.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
