"""Domain layer — engine values, graph models, and projection.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
