"""Infrastructure layer — database registry, filesystem, query engine.

This layer depends on stdlib, the domain layer, and the embedded engine (kuzu).
It must never import from services, commands, or output.
"""
