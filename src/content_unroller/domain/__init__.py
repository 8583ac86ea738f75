"""Domain layer for the content unroller.

Contains:
- Domain models in `models/`.
- Reference discovery, slot schema, set member resolution and the content resolver.
- Backend reader, health checks and the unroll service used by the MCP layer.
"""
