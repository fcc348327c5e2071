"""Application layer of the care management module: commands, queries and handlers."""
