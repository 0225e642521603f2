"""Command-line interface for objmesh."""
