"""
Top-level package for the synthetic ALS data project.

The generator lives under `synthetic_als.generator`; installing the project
exposes the `synthetic-als-generate` console script.
"""

__all__: list[str] = []
