"""
CLI runner module.

Provides commands:
- search, get, entities: read documents (no credentials needed)
- upload, update, delete: change documents
- projects: create, list, update, delete projects
- init-config: write a template config file
"""

from .main import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
