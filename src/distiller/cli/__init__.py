"""
CLI module for the article distiller.

Provides command-line interface using Typer:
- parse: Extract the article from a URL or a saved HTML file
- config: Configuration management
"""

from distiller.cli.main import app

__all__ = ["app"]
