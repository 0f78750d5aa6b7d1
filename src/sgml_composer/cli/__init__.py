"""Command-line interface module for SGML Composer.

This module provides the sgml-compose tool, which renders JSON tree
descriptions into minimized or indented markup.
"""

from .main import main

__all__ = ["main"]
