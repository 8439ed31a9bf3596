"""
mkdocs-jsdoc: JSDoc symbol helpers for MkDocs.

Classifies and names symbols from ``jsdoc -X`` output, turns their
descriptions into HTML, and exposes both to MkDocs theme templates.
"""

__version__ = "1.0.0"
