"""
psst-ai - AI coding instructions from your codebase

psst inspects a project's files and manifests, infers the conventions it
follows, and renders them as Markdown instructions for AI coding assistants.
"""

__version__ = "1.4.0"
__all__ = ["__version__"]
