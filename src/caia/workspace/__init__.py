"""Workspace indexing and prompt context."""

from .context import render_workspace_context
from .indexer import WorkspaceIndexer, detect_language
from .models import WorkspaceFileDescriptor

__all__ = [
    "render_workspace_context",
    "WorkspaceIndexer",
    "detect_language",
    "WorkspaceFileDescriptor",
]
