"""
Session subsystem - editing state around the core.

Modules:
    history: Undo/redo over immutable font snapshots
    editor: FontSession (generate, sync, edit, import)
    preview: Preview renders with generation tokens
"""
from .history import FontHistory
from .editor import FontSession
from .preview import PreviewStream, PreviewTicket

__all__ = ["FontHistory", "FontSession", "PreviewStream", "PreviewTicket"]
