# directory_app/components/__init__.py
from .directory_view import DirectoryView, build_card, compute_stats
from .page import DirectoryPage
from .profile_editor import ProfileEditor, split_comma_list
from .session_resolver import SessionResolver

__all__ = [
    "DirectoryPage",
    "DirectoryView",
    "ProfileEditor",
    "SessionResolver",
    "build_card",
    "compute_stats",
    "split_comma_list",
]
