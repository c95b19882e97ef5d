"""Go header scanning, build tag extraction and settings loading."""

from filebuildtag.parser.gosource import GoFile, GoSourceLoader
from filebuildtag.parser.header import Comment, CommentGroup, ParsedFile
from filebuildtag.parser.loader import SettingsDocument, SettingsLoader, YAMLSafetyError
from filebuildtag.parser.markers import extract_build_tags

__all__ = [
    "Comment",
    "CommentGroup",
    "GoFile",
    "GoSourceLoader",
    "ParsedFile",
    "SettingsDocument",
    "SettingsLoader",
    "YAMLSafetyError",
    "extract_build_tags",
]
