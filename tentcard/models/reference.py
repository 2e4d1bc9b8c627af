"""Typed references produced by the classifier."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ReferenceKind(str, Enum):
    STREAM_ALBUM = "stream_album"
    STREAM_TRACK = "stream_track"
    STREAM_PLAYLIST = "stream_playlist"
    COVER_TAGGED_TARGET = "cover_tagged_target"
    WEB_URL = "web_url"
    LOCAL_PATH = "local_path"

    @property
    def is_stream(self) -> bool:
        return self in (
            ReferenceKind.STREAM_ALBUM,
            ReferenceKind.STREAM_TRACK,
            ReferenceKind.STREAM_PLAYLIST,
        )


@dataclass(frozen=True)
class TypedReference:
    """One classified link-list line.

    raw_text is the whole line as it reached the classifier; it becomes the
    code payload of the resolved card.
    """
    kind: ReferenceKind
    raw_text: str
    id: Optional[str] = None  # provider id, stream kinds only
    cover_hint: Optional[str] = None  # text before the last "|"
    target: str = ""
