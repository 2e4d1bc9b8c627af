"""Classify a cleaned link-list line into a TypedReference."""
from tentcard.config import (
    STREAM_ALBUM_PREFIX,
    STREAM_PLAYLIST_PREFIX,
    STREAM_TRACK_PREFIX,
)
from tentcard.models.reference import ReferenceKind, TypedReference

COVER_DELIMITER = "|"
WEB_SCHEMES = ("http://", "https://")

_STREAM_PREFIXES = (
    (STREAM_ALBUM_PREFIX, ReferenceKind.STREAM_ALBUM),
    (STREAM_TRACK_PREFIX, ReferenceKind.STREAM_TRACK),
    (STREAM_PLAYLIST_PREFIX, ReferenceKind.STREAM_PLAYLIST),
)


def is_web_url(text: str) -> bool:
    return text.startswith(WEB_SCHEMES)


def _stream_id(line: str, prefix: str) -> str:
    rest = line[len(prefix):]
    if " " in line:
        rest = rest.split(" ", 1)[0]
    return rest


def classify(line: str) -> TypedReference:
    """Turn one link-list line into a typed reference.

    Streaming prefixes win; otherwise a "cover|target" line is split on its
    last "|", and the target decides between web URL and local path.
    """
    for prefix, kind in _STREAM_PREFIXES:
        if line.startswith(prefix):
            return TypedReference(
                kind=kind,
                raw_text=line,
                id=_stream_id(line, prefix),
                target=line,
            )

    cover_hint = None
    target = line
    if COVER_DELIMITER in line:
        cover_hint, target = line.rsplit(COVER_DELIMITER, 1)
        kind = ReferenceKind.COVER_TAGGED_TARGET
    elif is_web_url(target):
        kind = ReferenceKind.WEB_URL
    else:
        kind = ReferenceKind.LOCAL_PATH
    return TypedReference(kind=kind, raw_text=line, cover_hint=cover_hint, target=target)


def target_kind(ref: TypedReference) -> ReferenceKind:
    """WEB_URL or LOCAL_PATH for the part of the reference that is played."""
    # Cover-tagged lines keep their own kind; their target is typed here.
    if ref.kind.is_stream:
        return ref.kind
    return ReferenceKind.WEB_URL if is_web_url(ref.target) else ReferenceKind.LOCAL_PATH
