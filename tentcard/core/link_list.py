"""Read the link list and drop comments, blank lines and inline annotations."""
import logging
from pathlib import Path
from typing import Iterable, List

from tentcard.config import STREAM_PREFIX
from tentcard.errors import LinkListError

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "//"


def clean_lines(lines: Iterable[str]) -> List[str]:
    """Return the lines that should reach the classifier, in order.

    Empty lines and lines starting with "//" are dropped. For streaming
    references, anything after the first space is a human annotation and is
    cut off.
    """
    out = []
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.strip() or line.startswith(COMMENT_PREFIX):
            continue
        if line.startswith(STREAM_PREFIX) and line.find(" ") > 0:
            line = line[: line.index(" ")]
        out.append(line)
    return out


def read_link_list(path: Path) -> List[str]:
    """Read a UTF-8 link list file and return its cleaned lines."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LinkListError(f"Could not read link list {path}: {e}") from e
    links = clean_lines(text.splitlines())
    logger.info("Read %d links from %s", len(links), path)
    return links
