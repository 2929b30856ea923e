"""Object key naming: sanitized user/directory prefixes and collision-resistant file names."""

import random
import re
import time

_SEGMENT_UNSAFE = re.compile(r"[^A-Za-z0-9/_-]")
_NAME_UNSAFE = re.compile(r"[^A-Za-z0-9.]")

# Random suffix range; combined with the millisecond timestamp it separates same-name uploads
RANDOM_SUFFIX_RANGE = 10_000


def sanitize_segment(segment: str) -> str:
    return _SEGMENT_UNSAFE.sub("_", segment)


def sanitize_filename(name: str) -> str:
    return _NAME_UNSAFE.sub("_", name)


def compose_prefix(user_id: str | None = None, directory: str | None = None) -> str | None:
    """
    Join user and directory into a key prefix, e.g. "u1/docs".
    Blank or missing segments are dropped. Returns None when nothing is left (no prefix).
    """
    segments = [sanitize_segment(s.strip()) for s in (user_id, directory) if s and s.strip()]
    if not segments:
        return None
    return "/".join(segments)


def compose_object_key(prefix: str | None, original_name: str) -> str:
    """
    Unique object key: [prefix/]{epoch_millis}_{rand}_{sanitized name}.
    An empty name still yields a valid key ending in "_".
    """
    timestamp = int(time.time() * 1000)
    suffix = random.randrange(RANDOM_SUFFIX_RANGE)
    base_name = f"{timestamp}_{suffix}_{sanitize_filename(original_name or '')}"
    return f"{prefix}/{base_name}" if prefix else base_name
