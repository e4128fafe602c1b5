"""Artifact logical names.

Names follow `{folder}/{kind}_{userId}_{epochMillis}_{random}.{ext}`. The timestamp
plus random suffix avoids collisions between concurrent requests of one user without
a central allocator; uniqueness is probabilistic.
"""

import secrets
import string
import time
from urllib.parse import unquote, urlsplit

AUDIO_FOLDER = "audio"
UPLOADS_FOLDER = "uploads"

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_SUFFIX_LENGTH = 6


def generate_file_name(user_id: str, kind: str = "audio") -> str:
    """Generate a unique base name such as `audio_u1_1718000000000_k3x9qa`."""
    timestamp = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{kind}_{user_id}_{timestamp}_{suffix}"


def audio_artifact_name(user_id: str) -> str:
    return f"{AUDIO_FOLDER}/{generate_file_name(user_id, 'audio')}.mp3"


def upload_artifact_name(user_id: str, extension: str) -> str:
    return f"{UPLOADS_FOLDER}/{generate_file_name(user_id, 'original')}.{extension}"


def artifact_name_from_url(url: str, folder: str) -> str:
    """Recover a logical name from a public URL: last path segment under folder."""
    path = urlsplit(url).path
    return f"{folder}/{unquote(path.rsplit('/', 1)[-1])}"
