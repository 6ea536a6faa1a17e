"""Client-side identifier generation"""

import secrets
import string

_ALPHABET = string.digits + string.ascii_lowercase


def new_id(length: int = 9) -> str:
    """Short random base36 identifier, assigned when an entity is created."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))
