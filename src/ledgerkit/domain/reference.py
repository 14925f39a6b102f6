"""Transaction reference identifiers."""

import uuid


def new_reference() -> str:
    """Return a new random reference identifier in canonical UUID form.

    Uses the OS entropy source, so it is safe to call from any thread
    without coordination.
    """
    return str(uuid.uuid4())
