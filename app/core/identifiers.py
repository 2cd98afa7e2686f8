import uuid


def new_id(prefix: str) -> str:
    """Collection-unique identifier such as CASE-3f9c1a2b7d4e."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
