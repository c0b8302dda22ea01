import uuid


def parse_id(value: object) -> uuid.UUID | None:
    """Return ``value`` as a UUID, or None when it is not a well-formed identifier.

    Only the dashed 36-character spelling is accepted (in either case), so one
    record has exactly one valid identifier.
    """
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        return None
    try:
        parsed = uuid.UUID(value)
    except ValueError:
        return None
    if str(parsed) != value.lower():
        return None
    return parsed
