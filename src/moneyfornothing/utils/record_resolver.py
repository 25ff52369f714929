"""Utility for resolving record references to IDs."""

from typing import Iterable, Protocol


class NamedRecord(Protocol):
    id: str
    name: str


def resolve_record(records: Iterable[NamedRecord], reference: str, kind: str = "record") -> str:
    """Resolve an ID, unique ID prefix or name to a record ID.

    Args:
        records: Records to search
        reference: Full ID, unique ID prefix, or name (case-insensitive)
        kind: Record kind for error messages

    Returns:
        Record ID

    Raises:
        ValueError: If nothing matches or the reference is ambiguous
    """
    records = list(records)
    reference = reference.strip()
    if not reference:
        raise ValueError(f"No {kind} given")

    # Exact ID
    for record in records:
        if record.id == reference:
            return record.id

    # Name, case-insensitive
    lowered = reference.lower()
    named = [record for record in records if record.name.strip().lower() == lowered]
    if len(named) == 1:
        return named[0].id
    if len(named) > 1:
        raise ValueError(f"'{reference}' matches more than one {kind}")

    # ID prefix
    prefixed = [record for record in records if record.id.startswith(reference)]
    if len(prefixed) == 1:
        return prefixed[0].id
    if len(prefixed) > 1:
        raise ValueError(f"'{reference}' matches more than one {kind}")

    raise ValueError(f"{kind.capitalize()} '{reference}' not found")
