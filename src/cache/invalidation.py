"""Entity relation table used to decide which cache prefixes a mutation purges.

Over-invalidation is preferred: serving stale emotional data is worse than
an extra recomputation.
"""

RELATED_ENTITIES: dict[str, tuple[str, ...]] = {
    "user": ("sessions", "therapist", "payments", "streaks"),
    "session": ("therapist", "user", "payment", "payments"),
    "payment": ("user", "sessions"),
    "therapist": ("sessions", "users"),
    "journal": ("user", "recommendations"),
    "chat": ("user", "assistant"),
    "notification": ("user",),
}


def related_kinds(kind: str) -> tuple[str, ...]:
    """Kinds whose cached data depends on `kind` (unknown kinds -> ())."""
    return RELATED_ENTITIES.get(kind, ())


def prefixes_for(kind: str, entity_id) -> list[str]:
    """Key prefixes to purge when an entity of `kind` changes.

    For the kind itself and each related kind ``k`` both ``k:`` and
    ``k_{id}:`` are produced, so ``user:42:summary`` and
    ``user_42:summary`` are both covered.
    """
    prefixes = []
    for k in (kind, *related_kinds(kind)):
        for prefix in (f"{k}:", f"{k}_{entity_id}:"):
            if prefix not in prefixes:
                prefixes.append(prefix)
    return prefixes
