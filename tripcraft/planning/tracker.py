"""Edit tracking - pending removal intents carried into the next refinement."""

from tripcraft.models.plan import Activity


def activity_fingerprint(activity: Activity) -> str:
    """Content key identifying the same real-world place across regenerations.

    Identifiers are regenerated on every oracle round-trip, so deletions are
    tracked by ``lowercased(name)|lowercased(city)`` instead.
    """
    return f"{activity.name.strip().lower()}|{activity.city.strip().lower()}"


def split_fingerprint(fingerprint: str) -> tuple[str, str]:
    """Split a fingerprint into (name, city). Names may themselves contain "|"."""
    name, _, city = fingerprint.rpartition("|")
    return name, city


class EditTracker:
    """Deleted-activity fingerprints and city-sequence positions marked for removal.

    City positions index the distinct-city sequence recomputed from the working
    plan at compile time; they are not stable across refinements.
    """

    def __init__(self) -> None:
        # dict as an insertion-ordered set
        self._deleted: dict[str, None] = {}
        self._cities_marked: set[int] = set()

    @property
    def deleted(self) -> list[str]:
        """Deletion fingerprints in the order they were recorded."""
        return list(self._deleted)

    @property
    def cities_marked(self) -> list[int]:
        """Marked city-sequence positions in increasing order."""
        return sorted(self._cities_marked)

    def mark_deleted(self, activity: Activity) -> str:
        """Record an activity deletion. Idempotent."""
        fingerprint = activity_fingerprint(activity)
        self._deleted.setdefault(fingerprint, None)
        return fingerprint

    def is_deleted(self, activity: Activity) -> bool:
        return activity_fingerprint(activity) in self._deleted

    def toggle_city_removal(self, index: int) -> bool:
        """Mark or unmark a city-sequence position.

        Returns:
            True if the position is marked after the toggle
        """
        if index in self._cities_marked:
            self._cities_marked.discard(index)
            return False
        self._cities_marked.add(index)
        return True

    def clear(self) -> None:
        self._deleted.clear()
        self._cities_marked.clear()

    def is_empty(self) -> bool:
        return not self._deleted and not self._cities_marked
