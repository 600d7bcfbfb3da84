"""Explicit handle for a fetched plan catalog."""

from datetime import datetime, timezone

from pydantic import Field

from wattwise.models.base import DomainModel
from wattwise.models.plan import Plan, Supplier


class CatalogSnapshot(DomainModel):
    """Plans and supplier ratings as fetched at one point in time.

    The snapshot is passed explicitly to whatever layer calls the
    recommender; refreshing it is the caller's concern.

    Attributes
    ----------
    plans : list[Plan]
        Candidate plans
    suppliers : list[Supplier]
        Supplier ratings
    fetched_at : datetime
        When the snapshot was taken (UTC)
    """

    plans: list[Plan] = Field(default_factory=list)
    suppliers: list[Supplier] = Field(default_factory=list)
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def is_stale(self, ttl_seconds: int, now: datetime | None = None) -> bool:
        """Whether the snapshot is older than ``ttl_seconds``.

        Parameters
        ----------
        ttl_seconds : int
            Maximum age in seconds
        now : datetime | None, optional
            Reference time, by default the current UTC time

        Returns
        -------
        bool
            True if the snapshot has expired
        """
        now = now or datetime.now(timezone.utc)
        return (now - self.fetched_at).total_seconds() > ttl_seconds
