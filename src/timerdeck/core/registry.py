"""Surface registry: which surfaces belong to which timer group.

The registry owns the group table and the surface-to-group membership
table. A surface is attached to at most one group at a time; moving it
to another group detaches it from the old one first, and a group left
without surfaces is discarded along with its ticker.
"""

import asyncio
import logging
from collections.abc import Callable

from timerdeck.api.surface import Surface
from timerdeck.models.group import Group
from timerdeck.models.runtime import DEFAULT_DURATION_SECONDS, TimerRuntime
from timerdeck.models.settings import Role

logger = logging.getLogger(__name__)

GroupRemovedHandler = Callable[[str], None]


class SurfaceRegistry:
    """Tracks groups and the group each surface last attached to.

    Example:
        registry = SurfaceRegistry()
        group = registry.attach(dial, Role.DIAL, "kitchen")
        registry.detach("kitchen", dial.id)
    """

    def __init__(
        self,
        default_duration_seconds: int = DEFAULT_DURATION_SECONDS,
        on_group_removed: GroupRemovedHandler | None = None,
    ) -> None:
        """Initialize an empty registry.

        Args:
            default_duration_seconds: Duration given to newly created groups.
            on_group_removed: Called with the group ID when a group is discarded.
        """
        self._default_duration = default_duration_seconds
        self._on_group_removed = on_group_removed
        self._groups: dict[str, Group] = {}
        self._memberships: dict[str, str] = {}

    @property
    def groups(self) -> list[Group]:
        """Return all live groups."""
        return list(self._groups.values())

    def get_group(self, group_id: str) -> Group | None:
        """Get a group by ID.

        Args:
            group_id: The group ID to look up.

        Returns:
            The Group if it exists, else None.
        """
        return self._groups.get(group_id)

    def membership(self, surface_id: str) -> str | None:
        """Return the group ID a surface last attached to."""
        return self._memberships.get(surface_id)

    def group_for_surface(self, surface_id: str) -> Group | None:
        """Return the group a surface currently belongs to, if any."""
        group_id = self._memberships.get(surface_id)
        if group_id is None:
            return None
        group = self._groups.get(group_id)
        if group is None or not group.contains(surface_id):
            return None
        return group

    def attach(self, surface: Surface, role: Role, group_id: str) -> Group:
        """Attach a surface to a group, creating the group if needed.

        Idempotent. A surface previously attached to a different group is
        detached from it first.

        Args:
            surface: The surface to attach.
            role: Which set of the group the surface joins.
            group_id: Target group ID.

        Returns:
            The target group, with the surface attached.
        """
        surface_id = surface.id
        previous = self._memberships.get(surface_id)
        if previous is not None and previous != group_id:
            logger.debug("Surface %s moves from group %s to %s", surface_id, previous, group_id)
            self.detach(previous, surface_id)
        self._memberships[surface_id] = group_id

        group = self._groups.get(group_id)
        if group is None:
            group = Group(runtime=TimerRuntime.with_duration(group_id, self._default_duration))
            self._groups[group_id] = group
            logger.info("Created timer group %s", group_id)

        if role is Role.DIAL:
            group.keys.pop(surface_id, None)
            group.dials[surface_id] = surface
        else:
            group.dials.pop(surface_id, None)
            group.keys[surface_id] = surface
        return group

    def detach(self, group_id: str, surface_id: str) -> None:
        """Remove a surface from a group.

        No-op if the group or the surface is absent. Discards the group
        (stopping its ticker) once no surface is left.

        Args:
            group_id: The group to detach from.
            surface_id: The surface to remove.
        """
        group = self._groups.get(group_id)
        if group is None:
            return
        group.remove_surface(surface_id)
        if group.is_empty:
            group.stop_ticker()
            del self._groups[group_id]
            logger.info("Removed empty timer group %s", group_id)
            if self._on_group_removed is not None:
                self._on_group_removed(group_id)

    def forget(self, surface_id: str) -> None:
        """Detach a surface permanently and drop its membership record."""
        group_id = self._memberships.pop(surface_id, None)
        if group_id is not None:
            self.detach(group_id, surface_id)

    def close(self) -> list["asyncio.Task[None]"]:
        """Stop every ticker and clear all tables.

        Returns:
            The cancelled ticker tasks, for the caller to await.
        """
        tickers = [group.ticker for group in self._groups.values() if group.ticker is not None]
        for group in self._groups.values():
            group.stop_ticker()
        self._groups.clear()
        self._memberships.clear()
        return tickers
