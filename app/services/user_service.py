from typing import Any, Dict, List, Optional
import logging

from app.models.admin import StatCard, User
from app.models.table import Cell, CellStyle, ColumnDescriptor
from app.services.backend_service import BackendServiceError
from app.services.page_controller import PageController
from app.utils.helper_functions import format_date

logger = logging.getLogger(__name__)


def location_badge(enabled: Any) -> Cell:
    return Cell(
        text="Enabled" if enabled else "Disabled",
        style=CellStyle.BADGE,
        tone="green" if enabled else "red",
    )


class UserServiceError(Exception):
    """Custom exception for user service errors."""
    pass


class UserService(PageController):
    """
    Manages app user accounts. Users sign up through the app, so the
    dashboard only lists, inspects and removes them.
    """

    title = "Users"
    description = "Manage app users and their settings"
    table_title = "Manage Users"
    path = "/users"
    slug = "users"
    id_field = "uid"
    model = User
    supports_add = False
    supports_update = False

    def columns(self) -> List[ColumnDescriptor]:
        return [
            ColumnDescriptor(label="Name", field_path="display_name", icon="users",
                             renderer=lambda value: value or "Anonymous User"),
            ColumnDescriptor(label="Email", field_path="email", icon="mail",
                             renderer=lambda value: value or "No email"),
            ColumnDescriptor(label="Phone", field_path="phone_number", icon="phone",
                             renderer=lambda value: value or "No phone"),
            ColumnDescriptor(label="Location", field_path="location_enabled", icon="map-pin", renderer=location_badge),
            ColumnDescriptor(label="Joined", field_path="created_time", icon="calendar", renderer=format_date),
        ]

    def stats(self, records: List[Dict[str, Any]]) -> List[StatCard]:
        return [
            StatCard(title="Total Users", value=str(len(records)), caption="Registered users", icon="users"),
            StatCard(title="Location Enabled", value=str(len([u for u in records if u.get("location_enabled")])), caption="Sharing location", icon="map-pin"),
            StatCard(title="With Email", value=str(len([u for u in records if u.get("email")])), caption="Email on file", icon="mail"),
            StatCard(title="With Phone", value=str(len([u for u in records if u.get("phone_number")])), caption="Phone on file", icon="phone"),
        ]

    async def get_user(self, uid: str) -> Optional[Dict[str, Any]]:
        try:
            data = await self.backend.get(f"{self.path}/{uid}")
        except BackendServiceError as e:
            if e.status_code == 404:
                return None
            logger.error(f"Error fetching user {uid}: {str(e)}")
            raise UserServiceError(f"Could not fetch user {uid}")
        return self.parse_record(data) if data else None

    async def update_status(self, uid: str, status: str) -> Dict[str, Any]:
        try:
            updated = await self.backend.put(f"{self.path}/{uid}/status", {"status": status})
        except BackendServiceError as e:
            logger.error(f"Error updating status of user {uid}: {str(e)}")
            raise UserServiceError(f"Could not update status of user {uid}")

        if isinstance(updated, dict):
            self.cache.swap(uid, self.parse_record(updated))
        else:
            self.patch_cached(uid, status=status)
        logger.info(f"Updated status of user {uid} to {status}")
        return self.find(uid) or {}

    async def get_stats(self) -> Dict[str, Any]:
        """Backend-computed user statistics."""
        try:
            return await self.backend.get(f"{self.path}/stats") or {}
        except BackendServiceError as e:
            logger.error(f"Error fetching user stats: {str(e)}")
            raise UserServiceError("Could not fetch user stats")


user_service = UserService()
