from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

from app.models.admin import BusinessHoursData, Restaurant, StatCard
from app.models.table import Cell, CellStyle, ColumnDescriptor, FieldKind, FormField
from app.services.backend_service import BackendServiceError
from app.services.page_controller import PageController
from app.services.data_table import format_number
from app.utils.business_hours import is_business_open
from app.utils.helper_functions import average

logger = logging.getLogger(__name__)

RESTAURANT_STATUSES = ["active", "inactive", "pending", "closed"]


def format_address(restaurant: Dict[str, Any]) -> Optional[str]:
    """Single-line address from either a flat string or structured parts."""
    address = restaurant.get("address")
    if isinstance(address, dict):
        parts = [address.get(key) for key in ("street", "city", "state", "zip")]
        joined = ", ".join(str(p) for p in parts if p)
        return joined or restaurant.get("addressFull")
    return address or restaurant.get("addressFull")


def is_restaurant_open(restaurant: Dict[str, Any]) -> bool:
    """Business hours decide when the backend sent them, otherwise the closed flag."""
    hours = restaurant.get("businessHours")
    if hours:
        return is_business_open(hours)
    return not restaurant.get("isClosed", False)


def open_badge(is_open: Any) -> Cell:
    return Cell(
        text="Open" if is_open else "Closed",
        style=CellStyle.BADGE,
        tone="green" if is_open else "red",
    )


class RestaurantServiceError(Exception):
    """Custom exception for restaurant service errors."""
    pass


class RestaurantService(PageController):
    """
    Manages restaurant listings: CRUD plus verification, opening hours and
    location updates.
    """

    title = "Restaurants"
    description = "Manage restaurant listings and details"
    table_title = "Manage Restaurants"
    path = "/restaurants"
    slug = "restaurants"
    model = Restaurant
    row_actions = [{"label": "Verify", "path": "verify"}]

    def columns(self) -> List[ColumnDescriptor]:
        return [
            ColumnDescriptor(label="Name", field_path="name", icon="utensils"),
            ColumnDescriptor(label="Address", field_path="address", accessor=format_address, icon="map-pin"),
            ColumnDescriptor(label="Phone", field_path="phone", icon="phone"),
            ColumnDescriptor(label="Website", field_path="website", icon="globe"),
            ColumnDescriptor(label="Rating", field_path="averageRating", icon="star", is_number=True),
            ColumnDescriptor(label="Reviews", field_path="totalRatings", is_number=True),
            ColumnDescriptor(label="Status", field_path="isClosed", accessor=is_restaurant_open, renderer=open_badge),
        ]

    def form_fields(self) -> List[FormField]:
        return [
            FormField(key="name", label="Name", required=True),
            FormField(key="address", label="Address"),
            FormField(key="phone", label="Phone"),
            FormField(key="website", label="Website", kind=FieldKind.URL),
        ]

    def row_link(self):
        return lambda restaurant: f"/admin/restaurants/{restaurant.get('id')}" if restaurant.get("id") else None

    def prepare_new(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        return {
            **draft,
            "createdAt": datetime.now(timezone.utc).isoformat(),
            "location": {"latitude": 0, "longitude": 0},
            "totalRatings": 0,
            "averageRating": 0,
            "businessHours": [],
            "isClosed": False,
            "categories": [],
            "is_verified": False,
        }

    def stats(self, records: List[Dict[str, Any]]) -> List[StatCard]:
        avg_rating = average(float(r.get("averageRating") or 0) for r in records)
        total_reviews = sum(int(r.get("totalRatings") or 0) for r in records)
        verified = len([r for r in records if r.get("is_verified")])
        return [
            StatCard(title="Total Restaurants", value=str(len(records)), caption="Listed restaurants", icon="utensils"),
            StatCard(title="Average Rating", value=f"{avg_rating:.1f}", caption="Out of 5.0", icon="star"),
            StatCard(title="Total Reviews", value=format_number(total_reviews), caption="Across all restaurants", icon="message-circle"),
            StatCard(title="Verified", value=str(verified), caption="Verified restaurants", icon="check-circle"),
        ]

    async def _put_sub_resource(self, restaurant_id: str, resource: str, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            updated = await self.backend.put(f"{self.path}/{restaurant_id}/{resource}", data)
        except BackendServiceError as e:
            logger.error(f"Error updating {resource} of restaurant {restaurant_id}: {str(e)}")
            raise RestaurantServiceError(f"Could not update {resource} of restaurant {restaurant_id}")

        if isinstance(updated, dict):
            record = self.parse_record(updated)
            self.cache.swap(restaurant_id, record)
        else:
            self.patch_cached(restaurant_id, **data)
            record = self.find(restaurant_id) or {}
        logger.info(f"Updated {resource} of restaurant {restaurant_id}")
        return record

    async def verify(self, restaurant_id: str) -> Dict[str, Any]:
        return await self._put_sub_resource(restaurant_id, "verify", {"is_verified": True})

    async def update_business_hours(self, restaurant_id: str, business_hours: List[BusinessHoursData]) -> Dict[str, Any]:
        return await self._put_sub_resource(
            restaurant_id,
            "hours",
            {"businessHours": [h.model_dump() for h in business_hours]},
        )

    async def update_location(self, restaurant_id: str, latitude: float, longitude: float) -> Dict[str, Any]:
        return await self._put_sub_resource(
            restaurant_id,
            "location",
            {"location": {"latitude": latitude, "longitude": longitude}},
        )


restaurant_service = RestaurantService()
