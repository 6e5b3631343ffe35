from typing import Any, Dict, List
import logging

from app.models.admin import City, CityStatus, StatCard
from app.models.table import ColumnDescriptor
from app.services.backend_service import BackendServiceError
from app.services.page_controller import PageController
from app.services.data_table import format_number

logger = logging.getLogger(__name__)


class CityService(PageController):
    """
    Manages the cities covered by the app and their scraping state.
    """

    title = "Cities"
    description = "Manage cities and their scraping settings"
    table_title = "Manage Cities"
    path = "/cities"
    slug = "cities"
    model = City
    row_actions = [
        {"label": "Start Scraping", "path": "scraping/start"},
        {"label": "Stop Scraping", "path": "scraping/stop"},
    ]

    def columns(self) -> List[ColumnDescriptor]:
        return [
            ColumnDescriptor(label="City", field_path="name", icon="map-pin"),
            ColumnDescriptor(label="State", field_path="state"),
            ColumnDescriptor(label="State Code", field_path="state_code"),
            ColumnDescriptor(label="Total Restaurants", field_path="totalRestaurants", is_number=True),
            ColumnDescriptor(label="Status", field_path="status", is_status=True),
        ]

    def prepare_new(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        return {
            **draft,
            "location": {"latitude": 0, "longitude": 0},
            "restaurants": [],
            "status": CityStatus.PENDING.value,
            "totalRestaurants": 0,
            "lastScraped": None,
        }

    def stats(self, records: List[Dict[str, Any]]) -> List[StatCard]:
        active = [c for c in records if c.get("status") == CityStatus.ACTIVE.value]
        restaurant_count = sum(len(c.get("restaurants") or []) for c in records)
        return [
            StatCard(title="Total Cities", value=str(len(records)), caption="Across multiple states", icon="globe"),
            StatCard(title="Active Cities", value=str(len(active)), caption="Currently active", icon="refresh"),
            StatCard(title="Total Restaurants", value=format_number(restaurant_count), caption="Across all cities", icon="map-pin"),
        ]

    async def start_scraping(self, city_id: str) -> bool:
        """Ask the backend to start scraping a city and mark it as Scraping."""
        try:
            await self.backend.post("/scraping/start", {"cityId": city_id})
        except BackendServiceError as e:
            logger.error(f"Error starting scraping for city {city_id}: {str(e)}")
            return False
        self.patch_cached(city_id, status=CityStatus.SCRAPING.value)
        logger.info(f"Started scraping city {city_id}")
        return True

    async def stop_scraping(self, city_id: str) -> bool:
        """Ask the backend to stop scraping a city and mark it as Active."""
        try:
            await self.backend.post("/scraping/stop", {"cityId": city_id})
        except BackendServiceError as e:
            logger.error(f"Error stopping scraping for city {city_id}: {str(e)}")
            return False
        self.patch_cached(city_id, status=CityStatus.ACTIVE.value)
        logger.info(f"Stopped scraping city {city_id}")
        return True


city_service = CityService()
