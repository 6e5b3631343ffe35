from typing import List
import asyncio
import logging

from app.models.admin import CityStatus, DashboardStats, StatCard
from app.services.city_service import city_service
from app.services.data_table import format_number
from app.services.restaurant_service import restaurant_service
from app.services.review_service import review_service
from app.services.user_service import user_service
from app.utils.helper_functions import average

logger = logging.getLogger(__name__)


class DashboardService:
    """Overview numbers for the admin landing page, built from the page controllers."""

    async def get_stats(self) -> DashboardStats:
        cities, restaurants, users, reviews = await asyncio.gather(
            city_service.fetch_all(),
            restaurant_service.fetch_all(),
            user_service.fetch_all(),
            review_service.fetch_all(),
        )
        stats = DashboardStats(
            totalCities=len(cities),
            totalRestaurants=len(restaurants),
            totalUsers=len(users),
            totalReviews=len(reviews),
            activeCities=len([c for c in cities if c.get("status") == CityStatus.ACTIVE.value]),
            averageRating=round(average(float(r.get("rating") or 0) for r in reviews), 1),
        )
        logger.info(f"Dashboard stats: {stats.model_dump()}")
        return stats

    def cards(self, stats: DashboardStats) -> List[StatCard]:
        return [
            StatCard(title="Total Restaurants", value=format_number(stats.totalRestaurants), caption="Listed restaurants", icon="database"),
            StatCard(title="Total Users", value=format_number(stats.totalUsers), caption="Registered users", icon="users"),
            StatCard(title="Total Reviews", value=format_number(stats.totalReviews), caption=f"Average rating {stats.averageRating:.1f}", icon="check-circle"),
            StatCard(title="Cities Covered", value=format_number(stats.totalCities), caption=f"{stats.activeCities} active", icon="globe"),
        ]


dashboard_service = DashboardService()
