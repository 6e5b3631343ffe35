from typing import Any, Dict, List
import logging

from app.models.admin import Dish, StatCard
from app.models.table import Cell, CellStyle, ColumnDescriptor, FieldKind, FormField
from app.services.backend_service import BackendServiceError
from app.services.page_controller import PageController
from app.services.data_table import format_number
from app.utils.helper_functions import average, format_price, format_rating

logger = logging.getLogger(__name__)

MENU_CATEGORIES = ["Appetizer", "Main Course", "Dessert", "Beverage", "Side"]

def dish_rating(dish: Dict[str, Any]) -> Any:
    # older payloads carry `rating` instead of `average_rating`
    rating = dish.get("average_rating")
    return dish.get("rating") if rating is None else rating

class DishService(PageController):
    """
    Manages dishes across every restaurant menu.
    """

    title = "Dishes"
    description = "Manage dishes and their details"
    table_title = "Manage Dishes"
    path = "/dishes"
    slug = "dishes"
    model = Dish

    def columns(self) -> List[ColumnDescriptor]:
        return [
            ColumnDescriptor(label="Name", field_path="name", icon="utensils"),
            ColumnDescriptor(label="Description", field_path="description"),
            ColumnDescriptor(label="Price", field_path="price", icon="dollar-sign", is_number=True, renderer=format_price),
            ColumnDescriptor(label="Rating", field_path="average_rating", accessor=dish_rating, icon="star", is_number=True, renderer=format_rating),
            ColumnDescriptor(label="Reviews", field_path="review_count", icon="message-circle", is_number=True),
        ]

    def form_fields(self) -> List[FormField]:
        return [
            FormField(key="name", label="Name", required=True),
            FormField(key="description", label="Description", kind=FieldKind.TEXTAREA),
            FormField(key="price", label="Price", kind=FieldKind.NUMBER, required=True),
            FormField(key="section", label="Section", kind=FieldKind.SELECT, options=MENU_CATEGORIES),
            FormField(key="restaurant", label="Restaurant ID"),
            FormField(key="image_url", label="Image URL", kind=FieldKind.URL),
        ]

    def stats(self, records: List[Dict[str, Any]]) -> List[StatCard]:
        avg_rating = average(float(dish_rating(d) or 0) for d in records)
        total_reviews = sum(int(d.get("review_count") or 0) for d in records)
        avg_price = average(float(d.get("price") or 0) for d in records)
        return [
            StatCard(title="Total Dishes", value=str(len(records)), caption="Across all restaurants", icon="utensils"),
            StatCard(title="Average Rating", value=f"{avg_rating:.1f}", caption="Out of 5.0", icon="star"),
            StatCard(title="Total Reviews", value=format_number(total_reviews), caption="Across all dishes", icon="message-circle"),
            StatCard(title="Average Price", value=f"${avg_price:.2f}", caption="Per dish", icon="dollar-sign"),
        ]

    async def get_by_restaurant(self, restaurant_id: str) -> List[Dict[str, Any]]:
        """Dishes on one restaurant's menu; empty when the call fails."""
        try:
            data = await self.backend.get(f"{self.path}/restaurant/{restaurant_id}")
        except BackendServiceError as e:
            logger.error(f"Error fetching dishes for restaurant {restaurant_id}: {str(e)}")
            return []
        return self.parse_records(data)


def availability_badge(value: Any):
    available = value is None or bool(value)
    return Cell(
        text="Available" if available else "Unavailable",
        style=CellStyle.BADGE,
        tone="green" if available else "red",
    )

class RestaurantMenuService(DishService):
    """
    The dishes of a single restaurant, as shown on its detail page.

    Uses the same dish endpoints as DishService, scoped to one restaurant.
    """

    table_title = "Menu Management"
    slug = "menu"

    def __init__(self, restaurant_id: str, backend=None):
        super().__init__(backend)
        self.restaurant_id = restaurant_id

    def columns(self) -> List[ColumnDescriptor]:
        return [
            ColumnDescriptor(label="Name", field_path="name", icon="utensils"),
            ColumnDescriptor(label="Description", field_path="description"),
            ColumnDescriptor(label="Price", field_path="price", icon="dollar-sign", renderer=format_price),
            ColumnDescriptor(label="Category", field_path="section", empty_placeholder="Main Course"),
            ColumnDescriptor(label="Available", field_path="isAvailable", renderer=availability_badge),
        ]

    def form_fields(self) -> List[FormField]:
        return [
            FormField(key="name", label="Dish Name", required=True),
            FormField(key="description", label="Description", kind=FieldKind.TEXTAREA, required=True),
            FormField(key="price", label="Price", kind=FieldKind.NUMBER, required=True),
            FormField(key="section", label="Category", kind=FieldKind.SELECT, options=MENU_CATEGORIES, required=True),
            FormField(key="image_url", label="Image URL", kind=FieldKind.URL),
            FormField(key="isAvailable", label="Available", kind=FieldKind.CHECKBOX),
        ]

    def prepare_new(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        return {**draft, "restaurant": self.restaurant_id}

    async def fetch_all(self) -> List[Dict[str, Any]]:
        self.cache.replace(await self.get_by_restaurant(self.restaurant_id))
        return self.cache.records

dish_service = DishService()
