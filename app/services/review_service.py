from typing import Any, Dict, List, Optional
import logging

from app.models.admin import Review, StatCard
from app.models.table import Cell, CellStyle, ColumnDescriptor
from app.services.backend_service import BackendServiceError
from app.services.page_controller import PageController
from app.utils.helper_functions import average, format_date

logger = logging.getLogger(__name__)

REVIEW_SCOPES = ("restaurant", "dish", "user")


def review_restaurant_name(review: Dict[str, Any]) -> Optional[str]:
    """Restaurant name, falling back to the restaurant of the reviewed dish."""
    name = review.get("restaurant_name")
    if name:
        return name
    dish = review.get("dish") or {}
    restaurant = dish.get("restaurant") if isinstance(dish, dict) else None
    if isinstance(restaurant, dict):
        return restaurant.get("name")
    return None


def review_author(review: Dict[str, Any]) -> Dict[str, Any]:
    author = review.get("author")
    if isinstance(author, dict):
        return author
    return {"name": review.get("author_name"), "is_verified": False}


def rating_badge(value: Any) -> Cell:
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return Cell(text="0.0", style=CellStyle.BADGE, tone="red")
    if rating >= 4:
        tone = "green"
    elif rating >= 3:
        tone = "yellow"
    else:
        tone = "red"
    return Cell(text=f"{rating:.1f}", style=CellStyle.BADGE, tone=tone)


def reviewer_cell(author: Dict[str, Any]) -> Cell:
    return Cell(
        text=author.get("name") or "Anonymous",
        icon="users",
        tag="Verified" if author.get("is_verified") else None,
    )


def source_badge(value: Any) -> Cell:
    return Cell(
        text=(value or "unknown").upper(),
        style=CellStyle.BADGE,
        tone="green" if value == "google" else "purple",
    )


class ReviewServiceError(Exception):
    """Custom exception for review service errors."""
    pass


class ReviewService(PageController):
    """
    Moderates reviews: listing, deletion, reporting and verification.
    Reviews are never created or edited from the dashboard.
    """

    title = "Reviews"
    description = "Manage customer reviews and ratings"
    table_title = "Manage Reviews"
    path = "/reviews"
    slug = "reviews"
    model = Review
    supports_add = False
    supports_update = False
    row_actions = [
        {"label": "Verify", "path": "verify"},
        {"label": "Report", "path": "report", "input": "reason"},
    ]

    def columns(self) -> List[ColumnDescriptor]:
        return [
            ColumnDescriptor(label="Restaurant", field_path="restaurant_name", accessor=review_restaurant_name, icon="store",
                             renderer=lambda value: value or "Unknown Restaurant"),
            ColumnDescriptor(label="Rating", field_path="rating", icon="star", renderer=rating_badge),
            ColumnDescriptor(label="Review", field_path="comment", icon="message-circle",
                             renderer=lambda value: value or "No comment"),
            ColumnDescriptor(label="Reviewer", field_path="author", accessor=review_author, renderer=reviewer_cell),
            ColumnDescriptor(label="Source", field_path="source", renderer=source_badge),
            ColumnDescriptor(label="Date", field_path="timestamp", icon="calendar", renderer=format_date),
        ]

    def stats(self, records: List[Dict[str, Any]]) -> List[StatCard]:
        avg_rating = average(float(r.get("rating") or 0) for r in records)
        app_reviews = len([r for r in records if r.get("source") == "app"])
        verified = len([r for r in records if review_author(r).get("is_verified")])
        return [
            StatCard(title="Total Reviews", value=str(len(records)), caption="All reviews", icon="message-circle"),
            StatCard(title="Average Rating", value=f"{avg_rating:.1f}", caption="Out of 5.0", icon="star"),
            StatCard(title="App Reviews", value=str(app_reviews), caption="From mobile app", icon="message-circle"),
            StatCard(title="Verified Reviews", value=str(verified), caption="Verified customers", icon="users"),
        ]

    async def fetch_scoped(self, scope: str, target_id: str) -> List[Dict[str, Any]]:
        """Reviews of one restaurant, dish or user, loaded into the cache."""
        if scope not in REVIEW_SCOPES:
            raise ValueError(f"Unknown review scope: {scope}")

        try:
            data = await self.backend.get(f"{self.path}/{scope}/{target_id}")
            self.cache.replace(self.parse_records(data))
        except BackendServiceError as e:
            logger.error(f"Error fetching reviews for {scope} {target_id}: {str(e)}")
            self.cache.replace([])
        return self.cache.records

    async def report(self, review_id: str, reason: str) -> None:
        try:
            await self.backend.post(f"{self.path}/{review_id}/report", {"reason": reason})
        except BackendServiceError as e:
            logger.error(f"Error reporting review {review_id}: {str(e)}")
            raise ReviewServiceError(f"Could not report review {review_id}")
        logger.info(f"Reported review {review_id}: {reason}")

    async def verify(self, review_id: str) -> Dict[str, Any]:
        try:
            updated = await self.backend.put(
                f"{self.path}/{review_id}/verify", {"author.is_verified": True}
            )
        except BackendServiceError as e:
            logger.error(f"Error verifying review {review_id}: {str(e)}")
            raise ReviewServiceError(f"Could not verify review {review_id}")

        if isinstance(updated, dict):
            self.cache.swap(review_id, self.parse_record(updated))
        else:
            record = self.find(review_id)
            if record is not None:
                author = {**review_author(record), "is_verified": True}
                self.patch_cached(review_id, author=author)
        logger.info(f"Verified review {review_id}")
        return self.find(review_id) or {}

    async def get_stats(self) -> Dict[str, Any]:
        """Backend-computed review statistics."""
        try:
            return await self.backend.get(f"{self.path}/stats") or {}
        except BackendServiceError as e:
            logger.error(f"Error fetching review stats: {str(e)}")
            raise ReviewServiceError("Could not fetch review stats")


review_service = ReviewService()
