"""Data models for the records managed through the admin dashboard.

The backend is the source of truth for every record; these models only
describe the shape it sends so the dashboard can validate and pass the
payload through unchanged. Unknown fields are kept.
"""

from typing import Any, Dict, List, Optional, Union
from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field
from enum import Enum


class CityStatus(str, Enum):
    """Lifecycle status of a city in the scraping pipeline."""

    ACTIVE = "Active"
    PENDING = "Pending"
    SCRAPING = "Scraping"


class BackendRecord(BaseModel):
    """Base for backend records: keep unknown fields and accept aliases."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class GeoLocation(BaseModel):
    latitude: Annotated[float, Field(0, description="Latitude coordinate")]
    longitude: Annotated[float, Field(0, description="Longitude coordinate")]


class DocumentTimestamp(BaseModel):
    """Timestamp serialized by the document store as a seconds/nanoseconds pair."""

    seconds: Annotated[int, Field(..., alias="_seconds")]
    nanoseconds: Annotated[int, Field(0, alias="_nanoseconds")]

    model_config = ConfigDict(populate_by_name=True)


class City(BackendRecord):
    """City covered by the discovery app.

    Attributes:
        id: Server-assigned identifier
        name: City name
        state: State name
        state_code: Two-letter state code
        location: Geo-coordinates of the city centre
        status: Active, Pending or Scraping
        restaurants: References to the restaurants in this city
        totalRestaurants: Restaurant count reported by the backend
        lastScraped: When the city was last scraped, if ever
    """

    id: Annotated[Optional[str], Field(None, description="Server-assigned identifier")]
    name: Annotated[Optional[str], Field(None, description="City name")]
    state: Annotated[Optional[str], Field(None, description="State name")]
    state_code: Annotated[Optional[str], Field(None, description="Two-letter state code")]
    location: Annotated[Optional[GeoLocation], Field(None, description="City centre coordinates")]
    status: Annotated[Optional[CityStatus], Field(None, description="Scraping status")]
    restaurants: Annotated[List[Any], Field(default_factory=list, description="Restaurant references")]
    totalRestaurants: Annotated[Optional[int], Field(None, description="Restaurant count")]
    lastScraped: Annotated[Optional[Union[str, DocumentTimestamp]], Field(None, description="Last scrape time")]


class StructuredAddress(BaseModel):
    model_config = ConfigDict(extra="allow")

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None


class Restaurant(BackendRecord):
    """Restaurant listed in the discovery app.

    Attributes:
        id: Server-assigned identifier
        name: Restaurant name
        address: Flat address string or structured address
        addressFull: Full single-line address
        phone: Contact phone number
        website: Website URL
        averageRating: Average rating across reviews
        totalRatings: Number of ratings
        price_level: Price level (1-4)
        is_verified: Whether the listing was verified by an operator
        is_sponsored: Whether the listing is sponsored
        isClosed: Open/closed flag reported by the backend
        businessHours: Per-day opening hours, e.g. "Monday: 9:00 AM - 5:00 PM"
        categories: Cuisine categories
        searchKeywords: Keywords used by the app's search
        status: Operator-assigned status
    """

    id: Annotated[Optional[str], Field(None, description="Server-assigned identifier")]
    name: Annotated[Optional[str], Field(None, description="Restaurant name")]
    address: Annotated[Optional[Union[str, StructuredAddress]], Field(None, description="Address")]
    addressFull: Annotated[Optional[str], Field(None, description="Full address")]
    phone: Annotated[Optional[str], Field(None, description="Phone number")]
    website: Annotated[Optional[str], Field(None, description="Website URL")]
    averageRating: Annotated[Optional[float], Field(None, description="Average rating")]
    totalRatings: Annotated[Optional[int], Field(None, description="Number of ratings")]
    price_level: Annotated[Optional[int], Field(None, description="Price level")]
    is_verified: Annotated[bool, Field(False, description="Verified by an operator")]
    is_sponsored: Annotated[bool, Field(False, description="Sponsored listing")]
    isClosed: Annotated[Optional[bool], Field(None, description="Closed flag")]
    businessHours: Annotated[Optional[List[str]], Field(None, description="Per-day opening hours")]
    categories: Annotated[List[str], Field(default_factory=list, description="Categories")]
    searchKeywords: Annotated[List[str], Field(default_factory=list, description="Search keywords")]
    status: Annotated[Optional[str], Field(None, description="Operator-assigned status")]
    location: Annotated[Optional[GeoLocation], Field(None, description="Coordinates")]


class BusinessHoursData(BaseModel):
    """One day of opening hours sent to the hours sub-resource."""

    day: Annotated[str, Field(..., description="Weekday name")]
    open: Annotated[str, Field(..., description="Opening time, e.g. 9:00 AM")]
    close: Annotated[str, Field(..., description="Closing time, e.g. 5:00 PM")]


class Dish(BackendRecord):
    """Dish on a restaurant's menu.

    Attributes:
        id: Server-assigned identifier
        name: Dish name
        description: Menu description
        price: Price in dollars
        section: Menu section the dish belongs to
        restaurant: Reference to the owning restaurant
        image_url: Picture of the dish
        average_rating: Average rating (some payloads send `rating`)
        review_count: Number of reviews
    """

    id: Annotated[Optional[str], Field(None, description="Server-assigned identifier")]
    name: Annotated[Optional[str], Field(None, description="Dish name")]
    description: Annotated[Optional[str], Field(None, description="Menu description")]
    price: Annotated[Optional[float], Field(None, description="Price in dollars")]
    section: Annotated[Optional[str], Field(None, description="Menu section")]
    restaurant: Annotated[Optional[Any], Field(None, description="Owning restaurant reference")]
    image_url: Annotated[Optional[str], Field(None, description="Image URL")]
    average_rating: Annotated[Optional[float], Field(None, description="Average rating")]
    review_count: Annotated[Optional[int], Field(None, description="Number of reviews")]
    searchKeywords: Annotated[List[str], Field(default_factory=list, description="Search keywords")]
    created_at: Annotated[Optional[str], Field(None, description="Creation timestamp")]
    updated_at: Annotated[Optional[str], Field(None, description="Last update timestamp")]


class ReviewAuthor(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    is_verified: bool = False
    photo: Optional[str] = None


class Review(BackendRecord):
    """Review left on a restaurant or a dish.

    Attributes:
        id: Server-assigned identifier
        rating: Star rating (0-5)
        comment: Review text
        author: Reviewer details
        source: Platform the review came from (google, app, ...)
        restaurant_name: Name of the reviewed restaurant
        dish: Reviewed dish, with its restaurant
        timestamp: ISO string or seconds/nanoseconds pair
    """

    id: Annotated[str, Field(..., description="Server-assigned identifier")]
    rating: Annotated[Optional[float], Field(None, description="Star rating")]
    comment: Annotated[Optional[str], Field(None, description="Review text")]
    author: Annotated[Optional[ReviewAuthor], Field(None, description="Reviewer")]
    author_name: Annotated[Optional[str], Field(None, description="Reviewer name")]
    profile_photo_url: Annotated[Optional[str], Field(None, description="Reviewer photo")]
    source: Annotated[Optional[str], Field(None, description="Source platform")]
    restaurant_name: Annotated[Optional[str], Field(None, description="Reviewed restaurant")]
    dish: Annotated[Optional[Dict[str, Any]], Field(None, description="Reviewed dish")]
    timestamp: Annotated[Optional[Union[DocumentTimestamp, str]], Field(None, description="When the review was left")]
    type: Annotated[Optional[str], Field(None, description="Review type")]


class User(BackendRecord):
    """App user.

    Attributes:
        uid: Unique identifier
        display_name: Display name
        email: Email address
        phone_number: Phone number
        location_enabled: Whether the user shares their location
        photo_url: Avatar URL
        created_time: Account creation time
    """

    uid: Annotated[str, Field(..., description="Unique identifier")]
    display_name: Annotated[Optional[str], Field(None, description="Display name")]
    email: Annotated[Optional[str], Field(None, description="Email address")]
    phone_number: Annotated[Optional[str], Field(None, description="Phone number")]
    location_enabled: Annotated[bool, Field(False, description="Location sharing flag")]
    photo_url: Annotated[Optional[str], Field(None, description="Avatar URL")]
    created_time: Annotated[Optional[Union[DocumentTimestamp, str]], Field(None, description="Creation time")]


class DashboardStats(BaseModel):
    """Overview numbers shown on the admin landing page."""

    totalCities: int = 0
    totalRestaurants: int = 0
    totalUsers: int = 0
    totalReviews: int = 0
    activeCities: int = 0
    averageRating: float = 0.0


class StatCard(BaseModel):
    """One summary card above an admin table."""

    title: str
    value: str
    caption: str = ""
    icon: Optional[str] = None
