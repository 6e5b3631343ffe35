import pytest
from app.tests.constants.cities import CityTestConstants
from app.tests.constants.restaurants import RestaurantTestConstants
from app.tests.constants.reviews import ReviewTestConstants
from app.tests.constants.users import UserTestConstants


@pytest.fixture(scope="function")
def dashboard_routes(backend_routes):
    backend_routes.update({
        "/cities": CityTestConstants.MOCK_CITIES.value,
        "/restaurants": RestaurantTestConstants.MOCK_RESTAURANTS.value,
        "/users": UserTestConstants.MOCK_USERS.value,
        "/reviews": ReviewTestConstants.MOCK_REVIEWS.value,
    })
    return backend_routes


@pytest.mark.asyncio
class TestDashboard:

    async def test_dashboard_page(self, admin_client, mock_backend, dashboard_routes):
        response = admin_client.get("/admin")

        assert response.status_code == 200
        assert "Cities Covered" in response.text
        assert "1 active" in response.text
        assert 'href="/admin/reviews"' in response.text

    async def test_dashboard_stats(self, admin_client, mock_backend, dashboard_routes):
        response = admin_client.get("/admin/stats")

        assert response.status_code == 200
        assert response.json() == {
            "totalCities": 3,
            "totalRestaurants": 2,
            "totalUsers": 2,
            "totalReviews": 3,
            "activeCities": 1,
            "averageRating": 3.5,
        }
