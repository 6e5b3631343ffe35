import pytest
from app.services.backend_service import BackendServiceError
from app.tests.constants.cities import CityTestConstants


@pytest.fixture(scope="function")
def city_routes(backend_routes):
    backend_routes["/cities"] = CityTestConstants.MOCK_CITIES.value
    return backend_routes


@pytest.mark.asyncio
class TestCitiesPage:

    async def test_list_cities(self, admin_client, mock_backend, city_routes):
        response = admin_client.get("/admin/cities")

        assert response.status_code == 200
        for name in ("Austin", "Denver", "Miami"):
            assert name in response.text
        assert "1,250" in response.text
        assert "Total Cities" in response.text
        assert "Start Scraping" in response.text
        mock_backend.get.assert_awaited_with("/cities")

    async def test_search(self, admin_client, mock_backend, city_routes):
        response = admin_client.get("/admin/cities", params={"q": "colorado"})

        assert response.status_code == 200
        assert "Denver" in response.text
        assert "Miami" not in response.text

    async def test_search_without_results(self, admin_client, mock_backend, city_routes):
        response = admin_client.get("/admin/cities", params={"q": "atlantis"})
        assert "No results found" in response.text

    async def test_empty_collection(self, admin_client, mock_backend):
        response = admin_client.get("/admin/cities")
        assert "No data" in response.text

    async def test_add_dialog(self, admin_client, mock_backend, city_routes):
        response = admin_client.get("/admin/cities", params={"dialog": "add"})

        assert "Add New Record" in response.text
        assert 'action="/admin/cities/add"' in response.text

    async def test_edit_dialog(self, admin_client, mock_backend, city_routes):
        response = admin_client.get("/admin/cities", params={"edit": "city-austin"})

        assert "Edit Record" in response.text
        assert 'action="/admin/cities/city-austin/update"' in response.text

    async def test_add_city(self, admin_client, mock_backend, city_routes):
        mock_backend.post.return_value = CityTestConstants.MOCK_NEW_CITY.value

        response = admin_client.post(
            "/admin/cities/add",
            data={"name": "Boise", "state": "Idaho", "state_code": "ID", "q": "", "page": "1"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/admin/cities"
        path, payload = mock_backend.post.await_args.args
        assert path == "/cities"
        assert payload["name"] == "Boise"
        assert payload["status"] == "Pending"
        assert payload["totalRestaurants"] == 0

    async def test_add_city_failure_keeps_dialog(self, admin_client, mock_backend, city_routes):
        mock_backend.post.side_effect = BackendServiceError("rejected", status_code=400)

        response = admin_client.post(
            "/admin/cities/add", data={"name": "Boise"}, follow_redirects=False
        )

        assert response.status_code == 200
        assert "Add New Record" in response.text
        assert 'value="Boise"' in response.text

    async def test_update_city(self, admin_client, mock_backend, city_routes):
        response = admin_client.post(
            "/admin/cities/city-austin/update",
            data={"name": "Austin Metro", "q": "tx", "page": "1"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/admin/cities?q=tx"
        path, payload = mock_backend.put.await_args.args
        assert path == "/cities/city-austin"
        assert payload["name"] == "Austin Metro"
        assert payload["state"] == "Texas"

    async def test_delete_city(self, admin_client, mock_backend, city_routes):
        response = admin_client.post("/admin/cities/city-denver/delete", follow_redirects=False)

        assert response.status_code == 303
        mock_backend.delete.assert_awaited_once_with("/cities/city-denver")

    async def test_delete_form_posts_without_confirmation(self, admin_client, mock_backend, city_routes):
        response = admin_client.get("/admin/cities")

        assert response.status_code == 200
        assert 'action="/admin/cities/city-denver/delete"' in response.text
        assert "confirm(" not in response.text
        assert "onsubmit" not in response.text

    async def test_delete_unknown_city(self, admin_client, mock_backend, city_routes):
        response = admin_client.post("/admin/cities/nowhere/delete", follow_redirects=False)

        assert response.status_code == 404
        mock_backend.delete.assert_not_awaited()

    async def test_start_scraping(self, admin_client, mock_backend, city_routes):
        response = admin_client.post(
            "/admin/cities/city-denver/scraping/start", data={"page": "1"}, follow_redirects=False
        )

        assert response.status_code == 303
        mock_backend.post.assert_awaited_once_with("/scraping/start", {"cityId": "city-denver"})

    async def test_stop_scraping_failure_still_redirects(self, admin_client, mock_backend, city_routes):
        mock_backend.post.side_effect = BackendServiceError("scraper offline")

        response = admin_client.post("/admin/cities/city-miami/scraping/stop", follow_redirects=False)

        assert response.status_code == 303
        mock_backend.post.assert_awaited_once_with("/scraping/stop", {"cityId": "city-miami"})
