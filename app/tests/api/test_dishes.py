import pytest
from app.tests.constants.dishes import DishTestConstants


@pytest.fixture(scope="function")
def dish_routes(backend_routes):
    backend_routes["/dishes"] = DishTestConstants.MOCK_DISHES.value
    return backend_routes


@pytest.mark.asyncio
class TestDishesPage:

    async def test_list_dishes(self, admin_client, mock_backend, dish_routes):
        response = admin_client.get("/admin/dishes")

        assert response.status_code == 200
        assert "Salmon Nigiri" in response.text
        assert "$12.50" in response.text
        assert "Average Price" in response.text
        assert "$8.25" in response.text

    async def test_pagination_links(self, admin_client, mock_backend, backend_routes):
        backend_routes["/dishes"] = [
            {"id": f"d{i}", "name": f"Dish {i}", "price": i} for i in range(30)
        ]

        first = admin_client.get("/admin/dishes")
        assert "Page 1 of 2" in first.text
        assert "Dish 24" in first.text
        assert "Dish 25" not in first.text

        second = admin_client.get("/admin/dishes", params={"page": 2})
        assert "Page 2 of 2" in second.text
        assert "Dish 29" in second.text
        assert "Dish 10" not in second.text

    async def test_add_dish(self, admin_client, mock_backend, dish_routes):
        response = admin_client.post(
            "/admin/dishes/add",
            data={"name": "Tuna Roll", "price": "9.5", "section": "Main Course", "restaurant": "r1"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        mock_backend.post.assert_awaited_once_with(
            "/dishes",
            {"name": "Tuna Roll", "price": 9.5, "section": "Main Course", "restaurant": "r1"},
        )

    async def test_update_dish(self, admin_client, mock_backend, dish_routes):
        response = admin_client.post(
            "/admin/dishes/d1/update",
            data={"name": "Salmon Nigiri", "price": "13"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        path, payload = mock_backend.put.await_args.args
        assert path == "/dishes/d1"
        assert payload["price"] == 13

    async def test_delete_dish(self, admin_client, mock_backend, dish_routes):
        response = admin_client.post("/admin/dishes/d1/delete", follow_redirects=False)

        assert response.status_code == 303
        mock_backend.delete.assert_awaited_once_with("/dishes/d1")
