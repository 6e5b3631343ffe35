import pytest
from app.services.backend_service import BackendServiceError
from app.services.dish_service import DishService, RestaurantMenuService, dish_rating
from app.tests.constants.dishes import DishTestConstants


class TestDishColumns:

    def test_rating_falls_back_to_legacy_field(self):
        first, second = DishTestConstants.MOCK_DISHES.value
        assert dish_rating(first) == 4.6
        assert dish_rating(second) == 4.0
        assert dish_rating({}) is None

    def test_rows(self):
        service = DishService()
        service.cache.replace(DishTestConstants.MOCK_DISHES.value)
        rows = service.table().view().rows

        assert [cell.text for cell in rows[0].cells] == [
            "Salmon Nigiri", "Two pieces of fresh salmon over rice", "$12.50", "4.6", "1,200",
        ]
        assert [cell.text for cell in rows[1].cells][2:4] == ["$4.00", "4.0"]

    def test_stats(self):
        cards = DishService().stats(DishTestConstants.MOCK_DISHES.value)
        assert [(c.title, c.value) for c in cards] == [
            ("Total Dishes", "2"),
            ("Average Rating", "4.3"),
            ("Total Reviews", "1,208"),
            ("Average Price", "$8.25"),
        ]

    def test_menu_rows(self):
        menu = RestaurantMenuService("r1")
        menu.cache.replace(DishTestConstants.MOCK_DISHES.value)
        rows = menu.table().view().rows

        assert [cell.text for cell in rows[0].cells][2:] == ["$12.50", "Main Course", "Available"]
        assert [cell.text for cell in rows[1].cells][2:] == ["$4.00", "Main Course", "Unavailable"]
        assert rows[1].cells[3].style.value == "empty"


@pytest.mark.asyncio
class TestRestaurantMenu:

    async def test_fetch_all_scopes_to_restaurant(self, mock_controller_backend):
        mock_controller_backend.get.return_value = DishTestConstants.MOCK_DISHES.value
        menu = RestaurantMenuService("r1", mock_controller_backend)

        records = await menu.fetch_all()

        mock_controller_backend.get.assert_awaited_once_with("/dishes/restaurant/r1")
        assert len(records) == 2

    async def test_menu_fetch_failure_is_empty(self, mock_controller_backend):
        mock_controller_backend.get.side_effect = BackendServiceError("backend down")
        menu = RestaurantMenuService("r1", mock_controller_backend)
        assert await menu.fetch_all() == []

    async def test_add_attaches_restaurant(self, mock_controller_backend):
        menu = RestaurantMenuService("r1", mock_controller_backend)
        table = menu.table()

        table.open_add()
        table.apply_form(DishTestConstants.MOCK_NEW_DISH_FORM.value)
        assert await table.submit_add() is True

        mock_controller_backend.post.assert_awaited_once_with(
            "/dishes",
            {
                "name": "Tuna Roll",
                "description": "Fresh tuna and cucumber",
                "price": 9.5,
                "section": "Main Course",
                "isAvailable": False,
                "restaurant": "r1",
            },
        )
        assert [d["name"] for d in menu.cache.records] == ["Tuna Roll"]

    async def test_add_requires_menu_fields(self, mock_controller_backend):
        menu = RestaurantMenuService("r1", mock_controller_backend)
        table = menu.table()

        table.open_add()
        table.apply_form({"name": "Tuna Roll"})
        assert await table.submit_add() is False

        assert table.missing_fields == ["description", "price", "section"]
        mock_controller_backend.post.assert_not_awaited()
