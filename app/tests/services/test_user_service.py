import pytest
from app.services.backend_service import BackendServiceError
from app.services.user_service import UserService, UserServiceError
from app.tests.constants.users import UserTestConstants


class TestUserColumns:

    def test_rows_use_placeholders(self):
        service = UserService()
        service.cache.replace(UserTestConstants.MOCK_USERS.value)
        rows = service.table().view().rows

        assert [cell.text for cell in rows[0].cells] == [
            "Jane Doe", "jane@example.com", "+15125550199", "Enabled", "03/01/2024",
        ]
        assert [cell.text for cell in rows[1].cells] == [
            "Anonymous User", "No email", "No phone", "Disabled", "Invalid date",
        ]
        assert rows[1].record_id == "u2"

    def test_users_are_delete_only(self):
        table = UserService().table()
        assert table.on_add is None
        assert table.on_update is None
        assert table.on_delete is not None

    def test_stats(self):
        cards = UserService().stats(UserTestConstants.MOCK_USERS.value)
        assert [c.value for c in cards] == ["2", "1", "1", "1"]


@pytest.mark.asyncio
class TestUserService:

    async def test_get_user(self, mock_controller_backend):
        mock_controller_backend.get.return_value = UserTestConstants.MOCK_USERS.value[0]
        user = await UserService(mock_controller_backend).get_user("u1")

        mock_controller_backend.get.assert_awaited_once_with("/users/u1")
        assert user["email"] == "jane@example.com"

    async def test_get_user_not_found(self, mock_controller_backend):
        mock_controller_backend.get.side_effect = BackendServiceError("missing", status_code=404)
        assert await UserService(mock_controller_backend).get_user("nobody") is None

    async def test_get_user_backend_error(self, mock_controller_backend):
        mock_controller_backend.get.side_effect = BackendServiceError("boom", status_code=500)
        with pytest.raises(UserServiceError):
            await UserService(mock_controller_backend).get_user("u1")

    async def test_delete_uses_uid(self, mock_controller_backend):
        service = UserService(mock_controller_backend)
        service.cache.replace(UserTestConstants.MOCK_USERS.value)

        await service.delete(service.find("u2"))

        mock_controller_backend.delete.assert_awaited_once_with("/users/u2")
        assert service.find("u2") is None

    async def test_update_status(self, mock_controller_backend):
        service = UserService(mock_controller_backend)
        service.cache.replace(UserTestConstants.MOCK_USERS.value)

        record = await service.update_status("u1", "suspended")

        mock_controller_backend.put.assert_awaited_once_with("/users/u1/status", {"status": "suspended"})
        assert record["status"] == "suspended"
