"""Client for the customer service: users."""

from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

MessageFactory = Callable[..., Any]


def _plain_message(type_name: str, **fields: Any) -> SimpleNamespace:
    return SimpleNamespace(**fields)


class SCSClient:
    """Calls the user service through its gRPC stub.

    ``make_message(type_name, **fields)`` builds request messages; by default
    they are plain namespaces.
    """

    def __init__(self, user_stub: Any, make_message: MessageFactory = _plain_message) -> None:
        self._users = user_stub
        self._message = make_message

    def create_user(
        self, name: str, description: str, document_type: str, document_number: str, auth_id: str
    ) -> str:
        request = self._message(
            "CreateUserRequest",
            name=name,
            description=description,
            document_type=document_type,
            document_number=document_number,
            auth_id=auth_id,
        )
        return self._users.CreateUser(request).id

    def block_user(self, user_id: str) -> str:
        return self._users.BlockUser(self._message("IdRequest", id=user_id)).id

    def unblock_user(self, user_id: str) -> str:
        return self._users.UnblockUser(self._message("IdRequest", id=user_id)).id

    def update_user(
        self, user_id: str, name: str, description: str, document_type: str, document_number: str
    ) -> str:
        request = self._message(
            "UpdateUserRequest",
            id=user_id,
            name=name,
            description=description,
            document_type=document_type,
            document_number=document_number,
        )
        return self._users.UpdateUser(request).id

    def get_user_by_id(self, user_id: str) -> Any:
        return self._users.GetById(self._message("IdRequest", id=user_id))

    def get_all_users(self) -> list[Any]:
        return list(self._users.GetAllUsers(self._message("Empty")).users)