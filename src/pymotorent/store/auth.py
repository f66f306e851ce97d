"""Authentication and current-user store."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..api import RestApi
from ..api.mapping import envelope_message, envelope_success, map_user, unwrap_data, user_to_payload
from ..exceptions import ApiError, PyMotoRentError
from ..models import User
from .base import BaseStore
from .notify import Notifier

_LOGGER = logging.getLogger(__name__)


class AuthStore(BaseStore):
    """The signed-in user. ``logout`` hands control to ``on_logout`` for teardown."""

    name = "auth"

    def __init__(
        self,
        api: RestApi,
        notifier: Notifier | None = None,
        *,
        on_logout: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(api, notifier)
        self.user: User | None = None
        self.is_authenticated = False
        self._on_logout = on_logout

    def _reset_snapshot(self) -> None:
        self.user = None
        self.is_authenticated = False

    def set_user(self, user: User | None) -> None:
        self.user = user
        self.is_authenticated = user is not None
        self._changed()

    async def get_current_user(self) -> User:
        try:
            async with self._operation("get_current_user", "Failed to get user"):
                envelope = await self._api.get_current_user()
                self.user = map_user(unwrap_data(envelope))
                self.is_authenticated = True
        except PyMotoRentError:
            self._reset_snapshot()
            self._changed()
            raise
        return self.user

    async def register(self, data: Mapping[str, Any]) -> None:
        async with self._operation("register", "Registration failed"):
            envelope = await self._api.register(data)
        self._notify_success(envelope, "Registration successful")

    async def login(self, data: Mapping[str, Any]) -> User | None:
        async with self._operation("login", "Login failed"):
            envelope = await self._api.login(data)
            if envelope_success(envelope):
                payload = unwrap_data(envelope)
                if isinstance(payload, dict) and isinstance(payload.get("user"), dict):
                    payload = payload["user"]
                self.user = map_user(payload)
                self.is_authenticated = True
        if self.is_authenticated:
            self._notify_success(envelope, "Logged in")
        return self.user

    async def logout(self) -> None:
        async with self._operation("logout", "Logout failed"):
            await self._api.logout()
            self._reset_snapshot()
        if self._on_logout is not None:
            self._on_logout()

    async def verify_email(self, token: str) -> bool:
        async with self._operation("verify_email", "Verify email failed"):
            envelope = await self._api.verify_email(token)
        self._notify_success(envelope, "Email verified")
        await self.get_current_user()
        return True

    async def forgot_password_request(self, data: Mapping[str, Any]) -> None:
        async with self._operation("forgot_password_request", "Forgot password failed"):
            envelope = await self._api.forgot_password_request(data)
        self._notify_success(envelope, "Password reset mail sent")

    async def reset_forgotten_password(self, token: str, data: Mapping[str, Any]) -> None:
        async with self._operation("reset_forgotten_password", "Reset password failed"):
            envelope = await self._api.reset_forgotten_password(token, data)
        self._notify_success(envelope, "Password reset")

    async def resend_email_verification(self) -> None:
        async with self._operation("resend_email_verification", "Resend email failed"):
            envelope = await self._api.resend_email_verification()
        self._notify_success(envelope, "Verification mail sent")

    async def change_current_password(self, data: Mapping[str, Any]) -> None:
        async with self._operation("change_current_password", "Change password failed"):
            envelope = await self._api.change_current_password(data)
        self._notify_success(envelope, "Password changed")

    async def change_avatar(
        self,
        content: bytes,
        filename: str,
        *,
        content_type: str = "application/octet-stream",
        old_avatar_public_id: str | None = None,
    ) -> User | None:
        async with self._operation("change_avatar", "Change avatar failed"):
            envelope = await self._api.change_avatar(
                content,
                filename,
                content_type=content_type,
                old_avatar_public_id=old_avatar_public_id,
            )
            if envelope_success(envelope):
                self.user = map_user(unwrap_data(envelope))
        self._notify_success(envelope, "Avatar updated")
        return self.user

    async def upload_document(
        self,
        content: bytes,
        filename: str,
        *,
        document_type: str,
        name: str | None = None,
        content_type: str = "application/octet-stream",
    ) -> User:
        async with self._operation("upload_document", "Upload document failed"):
            envelope = await self._api.upload_document(
                content,
                filename,
                document_type=document_type,
                name=name,
                content_type=content_type,
            )
        self._notify_success(envelope, "Document uploaded")
        return await self.get_current_user()

    async def delete_user_account(self, user_id: str) -> None:
        async with self._operation("delete_user_account", "Delete account failed"):
            envelope = await self._api.delete_user_account(user_id)
        self._notify_success(envelope, "Account deleted")

    async def assign_role(self, user_id: str, data: Mapping[str, Any]) -> None:
        async with self._operation("assign_role", "Assign role failed"):
            envelope = await self._api.assign_role(user_id, data)
        self._notify_success(envelope, "Role assigned")

    def snapshot(self) -> dict[str, Any]:
        return {
            "user": user_to_payload(self.user) if self.user is not None else None,
            "isAuthenticated": self.is_authenticated,
        }

    def restore(self, snapshot: Any) -> None:
        if not isinstance(snapshot, dict):
            return
        raw_user = snapshot.get("user")
        try:
            user = map_user(raw_user) if isinstance(raw_user, dict) else None
        except ApiError:
            _LOGGER.warning("Stored user snapshot is invalid, discarding it")
            user = None
        self.user = user
        self.is_authenticated = user is not None and snapshot.get("isAuthenticated") is True

    def _notify_success(self, envelope: Any, default: str) -> None:
        self._notifier.success(envelope_message(envelope) or default)
