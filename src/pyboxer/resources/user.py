"""User helper class."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, get_args

from pyboxer.clients.users import DEFAULT_USERS_PAGE_SIZE
from pyboxer.resources.collection import PaginatedCollection
from pyboxer.resources.resource import Resource
from pyboxer.utils import api_types
from pyboxer.utils.api_types import assert_in_literal
from pyboxer.utils.misc import parse_iso

if TYPE_CHECKING:
    import sys
    from collections.abc import Iterator, Sequence
    from datetime import datetime

    from pyboxer.clients.request import RequestEnvelope
    from pyboxer.config.context import BoxContext

    if sys.version_info < (3, 11):
        from typing_extensions import Self
    else:
        from typing import Self


def _parse_timestamp(value: str | datetime | None) -> datetime | None:
    if isinstance(value, str):
        return parse_iso(value)
    return value


class User(Resource):
    """Helper class for Box users.

    .. code-block:: python

        user = User.new(ctx).set_login("a@b.com").set_name("A")
        created = user.create()  # sends {"login": "a@b.com", "name": "A"}
        updated = created.set_status("inactive").update()  # sends {"status": "inactive"}

    """

    tracked_fields: ClassVar[tuple[str, ...]] = get_args(api_types.UserField)
    create_fields: ClassVar[tuple[str, ...]] = ("login", "name")
    """Sent with every create request when they have a value."""

    type: str | None
    name: str | None
    login: str | None
    created_at: datetime | None
    modified_at: datetime | None
    language: str | None
    timezone: str | None
    space_amount: int | None
    space_used: int | None
    max_upload_size: int | None
    status: api_types.UserStatus | None
    job_title: str | None
    phone: str | None
    address: str | None
    avatar_url: str | None
    role: api_types.UserRole | None
    tracking_codes: list[api_types.TrackingCode] | None
    can_see_managed_users: bool | None
    is_sync_enabled: bool | None
    is_external_collab_restricted: bool | None
    is_exempt_from_device_limits: bool | None
    is_exempt_from_login_verification: bool | None
    is_password_reset_required: bool | None
    enterprise: api_types.Enterprise | None
    my_tags: list[str] | None
    hostname: str | None
    is_platform_access_only: bool | None
    external_app_user_id: str | None

    def __init__(self, *args, **kwargs) -> None:
        """Not intended to be initialized directly. Use :py:meth:`User.new`, :py:meth:`User.me` or :py:meth:`User.from_id` instead."""  # noqa: E501
        super().__init__(*args, **kwargs)

    def _from_json(
        self,
        id: api_types.UserId | None = None,  # noqa: A002
        type: str | None = None,  # noqa: A002
        name: str | None = None,
        login: str | None = None,
        created_at: str | None = None,
        modified_at: str | None = None,
        language: str | None = None,
        timezone: str | None = None,
        space_amount: int | None = None,
        space_used: int | None = None,
        max_upload_size: int | None = None,
        status: api_types.UserStatus | None = None,
        job_title: str | None = None,
        phone: str | None = None,
        address: str | None = None,
        avatar_url: str | None = None,
        role: api_types.UserRole | None = None,
        tracking_codes: list[api_types.TrackingCode] | None = None,
        can_see_managed_users: bool | None = None,
        is_sync_enabled: bool | None = None,
        is_external_collab_restricted: bool | None = None,
        is_exempt_from_device_limits: bool | None = None,
        is_exempt_from_login_verification: bool | None = None,
        is_password_reset_required: bool | None = None,
        enterprise: api_types.Enterprise | None = None,
        my_tags: list[str] | None = None,
        hostname: str | None = None,
        is_platform_access_only: bool | None = None,
        external_app_user_id: str | None = None,
        **kwargs,
    ) -> None:
        self._id = id
        self.type = type
        self.name = name
        self.login = login
        self.created_at = _parse_timestamp(created_at)
        self.modified_at = _parse_timestamp(modified_at)
        self.language = language
        self.timezone = timezone
        self.space_amount = space_amount
        self.space_used = space_used
        self.max_upload_size = max_upload_size
        self.status = status
        self.job_title = job_title
        self.phone = phone
        self.address = address
        self.avatar_url = avatar_url
        self.role = role
        self.tracking_codes = tracking_codes
        self.can_see_managed_users = can_see_managed_users
        self.is_sync_enabled = is_sync_enabled
        self.is_external_collab_restricted = is_external_collab_restricted
        self.is_exempt_from_device_limits = is_exempt_from_device_limits
        self.is_exempt_from_login_verification = is_exempt_from_login_verification
        self.is_password_reset_required = is_password_reset_required
        self.enterprise = enterprise
        self.my_tags = my_tags
        self.hostname = hostname
        self.is_platform_access_only = is_platform_access_only
        self.external_app_user_id = external_app_user_id
        self._kwargs = kwargs

    @property
    def id(self) -> api_types.UserId | None:
        """The id of the user, None until the user has been created."""
        return self._id

    @classmethod
    def me(cls, context: BoxContext, fields: Sequence[api_types.FieldName] | None = None) -> Self:
        """Returns the user the access token was generated for.

        Args:
            context: the box context for the user
            fields: the fields to fetch, empty for the default fields
        """
        response = context.users.api_get_current_user(fields)
        return cls._from_response(context, response)

    @classmethod
    def from_id(
        cls,
        context: BoxContext,
        user_id: api_types.UserId,
        fields: Sequence[api_types.FieldName] | None = None,
    ) -> Self:
        """Returns the user with the id.

        Args:
            context: the box context for the user
            user_id: the id of the user
            fields: the fields to fetch, empty for the default fields
        """
        response = context.users.api_get_user(user_id, fields)
        return cls._from_response(context, response)

    @classmethod
    def get_enterprise_users(
        cls,
        context: BoxContext,
        filter_term: str | None = None,
        offset: int = 0,
        limit: int = DEFAULT_USERS_PAGE_SIZE,
        fields: Sequence[api_types.FieldName] | None = None,
    ) -> PaginatedCollection[Self]:
        """Returns one page of the users in the enterprise.

        Args:
            context: the box context for the users
            filter_term: only return users whose name or login starts with this term
            offset: the index of the first user in the page
            limit: the maximum number of users in the page
            fields: the fields to fetch for every user, empty for the default fields
        """
        response = context.users.api_get_enterprise_users(filter_term, offset, limit, fields)
        return PaginatedCollection.from_response(context, response, cls)

    @classmethod
    def iter_enterprise_users(
        cls,
        context: BoxContext,
        filter_term: str | None = None,
        limit: int = DEFAULT_USERS_PAGE_SIZE,
        fields: Sequence[api_types.FieldName] | None = None,
    ) -> Iterator[Self]:
        """Iterates over all users in the enterprise (automatic pagination).

        Args:
            context: the box context for the users
            filter_term: only return users whose name or login starts with this term
            limit: the maximum number of users fetched per page
            fields: the fields to fetch for every user, empty for the default fields
        """
        offset = 0
        while True:
            page = cls.get_enterprise_users(context, filter_term, offset, limit, fields)
            yield from page
            if not page.has_more:
                break
            offset = page.next_offset

    def create_request(self, fields: Sequence[api_types.FieldName] | None = None) -> RequestEnvelope:
        """Builds the create request, see :py:meth:`User.create`."""
        return self._context.users.build_create_user_request(self.selective_payload(self.create_fields), fields)

    def create(self, fields: Sequence[api_types.FieldName] | None = None) -> Self:
        """Creates the user and returns the created user as a new instance.

        The request contains `login` and `name` and every field that was changed through a setter.

        Args:
            fields: the fields the returned user should contain, empty for the default fields
        """
        response = self._context.users.api_create_user(self.selective_payload(self.create_fields), fields)
        return self._from_response(self._context, response)

    def create_app_user_request(self, fields: Sequence[api_types.FieldName] | None = None) -> RequestEnvelope:
        """Builds the create app user request, see :py:meth:`User.create_app_user`."""
        return self._context.users.build_create_user_request(self._app_user_payload(), fields)

    def create_app_user(self, fields: Sequence[api_types.FieldName] | None = None) -> Self:
        """Creates an app user, a user that can only be accessed through the API.

        Like :py:meth:`User.create` with `is_platform_access_only` set to true,
        this instance is not modified.

        Args:
            fields: the fields the returned user should contain, empty for the default fields
        """
        response = self._context.users.api_create_user(self._app_user_payload(), fields)
        return self._from_response(self._context, response)

    def _app_user_payload(self) -> dict:
        payload = self.selective_payload(("name",))
        payload["is_platform_access_only"] = True
        return payload

    def update_request(
        self,
        fields: Sequence[api_types.FieldName] | None = None,
        user_id: api_types.UserId | None = None,
    ) -> RequestEnvelope:
        """Builds the update request, see :py:meth:`User.update`."""
        return self._context.users.build_update_user_request(
            self._target_id(user_id), self.selective_payload(), fields
        )

    def update(
        self,
        fields: Sequence[api_types.FieldName] | None = None,
        user_id: api_types.UserId | None = None,
    ) -> Self:
        """Sends the changed fields to the server and returns the updated user as a new instance.

        Fields that were not changed through a setter are not sent, and stay as they are on the server.

        Args:
            fields: the fields the returned user should contain, empty for the default fields
            user_id: the user to update, defaults to the id of this user
        """
        response = self._context.users.api_update_user(self._target_id(user_id), self.selective_payload(), fields)
        return self._from_response(self._context, response)

    def delete(self, notify: bool = False, force: bool = False, user_id: api_types.UserId | None = None) -> None:
        """Deletes the user.

        Args:
            notify: send a notification email to the user
            force: delete the user even if they still own files
            user_id: the user to delete, defaults to the id of this user
        """
        self._context.users.api_delete_user(self._target_id(user_id), notify=notify, force=force)

    def _target_id(self, user_id: api_types.UserId | None) -> api_types.UserId:
        if user_id := user_id or self._id:
            return user_id
        msg = "The user has no id, pass the user_id of the user to modify."
        raise ValueError(msg)

    def set_login(self, login: str) -> Self:
        """Sets the primary email address the user logs in with."""
        return self._set("login", login)

    def set_name(self, name: str) -> Self:
        """Sets the name of the user."""
        return self._set("name", name)

    def set_role(self, role: api_types.UserRole) -> Self:
        """Sets the role of the user in the enterprise."""
        assert_in_literal(role, api_types.UserRole, "role")
        return self._set("role", role)

    def set_language(self, language: str) -> Self:
        """Sets the language of the user, ISO 639-1 code."""
        return self._set("language", language)

    def set_is_sync_enabled(self, is_sync_enabled: bool) -> Self:
        return self._set("is_sync_enabled", is_sync_enabled)

    def set_job_title(self, job_title: str) -> Self:
        return self._set("job_title", job_title)

    def set_phone(self, phone: str) -> Self:
        return self._set("phone", phone)

    def set_address(self, address: str) -> Self:
        return self._set("address", address)

    def set_space_amount(self, space_amount: int) -> Self:
        """Sets the storage quota in bytes, -1 for unlimited."""
        return self._set("space_amount", space_amount)

    def set_tracking_codes(self, tracking_codes: list[api_types.TrackingCode]) -> Self:
        return self._set("tracking_codes", tracking_codes)

    def set_can_see_managed_users(self, can_see_managed_users: bool) -> Self:
        return self._set("can_see_managed_users", can_see_managed_users)

    def set_timezone(self, timezone: str) -> Self:
        """Sets the timezone of the user, e.g. "Europe/Berlin"."""
        return self._set("timezone", timezone)

    def set_is_exempt_from_device_limits(self, is_exempt_from_device_limits: bool) -> Self:
        return self._set("is_exempt_from_device_limits", is_exempt_from_device_limits)

    def set_is_exempt_from_login_verification(self, is_exempt_from_login_verification: bool) -> Self:
        return self._set("is_exempt_from_login_verification", is_exempt_from_login_verification)

    def set_is_external_collab_restricted(self, is_external_collab_restricted: bool) -> Self:
        return self._set("is_external_collab_restricted", is_external_collab_restricted)

    def set_status(self, status: api_types.UserStatus) -> Self:
        """Sets the status of the user account."""
        assert_in_literal(status, api_types.UserStatus, "status")
        return self._set("status", status)

    def set_is_password_reset_required(self, is_password_reset_required: bool) -> Self:
        return self._set("is_password_reset_required", is_password_reset_required)

    def set_is_platform_access_only(self, is_platform_access_only: bool) -> Self:
        return self._set("is_platform_access_only", is_platform_access_only)

    def set_external_app_user_id(self, external_app_user_id: str) -> Self:
        """Sets the id of the user in an external identity provider, only for app users."""
        return self._set("external_app_user_id", external_app_user_id)

    def _get_repr_dict(self) -> dict:
        d = super()._get_repr_dict()
        if self._id is not None:
            d = {"id": self._id, **d}
        if c := d.get("created_at"):
            d["created_at"] = c.isoformat()
        if m := d.get("modified_at"):
            d["modified_at"] = m.isoformat()
        return d
