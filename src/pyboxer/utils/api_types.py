"""Defines types for the Box API, for better readability of the code."""

from __future__ import annotations

from typing import Literal, TypedDict, get_args


def assert_in_literal(option, literal, variable_name) -> None:  # noqa: ANN001
    """Raise a TypeError when the passed option is not contained in the literal.

    Args:
        option: An option from the list of options from `literal`
        literal: The literal variable defining all the valid options
        variable_name: The name of the literal variable
    """
    options = get_args(literal)

    if option not in options:
        msg = f"'{option}' is not a valid option for {variable_name}, valid options are {options}"
        raise TypeError(msg)


UserId = str
"""The identifier of a Box user."""

EnterpriseId = str
"""The identifier of a Box enterprise."""

FieldName = str
"""The name of a field in a Box API object, used for field projection."""

UserStatus = Literal["active", "inactive", "cannot_delete_edit", "cannot_delete_edit_upload"]
"""The status of a user account."""

UserRole = Literal["admin", "coadmin", "user"]
"""The role of a user in the enterprise."""

EnterpriseType = Literal["enterprise", "user"]
"""The type of the enterprise object attached to a user."""

UserField = Literal[
    "login",
    "name",
    "role",
    "language",
    "is_sync_enabled",
    "job_title",
    "phone",
    "address",
    "space_amount",
    "tracking_codes",
    "can_see_managed_users",
    "timezone",
    "is_exempt_from_device_limits",
    "is_exempt_from_login_verification",
    "is_external_collab_restricted",
    "status",
    "is_password_reset_required",
    "is_platform_access_only",
    "external_app_user_id",
]
"""User fields that can be changed through a setter and are tracked for create/update requests."""

USER_ALL_FIELDS: tuple[FieldName, ...] = (
    "type",
    "id",
    "name",
    "login",
    "created_at",
    "modified_at",
    "language",
    "timezone",
    "space_amount",
    "space_used",
    "max_upload_size",
    "status",
    "job_title",
    "phone",
    "address",
    "avatar_url",
    "role",
    "tracking_codes",
    "can_see_managed_users",
    "is_sync_enabled",
    "is_external_collab_restricted",
    "is_exempt_from_device_limits",
    "is_exempt_from_login_verification",
    "enterprise",
    "my_tags",
    "hostname",
    "is_platform_access_only",
    "external_app_user_id",
)
"""All fields of a user, can be passed as field projection to get every field."""


class Enterprise(TypedDict):
    """The enterprise a user belongs to."""

    type: EnterpriseType
    id: EnterpriseId
    name: str


class TrackingCode(TypedDict):
    """A custom name/value pair attached to a user."""

    type: Literal["tracking_code"]
    name: str
    value: str

