"""Implementation of the Box users API."""

from __future__ import annotations

import warnings
from http import HTTPStatus
from typing import TYPE_CHECKING
from urllib.parse import quote

from pyboxer.clients.api_client import APIClient
from pyboxer.utils.clients import build_fields_query_params

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pyboxer.clients.request import RequestEnvelope, ResponseEnvelope
    from pyboxer.utils import api_types

DEFAULT_USERS_PAGE_SIZE = 100
MAXIMUM_USERS_PAGE_SIZE = 1000


def _user_path(user_id: api_types.UserId) -> str:
    # the id is always exactly one path segment
    return "users/" + quote(str(user_id), safe="")


class UsersClient(APIClient):
    """Requests for the `users` endpoints.

    Every `api_*` method has a `build_*_request` counterpart which only builds the request.
    """

    def build_get_current_user_request(self, fields: Sequence[api_types.FieldName] | None = None) -> RequestEnvelope:
        """Builds the request for :py:meth:`UsersClient.api_get_current_user`."""
        return self.build_request("GET", "users/me", params=build_fields_query_params(fields))

    def api_get_current_user(
        self, fields: Sequence[api_types.FieldName] | None = None, **kwargs
    ) -> ResponseEnvelope:
        """Returns the user the access token was generated for.

        Args:
            fields: the fields the response should contain, empty for the default fields
            **kwargs: gets passed to :py:meth:`APIClient.send`
        """
        return self.send(self.build_get_current_user_request(fields), HTTPStatus.OK, **kwargs)

    def build_get_user_request(
        self, user_id: api_types.UserId, fields: Sequence[api_types.FieldName] | None = None
    ) -> RequestEnvelope:
        """Builds the request for :py:meth:`UsersClient.api_get_user`."""
        return self.build_request("GET", _user_path(user_id), params=build_fields_query_params(fields))

    def api_get_user(
        self, user_id: api_types.UserId, fields: Sequence[api_types.FieldName] | None = None, **kwargs
    ) -> ResponseEnvelope:
        """Returns a user of the enterprise, requires enterprise administration authorization.

        Args:
            user_id: the id of the user
            fields: the fields the response should contain, empty for the default fields
            **kwargs: gets passed to :py:meth:`APIClient.send`
        """
        return self.send(self.build_get_user_request(user_id, fields), HTTPStatus.OK, **kwargs)

    def build_create_user_request(
        self, body: dict, fields: Sequence[api_types.FieldName] | None = None
    ) -> RequestEnvelope:
        """Builds the request for :py:meth:`UsersClient.api_create_user`."""
        return self.build_request("POST", "users", params=build_fields_query_params(fields), json=body)

    def api_create_user(
        self, body: dict, fields: Sequence[api_types.FieldName] | None = None, **kwargs
    ) -> ResponseEnvelope:
        """Creates a user (or an app user, if the body contains `is_platform_access_only`).

        Args:
            body: the user json, only the fields in here will be sent
            fields: the fields the response should contain, empty for the default fields
            **kwargs: gets passed to :py:meth:`APIClient.send`

        The response contains the created user:

        .. code-block:: python

            {
                "type": "user",
                "id": "11446498",
                "name": "Aaron Levie",
                "login": "ceo@example.com",
                "created_at": "2012-12-12T10:53:43-08:00",
                "modified_at": "2012-12-12T10:53:43-08:00",
                "status": "active",
                ...
            }

        """
        return self.send(self.build_create_user_request(body, fields), HTTPStatus.CREATED, **kwargs)

    def build_update_user_request(
        self, user_id: api_types.UserId, body: dict, fields: Sequence[api_types.FieldName] | None = None
    ) -> RequestEnvelope:
        """Builds the request for :py:meth:`UsersClient.api_update_user`."""
        return self.build_request("PUT", _user_path(user_id), params=build_fields_query_params(fields), json=body)

    def api_update_user(
        self,
        user_id: api_types.UserId,
        body: dict,
        fields: Sequence[api_types.FieldName] | None = None,
        **kwargs,
    ) -> ResponseEnvelope:
        """Updates a user, fields missing in the body are left unchanged.

        Args:
            user_id: the id of the user to update
            body: the changed fields
            fields: the fields the response should contain, empty for the default fields
            **kwargs: gets passed to :py:meth:`APIClient.send`
        """
        return self.send(self.build_update_user_request(user_id, body, fields), HTTPStatus.OK, **kwargs)

    def build_delete_user_request(
        self, user_id: api_types.UserId, notify: bool = False, force: bool = False
    ) -> RequestEnvelope:
        """Builds the request for :py:meth:`UsersClient.api_delete_user`."""
        return self.build_request("DELETE", _user_path(user_id), params=[("notify", notify), ("force", force)])

    def api_delete_user(
        self, user_id: api_types.UserId, notify: bool = False, force: bool = False, **kwargs
    ) -> ResponseEnvelope:
        """Deletes a user.

        Args:
            user_id: the id of the user to delete
            notify: send a notification email to the user
            force: delete the user even if they still own files
            **kwargs: gets passed to :py:meth:`APIClient.send`
        """
        return self.send(self.build_delete_user_request(user_id, notify, force), HTTPStatus.NO_CONTENT, **kwargs)

    def build_get_enterprise_users_request(
        self,
        filter_term: str | None = None,
        offset: int = 0,
        limit: int = DEFAULT_USERS_PAGE_SIZE,
        fields: Sequence[api_types.FieldName] | None = None,
    ) -> RequestEnvelope:
        """Builds the request for :py:meth:`UsersClient.api_get_enterprise_users`."""
        if offset < 0:
            msg = f"Parameter `offset` ({offset}) must not be negative."
            raise ValueError(msg)
        if limit <= 0:
            msg = f"Parameter `limit` ({limit}) must be greater than 0."
            raise ValueError(msg)
        if limit > MAXIMUM_USERS_PAGE_SIZE:
            warnings.warn(
                f"Parameter `limit` ({limit}) is greater than the maximum ({MAXIMUM_USERS_PAGE_SIZE}). "
                f"Defaulting to {MAXIMUM_USERS_PAGE_SIZE}."
            )
            limit = MAXIMUM_USERS_PAGE_SIZE

        params = [("filter_term", filter_term or None), ("offset", offset), ("limit", limit)]
        params.extend(build_fields_query_params(fields))
        return self.build_request("GET", "users", params=params)

    def api_get_enterprise_users(
        self,
        filter_term: str | None = None,
        offset: int = 0,
        limit: int = DEFAULT_USERS_PAGE_SIZE,
        fields: Sequence[api_types.FieldName] | None = None,
        **kwargs,
    ) -> ResponseEnvelope:
        """Returns one page of the users in the enterprise.

        Args:
            filter_term: only return users whose name or login starts with this term
            offset: the index of the first user in the page
            limit: the maximum number of users in the page
            fields: the fields each user should contain, empty for the default fields
            **kwargs: gets passed to :py:meth:`APIClient.send`

        Response with the following structure:

        .. code-block:: python

            {
                "total_count": 150,
                "entries": [{"type": "user", "id": "...", ...}, ...],
                "offset": 0,
                "limit": 100,
            }

        """
        return self.send(
            self.build_get_enterprise_users_request(filter_term, offset, limit, fields), HTTPStatus.OK, **kwargs
        )
