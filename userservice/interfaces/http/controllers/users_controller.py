# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from uuid import UUID

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from userservice.application.use_cases.users.create_user import CreateUserUseCase
from userservice.application.use_cases.users.delete_user import DeleteUserUseCase
from userservice.application.use_cases.users.list_users import ListUsersUseCase
from userservice.application.use_cases.users.update_user import UpdateUserUseCase
from userservice.infrastructure.resilience import run_with_deadline
from userservice.interfaces.http.dto.users import (ListUsersQueryDTO, OkDTO,
                                                   UserDTO, UserPageDTO,
                                                   UserPayloadDTO)
from userservice.shared.errors.base import InvalidUserIdError
from userservice.shared.errors.validation import raise_validation_error
from userservice.shared.logging import logger

DEFAULT_REQUEST_TIMEOUT = 10.0


def _parse_user_id(raw: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError as exc:
        raise InvalidUserIdError(raw) from exc


def _read_payload() -> UserPayloadDTO:
    try:
        return UserPayloadDTO.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


class UsersController:
    def __init__(
        self,
        *,
        create_user: CreateUserUseCase,
        update_user: UpdateUserUseCase,
        delete_user: DeleteUserUseCase,
        list_users: ListUsersUseCase,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        url_prefix: str = "",
    ) -> None:
        self._create_user = create_user
        self._update_user = update_user
        self._delete_user = delete_user
        self._list_users = list_users
        self._timeout = request_timeout
        self._url_prefix = url_prefix

    def create_user(self) -> tuple[Response, int]:
        dto = _read_payload()
        user = run_with_deadline(
            self._create_user.execute, dto.to_domain(), timeout=self._timeout
        )
        logger.info(f"http.users: created user_id={user.id}")
        return jsonify(UserDTO.model_validate(user).model_dump(mode="json")), 201

    def list_users(self) -> tuple[Response, int]:
        # ``limit=`` and other empty parameters mean "not set".
        params = {key: value for key, value in request.args.items() if value != ""}
        try:
            query = ListUsersQueryDTO.model_validate(params)
        except ValidationError as exc:
            raise_validation_error(exc)

        page = run_with_deadline(
            self._list_users.execute, query.to_domain(), timeout=self._timeout
        )
        payload = UserPageDTO.model_validate(page).model_dump(mode="json", exclude_none=True)
        return jsonify(payload), 200

    def update_user(self, user_id: str) -> tuple[Response, int]:
        parsed_id = _parse_user_id(user_id)
        dto = _read_payload()
        run_with_deadline(
            self._update_user.execute, dto.to_domain(parsed_id), timeout=self._timeout
        )
        logger.info(f"http.users: updated user_id={parsed_id}")
        return jsonify(OkDTO().model_dump()), 200

    def delete_user(self, user_id: str) -> tuple[Response, int]:
        parsed_id = _parse_user_id(user_id)
        run_with_deadline(self._delete_user.execute, parsed_id, timeout=self._timeout)
        logger.info(f"http.users: deleted user_id={parsed_id}")
        return jsonify(OkDTO().model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix=f"{self._url_prefix}/users")
        bp.add_url_rule("", view_func=self.create_user, methods=["POST"])
        bp.add_url_rule("", view_func=self.list_users, methods=["GET"])
        bp.add_url_rule("/<user_id>", view_func=self.update_user, methods=["PUT"])
        bp.add_url_rule("/<user_id>", view_func=self.delete_user, methods=["DELETE"])
        return bp
