# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request

from marketplace.application.use_cases.users.get_profile import GetProfileUseCase
from marketplace.application.use_cases.users.login_user import LoginUserUseCase
from marketplace.application.use_cases.users.register_user import RegisterUserUseCase
from marketplace.interfaces.http.dto.auth import LoginRequestDTO, LoginResponseDTO, RegisterRequestDTO
from marketplace.interfaces.http.dto.users import ProfileDTO
from marketplace.interfaces.http.security import get_session_guard, login_required
from marketplace.shared.errors import parse_payload
from marketplace.shared.logging import logger
from marketplace.shared.middleware.csrf import get_csrf_guard
from marketplace.shared.middleware.request_logger import current_request_context


class UsersController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        get_profile_use_case: GetProfileUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._get_profile_use_case = get_profile_use_case

    def _signed_in(self, response: Response, token: str, csrf_token: str) -> None:
        get_session_guard().set_session_cookie(response, token)
        get_csrf_guard().attach(response, csrf_token)

    def register(self) -> tuple[Response, int]:
        dto = parse_payload(RegisterRequestDTO, request.get_json(silent=True))

        user, token = self._register_use_case.execute(
            dto.login,
            dto.password,
            dto.first_name,
            dto.last_name,
            ctx=current_request_context(),
        )
        response = jsonify(ProfileDTO.from_user(user).model_dump(mode="json"))
        self._signed_in(response, token, get_csrf_guard().issue(token))
        logger.info(f"users.register: ok user_id={user.id}")
        return response, 200

    def login(self) -> tuple[Response, int]:
        dto = parse_payload(LoginRequestDTO, request.get_json(silent=True))

        user_id, token = self._login_use_case.execute(
            dto.login, dto.password, ctx=current_request_context()
        )
        csrf_token = get_csrf_guard().issue(token)
        response = jsonify(LoginResponseDTO(token=csrf_token).model_dump())
        self._signed_in(response, token, csrf_token)
        logger.info(f"users.login: ok user_id={user_id}")
        return response, 200

    @login_required
    def profile(self, user_id: int) -> tuple[Response, int]:
        user = self._get_profile_use_case.execute(g.user_id, user_id)
        return jsonify(ProfileDTO.from_user(user).model_dump(mode="json")), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("users", __name__, url_prefix="/api/v1/user")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/profile/<int:user_id>", view_func=self.profile, methods=["GET"])
        return bp
