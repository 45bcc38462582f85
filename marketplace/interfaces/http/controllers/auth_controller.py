# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request

from marketplace.application.use_cases.users.logout_user import LogoutAllUseCase, LogoutUserUseCase
from marketplace.interfaces.http.dto.auth import AuthStatusDTO, AuthSuccessDTO, LogoutAllResponseDTO
from marketplace.interfaces.http.security import get_session_guard, login_required
from marketplace.shared.logging import logger
from marketplace.shared.middleware.csrf import SESSION_COOKIE, csrf_protect, get_csrf_guard
from marketplace.shared.middleware.request_logger import current_request_context


class AuthController:
    def __init__(
        self,
        *,
        logout_use_case: LogoutUserUseCase,
        logout_all_use_case: LogoutAllUseCase,
    ) -> None:
        self._logout_use_case = logout_use_case
        self._logout_all_use_case = logout_all_use_case

    @login_required
    def is_auth(self) -> tuple[Response, int]:
        return jsonify(AuthStatusDTO(user_id=g.user_id).model_dump()), 200

    def _signed_out(self, payload: dict) -> Response:
        response = jsonify(payload)
        get_session_guard().clear_session_cookie(response)
        csrf = get_csrf_guard()
        csrf.attach(response, csrf.issue(""))
        return response

    @csrf_protect
    def logout(self) -> tuple[Response, int]:
        token = request.cookies.get(SESSION_COOKIE)
        if not token:
            return self._signed_out(AuthSuccessDTO().model_dump()), 200

        self._logout_use_case.execute(token, ctx=current_request_context())
        logger.info("auth.logout: ok")
        return self._signed_out(AuthSuccessDTO().model_dump()), 200

    @csrf_protect
    @login_required
    def logout_all(self) -> tuple[Response, int]:
        revoked = self._logout_all_use_case.execute(g.user_id, ctx=current_request_context())
        logger.info(f"auth.logout_all: ok user_id={g.user_id} revoked={revoked}")
        return self._signed_out(LogoutAllResponseDTO(revoked=revoked).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")
        bp.add_url_rule("/isAuth", view_func=self.is_auth, methods=["GET"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/logoutAll", view_func=self.logout_all, methods=["POST"])
        return bp
