# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Response, jsonify

from .base import AppError

INTERNAL_ERROR_CODE = "internal_error"


def error_response(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def internal_error_response() -> tuple[Response, HTTPStatus]:
    return jsonify({"error": INTERNAL_ERROR_CODE}), HTTPStatus.INTERNAL_SERVER_ERROR


__all__ = ["INTERNAL_ERROR_CODE", "error_response", "internal_error_response"]
