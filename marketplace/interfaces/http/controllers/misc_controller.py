# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from marketplace.infrastructure.health import HealthChecker


class MiscController:
    def __init__(self, *, health: HealthChecker, metrics_enabled: bool = True) -> None:
        self._health = health
        self._metrics_enabled = metrics_enabled

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/v1/health", view_func=self.health, methods=["GET"])
        if self._metrics_enabled:
            bp.add_url_rule("/metrics", view_func=self.metrics, methods=["GET"])
        return bp

    def health(self):
        status = self._health.check()
        return jsonify(status), 200 if status["ok"] else 503

    def metrics(self) -> Response:
        return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
