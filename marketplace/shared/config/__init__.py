# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    AppConfig,
    DatabaseConfig,
    ImageAdmissionConfig,
    ObservabilityConfig,
    RedisConfig,
    SecurityConfig,
    SessionConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "ImageAdmissionConfig",
    "ObservabilityConfig",
    "RedisConfig",
    "SecurityConfig",
    "SessionConfig",
    "load_config",
]
