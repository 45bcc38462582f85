# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

import httpx

from marketplace.application.services.password_hashing import Argon2CredentialHasher
from marketplace.application.use_cases.listings import (
    CreateListingUseCase,
    GetListingUseCase,
    ListListingsUseCase,
    ListUserListingsUseCase,
)
from marketplace.application.use_cases.users import (
    GetProfileUseCase,
    LoginUserUseCase,
    LogoutAllUseCase,
    LogoutUserUseCase,
    RegisterUserUseCase,
    ResolveSessionUseCase,
)
from marketplace.domain.sessions.store import KeyValueStore
from marketplace.domain.users.repositories import PasswordHasher
from marketplace.infrastructure.db.session import Database
from marketplace.infrastructure.health import HealthChecker
from marketplace.infrastructure.image_admission import RemoteImageAdmission
from marketplace.infrastructure.kv import build_kv_store
from marketplace.infrastructure.repositories import (
    SqlAlchemyListingRepository,
    SqlAlchemyUserRepository,
)
from marketplace.infrastructure.sessions.session_store import SessionStore
from marketplace.interfaces.http.controllers.auth_controller import AuthController
from marketplace.interfaces.http.controllers.listings_controller import ListingsController
from marketplace.interfaces.http.controllers.misc_controller import MiscController
from marketplace.interfaces.http.controllers.users_controller import UsersController
from marketplace.interfaces.http.security import SessionGuard
from marketplace.shared.config import AppConfig
from marketplace.shared.middleware.csrf import CSRFGuard


class Container:
    def __init__(
        self,
        config: AppConfig,
        *,
        kv_store: KeyValueStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        self.config = config
        self._kv_store = kv_store
        self._transport = transport
        self._password_hasher = password_hasher

    @cached_property
    def database(self) -> Database:
        return Database.from_config(self.config.database)

    @cached_property
    def kv_store(self) -> KeyValueStore:
        return self._kv_store or build_kv_store(self.config)

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return self._password_hasher or Argon2CredentialHasher()

    @cached_property
    def session_store(self) -> SessionStore:
        return SessionStore(
            self.kv_store,
            ttl_seconds=self.config.session.ttl_seconds,
            max_token_attempts=self.config.session.max_token_attempts,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def listing_repository(self) -> SqlAlchemyListingRepository:
        return SqlAlchemyListingRepository(self.database)

    @cached_property
    def image_admission(self) -> RemoteImageAdmission:
        return RemoteImageAdmission(self.config.images, transport=self._transport)

    @cached_property
    def csrf_guard(self) -> CSRFGuard:
        return CSRFGuard.from_config(
            self.config.secret_key,
            self.config.security,
            max_age=self.config.session.ttl_seconds,
        )

    @cached_property
    def session_guard(self) -> SessionGuard:
        return SessionGuard(
            resolve=ResolveSessionUseCase(sessions=self.session_store),
            security=self.config.security,
            ttl_seconds=self.config.session.ttl_seconds,
        )

    @cached_property
    def health_checker(self) -> HealthChecker:
        return HealthChecker(db=self.database, kv_store=self.kv_store)

    # Use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            sessions=self.session_store,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_store,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_store)

    @cached_property
    def logout_all_use_case(self) -> LogoutAllUseCase:
        return LogoutAllUseCase(sessions=self.session_store)

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(users=self.user_repository)

    @cached_property
    def create_listing_use_case(self) -> CreateListingUseCase:
        return CreateListingUseCase(
            listings=self.listing_repository,
            images=self.image_admission,
            image_timeout=self.config.images.timeout,
        )

    # Controllers

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            get_profile_use_case=self.get_profile_use_case,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            logout_use_case=self.logout_user_use_case,
            logout_all_use_case=self.logout_all_use_case,
        )

    @cached_property
    def listings_controller(self) -> ListingsController:
        return ListingsController(
            create_use_case=self.create_listing_use_case,
            get_use_case=GetListingUseCase(listings=self.listing_repository),
            list_use_case=ListListingsUseCase(listings=self.listing_repository),
            list_user_use_case=ListUserListingsUseCase(listings=self.listing_repository),
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(
            health=self.health_checker,
            metrics_enabled=self.config.observability.metrics_enabled,
        )
