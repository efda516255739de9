"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from portfolio_admin.application.services.credential_store import CredentialStore
from portfolio_admin.application.use_cases.admin.rate_limits import (
    ClearRateLimitUseCase,
    GetRateLimitStatsUseCase,
)
from portfolio_admin.application.use_cases.admin.run_maintenance import RunMaintenanceUseCase
from portfolio_admin.application.use_cases.auth.authorize_request import AuthorizeRequestUseCase
from portfolio_admin.application.use_cases.auth.change_password import ChangePasswordUseCase
from portfolio_admin.application.use_cases.auth.login_user import LoginUserUseCase
from portfolio_admin.application.use_cases.auth.logout_user import LogoutUserUseCase
from portfolio_admin.application.use_cases.content.delete_content import (
    DeleteContentUseCase,
    ListContentUseCase,
)
from portfolio_admin.domain.clock import Clock, utc_now
from portfolio_admin.domain.login_attempts.entities import LimiterPolicy
from portfolio_admin.infrastructure.auth.login_attempts import LoginAttemptLimiter
from portfolio_admin.infrastructure.auth.password_hashing import WerkzeugPasswordHasher
from portfolio_admin.infrastructure.auth.tokens import JoseTokenSigner
from portfolio_admin.infrastructure.auth_middleware import AuthGuard
from portfolio_admin.infrastructure.repositories.json_login_attempt_repository import (
    JsonLoginAttemptRepository,
)
from portfolio_admin.infrastructure.repositories.json_user_repository import (
    JsonSessionRepository,
    JsonUserRepository,
)
from portfolio_admin.infrastructure.storage import LocalContentStorage
from portfolio_admin.interfaces.http.controllers.admin_controller import AdminController
from portfolio_admin.interfaces.http.controllers.auth_controller import AuthController
from portfolio_admin.interfaces.http.controllers.content_controller import ContentController
from portfolio_admin.interfaces.http.controllers.misc_controller import MiscController
from portfolio_admin.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig, *, clock: Clock = utc_now) -> None:
        self._config = config
        self._clock = clock

    @property
    def config(self) -> AppConfig:
        return self._config

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_signer(self) -> JoseTokenSigner:
        return JoseTokenSigner(self._config.jwt_secret, self._config.auth.jwt_algorithm)

    @cached_property
    def user_repository(self) -> JsonUserRepository:
        return JsonUserRepository(self._config.storage.users_file)

    @cached_property
    def session_repository(self) -> JsonSessionRepository:
        return JsonSessionRepository(self._config.storage.sessions_file)

    @cached_property
    def login_attempt_repository(self) -> JsonLoginAttemptRepository:
        return JsonLoginAttemptRepository(self._config.storage.login_attempts_file)

    @cached_property
    def credential_store(self) -> CredentialStore:
        return CredentialStore(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
            token_signer=self.token_signer,
            session_ttl=self._config.auth.session_ttl,
            clock=self._clock,
        )

    @cached_property
    def limiter_policy(self) -> LimiterPolicy:
        limits = self._config.login_limit
        return LimiterPolicy(
            max_attempts=limits.max_attempts,
            window=timedelta(minutes=limits.window_minutes),
            block_duration=timedelta(minutes=limits.block_minutes),
            cleanup_interval=timedelta(seconds=limits.cleanup_interval),
        )

    @cached_property
    def login_limiter(self) -> LoginAttemptLimiter:
        return LoginAttemptLimiter(
            self.login_attempt_repository, self.limiter_policy, clock=self._clock
        )

    @cached_property
    def content_storage(self) -> LocalContentStorage:
        return LocalContentStorage(self._config.storage.content_dir)

    @cached_property
    def auth_guard(self) -> AuthGuard:
        return AuthGuard(
            authorize=AuthorizeRequestUseCase(store=self.credential_store),
            cookie_name=self._config.auth.cookie_name,
            debug_mode=self._config.debug_logging,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=LoginUserUseCase(
                store=self.credential_store, limiter=self.login_limiter
            ),
            logout_use_case=LogoutUserUseCase(store=self.credential_store),
            change_password_use_case=ChangePasswordUseCase(store=self.credential_store),
            guard=self.auth_guard,
            auth_config=self._config.auth,
            security_config=self._config.security,
        )

    @cached_property
    def content_controller(self) -> ContentController:
        return ContentController(
            delete_content=DeleteContentUseCase(storage=self.content_storage),
            list_content=ListContentUseCase(storage=self.content_storage),
            guard=self.auth_guard,
        )

    @cached_property
    def admin_controller(self) -> AdminController:
        return AdminController(
            get_rate_limit_stats=GetRateLimitStatsUseCase(limiter=self.login_limiter),
            clear_rate_limit=ClearRateLimitUseCase(limiter=self.login_limiter),
            run_maintenance=RunMaintenanceUseCase(
                store=self.credential_store, limiter=self.login_limiter
            ),
            guard=self.auth_guard,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(guard=self.auth_guard)
