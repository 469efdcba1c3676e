"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from userservice.application.use_cases.users import (CreateUserUseCase,
                                                     DeleteUserUseCase,
                                                     ListUsersUseCase,
                                                     UpdateUserUseCase)
from userservice.infrastructure.db import create_db_engine, create_session_factory
from userservice.infrastructure.notifier import PubSubNotifier
from userservice.infrastructure.repositories.users import SqlAlchemyUserRepository
from userservice.interfaces.http.controllers import MiscController, UsersController
from userservice.shared.config import AppConfig
from userservice.shared.logging import logger


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def engine(self) -> Engine:
        return create_db_engine(
            self.config.database,
            statement_timeout=self.config.server.request_timeout,
        )

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return create_session_factory(self.engine)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def notifier(self) -> PubSubNotifier | None:
        if not self.config.pubsub.enabled:
            logger.info("pubsub: notifications disabled")
            return None
        logger.info(f"pubsub: notifications enabled topic={self.config.pubsub.topic}")
        return PubSubNotifier.from_config(self.config.pubsub)

    @cached_property
    def create_user_use_case(self) -> CreateUserUseCase:
        return CreateUserUseCase(users=self.user_repository, notifier=self.notifier)

    @cached_property
    def update_user_use_case(self) -> UpdateUserUseCase:
        return UpdateUserUseCase(users=self.user_repository, notifier=self.notifier)

    @cached_property
    def delete_user_use_case(self) -> DeleteUserUseCase:
        return DeleteUserUseCase(users=self.user_repository, notifier=self.notifier)

    @cached_property
    def list_users_use_case(self) -> ListUsersUseCase:
        return ListUsersUseCase(users=self.user_repository)

    @cached_property
    def users_controller(self) -> UsersController:
        return UsersController(
            create_user=self.create_user_use_case,
            update_user=self.update_user_use_case,
            delete_user=self.delete_user_use_case,
            list_users=self.list_users_use_case,
            request_timeout=self.config.server.request_timeout,
            url_prefix=self.config.server.api_prefix,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)

    def close(self) -> None:
        notifier = self.__dict__.get("notifier")
        if notifier is not None:
            notifier.close()
        engine = self.__dict__.get("engine")
        if engine is not None:
            engine.dispose()
        logger.info("container: resources released")


__all__ = ["Container"]
