"""Tests for startup validation of handler __auth__ declarations."""

import pytest

from rolegate.domain.auth.model.identity import Identity
from rolegate.domain.auth.model.role_level import RoleLevel
from rolegate.domain.auth.service.gatekeeper import Gatekeeper
from rolegate.domain.shared.authorization.policy import at_least, public
from rolegate.domain.shared.authorization.startup import _check_handler_class, validate_all_handlers
from rolegate.domain.shared.command import Command, CommandHandler, Result
from rolegate.domain.shared.error import ConfigurationError
from rolegate.domain.shared.query import Query, QueryHandler
from rolegate.domain.shared.query import Result as QueryResult


class TestStartupValidation:
    def test_validation_catches_missing_auth_on_command_handler(self) -> None:
        class UnprotectedCommand(Command):
            pass

        class UnprotectedResult(Result):
            pass

        class UnprotectedHandler(CommandHandler[UnprotectedCommand, UnprotectedResult]):
            async def run(self, cmd: UnprotectedCommand) -> UnprotectedResult:
                return UnprotectedResult()

        with pytest.raises(ConfigurationError, match="UnprotectedHandler"):
            _check_handler_class(UnprotectedHandler)

    def test_validation_catches_policy_without_identity(self) -> None:
        class BlindQuery(Query):
            pass

        class BlindResult(QueryResult):
            pass

        class BlindHandler(QueryHandler[BlindQuery, BlindResult]):
            __auth__ = at_least(RoleLevel.MANAGER)
            gatekeeper: Gatekeeper

            async def run(self, cmd: BlindQuery) -> BlindResult:
                return BlindResult()

        with pytest.raises(ConfigurationError, match="identity"):
            _check_handler_class(BlindHandler)

    def test_validation_passes_for_protected_handler(self) -> None:
        class ProtectedCommand(Command):
            pass

        class ProtectedResult(Result):
            pass

        class ProtectedHandler(CommandHandler[ProtectedCommand, ProtectedResult]):
            __auth__ = at_least(RoleLevel.SENIOR)
            identity: Identity
            gatekeeper: Gatekeeper

            async def run(self, cmd: ProtectedCommand) -> ProtectedResult:
                return ProtectedResult()

        _check_handler_class(ProtectedHandler)

    def test_validation_passes_for_public_handler(self) -> None:
        class OpenQuery(Query):
            pass

        class OpenResult(QueryResult):
            pass

        class OpenHandler(QueryHandler[OpenQuery, OpenResult]):
            __auth__ = public()

            async def run(self, cmd: OpenQuery) -> OpenResult:
                return OpenResult()

        _check_handler_class(OpenHandler)

    def test_all_application_handlers_are_declared(self) -> None:
        # Importing the app registers every handler
        import rolegate.application.api.rest.app  # noqa: F401

        validate_all_handlers()
