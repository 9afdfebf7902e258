"""Global test fixtures."""

import os

import logfire

# Set JWT secret and an in-memory database before any test modules import Config
# This must happen at module load time, not in a fixture
os.environ.setdefault("ROLEGATE_AUTH__JWT__SECRET", "test-secret-for-unit-tests-min-32")
os.environ.setdefault("ROLEGATE_DATABASE__URL", "sqlite+aiosqlite://")

logfire.configure(send_to_logfire=False, console=False)
