"""Pytest configuration and shared fixtures.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
on the import path. The tree-sitter gateway is stateless, so one instance is
shared across the session.
"""

from collections.abc import Callable

import pytest

from ui_compliance.domain.config import Configuration
from ui_compliance.domain.entities import FileKind
from ui_compliance.domain.rules import ValidationContext
from ui_compliance.infrastructure.gateways.tree_sitter_gateway import TreeSitterGateway
from ui_compliance.use_cases.validation_engine import ValidationEngine


@pytest.fixture(scope="session")
def parser() -> TreeSitterGateway:
    return TreeSitterGateway()


@pytest.fixture
def strict_config() -> Configuration:
    return Configuration()


@pytest.fixture
def engine(parser: TreeSitterGateway) -> ValidationEngine:
    """Engine with the strict configuration: every rule enabled."""
    return ValidationEngine(parser=parser)


@pytest.fixture
def make_context(parser: TreeSitterGateway) -> Callable[..., ValidationContext]:
    """Build a ValidationContext the way the engine does, for evaluating one rule in isolation."""

    def _make(
        code: str,
        file_path: str = "Component.tsx",
        config: Configuration | None = None,
    ) -> ValidationContext:
        file_kind = FileKind.from_path(file_path)
        ast = parser.parse(code, file_kind, file_path) if file_kind.is_parseable else None
        return ValidationContext(
            code=code,
            file_path=file_path,
            file_kind=file_kind,
            ast=ast,
            config=config or Configuration(),
        )

    return _make
