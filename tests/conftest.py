"""
Shared fixtures for the css-guard test suite.

Provides test fixtures for:
- A rule engine with every discovered rule loaded
- Linting in-memory sources and filtering by rule id
- Temporary projects with stylesheets on disk
"""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from css_guard.analysis import parse_stylesheet
from css_guard.guard_logging import ROOT_LOGGER_NAME
from css_guard.models import Violation
from css_guard.rules.config import LintConfig, LintConfigLoader
from css_guard.rules.engine import RuleEngine, create_rule_engine


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path_factory, monkeypatch) -> Path:
    """Point the global config directory at an empty temporary directory."""
    global_dir = tmp_path_factory.mktemp("global_config")
    monkeypatch.setattr(LintConfigLoader, "GLOBAL_CONFIG_DIR", global_dir)
    return global_dir


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so streams don't leak between tests."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(scope="session")
def engine() -> RuleEngine:
    """Rule engine with default configuration and all rules loaded."""
    return create_rule_engine(LintConfig())


@pytest.fixture()
def lint(engine) -> Callable[..., list[Violation]]:
    """Lint a source string and return every violation.

    Pass ``config`` to lint with a non-default configuration.
    """

    def _lint(
        source: str,
        file_path: str = "test.scss",
        config: LintConfig | None = None,
    ) -> list[Violation]:
        rule_engine = engine if config is None else create_rule_engine(config)
        return rule_engine.run(parse_stylesheet(source, file_path)).violations

    return _lint


@pytest.fixture()
def violations_for(lint) -> Callable[..., list[Violation]]:
    """Lint a source string and keep only violations of one rule."""

    def _violations_for(
        source: str,
        rule_id: str,
        file_path: str = "test.scss",
        config: LintConfig | None = None,
    ) -> list[Violation]:
        return [v for v in lint(source, file_path, config) if v.rule_id == rule_id]

    return _violations_for


# ---------------------------------------------------------------------------
# Temporary project fixture
# ---------------------------------------------------------------------------


@pytest.fixture()
def style_project(tmp_path) -> Path:
    """Create a temporary project with a mix of clean and dirty stylesheets."""
    (tmp_path / "styles").mkdir()
    (tmp_path / "styles" / "menu.scss").write_text(
        ".menu {\n"
        "  position: relative;\n"
        "  display: block;\n"
        "  color: #333;\n"
        "\n"
        "  &__item {\n"
        "    padding: .5em;\n"
        "  }\n"
        "}\n",
        encoding="utf-8",
    )
    (tmp_path / "styles" / "button.css").write_text(
        ".button {\n"
        "  margin: 0.9em;\n"
        "}\n"
        "\n"
        "#submit {\n"
        "  color: #fff;\n"
        "}\n",
        encoding="utf-8",
    )
    (tmp_path / "index.html").write_text(
        "<html>\n"
        "<head>\n"
        "<style>\n"
        ".page {\n"
        "  z-index: 950;\n"
        "}\n"
        "</style>\n"
        "</head>\n"
        "</html>\n",
        encoding="utf-8",
    )
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "vendor.css").write_text(
        "#vendor { color: RED; }\n", encoding="utf-8"
    )
    (tmp_path / "README.md").write_text("# styles\n", encoding="utf-8")
    return tmp_path
