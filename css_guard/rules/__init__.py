"""
Style rule engine.

Rules live in one package per category and are discovered automatically
by RuleDiscovery.
"""

from .base import BaseRule, NodeKind, RuleContext
from .config import LintConfig, LintConfigLoader, RuleConfig
from .engine import RuleEngine, RuleEngineResult, create_rule_engine

__all__ = [
    "BaseRule",
    "NodeKind",
    "RuleContext",
    "LintConfig",
    "LintConfigLoader",
    "RuleConfig",
    "RuleEngine",
    "RuleEngineResult",
    "create_rule_engine",
]
