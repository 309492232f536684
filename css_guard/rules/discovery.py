"""
Rule discovery system for auto-loading rules from category packages.

New rules are added by creating a module in the appropriate category
package; no registration code needs to change.

Directory structure:
    css_guard/rules/
    ├── formatting/
    │   ├── brace_placement.py
    │   └── selector_per_line.py
    ├── values/
    │   ├── leading_zero.py
    │   └── z_index.py
    └── ...
"""

import importlib
import inspect
import logging
import pkgutil
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BaseRule

logger = logging.getLogger(__name__)


class RuleDiscovery:
    """Auto-discovers BaseRule subclasses from the category packages."""

    RULE_CATEGORIES = [
        "formatting",
        "selectors",
        "naming",
        "values",
        "structure",
        "comments",
    ]

    def __init__(self, package: str = "css_guard.rules"):
        """Initialize the rule discovery system.

        Args:
            package: Dotted name of the package holding category packages
        """
        self.package = package
        self._discovered_rules: dict[str, type[BaseRule]] = {}
        self._discovery_errors: list[str] = []

    def discover_all(self) -> dict[str, type["BaseRule"]]:
        """Discover all rules from all category packages.

        Returns:
            Dictionary mapping rule_id to rule class
        """
        self._discovered_rules.clear()
        self._discovery_errors.clear()

        for category in self.RULE_CATEGORIES:
            self._discovered_rules.update(self.discover_category(category))

        if self._discovery_errors:
            logger.warning(
                f"Rule discovery completed with {len(self._discovery_errors)} errors"
            )

        return dict(self._discovered_rules)

    def discover_category(self, category: str) -> dict[str, type["BaseRule"]]:
        """Discover rules from a specific category.

        Args:
            category: Category name (e.g., 'formatting', 'values')

        Returns:
            Dictionary mapping rule_id to rule class for this category
        """
        category_rules: dict[str, type[BaseRule]] = {}
        package_name = f"{self.package}.{category}"

        try:
            package = importlib.import_module(package_name)
        except ImportError as e:
            logger.debug(f"Category package not found: {package_name} ({e})")
            return category_rules

        for module_info in pkgutil.iter_modules(package.__path__):
            if module_info.name.startswith("_") or module_info.ispkg:
                continue
            module_name = f"{package_name}.{module_info.name}"
            try:
                category_rules.update(self._load_rules_from_module(module_name))
            except Exception as e:
                error_msg = f"Error loading rules from {module_name}: {e}"
                logger.warning(error_msg)
                self._discovery_errors.append(error_msg)

        return category_rules

    def _load_rules_from_module(self, module_name: str) -> dict[str, type["BaseRule"]]:
        """Load rule classes from a module.

        Args:
            module_name: Dotted module name

        Returns:
            Dictionary mapping rule_id to rule class
        """
        from .base import BaseRule

        rules: dict[str, type[BaseRule]] = {}
        module = importlib.import_module(module_name)

        for name, obj in inspect.getmembers(module, inspect.isclass):
            # Must be a concrete BaseRule subclass defined in this module
            if not issubclass(obj, BaseRule) or obj is BaseRule:
                continue
            if obj.__module__ != module_name:
                continue
            if inspect.isabstract(obj):
                continue

            try:
                instance = obj()
                rules[instance.rule_id] = obj
                logger.debug(f"Discovered rule: {instance.rule_id} from {module_name}")
            except Exception as e:
                logger.warning(f"Could not instantiate rule {name} from {module_name}: {e}")

        return rules

    @property
    def discovery_errors(self) -> list[str]:
        """Get list of errors encountered during discovery."""
        return self._discovery_errors.copy()

    @property
    def discovered_rule_ids(self) -> list[str]:
        """Get list of discovered rule IDs."""
        return list(self._discovered_rules.keys())

    def get_rule_class(self, rule_id: str) -> type["BaseRule"] | None:
        return self._discovered_rules.get(rule_id)


def discover_rules() -> dict[str, type["BaseRule"]]:
    """Convenience function to discover all rules.

    Returns:
        Dictionary mapping rule_id to rule class
    """
    return RuleDiscovery().discover_all()
