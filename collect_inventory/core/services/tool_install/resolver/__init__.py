"""
L2 Resolver — ``__init__.py`` re-exports the dependency workflow.
"""

from collect_inventory.core.services.tool_install.resolver.dependency_resolver import (  # noqa: F401
    DependencyResolver,
    decide_install,
    install_commands,
    prompt_user,
)
