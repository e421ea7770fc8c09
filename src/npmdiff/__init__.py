"""npmdiff core package.

Audits a repository for devDependencies declared in package.json that are not
installed in node_modules, and installed packages that are not declared.
"""

from .logging import configure_defaults

configure_defaults()

__all__ = [
    "core",
]
