"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: configuration and database helpers live in ``core``,
request/response models in ``schemas``, business rules in
``services`` and HTTP routes in ``api``.
"""

from .main import app, create_app  # noqa: F401
