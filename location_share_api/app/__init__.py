"""
Application package.

The project is organised into logical pieces: ``core`` (settings,
logging, errors, database), ``schemas`` (request/response models),
``services`` (business rules) and ``api`` (HTTP routers).
"""

from .main import app  # noqa: F401
