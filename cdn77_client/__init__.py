"""
CDN77 API Client.

Command-line client for the CDN77 REST API (v3).

- core/: Configuration, logging, exceptions
- api/: HTTP transport, status-code interpretation, response decoding
- schemas/: Pydantic request/response models and selector enums
- commands/: Typer command groups, one per API area
"""

__version__ = "0.1.0"
