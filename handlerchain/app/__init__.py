"""Application-layer adapters (CLI, serverless handler)."""

from .lambda_adapter import lambda_handler, to_platform_response

__all__ = ["lambda_handler", "to_platform_response"]
