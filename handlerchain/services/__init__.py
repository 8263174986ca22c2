"""Service-layer entry points for handlerchain."""

from .executor_service import ChainExecutor, ChainService, build_chain_service

__all__ = ["ChainExecutor", "ChainService", "build_chain_service"]
