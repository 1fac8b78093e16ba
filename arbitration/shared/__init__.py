"""
Arbiter Shared - Common types, errors and utilities for the arbitrator.
"""

from .config import ArbitratorConfig, LoggingConfig, get_config
from .errors import (
    ArbitratorError,
    FeeNotConfigured,
    OracleCallFailed,
    QuestionAlreadyFinalized,
    TransferFailed,
    Unauthorized,
)
from .logger import ServiceLogger, configure_logging
from .types import (
    UINT256_MAX,
    Answer,
    ArbitrationRequest,
    Principal,
    QuestionId,
    QuestionState,
    require_principal,
    to_bytes32,
    to_uint256,
)

__all__ = [
    # Types
    "UINT256_MAX",
    "Answer",
    "Principal",
    "QuestionId",
    "QuestionState",
    "ArbitrationRequest",
    "to_bytes32",
    "to_uint256",
    "require_principal",
    # Errors
    "ArbitratorError",
    "Unauthorized",
    "FeeNotConfigured",
    "QuestionAlreadyFinalized",
    "OracleCallFailed",
    "TransferFailed",
    # Config
    "get_config",
    "ArbitratorConfig",
    "LoggingConfig",
    # Logger
    "configure_logging",
    "ServiceLogger",
]
