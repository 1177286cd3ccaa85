"""Response use cases."""

from .create_response import (
    CreateResponseRequest,
    CreateResponseResponse,
    CreateResponseUseCase,
)

__all__ = [
    "CreateResponseRequest",
    "CreateResponseResponse",
    "CreateResponseUseCase",
]
