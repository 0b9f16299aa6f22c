"""
Domain models — Pydantic types for protogen.

All models are re-exported here for convenient access:

    from protogen.core.models import GenerationRequest, OutputKind, Receipt
"""

from protogen.core.models.action import Action, Receipt
from protogen.core.models.generation import (
    GenerationRequest,
    GenerationResult,
    OutputKind,
)
from protogen.core.models.project import (
    GeneratorSettings,
    ProjectConfig,
    ProjectItem,
)
from protogen.core.models.state import ItemState, ProjectState

__all__ = [
    # action.py
    "Action",
    # generation.py
    "GenerationRequest",
    "GenerationResult",
    # project.py
    "GeneratorSettings",
    # state.py
    "ItemState",
    "OutputKind",
    "ProjectConfig",
    "ProjectItem",
    "ProjectState",
    "Receipt",
]
