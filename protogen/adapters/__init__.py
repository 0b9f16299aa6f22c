"""Adapters — bindings for the compiler and the host project.

Public re-exports for convenient access.
"""

from protogen.adapters.base import Adapter, ExecutionContext
from protogen.adapters.generator.protoc import ProtocAdapter
from protogen.adapters.mock import MockGeneratorAdapter
from protogen.adapters.project.base import ProjectModel
from protogen.adapters.project.directory import DirectoryProject

__all__ = [
    "Adapter",
    "DirectoryProject",
    "ExecutionContext",
    "MockGeneratorAdapter",
    "ProjectModel",
    "ProtocAdapter",
]
