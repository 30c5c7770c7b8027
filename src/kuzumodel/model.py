# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Base model for compiled graph vertex types and the registry of compiled models.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Dict, FrozenSet, Optional, Type

from pydantic import BaseModel, ConfigDict

from .constants import LoggingConstants, ModelMetadataConstants

logger = logging.getLogger(__name__)


class ModelRegistry:
    """
    Process-wide registry of initialized models, keyed by type tag.

    The type tag is the discriminant stored on every vertex, so one tag maps to
    exactly one model class at a time.
    """

    _instance: Optional["ModelRegistry"] = None

    def __new__(cls) -> "ModelRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self.__dict__.get("_initialized", False):
            return
        self._initialized = True
        self.models: Dict[str, Type[Any]] = {}

    def register(self, type_tag: str, cls: Type[Any]) -> None:
        """
        Register a model class under its type tag.

        Args:
            type_tag: Discriminant of the model's vertices
            cls: The model class
        """
        existing = self.models.get(type_tag)
        if existing is not None and existing is not cls:
            logger.warning(LoggingConstants.MODEL_REPLACED, type_tag, existing.__name__, cls.__name__)
        self.models[type_tag] = cls
        logger.debug(LoggingConstants.MODEL_REGISTERED, cls.__name__, type_tag)

    def get_model(self, type_tag: str) -> Optional[Type[Any]]:
        return self.models.get(type_tag)

    def clear(self) -> None:
        self.models.clear()


_model_registry = ModelRegistry()


class KuzuModel(BaseModel):
    """
    Base class of every compiled model.

    Vertex properties are free-form keyword arguments. Identity and context
    metadata live on the class and are shared by all instances.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    base: ClassVar[Any] = None
    type_tag: ClassVar[Optional[str]] = None
    graph_schema: ClassVar[Any] = None
    procedure_names: ClassVar[FrozenSet[str]] = frozenset()

    @classmethod
    def init(cls) -> None:
        """
        Finalize a compiled model by registering it under its type tag.

        Calling it again on the same class does nothing.

        Raises:
            ValueError: If the class has no type tag
        """
        if cls.__dict__.get(ModelMetadataConstants.INITIALIZED_FLAG, False):
            return
        if not cls.type_tag:
            raise ValueError(f"{cls.__name__} has no type tag and cannot be initialized")
        _model_registry.register(cls.type_tag, cls)
        setattr(cls, ModelMetadataConstants.INITIALIZED_FLAG, True)

    def to_properties(self) -> Dict[str, Any]:
        """Vertex properties of this instance, including the type discriminant."""
        properties = self.model_dump()
        properties[ModelMetadataConstants.TYPE_PROPERTY] = self.type_tag
        return properties


def get_registered_models() -> Dict[str, Type[KuzuModel]]:
    return dict(_model_registry.models)


def get_model_by_type(type_tag: str) -> Optional[Type[KuzuModel]]:
    return _model_registry.get_model(type_tag)


def clear_registry() -> None:
    """Forget every registered model."""
    _model_registry.clear()
