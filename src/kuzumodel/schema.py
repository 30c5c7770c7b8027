# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""Declarative bundle of instance methods and static methods for a model."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

SchemaFunction = Callable[..., Any]


class Schema:
    """
    Instance methods and statics to attach to a compiled model.

    Example:
        >>> schema = Schema()
        >>> @schema.method
        ... def greet(self):
        ...     return f"hello {self.name}"
        >>> @schema.static
        ... def label(cls):
        ...     return cls.type_tag
    """

    def __init__(
        self,
        methods: Optional[Dict[str, SchemaFunction]] = None,
        statics: Optional[Dict[str, Any]] = None,
    ):
        self.methods: Dict[str, SchemaFunction] = dict(methods or {})
        self.statics: Dict[str, Any] = dict(statics or {})

    def method(self, fn: Optional[SchemaFunction] = None, *, name: Optional[str] = None):
        """Register an instance method; usable as ``@schema.method`` or ``@schema.method(name=...)``."""
        def decorator(func: SchemaFunction) -> SchemaFunction:
            self.methods[name or func.__name__] = func
            return func

        if fn is not None:
            return decorator(fn)
        return decorator

    def static(self, fn: Optional[Any] = None, *, name: Optional[str] = None):
        """Register a static; usable as ``@schema.static`` or ``@schema.static(name=...)``."""
        def decorator(func: Any) -> Any:
            # staticmethod/classmethod objects carry the function on __func__
            key = name or getattr(func, "__name__", None) or func.__func__.__name__
            self.statics[key] = func
            return func

        if fn is not None:
            return decorator(fn)
        return decorator

    def __repr__(self) -> str:
        return f"<Schema(methods={sorted(self.methods)}, statics={sorted(self.statics)})>"
