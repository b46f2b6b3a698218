"""
Render context.

A stack of scope frames plus a fallback key-path accessor into the caller's
model object. One context is created per render call; the renderer pushes
and pops frames in lock-step with branch entry and exit.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from .expressions.values import NULL


@runtime_checkable
class ModelAccessor(Protocol):
    """
    Capability resolving a dotted key path against an opaque model object.

    Implemented by the embedding application when the default accessor does
    not fit its model representation.
    """

    def resolve(self, model: Any, key_path: str) -> Any:
        """
        Args:
            model: Model object (may be None)
            key_path: Dotted key path such as 'user.address.city'

        Returns:
            The value, or None when the path does not resolve
        """
        ...


class DefaultModelAccessor:
    """
    Walks mappings by key, sequences by integer segment and other objects by
    public attribute.
    """

    def resolve(self, model: Any, key_path: str) -> Any:
        if model is None or not key_path:
            return None
        current = model
        for segment in key_path.split("."):
            current = self._step(current, segment)
            if current is None:
                return None
        return current

    def _step(self, obj: Any, segment: str) -> Any:
        if obj is NULL:
            return None
        if isinstance(obj, Mapping):
            return obj.get(segment)
        if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)):
            try:
                return obj[int(segment)]
            except (ValueError, IndexError):
                return None
        if not segment or segment.startswith("_"):
            return None
        return getattr(obj, segment, None)


class RenderContext:
    """
    Scope stack with model fallback.

    Frames are ordered outermost first. Lookups search innermost to
    outermost; names that no frame binds are resolved against the model.
    """

    def __init__(self, model: Any = None, accessor: Optional[ModelAccessor] = None):
        """
        Args:
            model: Externally owned model object, used only as a lookup root
            accessor: Key-path capability for the model (DefaultModelAccessor if omitted)
        """
        self.model = model
        self.accessor: ModelAccessor = accessor or DefaultModelAccessor()
        self.frames: List[Dict[str, Any]] = []

    @property
    def depth(self) -> int:
        return len(self.frames)

    def push(self) -> None:
        """Opens a new innermost frame."""
        self.frames.append({})

    def pop(self) -> None:
        """
        Closes the innermost frame.

        Raises:
            RuntimeError: If the stack is empty (unbalanced push/pop)
        """
        if not self.frames:
            raise RuntimeError("No scope to pop (scope stack is empty)")
        self.frames.pop()

    def get(self, key_path: str) -> Any:
        """
        Resolves a dotted key path.

        The first segment is looked up in the frames, innermost first; the
        rest of the path is resolved against the bound value. A path whose
        first segment no frame binds is resolved against the model.

        Returns:
            The value, or None when absent (a name bound to NULL reads as None)
        """
        head, _, tail = key_path.partition(".")
        frame = self._find_frame(head)
        if frame is None:
            return self.accessor.resolve(self.model, key_path)

        value = frame[head]
        if value is NULL:
            return None
        if not tail:
            return value
        return self.accessor.resolve(value, tail)

    def set(self, name: str, value: Any) -> None:
        """
        Binds a name.

        An existing binding is overwritten in the frame that declared it;
        a new name goes to the innermost frame. None is stored as NULL.

        Raises:
            RuntimeError: If there is no frame to bind into
        """
        if value is None:
            value = NULL
        frame = self._find_frame(name)
        if frame is None:
            if not self.frames:
                raise RuntimeError(f"Cannot bind '{name}': scope stack is empty")
            frame = self.frames[-1]
        frame[name] = value

    def unset(self, name: str) -> None:
        """Removes a binding from the frame holding it; unknown names are ignored."""
        frame = self._find_frame(name)
        if frame is not None:
            del frame[name]

    def is_bound(self, name: str) -> bool:
        return self._find_frame(name) is not None

    def _find_frame(self, name: str) -> Optional[Dict[str, Any]]:
        for frame in reversed(self.frames):
            if name in frame:
                return frame
        return None


__all__ = [
    "NULL",
    "ModelAccessor",
    "DefaultModelAccessor",
    "RenderContext",
]
