from __future__ import annotations

from itertools import count
from typing import Dict, List

from .model import TextItem, TimelineObject


class LayerOccupiedError(Exception):
    """The requested layer already holds an object in that frame range."""

    def __init__(self, layer: int, frame_start: int, frame_end: int):
        super().__init__(f"Layer {layer} is occupied in frames {frame_start}-{frame_end}")
        self.layer = layer
        self.frame_start = frame_start
        self.frame_end = frame_end


class Timeline:
    """In-memory edit section: objects on (layer, frame range) slots."""

    def __init__(self) -> None:
        self._objects: Dict[int, TimelineObject] = {}
        self._items: Dict[int, TextItem] = {}
        self._ids = count(1)

    @property
    def objects(self) -> List[TimelineObject]:
        return sorted(self._objects.values(), key=lambda obj: (obj.layer, obj.frame_start, obj.object_id))

    def item(self, obj: TimelineObject) -> TextItem | None:
        return self._items.get(obj.object_id)

    def add_item(self, item: TextItem) -> TimelineObject:
        """Register a source text object at its own layer and frames."""
        obj = self._place("", item.layer, item.frame_start, item.frame_end)
        self._items[obj.object_id] = item
        return obj

    def create_object_from_alias(self, alias: str, layer: int, frame: int, length: int) -> TimelineObject:
        return self._place(alias, layer, frame, frame + length)

    def delete_object(self, obj: TimelineObject) -> None:
        if obj.object_id not in self._objects:
            raise KeyError(f"Object {obj.object_id} is not on the timeline")
        del self._objects[obj.object_id]
        self._items.pop(obj.object_id, None)

    def is_free(self, layer: int, frame_start: int, frame_end: int) -> bool:
        for obj in self._objects.values():
            if obj.layer == layer and obj.frame_start <= frame_end and frame_start <= obj.frame_end:
                return False
        return True

    def _place(self, alias: str, layer: int, frame_start: int, frame_end: int) -> TimelineObject:
        if not self.is_free(layer, frame_start, frame_end):
            raise LayerOccupiedError(layer, frame_start, frame_end)
        obj = TimelineObject(
            object_id=next(self._ids),
            layer=layer,
            frame_start=frame_start,
            frame_end=frame_end,
            alias=alias,
        )
        self._objects[obj.object_id] = obj
        return obj
