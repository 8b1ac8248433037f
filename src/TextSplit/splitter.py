from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List

from . import alias_format
from .alignment import parse_alignment
from .layout import layout
from .markup_parser import ParseError, parse_markup
from .model import BlockParams, Placement, TextItem, TextRun, TimelineObject
from .timeline import LayerOccupiedError, Timeline


class SplitError(RuntimeError):
    """Splitting a selection could not be completed."""


@dataclass
class SplitPlan:
    source: TimelineObject
    item: TextItem
    runs: List[TextRun]
    placements: List[Placement]


def block_params(item: TextItem) -> BlockParams:
    alignment = parse_alignment(item.alignment)
    if alignment.is_vert:
        logging.debug("Vertical alignment %r is laid out horizontally", item.alignment)
    return BlockParams(
        defaults=item.default_style,
        kerning=item.kerning,
        line_spacing=item.line_spacing,
        anchor_x=item.x,
        anchor_y=item.y,
        hdir=alignment.hdir,
        vdir=alignment.vdir,
    )


def plan_item(source: TimelineObject, item: TextItem) -> SplitPlan:
    try:
        runs = parse_markup(item.text)
    except ParseError as exc:
        raise SplitError(f"Failed to parse text: {item.text}") from exc
    placements = layout(runs, block_params(item))
    logging.debug("Item on layer %d: %d runs, %d characters", item.layer, len(runs), len(placements))
    return SplitPlan(source=source, item=item, runs=runs, placements=placements)


def split_items(timeline: Timeline, selected: Iterable[TimelineObject]) -> List[TimelineObject]:
    """Replace each selected text object with one object per character.

    All items are parsed and laid out before the timeline is touched, so a
    bad item leaves the timeline unchanged. If emission runs out of layers,
    the objects created so far are removed again. Originals are deleted last.
    """
    plans = []
    for source in selected:
        item = timeline.item(source)
        if item is None:
            raise SplitError(f"Object {source.object_id} is not a text object.")
        plans.append(plan_item(source, item))

    created: List[TimelineObject] = []
    try:
        for plan in plans:
            item = plan.item
            length = item.frame_end - item.frame_start
            for placement in plan.placements:
                alias = alias_format.build_alias(placement, item)
                layer = item.layer + 1 + placement.index
                created.append(_create_on_free_layer(timeline, alias, layer, item.frame_start, length))
            logging.info("Split %d characters from layer %d", len(plan.placements), item.layer)
    except SplitError:
        logging.debug("Rolling back %d created objects", len(created))
        for obj in created:
            timeline.delete_object(obj)
        raise

    for plan in plans:
        timeline.delete_object(plan.source)
    return created


def _create_on_free_layer(timeline: Timeline, alias: str, layer: int, frame: int, length: int) -> TimelineObject:
    candidate = layer
    while candidate <= alias_format.MAX_LAYER:
        try:
            return timeline.create_object_from_alias(alias, candidate, frame, length)
        except LayerOccupiedError:
            logging.debug("Layer %d occupied, trying %d", candidate, candidate + 1)
            candidate += 1
    raise SplitError(f"No free layer between {layer} and {alias_format.MAX_LAYER}")
