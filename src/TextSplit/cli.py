from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from . import alias_format, item_parser, renderer_docx, splitter
from .timeline import LayerOccupiedError, Timeline
from .utils import configure_logging, resolve_output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textsplit",
        description="Split tagged text objects into one positioned object per character.",
    )
    parser.add_argument("input", type=str, help="Path to items YAML file")
    parser.add_argument("-o", "--output", type=str, help="Output YAML path for the created objects")
    parser.add_argument("--preview", type=str, help="Also write a DOCX preview of the parsed runs")
    parser.add_argument("--runs", action="store_true", help="Print the parsed runs as YAML")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    output_path = resolve_output_path(input_path, args.output)

    logging.info("Reading %s", input_path)
    items = item_parser.parse_items_file(input_path)
    logging.debug("Loaded %d text objects", len(items))

    timeline = Timeline()
    selected = []
    for idx, item in enumerate(items):
        try:
            selected.append(timeline.add_item(item))
        except LayerOccupiedError as exc:
            raise item_parser.ItemError(f"Item {idx} overlaps another item: {exc}") from exc

    plans = [splitter.plan_item(obj, item) for obj, item in zip(selected, items)]
    if args.runs:
        dump = [[run.as_dict() for run in plan.runs] for plan in plans]
        yaml.safe_dump(dump, sys.stdout, allow_unicode=True, sort_keys=False)

    if args.preview:
        logging.info("Rendering preview to %s", args.preview)
        renderer_docx.render_preview(((plan.item, plan.runs) for plan in plans), args.preview)

    logging.info("Splitting %d objects...", len(selected))
    created = splitter.split_items(timeline, selected)

    logging.info("Writing %d objects to %s", len(created), output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(
            {"objects": [_object_entry(obj) for obj in created]},
            fh,
            allow_unicode=True,
            sort_keys=False,
        )

    logging.info("Done. Saved to %s", output_path)


def _object_entry(obj) -> dict:
    text = alias_format.parse_alias(obj.alias).get("Object.0", {}).get("テキスト", "")
    return {
        "layer": obj.layer,
        "frame": [obj.frame_start, obj.frame_end],
        "text": text,
        "alias": obj.alias,
    }


if __name__ == "__main__":
    main()
