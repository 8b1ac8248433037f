import textwrap
from pathlib import Path

import pytest
import yaml

from TextSplit import cli, item_parser

ITEMS = textwrap.dedent(
    """
    items:
      - text: "<s40,,B>Hi<#>\\\\n<#00ff00>!"
        layer: 2
        frame: [0, 30]
        style:
          size: 20
          font: Arial
          color: ffffff
          alignment: 左寄せ[上]
        position: {x: 100, y: 200}
    """
)


def test_cli_writes_split_objects(tmp_path: Path, capsys):
    source = tmp_path / "items.yaml"
    source.write_text(ITEMS, encoding="utf-8")
    preview = tmp_path / "preview.docx"

    cli.main([str(source), "--preview", str(preview), "--runs"])

    output = tmp_path / "items.split.yaml"
    data = yaml.safe_load(output.read_text(encoding="utf-8"))
    objects = data["objects"]
    assert [obj["text"] for obj in objects] == ["H", "i", "!"]
    assert [obj["layer"] for obj in objects] == [3, 4, 5]
    assert objects[0]["frame"] == [0, 30]
    assert "X=100.00" in objects[0]["alias"]
    assert "X=140.00" in objects[1]["alias"]
    assert "Y=220.00" in objects[2]["alias"]
    assert preview.exists()

    runs = yaml.safe_load(capsys.readouterr().out)
    assert runs[0][0] == {"text": "Hi", "size": 40.0, "bold": True, "italic": False}
    assert [run["text"] for run in runs[0]] == ["Hi", "\\n", "!"]


def test_cli_missing_input(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        cli.main([str(tmp_path / "missing.yaml")])


def test_cli_rejects_overlapping_items(tmp_path: Path):
    source = tmp_path / "items.yaml"
    source.write_text(
        textwrap.dedent(
            """
            - text: first
              layer: 1
              frame: [0, 30]
              style: {size: 20, font: Arial, color: ffffff}
            - text: second
              layer: 1
              frame: [10, 40]
              style: {size: 20, font: Arial, color: ffffff}
            """
        ),
        encoding="utf-8",
    )
    with pytest.raises(item_parser.ItemError, match="Item 1 overlaps"):
        cli.main([str(source)])
