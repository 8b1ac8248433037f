import pytest

from TextSplit import alias_format
from TextSplit.alias_format import build_alias, parse_alias
from TextSplit.model import Placement, ResolvedStyle, TextItem
from TextSplit.splitter import SplitError, block_params, split_items
from TextSplit.timeline import LayerOccupiedError, Timeline


def _item(**kwargs) -> TextItem:
    values = dict(
        text="AB",
        size=34.0,
        font="MS UI Gothic",
        color="ffffff",
        outline_color="000000",
        alignment="左寄せ[上]",
        layer=1,
        frame_start=0,
        frame_end=60,
    )
    values.update(kwargs)
    return TextItem(**values)


def _text_of(obj) -> str:
    return parse_alias(obj.alias)["Object.0"]["テキスト"]


def test_alias_uses_fixed_point_and_item_fallbacks():
    item = _item(z=1.5, opacity=20.0, blend="加算", decoration="影付き文字", frame_start=5, frame_end=65)
    style = ResolvedStyle(size=12.0, font="Meiryo", color="ff0000", bold=True, italic=False)
    alias = build_alias(Placement(char="あ", style=style, x=-3.333, y=7.0, index=0), item)
    sections = parse_alias(alias)
    assert sections["Object"]["frame"] == "5,65"
    text = sections["Object.0"]
    assert text["effect.name"] == "テキスト"
    assert text["サイズ"] == "12.00"
    assert text["フォント"] == "Meiryo"
    assert text["文字色"] == "ff0000"
    assert text["影・縁色"] == "000000"
    assert text["文字装飾"] == "影付き文字"
    assert text["文字揃え"] == "左寄せ[上]"
    assert (text["B"], text["I"]) == ("1", "0")
    assert text["テキスト"] == "あ"
    draw = sections["Object.1"]
    assert draw["effect.name"] == "標準描画"
    assert (draw["X"], draw["Y"], draw["Z"]) == ("-3.33", "7.00", "1.50")
    assert draw["透明度"] == "20.00"
    assert draw["合成モード"] == "加算"


def test_block_params_follow_item():
    params = block_params(_item(kerning=2.0, line_spacing=3.0, x=10.0, y=-4.0, alignment="右寄せ[下]"))
    assert params.base_size == 34.0
    assert (params.kerning, params.line_spacing) == (2.0, 3.0)
    assert (params.anchor_x, params.anchor_y) == (10.0, -4.0)
    assert (params.hdir.name, params.vdir.name) == ("RIGHT", "BOTTOM")


def test_split_replaces_item_with_one_object_per_character():
    timeline = Timeline()
    source = timeline.add_item(_item(text="<#ff0000>A<#>B\\nC"))
    created = split_items(timeline, [source])

    assert [_text_of(obj) for obj in created] == ["A", "B", "C"]
    assert [obj.layer for obj in created] == [2, 3, 4]
    assert all((obj.frame_start, obj.frame_end) == (0, 60) for obj in created)
    assert timeline.objects == created
    first, second, third = (parse_alias(obj.alias) for obj in created)
    assert first["Object.0"]["文字色"] == "ff0000"
    assert second["Object.0"]["文字色"] == "ffffff"
    assert (second["Object.1"]["X"], second["Object.1"]["Y"]) == ("34.00", "0.00")
    assert (third["Object.1"]["X"], third["Object.1"]["Y"]) == ("0.00", "34.00")


def test_split_climbs_past_occupied_layers():
    timeline = Timeline()
    source = timeline.add_item(_item(text="AB"))
    blocker = timeline.create_object_from_alias("", 2, 30, 100)
    created = split_items(timeline, [source])
    assert [obj.layer for obj in created] == [3, 4]
    assert blocker in timeline.objects


def test_split_uses_free_layer_when_frames_do_not_overlap():
    timeline = Timeline()
    source = timeline.add_item(_item(text="A"))
    timeline.create_object_from_alias("", 2, 61, 10)
    created = split_items(timeline, [source])
    assert created[0].layer == 2


def test_bad_markup_leaves_timeline_untouched():
    timeline = Timeline()
    good = timeline.add_item(_item(text="ok"))
    bad = timeline.add_item(_item(text="oops<#xyz>", layer=10))
    with pytest.raises(SplitError, match="oops"):
        split_items(timeline, [good, bad])
    assert timeline.objects == [good, bad]


def test_split_rejects_non_text_objects():
    timeline = Timeline()
    other = timeline.create_object_from_alias("", 1, 0, 10)
    with pytest.raises(SplitError):
        split_items(timeline, [other])


def test_split_gives_up_above_max_layer(monkeypatch):
    monkeypatch.setattr(alias_format, "MAX_LAYER", 3)
    timeline = Timeline()
    source = timeline.add_item(_item(text="A"))
    timeline.create_object_from_alias("", 2, 0, 60)
    timeline.create_object_from_alias("", 3, 0, 60)
    with pytest.raises(SplitError, match="No free layer"):
        split_items(timeline, [source])


def test_running_out_of_layers_removes_partial_split(monkeypatch):
    monkeypatch.setattr(alias_format, "MAX_LAYER", 3)
    timeline = Timeline()
    source = timeline.add_item(_item(text="ABC"))
    with pytest.raises(SplitError, match="No free layer"):
        split_items(timeline, [source])
    assert timeline.objects == [source]


def test_timeline_reports_occupied_layer():
    timeline = Timeline()
    timeline.create_object_from_alias("", 5, 0, 10)
    with pytest.raises(LayerOccupiedError) as excinfo:
        timeline.create_object_from_alias("", 5, 10, 5)
    assert excinfo.value.layer == 5
    assert timeline.is_free(6, 0, 10)
