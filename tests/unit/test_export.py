import json
from datetime import datetime
from pathlib import Path

import pytest

from pricepaid.common import fs
from pricepaid.common.errors import OutputError
from pricepaid.common.models import Entry, PropertyAge, PropertyType, TransferDuration
from pricepaid.pipeline import export
from pricepaid.pipeline.aggregate import aggregate
from pricepaid.pipeline.export import parse_aggregate, read_aggregate_json, render_aggregate, write_aggregate_json


def _sample():
    def entry(price, year, location, property_type, property_age):
        return Entry(
            price=price,
            date=datetime(year, 1, 2, 3, 4),
            primary_location=location,
            secondary_location="",
            property_type=property_type,
            property_age=property_age,
            transfer_duration=TransferDuration.FREEHOLD,
        )

    return aggregate(
        [
            entry(500000, 2016, "SW1", PropertyType.DETACHED, PropertyAge.NEW),
            entry(410000, 2016, "SW1", PropertyType.DETACHED, PropertyAge.NEW),
            entry(210000, 2017, "E1", PropertyType.SEMI_DETACHED, PropertyAge.OLD),
        ]
    )


def test_render_uses_category_names_and_string_years():
    assert render_aggregate(_sample()) == {
        "SW1": {"2016": {"Detached": {"New": [500000, 410000]}}},
        "E1": {"2017": {"SemiDetached": {"Old": [210000]}}},
    }


def test_write_and_read_round_trip(tmp_path: Path):
    agg = _sample()
    out = tmp_path / "out" / "stats.json"

    write_aggregate_json(out, agg)

    assert read_aggregate_json(out) == agg
    assert json.loads(out.read_text(encoding="utf-8"))["SW1"]["2016"]["Detached"]["New"] == [500000, 410000]
    assert "\t" in out.read_text(encoding="utf-8")


def test_write_leaves_no_temp_files(tmp_path: Path):
    write_aggregate_json(tmp_path / "stats.json", _sample(), indent=2)
    assert [p.name for p in tmp_path.iterdir()] == ["stats.json"]


def test_failed_write_keeps_previous_output(monkeypatch, tmp_path: Path):
    out = tmp_path / "stats.json"
    out.write_text('{"previous": true}\n', encoding="utf-8")

    def broken_dump(*_args, **_kwargs):
        raise TypeError("not serialisable")

    monkeypatch.setattr(fs.json, "dump", broken_dump)

    with pytest.raises(OutputError):
        export.write_aggregate_json(out, _sample())

    assert out.read_text(encoding="utf-8") == '{"previous": true}\n'
    assert [p.name for p in tmp_path.iterdir()] == ["stats.json"]


def test_parse_rejects_unknown_category_name():
    with pytest.raises(OutputError):
        parse_aggregate({"SW1": {"2016": {"Bungalow": {"New": [1]}}}})
