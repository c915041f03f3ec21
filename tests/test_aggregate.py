import datetime as dt
import json
import logging

import pytest

from fakes import october_page, september_page
from services.aggregate import (
    build_combined_dataset,
    build_month_dataset,
    list_source_files,
    merge_days,
    process_file,
    write_dataset,
)
from services.errors import FormatError, SourceReadFailure

NOW = dt.datetime(2025, 8, 30, 12, 0, tzinfo=dt.timezone.utc)


@pytest.fixture
def source_dir(tmp_path):
    (tmp_path / "09-25.html").write_text(september_page(), encoding="utf-8")
    (tmp_path / "10-25.html").write_text(october_page(), encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not a table", encoding="utf-8")
    return tmp_path


def test_process_file_enriches_each_date_once(source_dir, enricher, sun_client):
    context, days = process_file(str(source_dir / "09-25.html"), enricher)
    assert context.label == "September 2025"
    assert sorted(days) == [dt.date(2025, 9, 5), dt.date(2025, 9, 6)]
    assert len(days[dt.date(2025, 9, 5)]) == 2
    assert sun_client.calls == [dt.date(2025, 9, 5), dt.date(2025, 9, 6)]


def test_month_dataset_shape(source_dir, enricher):
    context, dataset = build_month_dataset(str(source_dir / "09-25.html"), enricher, now=NOW)
    assert context.output_name == "tides-2025-09.json"
    assert dataset["lastUpdated"] == NOW.isoformat()
    assert dataset["month"] == "September 2025"
    assert "source" in dataset
    assert list(dataset["data"]) == ["2025-09-05", "2025-09-06"]
    overnight = dataset["data"]["2025-09-05"][1]
    assert overnight["startDate"] == "2025-09-05"
    assert overnight["endDate"] == "2025-09-06"
    assert overnight["midpoint"] == "03:22"
    assert overnight["photography"]["sunrise"] == "06:25"


def test_month_dataset_with_failed_sun_lookup(source_dir, sun_client, enricher):
    sun_client.failing.add(dt.date(2025, 9, 6))
    _, dataset = build_month_dataset(str(source_dir / "09-25.html"), enricher)
    window = dataset["data"]["2025-09-06"][0]
    assert window["photography"] is None
    assert window["daylight"] is False
    assert dataset["data"]["2025-09-05"][0]["daylight"] is True


def test_single_file_with_bad_name_fails(tmp_path, enricher):
    path = tmp_path / "september.html"
    path.write_text(september_page(), encoding="utf-8")
    with pytest.raises(FormatError):
        build_month_dataset(str(path), enricher)


def test_single_file_that_cannot_be_read_fails(tmp_path, enricher):
    path = tmp_path / "09-25.html"
    path.write_bytes(b"\xff\xfe\xfa not utf-8")
    with pytest.raises(SourceReadFailure):
        build_month_dataset(str(path), enricher)


def test_missing_single_file_fails(tmp_path, enricher):
    with pytest.raises(SourceReadFailure):
        build_month_dataset(str(tmp_path / "09-25.html"), enricher)


def test_lists_only_month_files_in_name_order(source_dir):
    (source_dir / "01-26.html").write_text("", encoding="utf-8")
    assert list_source_files(str(source_dir)) == ["01-26.html", "09-25.html", "10-25.html"]


def test_combined_dataset_merges_months(source_dir, enricher):
    dataset = build_combined_dataset(str(source_dir), enricher, now=NOW)
    assert dataset["months"] == ["September 2025", "October 2025"]
    assert dataset["totalDays"] == 3
    assert len(dataset["data"]) == 2 + 1
    assert "2025-10-01" in dataset["data"]


def test_combined_dataset_skips_bad_file(source_dir, enricher, caplog):
    (source_dir / "13-25.html").write_text(september_page(), encoding="utf-8")
    with caplog.at_level(logging.ERROR, logger="services.aggregate"):
        dataset = build_combined_dataset(str(source_dir), enricher)
    assert dataset["months"] == ["September 2025", "October 2025"]
    assert dataset["totalDays"] == 3
    assert "Error processing 13-25.html" in caplog.text


def test_combined_dataset_of_empty_folder(tmp_path, enricher):
    dataset = build_combined_dataset(str(tmp_path), enricher)
    assert dataset["months"] == []
    assert dataset["totalDays"] == 0
    assert dataset["data"] == {}


def test_merge_overwrites_and_warns(caplog):
    day = dt.date(2025, 9, 5)
    combined = {day: ["first"]}
    with caplog.at_level(logging.WARNING, logger="services.aggregate"):
        merge_days(combined, {day: ["second"]}, "a09-25.html")
    assert combined[day] == ["second"]
    assert "2025-09-05 from a09-25.html overwrites" in caplog.text


def test_write_dataset_creates_folder(tmp_path):
    out = tmp_path / "data" / "tides.json"
    write_dataset({"data": {}}, str(out))
    assert json.loads(out.read_text(encoding="utf-8")) == {"data": {}}


def test_year_month_names_are_not_month_files(source_dir, enricher):
    (source_dir / "2011-09.html").write_text(september_page(), encoding="utf-8")
    (source_dir / "1209-25.html").write_text(september_page(), encoding="utf-8")
    assert list_source_files(str(source_dir)) == ["09-25.html", "10-25.html"]
    dataset = build_combined_dataset(str(source_dir), enricher)
    assert dataset["months"] == ["September 2025", "October 2025"]
    assert not any(key.startswith("2009") for key in dataset["data"])


def test_year_month_name_fails_in_single_file_mode(tmp_path, enricher):
    path = tmp_path / "2011-09.html"
    path.write_text(september_page(), encoding="utf-8")
    with pytest.raises(FormatError):
        build_month_dataset(str(path), enricher)
