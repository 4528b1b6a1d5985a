import gzip

import pytest

from xiny.config.settings import PlaceTagPolicy
from xiny.gazetteer.io import (
    CSV_COLUMNS,
    read_containment_csv,
    write_containment_csv,
)

HEADER = ",".join(CSV_COLUMNS)


def _row(place_name="Alpha", place_type="village", boundary_name="Beta", place_id=1, boundary_id=10):
    return f"n,{place_id},{place_name},{place_type},51.5,-0.12,r,{boundary_id},{boundary_name},8"


def test_reads_gzipped_csv_and_filters(tmp_path):
    path = tmp_path / "place-in-area.csv.gz"
    lines = [
        HEADER,
        _row(),
        _row(place_name="", place_id=2),
        _row(boundary_name="", place_id=3),
        _row(place_type="farm", place_id=4),
        _row(place_type="spaceport", place_id=5),
        _row(place_type="spaceport", place_id=6),
        _row(place_type="moonbase", place_id=7),
        _row(place_type="suburb", place_id=8),
    ]
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")

    facts, stats = read_containment_csv(path)

    assert [f.place_id for f in facts] == [1, 8]
    assert facts[0].place_lat == 51.5
    assert facts[0].boundary_admin_level == "8"
    assert stats.rows == 8
    assert stats.kept == 2
    assert stats.empty_name == 2
    assert stats.ignored == 1
    assert stats.unknown_total == 3
    assert stats.top_unknown(1) == [("spaceport", 2)]


def test_reads_plain_csv(tmp_path):
    path = tmp_path / "facts.csv"
    path.write_text(HEADER + "\n" + _row() + "\n", encoding="utf-8")
    facts, stats = read_containment_csv(path)
    assert len(facts) == 1
    assert stats.kept == 1


def test_custom_policy(tmp_path):
    path = tmp_path / "facts.csv"
    path.write_text(HEADER + "\n" + _row(place_type="farm") + "\n", encoding="utf-8")
    facts, _ = read_containment_csv(path, PlaceTagPolicy(allowed=frozenset({"farm"})))
    assert len(facts) == 1


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_containment_csv(tmp_path / "nope.csv.gz")


def test_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("place_id,place_name\n1,Alpha\n", encoding="utf-8")
    with pytest.raises(ValueError, match="missing column"):
        read_containment_csv(path)


def test_malformed_row_names_line(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text(
        HEADER + "\n" + "n,notanumber,Alpha,village,1,2,r,10,Beta,8\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="Line 2"):
        read_containment_csv(path)


def test_write_then_read(tmp_path, linear_facts):
    path = tmp_path / "out.csv.gz"
    assert write_containment_csv(path, linear_facts) == 3

    facts, stats = read_containment_csv(path)
    assert facts == linear_facts
    assert [f.place_name for f in facts] == ["Alpha", "Beta", "Gamma"]
    assert stats.kept == 3
