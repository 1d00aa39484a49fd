# tests/test_parsing.py
from carsdb.parsing import FieldMap, ParsedRow, class_bucket, parse_header, parse_row

HEADER = "barrels08,make,model,VClass,year"


def test_header_maps_consumed_columns_only():
    fields = parse_header("id,make,cylinders,model,VClass,year\r\n")
    assert fields == FieldMap(make=1, model=3, type=4, year=5)
    assert fields.complete


def test_header_missing_column_stays_unresolved():
    fields = parse_header("make,model,year")
    assert fields.type is None
    assert not fields.complete
    assert parse_row(fields, "Toyota,Corolla,2001") is None


def test_row_is_normalized():
    fields = parse_header(HEADER)
    row = parse_row(fields, "1.2,Toyota,Corolla,Compact Cars,2001\n")
    assert row == ParsedRow(make="Toyota", model="Corolla", type="midsize", year=2001)


def test_row_with_zero_make_is_rejected():
    fields = parse_header(HEADER)
    assert parse_row(fields, "1.2,0,Corolla,Compact Cars,2001") is None


def test_row_with_bad_year_is_rejected():
    fields = parse_header(HEADER)
    assert parse_row(fields, "1.2,Toyota,Corolla,Compact Cars,") is None
    assert parse_row(fields, "1.2,Toyota,Corolla,Compact Cars,20x1") is None


def test_short_and_empty_rows_are_rejected():
    fields = parse_header(HEADER)
    assert parse_row(fields, "1.2,Toyota,Corolla") is None
    assert parse_row(fields, "") is None


def test_unmapped_class_is_unknown_bucket():
    fields = parse_header(HEADER)
    row = parse_row(fields, "1.2,Tesla,Roadster,Hyper Cars,2010")
    assert row.type is None
    assert class_bucket("Two Seaters") == "mini"
    assert class_bucket("Vans") == "large"
    assert class_bucket("vans") is None


def test_year_must_be_plain_digits():
    fields = parse_header(HEADER)
    for year in (" 2001", "2001 ", "+2001", "-2001", "2_001", "２００１", "2001.0"):
        assert parse_row(fields, f"1.2,Toyota,Corolla,Compact Cars,{year}") is None, year
    assert parse_row(fields, "1.2,Toyota,Corolla,Compact Cars,0042").year == 42
