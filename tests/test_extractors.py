"""Tests for file and table record extractors."""

import pytest

from surreal_transfer.extractors import (
    JSONExtractor,
    TableExtractor,
    get_extractor,
    table_name,
)
from surreal_transfer.models.errors import NamingError, ParseError, ValidationError
from surreal_transfer.models.transfer import FileFormat


class TestJSONExtractor:

    def test_single_object_is_one_record(self, write_json):
        path = write_json("person.json", {"id": 1, "name": "Al"})
        assert JSONExtractor(path).extract() == [{"id": 1, "name": "Al"}]

    def test_array_keeps_file_order(self, write_json):
        data = [{"n": i} for i in range(5)]
        records = JSONExtractor(write_json("nums.json", data)).extract()
        assert records == data

    def test_empty_array(self, write_json):
        assert JSONExtractor(write_json("empty.json", [])).extract() == []

    def test_malformed_json(self, write_json):
        path = write_json("bad.json", '{"id": 1,')
        with pytest.raises(ParseError) as exc:
            JSONExtractor(path).extract()
        assert str(path) in exc.value.message

    @pytest.mark.parametrize("body", ["42", '"text"', "null", "true"])
    def test_scalar_root_rejected(self, write_json, body):
        with pytest.raises(ParseError):
            JSONExtractor(write_json("scalar.json", body)).extract()

    def test_array_of_scalars_rejected(self, write_json):
        with pytest.raises(ParseError, match="item 1"):
            JSONExtractor(write_json("mixed.json", '[{"a": 1}, 2]')).extract()

    def test_unicode_content(self, write_json):
        records = JSONExtractor(write_json("city.json", {"name": "Zürich"})).extract()
        assert records[0]["name"] == "Zürich"

    def test_table_is_file_stem(self, write_json):
        assert JSONExtractor(write_json("person.json", {})).table == "person"


class TestTableName:

    def test_strips_extension(self):
        assert table_name("/data/person.json") == "person"

    def test_keeps_inner_dots(self):
        assert table_name("archive.2024.json") == "archive.2024"

    @pytest.mark.parametrize("path", ["..json", " .json", "/data/ .json"])
    def test_empty_stem(self, path):
        with pytest.raises(NamingError):
            table_name(path)


class TestGetExtractor:

    def test_json(self):
        assert get_extractor(FileFormat.JSON) is JSONExtractor

    def test_csv_import_not_supported(self):
        with pytest.raises(ValidationError, match="not supported"):
            get_extractor(FileFormat.CSV)


class TestTableExtractor:

    def test_normalizes_ids(self, fake_db):
        fake_db.tables["person"] = [
            {"id": "person:1", "name": "Al"},
            {"id": "person:⟨x y⟩", "name": "Bo"},
        ]
        records = TableExtractor(fake_db, "person").extract()
        assert records == [{"id": "1", "name": "Al"}, {"id": "x y", "name": "Bo"}]

    def test_window_is_bounded(self, fake_db):
        fake_db.tables["big"] = [{"id": f"big:{i}"} for i in range(25)]
        extractor = TableExtractor(fake_db, "big", page_size=10)
        records = extractor.extract()
        assert [r["id"] for r in records] == [str(i) for i in range(10)]
        assert extractor.truncated

    def test_exact_page_not_truncated(self, fake_db):
        fake_db.tables["big"] = [{"id": f"big:{i}"} for i in range(10)]
        extractor = TableExtractor(fake_db, "big", page_size=10)
        assert len(extractor.extract()) == 10
        assert not extractor.truncated

    def test_extract_batch_offset(self, fake_db):
        fake_db.tables["big"] = [{"id": f"big:{i}"} for i in range(25)]
        batch = TableExtractor(fake_db, "big").extract_batch(offset=20, limit=10)
        assert [r["id"] for r in batch] == ["20", "21", "22", "23", "24"]

    def test_source_rows_not_mutated(self, fake_db):
        fake_db.tables["person"] = [{"id": "person:1"}]
        TableExtractor(fake_db, "person").extract()
        assert fake_db.tables["person"][0]["id"] == "person:1"
