"""
Unit tests for the CSV record source
"""

import pytest
from core.exceptions import MalformedInputError, SourceReadError
from ingestion.extractors.csv_extractor import CSVRecordSource


class TestCSVRecordSource:
    """Test CSV streaming"""

    def test_streams_rows_in_file_order(self, write_places_csv, csv_row):
        """Rows come back as positional string tuples, header excluded"""
        csv_file = write_places_csv([csv_row("P1"), csv_row("P2"), csv_row("P3")])

        source = CSVRecordSource(csv_file)
        rows = list(source.iter_records())

        assert [row[0] for row in rows] == ["P1", "P2", "P3"]
        assert all(isinstance(value, str) for row in rows for value in row)
        assert rows[0][2] == "House 4, Road P1"
        assert rows[0][8] == "['cafe', 'food']"
        assert source.records_read == 3
        assert source.header[0] == "place_id"
        assert len(source.header) == 11

    def test_values_are_not_type_inferred(self, write_places_csv, csv_row):
        """Leading zeros and blanks survive untouched"""
        csv_file = write_places_csv([csv_row("007", lat="", lng="NA")])

        row = next(iter(CSVRecordSource(csv_file)))

        assert row[0] == "007"
        assert row[9] == ""
        assert row[10] == "NA"

    def test_streams_across_chunks(self, write_places_csv, csv_row):
        """Chunk boundaries do not drop or reorder rows"""
        keys = [f"P{i}" for i in range(1, 8)]
        csv_file = write_places_csv([csv_row(k) for k in keys])

        rows = list(CSVRecordSource(csv_file, chunk_size=3))

        assert [row[0] for row in rows] == keys

    def test_missing_file_raises(self, tmp_path):
        """An unreadable input is fatal"""
        source = CSVRecordSource(tmp_path / "missing.csv")

        with pytest.raises(SourceReadError) as exc_info:
            list(source.iter_records())

        assert exc_info.value.context["file_path"].endswith("missing.csv")

    def test_extra_column_raises(self, write_places_csv, csv_row):
        """A row with too many fields terminates the stream"""
        csv_file = write_places_csv([csv_row("P1"), csv_row("P2") + ",extra"])

        with pytest.raises(MalformedInputError):
            list(CSVRecordSource(csv_file).iter_records())

    def test_short_row_raises(self, write_places_csv, csv_row):
        """A row with too few fields is not padded out and committed"""
        csv_file = write_places_csv([csv_row("P1"), "P2,a,b", csv_row("P3")])
        source = CSVRecordSource(csv_file)
        rows = source.iter_records()

        assert next(rows)[0] == "P1"
        with pytest.raises(MalformedInputError) as exc_info:
            next(rows)

        assert exc_info.value.context["line_number"] == 3
        assert exc_info.value.context["row_number"] == 2
        assert "saw 3" in exc_info.value.message

    def test_trailing_field_on_every_row_raises(self, write_places_csv, csv_row):
        """Uniformly wide rows must not shift place_id out of column 0"""
        csv_file = write_places_csv([csv_row("P1") + ",x", csv_row("P2") + ",y"])

        with pytest.raises(MalformedInputError):
            for row in CSVRecordSource(csv_file):
                assert row[0].startswith("P")

    def test_quoted_commas_and_blank_lines_are_not_miscounted(self, write_places_csv, csv_row):
        csv_file = write_places_csv([csv_row("P1"), "", csv_row("P2")])

        rows = list(CSVRecordSource(csv_file))

        assert [row[0] for row in rows] == ["P1", "P2"]

    def test_invalid_encoding_raises(self, tmp_path, csv_row):
        """Undecodable bytes are reported as malformed input"""
        csv_file = tmp_path / "broken.csv"
        csv_file.write_bytes(
            b"place_id,name,address,area,country,district,division,is_public,types,latitude,longitude\n"
            + csv_row("P1").replace("Gulshan", "Gul\udcffshan").encode("utf-8", "surrogateescape")
            + b"\n"
        )

        with pytest.raises(MalformedInputError):
            list(CSVRecordSource(csv_file).iter_records())

    def test_empty_file_yields_nothing(self, tmp_path):
        """A file without even a header ends the stream normally"""
        csv_file = tmp_path / "empty.csv"
        csv_file.write_text("")

        source = CSVRecordSource(csv_file)

        assert list(source.iter_records()) == []
        assert source.records_read == 0

    def test_header_only_yields_nothing(self, write_places_csv):
        csv_file = write_places_csv([])

        assert list(CSVRecordSource(csv_file)) == []

    def test_source_is_not_restartable(self, write_places_csv, csv_row):
        csv_file = write_places_csv([csv_row("P1")])
        source = CSVRecordSource(csv_file)
        list(source)

        with pytest.raises(RuntimeError):
            list(source)
