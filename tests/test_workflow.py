"""
Tests for the decode workflow: dispatching, assembly and decode_file.
"""

import fitdecode
import pytest

from fittables.errors import (
    DecodeRuntimeError,
    InputFileNotFoundError,
    IntegrityCheckFailed,
)
from fittables.parsers import fit_parser
from fittables.validation import TableValidator
from fittables.workflow import (
    DecodeResult,
    OutputAssembler,
    RecordDispatcher,
    decode_file,
)

from conftest import make_record


def hr(value, units="bpm", base_type="uint8"):
    return {"values": (value,), "units": units, "base_type": base_type}


class TestRecordDispatcher:
    """Tests for routing records to tables."""

    def test_ingest_creates_tables_in_order(self):
        dispatcher = RecordDispatcher()
        dispatcher.ingest(make_record(0, "file_id", serial=hr(1, "")))
        dispatcher.ingest(make_record(20, "record", heart_rate=hr(60)))
        dispatcher.ingest(make_record(0, "file_id", serial=hr(2, "")))
        dispatcher.ingest(make_record(19, "lap", total_timer_time=hr(10, "s")))

        assert dispatcher.registry.names() == ["file_id", "record", "lap"]
        assert dispatcher.registry.get(0).row_count == 2

    def test_row_count_per_type(self):
        dispatcher = RecordDispatcher()
        records = [make_record(20, "record", heart_rate=hr(i)) for i in range(5)]
        records += [make_record(19, "lap") for _ in range(2)]

        assert dispatcher.ingest_all(records) == 7
        assert dispatcher.registry.get(20).row_count == 5
        assert dispatcher.registry.get(19).row_count == 2

    def test_callable(self):
        dispatcher = RecordDispatcher()
        dispatcher(make_record(20, "record", heart_rate=hr(60)))
        assert 20 in dispatcher.registry


class TestOutputAssembler:
    """Tests for assembling materialized tables."""

    def test_heart_rate_and_cadence(self):
        dispatcher = RecordDispatcher()
        dispatcher.ingest(make_record(heart_rate=hr(60)))
        dispatcher.ingest(make_record(heart_rate=hr(62), cadence=hr(80, "rpm")))

        result = OutputAssembler().assemble(dispatcher.registry)

        table = result["record"]
        assert table.row_count == 2
        assert table.columns["heart_rate"] == [60.0, 62.0]
        assert table.columns["cadence"] == [None, 80.0]
        assert table.units_by_column == {"heart_rate": "bpm", "cadence": "rpm"}
        assert result.record_count == 2

    def test_tables_in_discovery_order(self):
        dispatcher = RecordDispatcher()
        dispatcher.ingest(make_record(19, "lap"))
        dispatcher.ingest(make_record(0, "file_id"))
        dispatcher.ingest(make_record(20, "record"))

        result = OutputAssembler().assemble(dispatcher.registry)
        assert result.table_names == ["lap", "file_id", "record"]

    def test_deterministic(self):
        def run():
            dispatcher = RecordDispatcher()
            dispatcher.ingest(make_record(heart_rate=hr(60), position=(1, 2)))
            dispatcher.ingest(make_record(cadence=hr(90, "rpm")))
            return OutputAssembler().assemble(dispatcher.registry)

        assert run() == run()

    def test_repeated_assembly_identical(self):
        dispatcher = RecordDispatcher()
        dispatcher.ingest(make_record(heart_rate=hr(60)))
        assembler = OutputAssembler()
        assert assembler.assemble(dispatcher.registry) == assembler.assemble(dispatcher.registry)

    def test_unrecognized_becomes_warning(self):
        dispatcher = RecordDispatcher()
        dispatcher.ingest(make_record(0, "file_id", product_name=hr("Edge", "", "string")))
        result = OutputAssembler().assemble(dispatcher.registry)

        assert result["file_id"].columns["product_name"] == [-1.0]
        assert result.has_warnings
        assert "product_name" in result.warnings[0]

    def test_unit_conflict_becomes_warning(self):
        dispatcher = RecordDispatcher()
        dispatcher.ingest(make_record(temperature=hr(20, "C")))
        dispatcher.ingest(make_record(temperature=hr(68, "F")))
        result = OutputAssembler().assemble(dispatcher.registry)

        assert result["record"].unit_for("temperature") == "C"
        assert any("kept unit 'C'" in w for w in result.warnings)

    def test_duplicate_names_kept_apart(self):
        dispatcher = RecordDispatcher()
        dispatcher.ingest(make_record(0xFF01, "unknown", a=hr(1)))
        dispatcher.ingest(make_record(0xFF02, "unknown", b=hr(2)))
        result = OutputAssembler().assemble(dispatcher.registry)

        assert result.table_names == ["unknown", f"unknown_{0xFF02}"]

    def test_discovery_column_order(self):
        dispatcher = RecordDispatcher()
        dispatcher.ingest(make_record(speed=hr(1, "m/s"), altitude=hr(2, "m")))
        result = OutputAssembler(column_order="discovery").assemble(dispatcher.registry)
        assert result["record"].column_names == ["speed", "altitude"]

    def test_summary(self):
        dispatcher = RecordDispatcher()
        dispatcher.ingest(make_record(heart_rate=hr(60)))
        summary = OutputAssembler().assemble(dispatcher.registry).summary()
        assert "record (#20): 1 rows, 1 columns" in summary


class FakeFrame:
    """Minimal stand-in for a fitdecode data message."""

    frame_type = fitdecode.FIT_FRAME_DATA
    global_mesg_num = 20
    name = "record"
    fields = ()


class TestDecodeFile:
    """Tests for the end-to-end decode_file pipeline."""

    def test_decode(self, fit_file):
        result = decode_file(fit_file)

        assert isinstance(result, DecodeResult)
        assert result.source_file == str(fit_file)
        table = result["record"]
        assert table.row_count == 2
        assert table.columns["heart_rate"] == [60.0, 62.0]
        assert table.columns["cadence"] == [None, 80.0]
        assert table.units_by_column == {"cadence": "rpm", "heart_rate": "bpm"}
        assert TableValidator().validate(result).is_valid

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputFileNotFoundError):
            decode_file(tmp_path / "missing.fit")

    def test_missing_file_is_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            decode_file(tmp_path / "missing.fit")

    def test_integrity_failure_before_any_record(self, corrupt_fit_file, monkeypatch):
        """A corrupt file never reaches the decoder or the dispatcher."""
        ingested = []
        monkeypatch.setattr(RecordDispatcher, "ingest", lambda self, r: ingested.append(r))

        with pytest.raises(IntegrityCheckFailed):
            decode_file(corrupt_fit_file)
        assert ingested == []

    def test_decode_error_mid_stream(self, fit_file, monkeypatch):
        """A decoder abort raises and returns nothing partial."""

        class BrokenReader:
            def __init__(self, *args, **kwargs):
                pass

            def __enter__(self):
                return self

            def __exit__(self, *exc):
                return False

            def __iter__(self):
                yield FakeFrame()
                raise fitdecode.FitError("unexpected end of file")

        monkeypatch.setattr(fit_parser.fitdecode, "FitReader", BrokenReader)

        with pytest.raises(DecodeRuntimeError, match="unexpected end of file"):
            decode_file(fit_file)
