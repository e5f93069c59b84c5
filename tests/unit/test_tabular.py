"""Tests for CSV import of inputs and export of results."""

import csv
import io

import pytest

from stccalc.sdk import (
    Calculator,
    CsvImportError,
    EXPORT_HEADER,
    OptionInput,
    read_inputs_csv,
    run_batch,
    write_results_csv,
)


class TestReadInputs:

    def test_reads_rows_after_header(self):
        source = io.StringIO(
            "Exercise Price,Exercised Shares,FMV\n"
            "10.00,100,50.00\n"
            "2.5,1000,12.75\n"
        )
        inputs = read_inputs_csv(source)

        assert inputs == [
            OptionInput(exercise_price=10.0, exercised_shares=100, fmv=50.0),
            OptionInput(exercise_price=2.5, exercised_shares=1000, fmv=12.75),
        ]

    def test_extra_columns_ignored(self):
        source = io.StringIO("a,b,c,d\n10,100,50,anything\n")
        assert read_inputs_csv(source) == [OptionInput(exercise_price=10.0, exercised_shares=100, fmv=50.0)]

    def test_short_rows_skipped(self):
        source = io.StringIO(
            "price,shares,fmv\n"
            "10,100\n"
            "\n"
            "5,200,25\n"
        )
        inputs = read_inputs_csv(source)

        assert len(inputs) == 1
        assert inputs[0].exercise_price == 5.0

    def test_header_only(self):
        assert read_inputs_csv(io.StringIO("price,shares,fmv\n")) == []

    def test_empty_file_fails(self):
        with pytest.raises(CsvImportError, match="header"):
            read_inputs_csv(io.StringIO(""))

    def test_bad_field_aborts_whole_import(self):
        source = io.StringIO(
            "price,shares,fmv\n"
            "10,100,50\n"
            "10,100,fifty\n"
            "10,100,50\n"
        )
        with pytest.raises(CsvImportError) as exc_info:
            read_inputs_csv(source)

        err = exc_info.value
        assert err.row == 3
        assert err.field == "FMV"
        assert err.value == "fifty"
        assert "row 3" in str(err)

    def test_first_bad_field_is_reported(self):
        source = io.StringIO("price,shares,fmv\nabc,xyz,50\n")
        with pytest.raises(CsvImportError) as exc_info:
            read_inputs_csv(source)
        assert exc_info.value.field == "exercise price"

    def test_whitespace_around_numbers(self):
        source = io.StringIO("price,shares,fmv\n 10.00 , 100 , 50.00 \n")
        assert read_inputs_csv(source)[0].fmv == 50.0

    def test_reads_from_path(self, tmp_path):
        path = tmp_path / "grants.csv"
        path.write_text("price,shares,fmv\n10,100,50\n")
        assert len(read_inputs_csv(path)) == 1
        assert len(read_inputs_csv(str(path))) == 1


class TestWriteResults:

    def test_header_and_formatting(self, example_exercise, default_config):
        results = run_batch([example_exercise], Calculator(default_config))
        out = io.StringIO()

        count = write_results_csv(results, out)

        rows = list(csv.reader(io.StringIO(out.getvalue())))
        assert count == 1
        assert rows[0] == EXPORT_HEADER
        assert len(rows[0]) == 11
        assert rows[1] == [
            "10.00", "100.0000", "50.00", "45.0000", "55.0000",
            "2211.00", "2250.00", "4000.00", "1186.00", "1000.00", "25.00",
        ]

    def test_negative_values_are_written(self, default_config):
        results = run_batch(
            [OptionInput(exercise_price=50.0, exercised_shares=100, fmv=40.0)], Calculator(default_config)
        )
        out = io.StringIO()
        write_results_csv(results, out)

        row = list(csv.reader(io.StringIO(out.getvalue())))[1]
        assert row[4] == "-19.0000"
        assert row[7] == "-1000.00"

    def test_empty_batch_writes_header_only(self):
        out = io.StringIO()
        assert write_results_csv([], out) == 0
        assert list(csv.reader(io.StringIO(out.getvalue()))) == [EXPORT_HEADER]

    def test_round_trip(self, tmp_path, default_config):
        inputs = [
            OptionInput(exercise_price=10.0, exercised_shares=100, fmv=50.0),
            OptionInput(exercise_price=0.25, exercised_shares=12500, fmv=8.4),
            OptionInput(exercise_price=31.17, exercised_shares=333, fmv=29.99),
        ]
        path = tmp_path / "results.csv"
        write_results_csv(run_batch(inputs, Calculator(default_config)), path)

        assert read_inputs_csv(path) == inputs
