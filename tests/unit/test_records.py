from __future__ import annotations

import io
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from chopcsv.config import InputConfig
from chopcsv.errors import FieldCountError, InputOpenError, StructuralReadError
from chopcsv.parse.records import Record, RecordSource


def _source(data: bytes, *, encoding: str = "utf-8", fields_per_record: int = 0) -> RecordSource:
    return RecordSource(io.BytesIO(data), encoding=encoding, errors="strict", fields_per_record=fields_per_record)


class RecordSourceTests(unittest.TestCase):
    def test_yields_numbered_records(self) -> None:
        source = _source(b"20240101,a\n20240102,b\n")

        self.assertEqual(
            list(source),
            [Record(1, ["20240101", "a"]), Record(2, ["20240102", "b"])],
        )
        self.assertEqual(source.records_read, 2)

    def test_quoted_fields_preserved(self) -> None:
        source = _source(b'20240101,"a,b","say ""hi""","two\nlines"\n')

        record = next(source)

        self.assertEqual(record.fields, ["20240101", "a,b", 'say "hi"', "two\nlines"])

    def test_long_fields_are_accepted(self) -> None:
        source = _source(b"20240101," + b"x" * 200_000 + b"\n")

        record = next(source)

        self.assertEqual(len(record.fields[1]), 200_000)

    def test_blank_lines_produce_no_record(self) -> None:
        source = _source(b"20240101,a\n\n\r\n20240102,b\n")

        self.assertEqual([r.number for r in source], [1, 2])

    def test_not_restartable(self) -> None:
        source = _source(b"20240101,a\n")

        self.assertEqual(len(list(source)), 1)
        self.assertEqual(list(source), [])
        with self.assertRaises(StopIteration):
            next(source)

    def test_field_count_mismatch_is_per_row(self) -> None:
        source = _source(b"20240101,a,b\n20240102,a\n20240103,c,d\n")

        first = next(source)
        with self.assertRaises(FieldCountError) as ctx:
            next(source)
        third = next(source)

        self.assertEqual(first.number, 1)
        self.assertEqual(ctx.exception.record_number, 2)
        self.assertEqual(ctx.exception.value, ["20240102", "a"])
        self.assertEqual(third, Record(3, ["20240103", "c", "d"]))

    def test_explicit_field_count(self) -> None:
        source = _source(b"20240101,a\n", fields_per_record=3)

        with self.assertRaises(FieldCountError):
            next(source)

    def test_negative_field_count_disables_check(self) -> None:
        source = _source(b"20240101,a,b\n20240102\n", fields_per_record=-1)

        self.assertEqual([len(r.fields) for r in source], [3, 1])

    def test_malformed_quoting_raises_structural_error(self) -> None:
        source = _source(b'20240101,a\n20240102,"b"c\n')

        next(source)
        with self.assertRaises(StructuralReadError):
            next(source)

    def test_strict_decode_failure_raises_structural_error(self) -> None:
        source = _source(b"20240101,\xff\xfe\n")

        with self.assertRaises(StructuralReadError):
            next(source)

    def test_encoding_is_applied_before_parsing(self) -> None:
        raw = "20240101,日付\n".encode("cp932")

        legacy = RecordSource(io.BytesIO(raw), encoding="cp932", errors="replace")
        utf8 = RecordSource(io.BytesIO(raw), encoding="utf-8", errors="surrogateescape")

        legacy_fields = next(legacy).fields
        utf8_fields = next(utf8).fields
        self.assertEqual(legacy_fields, ["20240101", "日付"])
        self.assertEqual(utf8_fields[0], "20240101")
        self.assertNotEqual(utf8_fields[1], legacy_fields[1])

    def test_open_uses_legacy_encoding_by_default(self) -> None:
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "in.csv"
            path.write_bytes("20240101,東京\n".encode("cp932"))

            with RecordSource.open(path, InputConfig()) as source:
                rows = [r.fields for r in source]

        self.assertEqual(rows, [["20240101", "東京"]])

    def test_open_utf8_mode(self) -> None:
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "in.csv"
            path.write_bytes("20240101,東京\n".encode("utf-8"))

            with RecordSource.open(path, InputConfig(utf8=True)) as source:
                rows = [r.fields for r in source]

        self.assertEqual(rows, [["20240101", "東京"]])

    def test_open_missing_file(self) -> None:
        with TemporaryDirectory() as tmpdir:
            with self.assertRaises(InputOpenError):
                RecordSource.open(Path(tmpdir) / "missing.csv", InputConfig())


if __name__ == "__main__":
    unittest.main()
