"""Tests for report module.

Test Files and Coverage:
========================

| Test File           | Test Classes                           | Tested Constructs                       | Tested Functionalities                   |
|---------------------|----------------------------------------|-----------------------------------------|------------------------------------------|
| test_path.py        | NormalizePathTest                      | normalize_path()                        | Separators, idempotence                  |
| test_record.py      | FileRecordTest                         | FileRecord, make_report()               | Equality, ordering, set semantics        |
| test_analysis.py    | AnalyzeReportTest                      | analyze_report()                        | Zero size, duplicate groups              |
| test_reconcile.py   | FindPairsTest, CompareReportsTest      | find_pairs(), extract_pairs(), compare_reports() | Key scoping, phases, partitioning |
| test_codec.py       | CodecTest                              | save_report(), load_report(), FormatError | JSON/msgpack round trip, rejection     |
| test_builder.py     | BuildReportTest                        | build_report(), generate_report()       | Records, progress, failure atomicity     |
"""
