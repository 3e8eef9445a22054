"""Tests for utility modules.

Test Files and Coverage:
========================

| Test File           | Test Classes                                | Tested Constructs                                   | Tested Functionalities                               |
|---------------------|---------------------------------------------|-----------------------------------------------------|------------------------------------------------------|
| test_walker.py      | FileContextTest, WalkTest, ListFilesTest    | FileContext, walk(), list_files()                   | Sorted traversal, regular files only, symlinks       |
| test_processor.py   | ComputeFingerprintTest, ProcessorTest       | compute_fingerprint(), Processor                    | SHA-1 and size, pool bridging, error propagation     |
| test_throttler.py   | ThrottlerTest                               | Throttler                                           | Concurrency bound, results, sibling cancellation     |
| test_profiling.py   | ProfilingTest                               | profile_function(), profile_main(), profile_worker  | Session directories, profile files                   |
"""
