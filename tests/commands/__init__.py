"""Tests for command implementation modules.

Test Files and Coverage:
========================

| Test File          | Test Classes        | Tested Constructs                               | Tested Functionalities              |
|--------------------|---------------------|-------------------------------------------------|-------------------------------------|
| test_format.py     | FormatTest          | format_analysis(), format_comparison()          | Sections, ordering                  |
| test_cli.py        | CliTest             | treesnap_main()                                 | create/analyze/compare/check-names  |
"""
