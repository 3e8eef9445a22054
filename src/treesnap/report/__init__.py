"""Report module for fingerprinting and reconciling directory trees.

This package contains:
- record: FileRecord and the Report type
- path: Conversion of native relative paths to the normalized form stored in reports
- builder: Report generation from a directory tree
- analysis: Zero-size and duplicate content detection within one report
- reconcile: Key-based pairing and the moved/modified/added/deleted classification
- codec: Reading and writing reports
"""
