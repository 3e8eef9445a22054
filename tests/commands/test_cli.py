import io
import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

from treesnap.cli import treesnap_main
from treesnap.report.codec import load_report

from ..test_utils import write_tree


class CliTest(unittest.TestCase):
    """Integration tests for the treesnap command line."""

    def run_main(self, *argv):
        """Run treesnap_main and capture stdout and stderr."""
        captured_output = io.StringIO()
        captured_error = io.StringIO()
        old_stdout, old_stderr = sys.stdout, sys.stderr
        try:
            sys.stdout, sys.stderr = captured_output, captured_error
            status = treesnap_main([str(arg) for arg in argv])
        finally:
            sys.stdout, sys.stderr = old_stdout, old_stderr
        return status, captured_output.getvalue(), captured_error.getvalue()

    def test_create_and_save(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree = Path(tmpdir) / 'tree'
            write_tree(tree, {'a.txt': b'same', 'b/c.txt': b'same', 'empty': b''})
            output = Path(tmpdir) / 'report.json'

            status, out, _ = self.run_main('create', tree, '-o', output)

            self.assertEqual(0, status)
            self.assertIn("-- Files with size 0", out)
            self.assertIn("-- Files which have same content", out)
            self.assertIn("a.txt\nb/c.txt", out)
            self.assertEqual({'a.txt', 'b/c.txt', 'empty'}, {f.path for f in load_report(output)})
            self.assertEqual('1', json.loads(output.read_text())['version'])

    def test_create_verbose_progress(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree = Path(tmpdir) / 'tree'
            write_tree(tree, {'x': b'1', 'y': b'22'})

            status, out, err = self.run_main('--verbose', 'create', tree)

            self.assertEqual(0, status)
            self.assertIn("-- Analysis - OK", out)
            self.assertIn("Processed 'x' (1 bytes)", err)
            self.assertIn("Processed 'y' (2 bytes)", err)

    def test_create_check_names(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree = Path(tmpdir) / 'tree'
            write_tree(tree, {'Dasgupta - Algorithms (2006).pdf': b'book', 'notes.txt': b'notes'})
            output = Path(tmpdir) / 'report.json'

            status, out, _ = self.run_main('create', tree, '--check-names', '-o', output)

            self.assertEqual(2, status)
            self.assertIn("-- Invalid file names\n\nnotes.txt\n", out)
            self.assertFalse(output.exists())

    def test_check_names_from_settings(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree = Path(tmpdir) / 'tree'
            write_tree(tree, {'notes.txt': b'notes'})
            config = Path(tmpdir) / 'settings.toml'
            config.write_text('[create]\ncheck_names = true\n\n[processing]\nconcurrency = 1\n')

            status, _, _ = self.run_main('--config', config, 'create', tree)
            self.assertEqual(2, status)

            status, _, _ = self.run_main('--config', config, 'create', tree, '--no-check-names')
            self.assertEqual(0, status)

    def test_concurrency_from_settings(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree = Path(tmpdir) / 'tree'
            write_tree(tree, {'a.txt': b'a'})
            config = Path(tmpdir) / 'settings.toml'

            config.write_text('[processing]\nconcurrency = "2"\n')
            status, _, _ = self.run_main('--config', config, 'create', tree)
            self.assertEqual(0, status)

            for value in ('"four"', '0', 'true', '1.5'):
                with self.subTest(value=value):
                    config.write_text(f'[processing]\nconcurrency = {value}\n')

                    status, out, err = self.run_main('--config', config, 'create', tree)

                    self.assertEqual(1, status)
                    self.assertEqual('', out)
                    self.assertIn("Type: SettingsError", err)
                    self.assertIn("processing.concurrency must be a positive integer", err)

    def test_create_compare_with(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree = Path(tmpdir) / 'tree'
            write_tree(tree, {'dir/dog.png': b'woof', 'dir/pig.png': b'oink'})
            old = Path(tmpdir) / 'old.msgpack'
            self.assertEqual(0, self.run_main('create', tree, '-o', old)[0])

            (tree / 'dir' / 'dog.png').rename(tree / 'dog.png')
            (tree / 'dir' / 'pig.png').unlink()

            status, out, _ = self.run_main('create', tree, '--compare-with', old)

            self.assertEqual(0, status)
            self.assertIn("File 'dir/dog.png'\nmoved to 'dog.png'", out)
            self.assertIn("-- Deleted files\n\ndir/pig.png\n", out)

    def test_compare_report_with_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree = Path(tmpdir) / 'tree'
            write_tree(tree, {'info.txt': b'old'})
            old = Path(tmpdir) / 'old.json'
            self.run_main('create', tree, '-o', old)

            status, out, _ = self.run_main('compare', old, tree)
            self.assertEqual(0, status)
            self.assertIn("-- Report comparison - SAME", out)

            (tree / 'info.txt').write_bytes(b'new content')
            status, out, _ = self.run_main('compare', old, tree)
            self.assertIn("-- Modified files\n\ninfo.txt\n", out)

    def test_analyze(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            report = Path(tmpdir) / 'report.json'
            report.write_text(json.dumps({'version': '1', 'files': [
                {'path': 'a', 'size': '0', 'hash': 'e'},
            ]}))

            status, out, _ = self.run_main('analyze', report)

            self.assertEqual(0, status)
            self.assertIn("-- Files with size 0\n\na\n", out)

    def test_analyze_invalid_report(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            report = Path(tmpdir) / 'report.json'
            report.write_text('{"files": []}')

            status, out, err = self.run_main('analyze', report)

            self.assertEqual(1, status)
            self.assertEqual('', out)
            self.assertIn("Type: FormatError", err)

    def test_create_missing_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            status, _, err = self.run_main('create', Path(tmpdir) / 'missing')

            self.assertEqual(1, status)
            self.assertIn("Type: FileNotFoundError", err)

    def test_check_names(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            tree = Path(tmpdir) / 'tree'
            write_tree(tree, {'Syme - Expert F# 3.0 (2012).pdf': b''})

            self.assertEqual(0, self.run_main('check-names', tree)[0])

            write_tree(tree, {'Dasgupta - Algorithms (2006).PDF': b''})
            status, out, _ = self.run_main('check-names', tree)

            self.assertEqual(2, status)
            self.assertIn("Dasgupta - Algorithms (2006).PDF", out)
            self.assertNotIn("Syme", out)

    def test_log_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            report = Path(tmpdir) / 'report.json'
            report.write_text('{"version": "1", "files": []}')
            log_file = Path(tmpdir) / 'treesnap.log'

            root_handlers = logging.root.handlers[:]
            root_level = logging.root.level
            try:
                self.run_main('--log-file', log_file, 'analyze', report)
            finally:
                for handler in logging.root.handlers[:]:
                    logging.root.removeHandler(handler)
                    if handler not in root_handlers:
                        handler.close()
                for handler in root_handlers:
                    logging.root.addHandler(handler)
                logging.root.setLevel(root_level)

            self.assertIn("Loaded report with 0 files", log_file.read_text())


if __name__ == '__main__':
    unittest.main()
