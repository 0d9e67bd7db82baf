from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from colplot.errors import ConfigurationError, InputError
from colplot.inputs import resolve_input_files


class ResolveInputFilesTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        for name in ("b.res", "a.res", "c.dat", "run1.res", "run2.res"):
            (self.root / name).write_text("t v\n0 1\n", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_plain_files_then_sorted_pattern_matches(self) -> None:
        files = resolve_input_files(["c.dat", "run*", "b.res"], root=self.root)
        self.assertEqual(
            files,
            [self.root / "c.dat", self.root / "b.res", self.root / "run1.res", self.root / "run2.res"],
        )

    def test_absolute_paths_ignore_root(self) -> None:
        target = self.root / "a.res"
        with tempfile.TemporaryDirectory() as other:
            self.assertEqual(resolve_input_files([str(target)], root=other), [target])

    def test_no_arguments(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_input_files([])

    def test_missing_root_or_root_is_file(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_input_files(["a.res"], root=self.root / "missing")
        with self.assertRaises(ConfigurationError):
            resolve_input_files(["a.res"], root=self.root / "a.res")

    def test_missing_plain_file(self) -> None:
        with self.assertRaises(InputError):
            resolve_input_files(["nope.res"], root=self.root)

    def test_directory_is_not_a_readable_file(self) -> None:
        (self.root / "sub").mkdir()
        with self.assertRaises(InputError):
            resolve_input_files(["sub"], root=self.root)

    def test_pattern_matching_nothing(self) -> None:
        with self.assertLogs("colplot.inputs", level="WARNING"):
            with self.assertRaises(InputError):
                resolve_input_files(["*.none"], root=self.root)

    def test_one_empty_pattern_among_others_is_tolerated(self) -> None:
        with self.assertLogs("colplot.inputs", level="WARNING"):
            files = resolve_input_files(["*.none", "*.dat"], root=self.root)
        self.assertEqual(files, [self.root / "c.dat"])


if __name__ == "__main__":
    unittest.main()
