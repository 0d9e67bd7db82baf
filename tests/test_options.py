from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from colplot.errors import ConfigurationError
from colplot.options import PlotOptions, load_config_file


class PlotOptionsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        options = PlotOptions().validate()
        self.assertEqual((options.xcol, options.ycol), (0, -1))
        self.assertEqual(options.mode, "combined")
        self.assertEqual(options.comment, "#")
        self.assertTrue(options.header)
        self.assertEqual(options.max_series, 10)

    def test_mode_follows_per_file_flag(self) -> None:
        self.assertEqual(PlotOptions(per_file=True).mode, "per-file")

    def test_validate_rejects_bad_values(self) -> None:
        bad = [
            {"xcol": -1},
            {"ycol": -2},
            {"x_length_cm": 0},
            {"y_length_cm": -3.0},
            {"dpi": 0},
            {"max_series": 0},
            {"workers": 0},
        ]
        for changes in bad:
            with self.subTest(changes=changes):
                with self.assertRaises(ConfigurationError):
                    PlotOptions(**changes).validate()

    def test_validate_accepts_ycol_equal_to_xcol(self) -> None:
        PlotOptions(xcol=1, ycol=1).validate()

    def test_style_is_derived_once(self) -> None:
        style = PlotOptions(points=True, x_length_cm=8, y_length_cm=6, legend_top=True, dpi=120).style()
        self.assertTrue(style.points)
        self.assertTrue(style.legend_top)
        self.assertEqual((style.x_length_cm, style.y_length_cm, style.dpi), (8.0, 6.0, 120.0))
        self.assertEqual(style.y_tick_decimals, 2)

    def test_with_changes_returns_copy(self) -> None:
        options = PlotOptions()
        changed = options.with_changes(title="T")
        self.assertEqual(options.title, "")
        self.assertEqual(changed.title, "T")


class ConfigFileTests(unittest.TestCase):
    def _write(self, tmp: str, text: str) -> Path:
        path = Path(tmp) / "colplot.toml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_reads_colplot_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, '[colplot]\ncomment = "%"\nx-length-cm = 12\nper_file = true\nycol = 2\n')
            values = load_config_file(path)
        self.assertEqual(values, {"comment": "%", "x_length_cm": 12, "per_file": True, "ycol": 2})

    def test_missing_table_gives_no_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, "[other]\nkey = 1\n")
            self.assertEqual(load_config_file(path), {})

    def test_rejects_unknown_key_and_wrong_types(self) -> None:
        cases = [
            "[colplot]\ncolour = 1\n",
            "[colplot]\nxcol = true\n",
            "[colplot]\nxcol = \"1\"\n",
            "[colplot]\npoints = 1\n",
            "colplot = 3\n",
            "[colplot\n",
        ]
        with tempfile.TemporaryDirectory() as tmp:
            for text in cases:
                with self.subTest(text=text):
                    with self.assertRaises(ConfigurationError):
                        load_config_file(self._write(tmp, text))

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigurationError):
                load_config_file(Path(tmp) / "nope.toml")


if __name__ == "__main__":
    unittest.main()
