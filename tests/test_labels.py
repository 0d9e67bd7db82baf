from __future__ import annotations

import unittest

from colplot.labels import build_chart_labels, chart_title, output_path, x_label, y_label
from colplot.options import PlotOptions
from colplot.parser import parse_lines


class LabelTests(unittest.TestCase):
    def test_y_label_joins_non_x_legend_names(self) -> None:
        legend = ("a", "b", "c")
        self.assertEqual(y_label("", legend, 0, -1), "b-c")
        self.assertEqual(y_label("", legend, 1, -1), "a-c")
        self.assertEqual(y_label("", legend, 0, 2), "c")

    def test_y_label_override_and_defaults(self) -> None:
        self.assertEqual(y_label("speed", ("a", "b"), 0, -1), "speed")
        self.assertEqual(y_label("", None, 0, -1), "y")
        self.assertEqual(y_label("", ("a",), 0, -1), "y")
        self.assertEqual(y_label("", ("a", "b"), 0, 5), "y")

    def test_x_label(self) -> None:
        self.assertEqual(x_label("", ("t", "v"), 0), "t")
        self.assertEqual(x_label("time", ("t", "v"), 0), "time")
        self.assertEqual(x_label("", None, 0), "x")
        self.assertEqual(x_label("", ("t",), 3), "x")

    def test_title_is_base_name_of_source(self) -> None:
        self.assertEqual(chart_title("", "runs/2024/data.res"), "data.res")
        self.assertEqual(chart_title("My run", "runs/data.res"), "My run")

    def test_output_path_replaces_last_extension(self) -> None:
        self.assertEqual(output_path("", "runs/data.res"), "data.png")
        self.assertEqual(output_path("", "archive.tar.gz"), "archive.tar.png")
        self.assertEqual(output_path("", "noext"), "noext.png")
        self.assertEqual(output_path("chart.png", "runs/data.res"), "chart.png")

    def test_build_chart_labels_from_dataset(self) -> None:
        dataset = parse_lines(["#t u v", "0 1 2"], source="dir/run.res")
        labels = build_chart_labels(PlotOptions(), dataset)
        self.assertEqual(labels.title, "run.res")
        self.assertEqual(labels.x_label, "t")
        self.assertEqual(labels.y_label, "u-v")
        self.assertEqual(labels.output_path, "run.png")

        labels = build_chart_labels(PlotOptions(title="T", xlabel="X", ylabel="Y", output="o.png"), dataset)
        self.assertEqual((labels.title, labels.x_label, labels.y_label, labels.output_path), ("T", "X", "Y", "o.png"))


if __name__ == "__main__":
    unittest.main()
