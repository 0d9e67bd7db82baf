from __future__ import annotations

from decimal import Decimal
import io
import unittest

import numpy as np
from PIL import Image

from colplot_plot import PlotDataError, cm_to_px, figure, figure_cm
from colplot_plot.adapters.normalize import normalize_xy
from colplot_plot.raster.canvas import new_canvas
from colplot_plot.raster.draw_text import DEFAULT_FONT_FAMILY
from colplot_plot.raster.draw_text import draw_text as raster_draw_text
from colplot_plot.raster.draw_text import text_size as raster_text_size
from colplot_plot.scales import DataLimits, PlotTransform, combine_limits, format_ticks, nice_ticks


class ColplotPlotTests(unittest.TestCase):
    def test_default_plot_font_family(self) -> None:
        self.assertEqual(DEFAULT_FONT_FAMILY, "DejaVu Sans")

    def test_figure_derives_missing_dimension_from_aspect_ratio(self) -> None:
        fig = figure(width=800, height=None)
        self.assertEqual(fig.height, 600)

    def test_cm_to_px_uses_dpi(self) -> None:
        self.assertEqual(cm_to_px(10.0), 378)
        self.assertEqual(cm_to_px(2.54, dpi=300), 300)
        fig = figure_cm(10, 5)
        self.assertEqual((fig.width, fig.height), (378, 189))
        with self.assertRaises(ValueError):
            cm_to_px(0)

    def test_text_renderer_uses_antialias_coverage(self) -> None:
        canvas = new_canvas(220, 80, color=(0, 0, 0, 0))
        raster_draw_text(canvas, 10, 20, "Column plot", (255, 255, 255, 255), font_size_px=24.0)
        chan = canvas[:, :, 0]
        self.assertTrue(np.any((chan > 0) & (chan < 255)))
        self.assertEqual(int(canvas[0, 0, 3]), 0)

    def test_rotated_text_size_swaps_dimensions(self) -> None:
        w0, h0 = raster_text_size("value", font_size_px=18.0, rotate_deg=0)
        w1, h1 = raster_text_size("value", font_size_px=18.0, rotate_deg=90)
        self.assertEqual((w1, h1), (h0, w0))
        with self.assertRaises(ValueError):
            raster_text_size("value", rotate_deg=45)

    def test_tick_formatting_uses_consistent_decimals_from_step(self) -> None:
        ticks = np.asarray([1.5, 2.0, 2.5, 3.0], dtype=np.float64)
        self.assertEqual(format_ticks(ticks), ["1.5", "2", "2.5", "3"])

    def test_fixed_tick_decimals(self) -> None:
        ticks = np.asarray([0.0, 0.5, 1.0], dtype=np.float64)
        self.assertEqual(format_ticks(ticks, decimals=2), ["0.00", "0.50", "1.00"])

    def test_tick_formatting_snaps_near_zero(self) -> None:
        ticks = np.asarray([-1.0, -4.4409e-16, 1.0], dtype=np.float64)
        self.assertEqual(format_ticks(ticks)[1], "0")

    def test_nice_ticks_stay_inside_range(self) -> None:
        ticks = nice_ticks(0.3, 9.7, 5)
        self.assertTrue(np.all(ticks >= 0.3))
        self.assertTrue(np.all(ticks <= 9.7))
        self.assertTrue(np.allclose(np.diff(ticks), ticks[1] - ticks[0]))

    def test_empty_limits_fall_back_to_unit_box(self) -> None:
        limits = combine_limits([None])
        self.assertEqual((limits.xmin, limits.xmax), (0.0, 1.0))
        self.assertAlmostEqual(limits.ymin, -0.05)
        self.assertAlmostEqual(limits.ymax, 1.05)

    def test_transform_maps_corners(self) -> None:
        transform = PlotTransform(limits=DataLimits(0.0, 10.0, 0.0, 5.0), x0=10, y0=20, width=101, height=51)
        px, py = transform.to_pixels(np.asarray([0.0, 10.0]), np.asarray([0.0, 5.0]))
        self.assertEqual(px.tolist(), [10, 110])
        self.assertEqual(py.tolist(), [70, 20])

    def test_normalize_decimal_and_mask(self) -> None:
        out = normalize_xy([Decimal("1.5"), None, 3], x=[0, 1, 2])
        self.assertEqual(out.y.dtype, np.float64)
        self.assertEqual(out.mask.tolist(), [True, False, True])

    def test_normalize_rejects_bad_inputs(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy([1, 2, 3], x=[0, 1])
        with self.assertRaises(PlotDataError):
            normalize_xy(np.zeros((2, 2)))
        with self.assertRaises(PlotDataError):
            normalize_xy(["a", "b"])
        with self.assertRaises(PlotDataError):
            normalize_xy("abc")

    def test_normalize_requires_y_and_defaults_x_to_index(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy(None)
        out = normalize_xy(np.asarray([3.0, 4.0]))
        self.assertEqual(out.x.tolist(), [0.0, 1.0])

    def test_render_scatter_and_line_deterministic(self) -> None:
        def render() -> np.ndarray:
            fig = figure(width=320, height=240)
            ax = fig.axes(title="demo", x_label="t", y_label="v")
            ax.plot(x=[0, 1, 2, 3], y=[0, 1, 4, 9], label="sq", color=(0, 0, 255))
            ax.scatter(x=[0, 1, 2, 3], y=[9, 4, 1, 0], label="inv", color=(255, 0, 0))
            return fig.to_rgba()

        a = render()
        b = render()
        self.assertEqual(a.shape, (240, 320, 4))
        np.testing.assert_array_equal(a, b)
        blue = (a[:, :, 0] == 0) & (a[:, :, 1] == 0) & (a[:, :, 2] == 255)
        red = (a[:, :, 0] == 255) & (a[:, :, 1] == 0) & (a[:, :, 2] == 0)
        self.assertTrue(np.any(blue))
        self.assertTrue(np.any(red))

    def test_legend_anchor_moves_legend_box(self) -> None:
        bounds = {}
        for anchor in ("top", "bottom"):
            fig = figure(width=320, height=240)
            ax = fig.axes(legend_anchor=anchor)
            ax.plot(x=[0, 1], y=[0, 1], label="a")
            fig.to_rgba()
            bounds[anchor] = ax.legend_bounds()
        self.assertLess(bounds["top"][1], bounds["bottom"][1])
        self.assertEqual(bounds["top"][0], bounds["bottom"][0])

    def test_unlabeled_series_have_no_legend(self) -> None:
        fig = figure(width=320, height=240)
        ax = fig.axes()
        ax.plot(x=[0, 1], y=[0, 1], label=None)
        ax.plot(x=[0, 1], y=[1, 0], label="   ")
        fig.to_rgba()
        self.assertEqual(ax.legend_entries(), ())
        self.assertIsNone(ax.legend_bounds())

    def test_empty_axes_render_with_unit_limits(self) -> None:
        fig = figure(width=200, height=150)
        ax = fig.axes()
        frame = fig.to_rgba()
        self.assertEqual(frame.shape, (150, 200, 4))
        self.assertEqual((ax.last_limits().xmin, ax.last_limits().xmax), (0.0, 1.0))

    def test_y_tick_decimals_fixed(self) -> None:
        fig = figure(width=320, height=240)
        ax = fig.axes()
        ax.set_tick_decimals(y=2)
        ax.plot(x=[0, 1, 2], y=[0.0, 0.5, 1.0])
        fig.to_rgba()
        _, ticks_y = ax.last_tick_values()
        self.assertGreater(len(ticks_y), 1)

    def test_figure_allows_single_axes(self) -> None:
        fig = figure(width=100, height=100)
        fig.axes()
        with self.assertRaises(PlotDataError):
            fig.axes()
        with self.assertRaises(PlotDataError):
            figure(width=100, height=100).to_rgba()

    def test_save_png_to_file_object(self) -> None:
        fig = figure(width=160, height=120)
        fig.axes().plot(x=[0, 1], y=[1, 2])
        buf = io.BytesIO()
        fig.save_png(buf)
        buf.seek(0)
        with Image.open(buf) as img:
            self.assertEqual(img.size, (160, 120))
            self.assertEqual(img.mode, "RGB")

    def test_plot_rejects_unknown_mode(self) -> None:
        ax = figure(width=100, height=100).axes()
        with self.assertRaises(PlotDataError):
            ax.plot(x=[0], y=[0], mode="bars")


if __name__ == "__main__":
    unittest.main()
