from __future__ import annotations

import unittest

from colplot.palette import BASE_COLORS, BLACK, BLUE, RED, ColorPalette, diverging_ramp


class ColorPaletteTests(unittest.TestCase):
    def test_default_palette_serves_the_ten_base_colors(self) -> None:
        palette = ColorPalette()
        self.assertEqual(palette.capacity, 10)
        self.assertEqual(palette.colors(), BASE_COLORS)
        self.assertEqual(palette.color_for(0), RED)
        self.assertEqual(palette.color_for(1), BLUE)
        self.assertEqual(palette.color_for(9), BLACK)

    def test_index_at_capacity_falls_back_to_first_color(self) -> None:
        palette = ColorPalette()
        self.assertEqual(palette.color_for(palette.capacity), palette.color_for(0))
        self.assertEqual(palette.color_for(1000), RED)

    def test_lookup_is_deterministic(self) -> None:
        a = ColorPalette(14)
        b = ColorPalette(14)
        self.assertEqual([a.color_for(i) for i in range(20)], [b.color_for(i) for i in range(20)])

    def test_large_capacity_extends_with_blue_to_red_ramp(self) -> None:
        palette = ColorPalette(15)
        colors = palette.colors()
        self.assertEqual(len(colors), 16)
        self.assertEqual(colors[:10], BASE_COLORS)
        first, last = colors[10], colors[-1]
        self.assertGreater(first[2], first[0])
        self.assertGreater(last[0], last[2])
        self.assertTrue(all(c[3] == 255 for c in colors))
        self.assertEqual(palette.color_for(14), colors[14])
        self.assertEqual(palette.color_for(15), RED)

    def test_small_capacity_clamps_early(self) -> None:
        palette = ColorPalette(3)
        self.assertEqual(palette.color_for(2), BASE_COLORS[2])
        self.assertEqual(palette.color_for(3), RED)

    def test_reserve_only_grows(self) -> None:
        palette = ColorPalette()
        before = palette.colors()
        palette.reserve(12)
        self.assertEqual(palette.capacity, 12)
        self.assertEqual(palette.colors()[:10], before)
        palette.reserve(4)
        self.assertEqual(palette.capacity, 12)

    def test_invalid_capacity_and_index(self) -> None:
        with self.assertRaises(ValueError):
            ColorPalette(0)
        with self.assertRaises(ValueError):
            ColorPalette().reserve(-1)
        with self.assertRaises(ValueError):
            ColorPalette().color_for(-1)

    def test_ramp_length(self) -> None:
        self.assertEqual(diverging_ramp(0), [])
        self.assertEqual(len(diverging_ramp(5)), 5)


if __name__ == "__main__":
    unittest.main()
