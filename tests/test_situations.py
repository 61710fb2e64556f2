import unittest

from centraldeudores.transforms import config
from centraldeudores.transforms.colors import entity_color, hashed_color
from centraldeudores.transforms.situations import (
    Severity,
    classify_situation,
    situation_color,
    situation_label,
)


_SEVERITY_RANK = {
    Severity.NONE: 0,
    Severity.LOW: 1,
    Severity.LOW_MEDIUM: 2,
    Severity.MEDIUM: 3,
    Severity.HIGH: 4,
}


class SituationClassifierTests(unittest.TestCase):
    def test_table(self):
        self.assertEqual(situation_label(0), "no debt")
        self.assertEqual(situation_label(1), "normal")
        self.assertEqual(situation_label(2), "under watch")
        self.assertEqual(situation_label(3), "troubled")
        self.assertEqual(situation_label(4), "prejudicial-unrecoverable")
        self.assertEqual(situation_label(5), "technically unrecoverable")
        self.assertEqual(situation_label(6), "technically unrecoverable (alt.)")

        self.assertEqual(classify_situation(0).severity, Severity.NONE)
        self.assertEqual(classify_situation(2).severity, Severity.LOW_MEDIUM)
        self.assertEqual(classify_situation(6).severity, Severity.HIGH)

    def test_severity_is_monotonic(self):
        ranks = [_SEVERITY_RANK[classify_situation(c).severity] for c in range(7)]
        self.assertEqual(ranks, sorted(ranks))

    def test_out_of_range_is_unknown(self):
        for code in [-1, 7, 99, None, "x", 1.5, float("nan"), True]:
            info = classify_situation(code)
            self.assertEqual(info.severity, Severity.UNKNOWN, code)
            self.assertEqual(info.label, "unknown")
            self.assertEqual(info.color, config.UNKNOWN_SITUATION_COLOR)

    def test_numeric_like_codes(self):
        self.assertEqual(classify_situation(3.0).code, 3)
        self.assertEqual(classify_situation("2").label, "under watch")

    def test_only_zero_means_no_debt(self):
        self.assertEqual(classify_situation(0).severity, Severity.NONE)
        for code in range(1, 7):
            self.assertNotIn(classify_situation(code).severity, (Severity.NONE, Severity.UNKNOWN))

    def test_colors_come_from_config(self):
        for code in range(7):
            self.assertEqual(situation_color(code), config.SITUATION_COLORS[code])


class ColorTests(unittest.TestCase):
    def test_palette_then_hashed_overflow(self):
        palette = config.ENTITY_PALETTE
        self.assertEqual(entity_color("A", 0), palette[0])
        self.assertEqual(entity_color("B", len(palette) - 1), palette[-1])

        overflow = entity_color("BANCO DE LA NACION ARGENTINA", len(palette))
        self.assertEqual(overflow, hashed_color("BANCO DE LA NACION ARGENTINA"))
        self.assertRegex(overflow, r"^#[0-9a-f]{6}$")

    def test_hashed_color_is_reproducible(self):
        self.assertEqual(hashed_color("BBVA"), hashed_color("BBVA"))
        self.assertNotEqual(hashed_color("BBVA"), hashed_color("BANCO GALICIA"))

    def test_total_color_is_reserved(self):
        self.assertNotIn(config.TOTAL_SERIES_COLOR, config.ENTITY_PALETTE)
        for i in range(50):
            self.assertNotEqual(entity_color(f"ENTITY {i}", i), config.TOTAL_SERIES_COLOR)


if __name__ == "__main__":
    unittest.main()
