import math
import unittest

import pytest

from seqmap.annotate.base import Annotation
from seqmap.constants import ORIENT
from seqmap.illustrate.circular import (
    TWO_PI,
    CircularMap,
    angle_to_position,
    arc_path,
    arrow_arc_path,
    band_radii,
    dominant_baseline,
    layout_circular_annotations,
    mouse_to_position,
    normalize_angle,
    pack_circular_rows,
    polar_to_cartesian,
    position_to_angle,
    text_anchor,
    tick_interval,
    tick_label,
)
from seqmap.illustrate.constants import DiagramSettings
from seqmap.interval import Range


class TestAngles:
    def test_origin_at_top(self):
        assert position_to_angle(0, 1000) == pytest.approx(-math.pi / 2)
        assert position_to_angle(250, 1000) == pytest.approx(0)
        assert position_to_angle(500, 1000) == pytest.approx(math.pi / 2)

    def test_origin_offset(self):
        assert position_to_angle(0, 1000, math.pi / 2) == pytest.approx(0)

    @pytest.mark.parametrize('position', [0, 1, 250, 499, 750, 999])
    def test_angle_to_position_inverts(self, position):
        angle = position_to_angle(position, 1000, 0.3)
        assert angle_to_position(angle, 1000, 0.3) == pytest.approx(position, abs=1e-6)

    def test_normalize_angle(self):
        assert normalize_angle(-math.pi / 2) == pytest.approx(3 * math.pi / 2)
        assert normalize_angle(TWO_PI) == pytest.approx(0)
        assert 0 <= normalize_angle(-7 * TWO_PI) < TWO_PI

    def test_mouse_to_position(self):
        assert mouse_to_position(250, 100, 250, 250, 1000) == 0
        assert mouse_to_position(400, 250, 250, 250, 1000) == 250
        assert mouse_to_position(250, 400, 250, 250, 1000) == 500

    def test_mouse_to_position_wraps_to_zero(self):
        assert mouse_to_position(249.99, 100, 250, 250, 1000) == 0

    def test_polar_to_cartesian(self):
        x, y = polar_to_cartesian(250, 250, 100, math.pi / 2)
        assert x == pytest.approx(250)
        assert y == pytest.approx(350)


class TestArcPath(unittest.TestCase):
    def setUp(self):
        self.args = (1000, 250, 250, 180, 14)

    def test_empty(self):
        self.assertTrue(arc_path(10, 10, *self.args).is_empty())

    def test_band(self):
        path = arc_path(0, 250, *self.args)
        self.assertEqual(['M', 'A', 'L', 'A', 'Z'], [c[0] for c in path])
        self.assertAlmostEqual(math.pi / 2, path.angular_span)
        self.assertEqual((173, 187), (path.inner_radius, path.outer_radius))
        x, y = path.points()[0]
        self.assertAlmostEqual(250, x)
        self.assertAlmostEqual(250 - 187, y)

    def test_large_arc_flag(self):
        path = arc_path(0, 750, *self.args)
        self.assertEqual(1, path.commands[1][4])
        self.assertEqual(0, arc_path(0, 250, *self.args).commands[1][4])

    def test_crossing_origin(self):
        path = arc_path(900, 100, *self.args)
        self.assertAlmostEqual(0.2 * TWO_PI, path.angular_span)

    def test_wrap_around_is_complement(self):
        for start, end in [(0, 250), (250, 0), (100, 900)]:
            naive = position_to_angle(end, 1000) - position_to_angle(start, 1000)
            path = arc_path(start, end, *self.args, wrap_around=True)
            self.assertAlmostEqual(TWO_PI - abs(naive), abs(path.angular_span))
            self.assertEqual(-1 if naive > 0 else 1, int(math.copysign(1, path.angular_span)))

    def test_wrap_around_same_position_is_full_circle(self):
        path = arc_path(10, 10, *self.args, wrap_around=True)
        self.assertAlmostEqual(TWO_PI, path.angular_span)
        self.assertEqual(4, len([c for c in path if c[0] == 'A']))

    def test_tiny_fraction_is_quadrilateral(self):
        path = arc_path(0, 1, *self.args)
        self.assertEqual(['M', 'L', 'L', 'L', 'Z'], [c[0] for c in path])

    def test_band_radii(self):
        self.assertEqual((1, 15), band_radii(5, 20))
        self.assertEqual((173, 187), band_radii(180, 14))


class TestArrowArcPath(unittest.TestCase):
    def setUp(self):
        self.args = (1000, 250, 250, 180, 14)

    def test_plus_tip_at_end(self):
        path = arrow_arc_path(0, 250, *self.args, ORIENT.PLUS)
        self.assertTrue(path.has_arrow)
        tip = polar_to_cartesian(250, 250, 180, position_to_angle(250, 1000))
        self.assertTrue(any([
            math.isclose(x, tip[0], abs_tol=1e-6) and math.isclose(y, tip[1], abs_tol=1e-6)
            for x, y in path.points()
        ]))

    def test_minus_starts_at_tip(self):
        path = arrow_arc_path(0, 250, *self.args, ORIENT.MINUS)
        tip = polar_to_cartesian(250, 250, 180, position_to_angle(0, 1000))
        x, y = path.points()[0]
        self.assertAlmostEqual(tip[0], x)
        self.assertAlmostEqual(tip[1], y)

    def test_undirected_is_plain_band(self):
        path = arrow_arc_path(0, 250, *self.args, ORIENT.NONE)
        self.assertFalse(path.has_arrow)
        self.assertEqual(arc_path(0, 250, *self.args).to_svg(), path.to_svg())

    def test_too_short_for_head(self):
        path = arrow_arc_path(0, 5, *self.args, ORIENT.PLUS)
        self.assertFalse(path.has_arrow)
        self.assertEqual(['M', 'L', 'L', 'L', 'Z'], [c[0] for c in path])

    def test_empty(self):
        self.assertTrue(arrow_arc_path(5, 5, *self.args, ORIENT.PLUS).is_empty())


class TestTicks:
    @pytest.mark.parametrize(
        'length,interval', [(500, 100), (1000, 100), (3000, 500), (10000, 1000), (30000, 5000), (100000, 10000)]
    )
    def test_tick_interval(self, length, interval):
        assert tick_interval(length) == interval

    def test_tick_label(self):
        assert [tick_label(p) for p in [0, 500, 1000, 1500, 20000]] == ['0', '500', '1k', '1.5k', '20k']

    def test_text_anchor(self):
        assert text_anchor(0) == 'start'
        assert text_anchor(math.pi) == 'end'
        assert text_anchor(math.pi / 2) == 'middle'
        assert text_anchor(-math.pi / 2) == 'middle'

    def test_dominant_baseline(self):
        assert dominant_baseline(math.pi / 2) == 'hanging'
        assert dominant_baseline(-math.pi / 2) == 'auto'
        assert dominant_baseline(0) == 'middle'


class TestCircularMap(unittest.TestCase):
    def setUp(self):
        self.circular_map = CircularMap(1000, DiagramSettings())

    def test_defaults(self):
        self.assertEqual((250, 250), self.circular_map.center)
        self.assertEqual(180, self.circular_map.backbone_radius)
        self.assertEqual('0 0 500 500', self.circular_map.view_box)

    def test_zoom_clamped_high(self):
        scale = self.circular_map.set_zoom(2)
        self.assertAlmostEqual(230, self.circular_map.backbone_radius)
        self.assertAlmostEqual(230 / 180, scale)

    def test_zoom_clamped_low(self):
        self.circular_map.set_zoom(0.1)
        self.assertAlmostEqual(50, self.circular_map.backbone_radius)

    def test_annotation_rows_shrink_max_radius(self):
        self.circular_map.set_annotation_row_count(2)
        self.assertEqual(38, self.circular_map.annotation_space)
        self.assertEqual(192, self.circular_map.max_backbone_radius)
        self.circular_map.set_annotation_row_count(4)
        self.assertEqual(250 - 6 - 56 - 12 - 20, self.circular_map.backbone_radius)

    def test_row_radius(self):
        self.assertEqual(193, self.circular_map.row_radius(0))
        self.assertEqual(211, self.circular_map.row_radius(1))

    def test_tick_marks(self):
        ticks = self.circular_map.tick_marks()
        self.assertEqual(10, len(ticks))
        self.assertEqual('0', ticks[0].label)
        self.assertAlmostEqual(250, ticks[0].inner_point[0])
        self.assertAlmostEqual(250 - 176, ticks[0].inner_point[1])
        self.assertAlmostEqual(250 - 160, ticks[0].label_point[1])
        self.assertEqual([], CircularMap(0).tick_marks())

    def test_mouse_to_position(self):
        self.assertEqual(250, self.circular_map.mouse_to_position(400, 250))

    def test_text_arc_path_reversed_on_bottom_half(self):
        path = self.circular_map.text_arc_path(400, 600, 200)
        x, y = path.points()[0]
        end = self.circular_map.position_to_cartesian(600, 200)
        self.assertAlmostEqual(end[0], x)
        self.assertAlmostEqual(end[1], y)
        top = self.circular_map.text_arc_path(900, 100, 200)
        start = self.circular_map.position_to_cartesian(900, 200)
        self.assertAlmostEqual(start[0], top.points()[0][0])

    def test_selection_path(self):
        path = self.circular_map.selection_path(Range(0, 250))
        self.assertAlmostEqual(math.pi / 2, path.angular_span)
        self.assertTrue(self.circular_map.selection_path(Range(5, 5)).is_empty())


class TestCircularLayout(unittest.TestCase):
    def test_pack_rows(self):
        annotations = [
            Annotation('0..100', id='a'),
            Annotation('50..150', id='b'),
            Annotation('200..300 + 900..950', id='c'),
            Annotation('960..990', id='d', type='CDS'),
        ]
        rows = pack_circular_rows(annotations, padding=4, height=14)
        self.assertEqual([['d', 'c', 'a'], ['b']], [[a.id for a in row.members] for row in rows])
        self.assertEqual([0, 18], [row.offset for row in rows])

    def test_layout(self):
        circular_map = CircularMap(1000)
        annotations = [
            Annotation('0..200', id='a', caption='first'),
            Annotation('(100..300)', id='b'),
            Annotation('400..450 + 500..600', id='c'),
        ]
        placed = layout_circular_annotations(annotations, circular_map)
        self.assertEqual(['a', 'b', 'c'], [p.annotation.id for p in placed])
        self.assertEqual([0, 1, 0], [p.row for p in placed])
        self.assertEqual(2, circular_map.annotation_row_count)
        self.assertEqual(2, len(placed[2].arcs))
        self.assertEqual(circular_map.row_radius(1), placed[1].radius)
        self.assertFalse(placed[0].label_path.is_empty())
