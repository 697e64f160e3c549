import unittest

from seqmap.annotate.base import Annotation
from seqmap.constants import ORIENT
from seqmap.illustrate.constants import DiagramSettings
from seqmap.illustrate.linear import (
    LinearMetrics,
    arrow_path,
    element_height,
    layout_annotation_track,
    layout_labels,
    selection_path,
)
from seqmap.interval import Range


class TestLinearMetrics(unittest.TestCase):
    def setUp(self):
        self.metrics = LinearMetrics(50, DiagramSettings(width=800))

    def test_text_mode(self):
        self.assertTrue(self.metrics.text_mode)
        self.assertEqual(8, self.metrics.char_width)
        self.assertEqual(400, self.metrics.line_width)

    def test_compressed_mode_fills_available_width(self):
        metrics = LinearMetrics(200, DiagramSettings(width=800))
        self.assertFalse(metrics.text_mode)
        self.assertAlmostEqual(3.6, metrics.char_width)
        self.assertAlmostEqual(720, metrics.line_width)

    def test_width_override(self):
        self.assertEqual(1000, LinearMetrics(50, DiagramSettings(), width=1000).full_width)

    def test_pixel_to_line_position(self):
        self.assertEqual(10, self.metrics.pixel_to_line_position(140))
        self.assertEqual(0, self.metrics.pixel_to_line_position(0))
        self.assertEqual(50, self.metrics.pixel_to_line_position(10000))
        self.assertEqual(140, self.metrics.line_position_to_pixel(10))

    def test_width_narrower_than_margins(self):
        metrics = LinearMetrics(100, DiagramSettings(width=80))
        self.assertEqual(1, metrics.available_width)
        self.assertFalse(metrics.text_mode)
        self.assertEqual(0, metrics.pixel_to_line_position(10))
        self.assertEqual(100, metrics.pixel_to_line_position(500))

    def test_pixel_to_sequence_position(self):
        self.assertEqual(60, self.metrics.pixel_to_sequence_position(140, 47, 3))
        self.assertEqual(110, self.metrics.pixel_to_sequence_position(140, 5000, 3))

    def test_heights(self):
        self.assertEqual(0, self.metrics.total_height(0))
        self.assertEqual(72, self.metrics.total_height(2))
        self.assertEqual([10, 66], self.metrics.line_tops(2, {1: 20}))
        self.assertEqual(92, self.metrics.layout_height(2, {1: 20}))


class TestArrowPath(unittest.TestCase):
    def test_plus(self):
        path = arrow_path(0, 100, 18, 8, 2, ORIENT.PLUS)
        self.assertEqual('M 100,-9 L 92,0 V -2 H 0 V -16 H 92 V -18 Z', path.to_svg())

    def test_minus(self):
        path = arrow_path(0, 100, 18, 8, 2, ORIENT.MINUS)
        self.assertEqual('M 0,-9 L 8,0 V -2 H 100 V -16 H 8 V -18 Z', path.to_svg())

    def test_narrow_is_rectangle(self):
        path = arrow_path(0, 10, 18, 8, 2, ORIENT.PLUS)
        self.assertEqual('M 0,-2 H 10 V -16 H 0 Z', path.to_svg())

    def test_undirected_is_rectangle(self):
        path = arrow_path(0, 100, 18, 8, 2, ORIENT.NONE)
        self.assertEqual('M 0,-2 H 100 V -16 H 0 Z', path.to_svg())


class TestSelectionPath(unittest.TestCase):
    def setUp(self):
        self.metrics = LinearMetrics(50, DiagramSettings(width=800))

    def test_single_line(self):
        path = selection_path(Range(10, 20), 50, self.metrics)
        self.assertEqual('M 140,10 H 220 V 26 H 140 Z', path.to_svg())

    def test_multi_line(self):
        path = selection_path(Range(40, 60), 50, self.metrics)
        self.assertEqual('M 380,10 H 460 V 46 H 140 V 62 H 60 V 26 H 380 Z', path.to_svg())

    def test_custom_line_tops(self):
        path = selection_path(Range(60, 70), 50, self.metrics, line_tops=[10, 100])
        self.assertEqual((140, 100), path.points()[0])

    def test_beyond_last_line(self):
        self.assertTrue(selection_path(Range(60, 70), 50, self.metrics, line_count=1).is_empty())


class TestAnnotationTrack(unittest.TestCase):
    def setUp(self):
        self.settings = DiagramSettings(width=800)
        self.metrics = LinearMetrics(50, self.settings)

    def test_overlapping_annotations_stack(self):
        annotations = [Annotation('0..20', id='a'), Annotation('10..30', id='b')]
        track = layout_annotation_track(annotations, 50, self.metrics, self.settings)
        rows = {p.annotation.id: (p.row, p.offset) for p in track[0]}
        self.assertEqual({'a': (0, 0), 'b': (1, -20)}, rows)
        self.assertEqual(38, track.extra_heights[0])

    def test_placed_boxes_do_not_overlap(self):
        annotations = [Annotation('{}..{}'.format(i * 5, i * 5 + 12), id=str(i)) for i in range(8)]
        track = layout_annotation_track(annotations, 50, self.metrics, self.settings)
        boxes = [p.placed_box() for p in track[0]]
        for i, first in enumerate(boxes):
            for second in boxes[i + 1:]:
                self.assertTrue(
                    first.right <= second.left or second.right <= first.left
                    or first.bottom <= second.top or second.bottom <= first.top
                )

    def test_fragments_split_across_lines(self):
        track = layout_annotation_track([Annotation('40..60', id='a')], 50, self.metrics, self.settings)
        self.assertEqual([0, 1], track.line_numbers())
        self.assertEqual([], track[5])
        first, second = track[0][0], track[1][0]
        self.assertEqual(4, len(first.path.points()))
        self.assertGreater(len(second.path.points()), 4)

    def test_cds_translation_height(self):
        settings = DiagramSettings(show_translation=True)
        self.assertEqual(32, element_height(Annotation('0..1', type='CDS'), settings))
        self.assertEqual(18, element_height(Annotation('0..1', type='gene'), settings))

    def test_empty(self):
        track = layout_annotation_track([], 50, self.metrics, self.settings)
        self.assertEqual([], track.line_numbers())


class TestLayoutLabels(unittest.TestCase):
    def setUp(self):
        self.settings = DiagramSettings(width=800)
        self.metrics = LinearMetrics(50, self.settings)

    def labels_for(self, annotations):
        track = layout_annotation_track(annotations, 50, self.metrics, self.settings)
        return layout_labels(track[0], self.settings)

    def test_inside(self):
        labels = self.labels_for([Annotation('0..10', caption='lacZ', id='a')])
        self.assertEqual(1, len(labels))
        self.assertTrue(labels[0].inside)
        self.assertEqual(-18, labels[0].box.top)

    def test_floating_above_arrow(self):
        labels = self.labels_for([Annotation('0..10', caption='a very long caption here', id='a')])
        self.assertFalse(labels[0].inside)
        self.assertEqual(-31, labels[0].box.top)
        self.assertEqual(-18, labels[0].box.bottom)

    def test_floating_labels_do_not_collide(self):
        labels = self.labels_for([
            Annotation('0..10', caption='a very long caption here', id='a'),
            Annotation('10..20', caption='another long caption', id='b'),
        ])
        first, second = labels[0].shell, labels[1].shell
        self.assertFalse(first.overlaps(second))

    def test_no_caption(self):
        self.assertEqual([], self.labels_for([Annotation('0..10', id='a')]))

    def test_only_first_fragment_labelled(self):
        track = layout_annotation_track([Annotation('40..60', caption='x', id='a')], 50, self.metrics, self.settings)
        self.assertEqual(1, len(layout_labels(track[0], self.settings)))
        self.assertEqual([], layout_labels(track[1], self.settings))
