import unittest

from seqmap.annotate.base import Annotation
from seqmap.annotate.fragment import AnnotationFragment, Fragment, GraphicsSpan
from seqmap.constants import ORIENT
from seqmap.interval import Range, Span


class TestGraphicsSpan(unittest.TestCase):
    def test_two_lines(self):
        fragments = GraphicsSpan(Range(80, 170), 100).fragments()
        self.assertEqual(
            [(0, 80, 100, True, False), (1, 0, 70, False, True)],
            [(f.line, f.start, f.end, f.is_start, f.is_end) for f in fragments],
        )

    def test_ends_on_line_boundary(self):
        fragments = GraphicsSpan(Range(0, 200), 100).fragments()
        self.assertEqual([(0, 0, 100), (1, 0, 100)], [(f.line, f.start, f.end) for f in fragments])

    def test_three_lines(self):
        fragments = GraphicsSpan(Range(50, 250), 100).fragments()
        self.assertEqual(3, len(fragments))
        middle = fragments[1]
        self.assertEqual((1, 0, 100), (middle.line, middle.start, middle.end))
        self.assertFalse(middle.is_start)
        self.assertFalse(middle.is_end)

    def test_zero_width(self):
        fragments = GraphicsSpan(Range(100, 100), 100).fragments()
        self.assertEqual([Fragment(1, 0, 0, ORIENT.PLUS, True, True)], fragments)

    def test_every_range_in_order(self):
        fragments = GraphicsSpan(Span.parse('150..160 + (10..20)'), 100).fragments()
        self.assertEqual([1, 0], [f.line for f in fragments])

    def test_by_line(self):
        by_line = GraphicsSpan(Span.parse('80..170 + 10..20'), 100).by_line()
        self.assertEqual([0, 1], sorted(by_line.keys()))
        self.assertEqual(2, len(by_line[0]))

    def test_bad_zoom(self):
        with self.assertRaises(ValueError):
            GraphicsSpan(Range(0, 10), 0)

    def test_show_arrow(self):
        plus = GraphicsSpan(Range(80, 170), 100).fragments()
        self.assertEqual([False, True], [f.show_arrow for f in plus])
        minus = GraphicsSpan(Range(80, 170, ORIENT.MINUS), 100).fragments()
        self.assertEqual([True, False], [f.show_arrow for f in minus])
        undirected = GraphicsSpan(Range(80, 170, ORIENT.NONE), 100).fragments()
        self.assertEqual([False, False], [f.show_arrow for f in undirected])

    def test_annotation_fragments(self):
        annotation = Annotation('0..10 + 20..30', caption='exon', type='CDS', id='x1')
        fragments = annotation.to_fragments(100)
        self.assertTrue(all([isinstance(f, AnnotationFragment) for f in fragments]))
        self.assertEqual([0, 1], [f.range_index for f in fragments])
        self.assertEqual('x1', fragments[0].id)
        self.assertEqual('exon', fragments[1].caption)
        self.assertEqual('CDS', fragments[1].type)
