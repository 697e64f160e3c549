import unittest

from seqmap.annotate.selection import RANGE_CLASSES, Selection, SelectionDomain
from seqmap.constants import ORIENT
from seqmap.interval import Range, Span


class MockEditor:
    def __init__(self, sequence_length):
        self.sequence_length = sequence_length


class TestSelectionDomain(unittest.TestCase):
    def test_from_text(self):
        domain = SelectionDomain('0..10 + (20..30)')
        self.assertEqual([Range(0, 10), Range(20, 30, ORIENT.MINUS)], domain.ranges)

    def test_copies_input(self):
        ranges = [Range(0, 10)]
        domain = SelectionDomain(ranges)
        ranges[0].end = 5
        self.assertEqual(10, domain[0].end)
        copied = SelectionDomain(domain)
        copied[0].end = 3
        self.assertEqual(10, domain[0].end)

    def test_empty(self):
        self.assertEqual(0, len(SelectionDomain()))
        self.assertEqual(0, len(SelectionDomain('')))

    def test_merge_range(self):
        domain = SelectionDomain('0..10 + 20..30')
        domain.merge_range(Range(5, 25, ORIENT.MINUS))
        self.assertEqual('(0..30)', str(domain))

    def test_merge_range_no_overlap(self):
        domain = SelectionDomain('0..10')
        domain.merge_range(Range(10, 20))
        self.assertEqual('0..10 + 10..20', str(domain))

    def test_extend_before(self):
        domain = SelectionDomain('10..20 + (30..40)')
        self.assertTrue(domain.extend_to_position(5))
        self.assertEqual('5..20 + (30..40)', str(domain))

    def test_extend_after(self):
        domain = SelectionDomain('10..20 + (30..40)')
        domain.extend_to_position(50)
        self.assertEqual('10..20 + (30..50)', str(domain))

    def test_extend_between_merges_neighbours(self):
        domain = SelectionDomain('10..20 + (30..40)')
        domain.extend_to_position(25)
        self.assertEqual('10..40', str(domain))

    def test_extend_inside(self):
        domain = SelectionDomain('10..20')
        self.assertTrue(domain.extend_to_position(15))
        self.assertEqual('10..20', str(domain))

    def test_extend_empty(self):
        self.assertFalse(SelectionDomain().extend_to_position(5))

    def test_split_at(self):
        domain = SelectionDomain('10..20 + (30..40)')
        self.assertTrue(domain.split_at(15))
        self.assertEqual('10..15 + 15..20 + (30..40)', str(domain))
        self.assertTrue(domain.split_at(35))
        self.assertEqual('10..15 + 15..20 + (35..40) + (30..35)', str(domain))

    def test_split_at_edge(self):
        domain = SelectionDomain('10..20')
        self.assertFalse(domain.split_at(10))
        self.assertFalse(domain.split_at(20))

    def test_flip_and_orientation(self):
        domain = SelectionDomain('10..20')
        domain.flip(0)
        self.assertEqual(ORIENT.MINUS, domain[0].orientation)
        domain.set_orientation(0, ORIENT.NONE)
        self.assertEqual('[10..20]', str(domain))
        with self.assertRaises(KeyError):
            domain.set_orientation(0, 5)

    def test_move_range(self):
        domain = SelectionDomain('0..1 + 2..3 + 4..5')
        self.assertTrue(domain.move_range(2, 0))
        self.assertEqual('4..5 + 0..1 + 2..3', str(domain))
        self.assertFalse(domain.move_range(0, 3))

    def test_to_span(self):
        domain = SelectionDomain('0..10 + (20..30)')
        self.assertEqual(Span.parse('0..10 + (20..30)'), domain.to_span())
        self.assertEqual(20, domain.total_length)


class TestSelection(unittest.TestCase):
    def setUp(self):
        self.selection = Selection(MockEditor(100))

    def test_drag_forward(self):
        self.selection.start(10)
        self.selection.update(20)
        self.selection.end()
        self.assertEqual('10..20', str(self.selection.domain))
        self.assertTrue(self.selection.is_selected)
        self.assertFalse(self.selection.is_dragging)

    def test_drag_backward_is_minus(self):
        self.selection.start(20)
        self.selection.update(10)
        self.assertEqual('(10..20)', str(self.selection.domain))

    def test_drag_clamped_to_sequence(self):
        self.selection.start(90)
        self.selection.update(500)
        self.assertEqual('90..100', str(self.selection.domain))

    def test_extend_drag_limited_by_existing_ranges(self):
        self.selection.select('30..40 + 60..70')
        self.selection.start(50, extend=True)
        self.assertEqual(40, self.selection.drag_low_limit)
        self.assertEqual(60, self.selection.drag_high_limit)
        self.selection.update(80)
        self.assertEqual('30..40 + 60..70 + 50..60', str(self.selection.domain))
        self.selection.update(0)
        self.assertEqual('30..40 + 60..70 + (40..50)', str(self.selection.domain))

    def test_extend_start_inside_selection_is_ignored(self):
        self.selection.select('30..40')
        self.selection.start(35, extend=True)
        self.assertEqual(1, len(self.selection.domain))
        self.assertFalse(self.selection.is_dragging)

    def test_start_without_extend_replaces(self):
        self.selection.select('30..40')
        self.selection.start(5)
        self.assertEqual('5', str(self.selection.domain))

    def test_update_without_drag(self):
        self.selection.update(10)
        self.assertIsNone(self.selection.domain)

    def test_select_all(self):
        self.selection.select_all()
        self.assertEqual('0..100', str(self.selection.domain))

    def test_extend(self):
        self.selection.extend('10..20')
        self.selection.extend('15..30 + 50..60')
        self.assertEqual('10..30 + 50..60', str(self.selection.domain))

    def test_extend_to_position(self):
        self.assertFalse(self.selection.extend_to_position(10))
        self.selection.select('20..30')
        self.assertTrue(self.selection.extend_to_position(10))
        self.assertEqual('10..30', str(self.selection.domain))

    def test_delete_last_range_unselects(self):
        self.selection.select('20..30 + 40..50')
        self.selection.delete_range(0)
        self.assertTrue(self.selection.is_selected)
        self.selection.delete_range(0)
        self.assertFalse(self.selection.is_selected)
        self.assertIsNone(self.selection.domain)

    def test_split_and_move(self):
        self.selection.select('20..30')
        self.assertTrue(self.selection.split_range(25))
        self.assertTrue(self.selection.move_range(1, 0))
        self.assertEqual('25..30 + 20..25', str(self.selection.domain))

    def test_invalid_index_is_ignored(self):
        self.selection.flip(0)
        self.selection.select('20..30')
        self.selection.flip(3)
        self.selection.set_orientation(4, ORIENT.MINUS)
        self.assertEqual('20..30', str(self.selection.domain))

    def test_range_class(self):
        self.selection.select('20..30 + (40..50)')
        self.assertEqual(RANGE_CLASSES[ORIENT.PLUS], self.selection.range_class(0))
        self.assertEqual('selection minus', self.selection.range_class(1))
        self.assertEqual('selection undirected', self.selection.range_class(5))
