"""
the editing session for a single sequence: the sequence text, its annotations, the cursor, the zoom and the selection
"""
from .annotate.base import Annotation
from .annotate.edit import SequenceEdit, adjust_annotations
from .annotate.selection import Selection, SelectionDomain
from .constants import ORIENT, reverse_complement
from .interval import Range
from .util import logger

MIN_ZOOM = 50
DEFAULT_ZOOM = 100
MIN_FIND_LENGTH = 3


class Line:
    def __init__(self, index, start, end, text):
        self.index = index
        self.start = start
        self.end = end
        self.text = text

    @property
    def position(self):
        return self.start

    def __repr__(self):
        return 'Line({}, {}..{})'.format(self.index, self.start, self.end)


class EditorSession:
    """
    Every session owns its own sequence, annotation list and selection, so several sessions can be
    used side by side. Edits should be applied one at a time; the session is not thread safe

    Example:
        >>> session = EditorSession('ACGT' * 50, annotations=[Annotation('10..50', id='a')])
        >>> session.insert_at(20, 'GGGGG')
        'GGGGG'
        >>> str(session.annotations[0].span)
        '10..55'
    """

    def __init__(self, sequence='', title='', annotations=None, zoom=DEFAULT_ZOOM):
        self.sequence = ''
        self.title = ''
        self.annotations = []
        self.cursor = 0
        self.zoom = DEFAULT_ZOOM
        self.selection = Selection(self)
        self.set_sequence(sequence, title)
        for annotation in annotations or []:
            self.add_annotation(annotation)
        self.set_zoom(zoom)

    @property
    def sequence_length(self):
        return len(self.sequence)

    def set_sequence(self, sequence, title=''):
        self.sequence = str(sequence)
        self.title = title
        self.cursor = min(self.cursor, len(self.sequence))

    def set_zoom(self, level):
        """
        set the bases per line, clamped to at least 50 and at most the sequence length
        """
        self.zoom = max(MIN_ZOOM, min(int(level), max(len(self.sequence), MIN_ZOOM)))
        return self.zoom

    def set_cursor(self, pos):
        self.cursor = max(0, min(pos, len(self.sequence)))
        return self.cursor

    def position_to_line(self, pos):
        return pos // self.zoom

    def position_in_line(self, pos):
        return pos % self.zoom

    def line_to_position(self, line, line_pos=0):
        return line * self.zoom + line_pos

    @property
    def line_count(self):
        if not self.sequence:
            return 0
        return -(-len(self.sequence) // self.zoom)

    def lines(self):
        result = []
        for index in range(self.line_count):
            start = index * self.zoom
            end = min(start + self.zoom, len(self.sequence))
            result.append(Line(index, start, end, self.sequence[start:end]))
        return result

    def apply_edit(self, edit):
        """
        apply an edit to the sequence and adjust every annotation and the selected ranges to match

        Returns:
            str: the bases removed by the edit
        """
        removed = self.sequence[edit.start:edit.end]
        self.sequence = edit.apply(self.sequence)
        adjust_annotations(self.annotations, edit)
        if self.selection.domain is not None:
            self.selection.domain.ranges = [edit.adjust_range(r) for r in self.selection.domain.ranges]
        logger.debug(f'applied {edit!r}, sequence length is now {len(self.sequence)}')
        return removed

    def insert_at(self, position, text):
        self.apply_edit(SequenceEdit.insert(position, text))
        self.cursor = position + len(text)
        return text

    def replace_range(self, start, end, text):
        removed = self.apply_edit(SequenceEdit.replace(start, end, text))
        self.cursor = start + len(text)
        return removed

    def delete_range(self, start, end):
        if start == end:
            return ''
        removed = self.apply_edit(SequenceEdit.delete(start, end))
        if self.cursor > end:
            self.cursor -= end - start
        elif self.cursor > start:
            self.cursor = start
        return removed

    def backspace(self):
        if self.cursor > 0:
            return self.delete_range(self.cursor - 1, self.cursor)
        return ''

    def delete_forward(self):
        if self.cursor < len(self.sequence):
            return self.delete_range(self.cursor, self.cursor + 1)
        return ''

    def add_annotation(self, annotation):
        if not isinstance(annotation, Annotation):
            annotation = Annotation(**annotation)
        self.annotations.append(annotation)
        return annotation

    def remove_annotation(self, annotation_id):
        for index, annotation in enumerate(self.annotations):
            if annotation.id == annotation_id:
                return self.annotations.pop(index)
        raise KeyError('no annotation with the given id', annotation_id)

    def annotation_at(self, pos):
        """
        Returns:
            list: annotations with a range covering the position
        """
        return [a for a in self.annotations if a.span.contains(pos)]

    def annotations_in_range(self, start, end):
        return [a for a in self.annotations if a.overlaps(start, end)]

    def find(self, query):
        """
        find every occurrence of a query and of its reverse complement. Queries shorter than 3 bases
        find nothing and the comparison ignores case

        Returns:
            SelectionDomain: plus strand ranges for matches of the query, minus strand ranges for matches
            of its reverse complement

        Example:
            >>> str(EditorSession('AAGGATCCTTCCA').find('TCC'))
            '(2..5) + 5..8 + 9..12'
        """
        query = str(query).upper()
        size = len(query)
        found = SelectionDomain()
        if size < MIN_FIND_LENGTH:
            return found
        sequence = self.sequence.upper()
        complement = reverse_complement(query)
        for index in range(len(sequence) - size + 1):
            window = sequence[index:index + size]
            if window == query:
                found.add_range(Range(index, index + size, ORIENT.PLUS))
            elif window == complement:
                found.add_range(Range(index, index + size, ORIENT.MINUS))
        logger.debug(f'found {len(found)} matches of {query}')
        return found
