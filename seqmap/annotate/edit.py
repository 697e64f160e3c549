"""
adjusts annotation coordinates so that they stay attached to the same bases when the sequence is edited
"""
from typing import List

from ..constants import EDIT_KIND
from ..interval import Range, Span
from ..util import logger
from .base import Annotation


class SequenceEdit:
    """
    a single local edit of the sequence. An insert is a zero-width edit at ``start``; a replace
    swaps the bases in ``[start, end)`` for ``text``
    """

    def __init__(self, kind, start, end=None, text=''):
        self.kind = EDIT_KIND.enforce(kind)
        self.start = int(start)
        self.end = self.start if end is None else int(end)
        self.text = text or ''
        if self.start < 0 or self.end < self.start:
            raise ValueError('invalid edit bounds', self.start, self.end)
        if self.kind == EDIT_KIND.INSERT and self.end != self.start:
            raise ValueError('an insert edit cannot cover any existing bases', self.start, self.end)

    @classmethod
    def insert(cls, position, text):
        return cls(EDIT_KIND.INSERT, position, position, text)

    @classmethod
    def replace(cls, start, end, text):
        return cls(EDIT_KIND.REPLACE, start, end, text)

    @classmethod
    def delete(cls, start, end):
        return cls(EDIT_KIND.REPLACE, start, end, '')

    @property
    def removed_length(self):
        return self.end - self.start

    @property
    def net_change(self):
        """
        Example:
            >>> SequenceEdit.replace(20, 30, 'ACGT').net_change
            -6
        """
        return len(self.text) - self.removed_length

    def is_insert(self):
        """
        True when the edit only adds bases. Replacing an empty selection behaves as an insert
        """
        return self.kind == EDIT_KIND.INSERT or self.start == self.end

    def apply(self, sequence):
        if self.end > len(sequence):
            raise ValueError('edit extends past the end of the sequence', self.end, len(sequence))
        return sequence[:self.start] + self.text + sequence[self.end:]

    def adjust_range(self, range_: Range) -> Range:
        if self.is_insert():
            return adjust_range_for_insert(range_, self.start, len(self.text))
        return adjust_range_for_replace(range_, self.start, self.end, len(self.text))

    def __repr__(self):
        return '{}({}, {}, {}, {})'.format(
            self.__class__.__name__, repr(self.kind), self.start, self.end, repr(self.text))


def adjust_range_for_insert(range_: Range, position: int, length: int) -> Range:
    """
    Inserting at the start of a range grows the range; inserting at its end does not

    Example:
        >>> adjust_range_for_insert(Range(10, 50), 20, 5)
        Range(10, 55, 1)
        >>> adjust_range_for_insert(Range(10, 50), 50, 5)
        Range(10, 50, 1)
    """
    start, end = range_.start, range_.end
    if start > position:
        start += length
    if end > position:
        end += length
    return Range(start, end, range_.orientation)


def adjust_range_for_replace(range_: Range, start: int, end: int, length: int) -> Range:
    """
    adjust a range for the bases in [start, end) being replaced by ``length`` new bases

    Example:
        >>> adjust_range_for_replace(Range(25, 35), 20, 40, 3)
        Range(20, 20, 1)
        >>> adjust_range_for_replace(Range(15, 35), 30, 50, 0)
        Range(15, 30, 1)
        >>> adjust_range_for_replace(Range(25, 45), 20, 30, 4)
        Range(24, 39, 1)
    """
    net_change = length - (end - start)
    orient = range_.orientation

    if range_.end <= start:
        return range_.copy()
    elif range_.start >= end:
        return Range(range_.start + net_change, range_.end + net_change, orient)
    elif range_.start <= start and range_.end >= end:
        return Range(range_.start, range_.end + net_change, orient)
    elif range_.start >= start and range_.end <= end:
        return Range(start, start, orient)
    elif range_.start < start:
        return Range(range_.start, start, orient)
    return Range(start + length, range_.end + net_change, orient)


def adjust_span(span: Span, edit: SequenceEdit) -> Span:
    return Span([edit.adjust_range(r) for r in span.ranges])


def adjust_annotation(annotation: Annotation, edit: SequenceEdit) -> Annotation:
    """
    replaces the span of the annotation with the adjusted span. Ranges are adjusted independently in span order
    """
    new_span = adjust_span(annotation.span, edit)
    if new_span != annotation.span:
        logger.debug(f'adjusted annotation {annotation.id}: {annotation.span} -> {new_span}')
    annotation.span = new_span
    return annotation


def adjust_annotations(annotations: List[Annotation], edit: SequenceEdit) -> List[Annotation]:
    for annotation in annotations:
        adjust_annotation(annotation, edit)
    return annotations
