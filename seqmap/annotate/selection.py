"""
multi-range selections and the interactive (drag/extend/split) selection state built on them
"""
from ..constants import ORIENT
from ..interval import Range, Span
from ..util import logger


class SelectionDomain:
    """
    editable ordered list of ranges making up the current selection. Unlike an annotation it has no id,
    caption or type. Ranges may transiently touch or overlap, the operations below normalize them where needed
    """

    def __init__(self, spec=None):
        """
        Args:
            spec (str|Span|list): span text, a Span or a list of Range objects. Ranges are copied
        """
        if not spec:
            self.ranges = []
        elif isinstance(spec, str):
            self.ranges = Span.parse(spec).ranges
        elif isinstance(spec, Span):
            self.ranges = [r.copy() for r in spec.ranges]
        elif isinstance(spec, SelectionDomain):
            self.ranges = [r.copy() for r in spec.ranges]
        else:
            self.ranges = [r.copy() for r in spec]

    def __len__(self):
        return len(self.ranges)

    def __iter__(self):
        return iter(self.ranges)

    def __getitem__(self, index):
        return self.ranges[index]

    def contains(self, position):
        return any([r.contains(position) for r in self.ranges])

    def add_range(self, range_):
        self.ranges.append(range_)

    def remove_range(self, index):
        del self.ranges[index]

    @property
    def orientation(self):
        return self.to_span().orientation

    @property
    def total_length(self):
        return sum([r.length for r in self.ranges])

    def merge_range(self, new_range):
        """
        add a range, merging it with every existing range it overlaps. The merged range takes the
        orientation of the new range

        Example:
            >>> domain = SelectionDomain('0..10 + 20..30')
            >>> domain.merge_range(Range(5, 25, ORIENT.MINUS))
            >>> str(domain)
            '(0..30)'
        """
        overlapping = [i for i, r in enumerate(self.ranges) if r.overlaps(new_range)]
        if not overlapping:
            self.add_range(new_range)
            return
        start = min([new_range.start] + [self.ranges[i].start for i in overlapping])
        end = max([new_range.end] + [self.ranges[i].end for i in overlapping])
        for index in reversed(overlapping):
            del self.ranges[index]
        self.add_range(Range(start, end, new_range.orientation))

    def extend_to_position(self, pos):
        """
        grow the selection to include a position while keeping orientations

        - before every range: the leftmost range is extended to start at pos
        - after every range: the rightmost range is extended to end at pos
        - between two ranges: the two neighbouring ranges are merged

        Returns:
            bool: False if there are no ranges to extend
        """
        if not self.ranges:
            return False
        for range_ in self.ranges:
            if range_.start <= pos <= range_.end:
                return True

        ordered = sorted(range(len(self.ranges)), key=lambda i: self.ranges[i].start)
        leftmost = self.ranges[ordered[0]]
        rightmost = self.ranges[ordered[-1]]

        if pos < leftmost.start:
            leftmost.start = pos
            return True
        if pos > rightmost.end:
            rightmost.end = pos
            return True

        for current, following in zip(ordered, ordered[1:]):
            if self.ranges[current].end < pos < self.ranges[following].start:
                self.ranges[current].end = self.ranges[following].end
                del self.ranges[following]
                break
        return True

    def split_at(self, pos):
        """
        split the first range strictly containing pos into two. Minus strand ranges keep their traversal order
        so the downstream half comes first

        Returns:
            bool: True if a range was split
        """
        for index, range_ in enumerate(self.ranges):
            if range_.start < pos < range_.end:
                if range_.orientation == ORIENT.MINUS:
                    self.ranges[index:index + 1] = [
                        Range(pos, range_.end, range_.orientation), Range(range_.start, pos, range_.orientation)]
                else:
                    self.ranges[index:index + 1] = [
                        Range(range_.start, pos, range_.orientation), Range(pos, range_.end, range_.orientation)]
                return True
        return False

    def flip(self, index):
        self.ranges[index] = self.ranges[index].flip()

    def set_orientation(self, index, orientation):
        self.ranges[index].orientation = ORIENT.enforce(orientation)

    def move_range(self, from_index, to_index):
        if not (0 <= from_index < len(self.ranges)) or not (0 <= to_index < len(self.ranges)):
            return False
        self.ranges.insert(to_index, self.ranges.pop(from_index))
        return True

    def to_span(self):
        return Span(self.ranges)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, repr(str(self)))

    def __str__(self):
        return ' + '.join([str(r) for r in self.ranges])


RANGE_CLASSES = {
    ORIENT.MINUS: 'selection minus',
    ORIENT.NONE: 'selection undirected',
    ORIENT.PLUS: 'selection plus',
}


class Selection:
    """
    the selection state of one editor session: the current domain plus the state of an in-progress drag
    """

    def __init__(self, editor):
        """
        Args:
            editor: object exposing ``sequence_length``, used as the upper drag limit
        """
        self.editor = editor
        self.domain = None
        self.is_selected = False
        self.is_dragging = False
        self.anchor = 0
        self.drag_low_limit = 0
        self.drag_high_limit = 0

    def start(self, pos, extend=False):
        """
        begin a drag at pos. When extending, a new undirected cursor range is added unless pos is already selected
        """
        if not self.is_selected or not extend:
            self.unselect()
            self.domain = SelectionDomain([Range(pos, pos)])
            self.is_selected = True
        elif self.domain.contains(pos):
            return
        else:
            self.domain.add_range(Range(pos, pos, ORIENT.NONE))

        self.anchor = pos
        self.is_dragging = True

        self.drag_low_limit = 0
        self.drag_high_limit = self.editor.sequence_length
        for range_ in self.domain.ranges[:-1]:
            if self.drag_low_limit < range_.end <= pos:
                self.drag_low_limit = range_.end
            if pos <= range_.start < self.drag_high_limit:
                self.drag_high_limit = range_.start

    def update(self, pos):
        """
        move the free end of the range being dragged. Positions are clamped to the drag limits and a
        drag backwards from the anchor produces a minus strand range
        """
        if not self.is_dragging or self.domain is None:
            return
        pos = min(max(pos, self.drag_low_limit), self.drag_high_limit)
        current = self.domain.ranges[-1]
        if pos < self.anchor:
            current.start, current.end, current.orientation = pos, self.anchor, ORIENT.MINUS
        else:
            current.start, current.end, current.orientation = self.anchor, pos, ORIENT.PLUS

    def end(self):
        self.is_dragging = False

    def select(self, spec):
        self.unselect()
        self.domain = spec if isinstance(spec, SelectionDomain) else SelectionDomain(spec)
        self.is_selected = len(self.domain.ranges) > 0
        logger.debug(f'selected {self.domain}')

    def unselect(self):
        self.is_selected = False
        self.domain = None
        self.is_dragging = False

    def select_all(self):
        self.select([Range(0, self.editor.sequence_length)])

    def extend(self, spec):
        """
        add ranges to the selection, merging any that overlap the current ranges
        """
        new_domain = spec if isinstance(spec, SelectionDomain) else SelectionDomain(spec)
        if not self.is_selected or self.domain is None:
            self.select(new_domain)
            return
        for range_ in new_domain.ranges:
            self.domain.merge_range(range_)

    def extend_to_position(self, pos):
        if not self.is_selected or self.domain is None:
            return False
        return self.domain.extend_to_position(pos)

    def _has_range(self, index):
        return self.domain is not None and 0 <= index < len(self.domain.ranges)

    def flip(self, index):
        if self._has_range(index):
            self.domain.flip(index)

    def set_orientation(self, index, orientation):
        if self._has_range(index):
            self.domain.set_orientation(index, orientation)

    def split_range(self, pos):
        if self.domain is None:
            return False
        return self.domain.split_at(pos)

    def delete_range(self, index):
        if not self._has_range(index):
            return
        self.domain.remove_range(index)
        if not self.domain.ranges:
            self.unselect()

    def move_range(self, from_index, to_index):
        if self.domain is None:
            return False
        return self.domain.move_range(from_index, to_index)

    def range_class(self, index):
        if not self._has_range(index):
            return RANGE_CLASSES[ORIENT.NONE]
        return RANGE_CLASSES[self.domain.ranges[index].orientation]
