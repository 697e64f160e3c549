"""
splitting ranges into the pieces which fall on each display line of the linear view
"""
from ..constants import ORIENT
from ..interval import Range, Span


class Fragment:
    """
    the portion of a single range that is visible on one display line. Coordinates are line-local
    """

    def __init__(self, line, start, end, orientation=ORIENT.PLUS, is_start=True, is_end=True):
        self.line = line
        self.start = start
        self.end = end
        self.orientation = orientation
        self.is_start = is_start
        self.is_end = is_end

    @property
    def width(self):
        return self.end - self.start

    @property
    def show_arrow(self):
        """
        only the fragment at the true terminus of the range carries the arrow head. The 3' end for the
        plus strand and the 5' end for the minus strand
        """
        if self.orientation == ORIENT.PLUS:
            return self.is_end
        elif self.orientation == ORIENT.MINUS:
            return self.is_start
        return False

    def key(self):
        return (self.line, self.start, self.end, self.orientation, self.is_start, self.is_end)

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key() == other.key()

    __hash__ = None

    def __repr__(self):
        return '{}(line={}, start={}, end={}, orientation={}, is_start={}, is_end={})'.format(
            self.__class__.__name__, *self.key())


class AnnotationFragment(Fragment):
    """
    fragment of one range of an annotation
    """

    def __init__(self, annotation, line, start, end, orientation=ORIENT.PLUS, is_start=True, is_end=True, range_index=0):
        Fragment.__init__(self, line, start, end, orientation, is_start=is_start, is_end=is_end)
        self.annotation = annotation
        self.range_index = range_index

    @property
    def id(self):
        return self.annotation.id

    @property
    def caption(self):
        return self.annotation.caption

    @property
    def type(self):
        return self.annotation.type

    @property
    def css_class(self):
        return self.annotation.css_class


class GraphicsSpan:
    """
    Splits each range of a span into per-line fragments for a given zoom (bases per line)

    Example:
        >>> GraphicsSpan(Range(80, 170), 100).fragments()
        [Fragment(line=0, start=80, end=100, ...), Fragment(line=1, start=0, end=70, ...)]
    """

    def __init__(self, span, zoom, annotation=None):
        """
        Args:
            span (Span|Range): the location to fragment
            zoom (int): bases per display line
            annotation (Annotation): when given, AnnotationFragment objects referencing it are produced
        """
        if zoom < 1:
            raise ValueError('zoom must be a positive number of bases per line', zoom)
        self.span = Span([span]) if isinstance(span, Range) else span
        self.zoom = int(zoom)
        self.annotation = annotation

    def _fragment(self, line, start, end, orientation, is_start, is_end, range_index):
        if self.annotation is not None:
            return AnnotationFragment(
                self.annotation, line, start, end, orientation,
                is_start=is_start, is_end=is_end, range_index=range_index)
        return Fragment(line, start, end, orientation, is_start=is_start, is_end=is_end)

    def fragment_range(self, range_, range_index=0):
        """
        Args:
            range_ (Range): the range to split

        Returns:
            list: one fragment per line the range touches
        """
        zoom = self.zoom
        if range_.length == 0:
            line = range_.start // zoom
            pos = range_.start % zoom
            return [self._fragment(line, pos, pos, range_.orientation, True, True, range_index)]

        first_line = range_.start // zoom
        last_line = (range_.end - 1) // zoom
        fragments = []
        for line in range(first_line, last_line + 1):
            start = range_.start % zoom if line == first_line else 0
            end = ((range_.end - 1) % zoom) + 1 if line == last_line else zoom
            fragments.append(self._fragment(
                line, start, end, range_.orientation, line == first_line, line == last_line, range_index))
        return fragments

    def fragments(self):
        result = []
        for index, range_ in enumerate(self.span.ranges):
            result.extend(self.fragment_range(range_, index))
        return result

    def by_line(self):
        """
        Returns:
            :class:`dict` of :class:`list` of :class:`Fragment` by :class:`int`: fragments grouped by their line number
        """
        lines = {}
        for frag in self.fragments():
            lines.setdefault(frag.line, []).append(frag)
        return lines
