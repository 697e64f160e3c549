"""
collision avoidance for the linear view

There are two independent packing disciplines here. The pixel-space skyline packer (:func:`skyline_pack`) moves
measured boxes upwards until they clear each other. The sequence-space row packer (:func:`pack_rows`) assigns
items to stacked rows using their sequence coordinates only
"""
from shapely.geometry import box as shapely_box

from ..constants import is_cds
from ..util import logger


class Box:
    """
    measured bounding box of a drawn element, with independent padding on each edge. Y increases downwards

    Boxes are not modified after construction, placement offsets are held by :class:`Shell`
    """
    __slots__ = ['_edges', '_padding']

    def __init__(self, left, top, right, bottom, left_padding=0, top_padding=0, right_padding=0, bottom_padding=0):
        if right < left or bottom < top:
            raise ValueError('box edges are reversed', left, top, right, bottom)
        object.__setattr__(self, '_edges', (left, top, right, bottom))
        object.__setattr__(self, '_padding', (left_padding, top_padding, right_padding, bottom_padding))

    def __setattr__(self, attr, value):
        raise AttributeError('Box is immutable', attr)

    @classmethod
    def from_size(cls, x, y, width, height, padding=0):
        return cls(x, y, x + width, y + height, padding, padding, padding, padding)

    left = property(lambda self: self._edges[0])
    top = property(lambda self: self._edges[1])
    right = property(lambda self: self._edges[2])
    bottom = property(lambda self: self._edges[3])
    left_padding = property(lambda self: self._padding[0])
    top_padding = property(lambda self: self._padding[1])
    right_padding = property(lambda self: self._padding[2])
    bottom_padding = property(lambda self: self._padding[3])

    @property
    def width(self):
        return self.right - self.left

    @property
    def height(self):
        return self.bottom - self.top

    def padded(self, dx=0, dy=0):
        """
        Returns:
            Tuple[float, float, float, float]: the padded (left, top, right, bottom) edges after moving by the offset
        """
        return (
            self.left + dx - self.left_padding,
            self.top + dy - self.top_padding,
            self.right + dx + self.right_padding,
            self.bottom + dy + self.bottom_padding,
        )

    def moved(self, dx=0, dy=0):
        return Box(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy, *self._padding)

    def __eq__(self, other):
        if not isinstance(other, Box):
            return NotImplemented
        return self._edges == other._edges and self._padding == other._padding

    def __hash__(self):
        return hash((self._edges, self._padding))

    def __repr__(self):
        return 'Box({}, {}, {}, {})'.format(*self._edges)


def boxes_overlap(first, second):
    """
    two padded extents collide only when they intersect with a positive area. Touching edges do not collide

    Args:
        first (Tuple[float, float, float, float]): left, top, right, bottom
        second (Tuple[float, float, float, float]): left, top, right, bottom
    """
    if first[2] <= second[0] or second[2] <= first[0] or first[3] <= second[1] or second[3] <= first[1]:
        return False
    return shapely_box(*first).intersection(shapely_box(*second)).area > 0


class LayoutElement:
    """
    a measured element handed to the skyline packer. ``item`` is whatever the caller wants back
    """

    def __init__(self, box, item=None):
        self.box = box
        self.item = item

    @property
    def width(self):
        return self.box.width

    def __repr__(self):
        return '{}({!r}, {!r})'.format(self.__class__.__name__, self.box, self.item)


class Anchored(LayoutElement):
    """element which is never moved and which every floating element must clear"""
    pass


class Floating(LayoutElement):
    """element which the packer may move upwards"""
    pass


class Shell:
    """
    the placement of a layout element: the measured box plus the offset the packer has moved it by
    """

    def __init__(self, element):
        self.element = element
        self.dx = 0
        self.dy = 0

    @property
    def box(self):
        return self.element.box

    @property
    def anchored(self):
        return isinstance(self.element, Anchored)

    left = property(lambda self: self.box.padded(self.dx, self.dy)[0])
    top = property(lambda self: self.box.padded(self.dx, self.dy)[1])
    right = property(lambda self: self.box.padded(self.dx, self.dy)[2])
    bottom = property(lambda self: self.box.padded(self.dx, self.dy)[3])

    def extent(self):
        return self.box.padded(self.dx, self.dy)

    def overlaps(self, other):
        return boxes_overlap(self.extent(), other.extent())

    def placed_box(self):
        """
        the final box of the element, the measured box moved by the placement offset
        """
        return self.box.moved(self.dx, self.dy)

    def __repr__(self):
        return 'Shell({!r}, dx={}, dy={})'.format(self.element, self.dx, self.dy)


def skyline_pack(elements, content_padding=0):
    """
    greedy skyline packing of the elements of a single line

    Elements are processed widest first (stable for equal widths). Anchored elements stay where they are and
    seed the set of obstacles. Each floating element is then moved up by ``obstacle.top - bottom - content_padding``
    whenever it collides with an obstacle, re-testing against all obstacles until it is clear, after which it
    becomes an obstacle itself

    Args:
        elements (list of LayoutElement): the anchored and floating elements of the line
        content_padding (int): the gap kept between an element and the obstacle it was moved above

    Returns:
        :class:`list` of :class:`Shell`: the placement of each element, in the order the elements were given
    """
    ordered = sorted(elements, key=lambda e: -e.width)
    shells = {}
    obstacles = []

    for element in ordered:
        if isinstance(element, Anchored):
            shell = Shell(element)
            shells[id(element)] = shell
            obstacles.append(shell)

    for element in ordered:
        if isinstance(element, Anchored):
            continue
        shell = Shell(element)
        cleared = False
        while not cleared:
            cleared = True
            for obstacle in obstacles:
                if obstacle.overlaps(shell):
                    shell.dy += obstacle.top - shell.bottom - content_padding
                    cleared = False
                    break
        obstacles.append(shell)
        shells[id(element)] = shell

    logger.debug(f'skyline packed {len(obstacles)} elements')
    return [shells[id(e)] for e in elements]


def packed_extent(shells):
    """
    Returns:
        Tuple[float, float]: the top-most and bottom-most padded edges of the placed shells
    """
    if not shells:
        return 0, 0
    return min([s.top for s in shells]), max([s.bottom for s in shells])


def priority_of(annotation):
    """
    the stacking priority of an annotation. CDS annotations come first, then the widest

    Returns:
        Tuple[int, int]: sort key (tier, negative width)
    """
    return (0 if is_cds(annotation.type) else 1, -annotation.bounds.length)


def intervals_overlap(first, second):
    """
    half-open overlap of two (start, end) tuples, matching :meth:`~seqmap.interval.Range.overlaps`
    """
    return not (second[1] <= first[0] or second[0] >= first[1])


class Row:
    """
    one stacked row. ``offset`` is only meaningful once the packing is complete
    """

    def __init__(self, index):
        self.index = index
        self.intervals = []
        self.members = []
        self.height = 0
        self.offset = 0

    def fits(self, intervals):
        for interval in intervals:
            for occupied in self.intervals:
                if intervals_overlap(interval, occupied):
                    return False
        return True

    def add(self, item, intervals, height):
        self.members.append(item)
        self.intervals.extend(intervals)
        self.height = max(self.height, height)

    def __repr__(self):
        return 'Row(index={}, height={}, offset={}, members={})'.format(
            self.index, self.height, self.offset, len(self.members))


def pack_rows(items, intervals_of, height_of, padding=0, priority=None):
    """
    first-fit packing of items into rows by sequence coordinate

    Args:
        items (list): the items to pack
        intervals_of (callable): returns the list of (start, end) tuples an item occupies
        height_of (callable): returns the height an item requires
        padding (int): the fixed padding between rows
        priority (callable): sort key for the items. The sort is stable

    Returns:
        :class:`list` of :class:`Row`: the rows in stacking order, with offsets computed from the final row heights
    """
    ordered = sorted(items, key=priority) if priority else list(items)
    rows = []
    for item in ordered:
        intervals = intervals_of(item)
        for row in rows:
            if row.fits(intervals):
                break
        else:
            row = Row(len(rows))
            rows.append(row)
        row.add(item, intervals, height_of(item))

    offset = 0
    for row in rows:
        row.offset = offset
        offset += row.height + padding
    return rows


def rows_height(rows, padding=0):
    """
    total height taken by the packed rows including the padding between them
    """
    if not rows:
        return 0
    return sum([r.height for r in rows]) + padding * (len(rows) - 1)
