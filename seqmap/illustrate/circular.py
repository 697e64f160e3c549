"""
geometry of the circular (plasmid) view

Position 0 is drawn at the top of the circle and positions increase clockwise. Angles are in radians with
0 pointing right and pi/2 pointing down (svg coordinates). An origin offset rotates the whole mapping
"""
import math

from ..constants import ORIENT
from ..util import logger
from .constants import DiagramSettings
from .layout import pack_rows, priority_of
from .path import ArcDescriptor, PathDescriptor

TWO_PI = 2 * math.pi
ONE_DEGREE = math.pi / 180
FULL_CIRCLE_TOLERANCE = 1e-9

TICK_INTERVALS = [
    (1000, 100),
    (5000, 500),
    (20000, 1000),
    (50000, 5000),
]
MAX_TICK_INTERVAL = 10000


def normalize_angle(angle):
    """
    Example:
        >>> normalize_angle(-math.pi / 2)
        4.71238898038469
    """
    normalized = math.fmod(angle, TWO_PI)
    if normalized < 0:
        normalized += TWO_PI
    if normalized >= TWO_PI:
        normalized -= TWO_PI
    return normalized


def position_to_angle(position, sequence_length, origin_offset=0):
    """
    Example:
        >>> position_to_angle(0, 1000)
        -1.5707963267948966
        >>> position_to_angle(250, 1000)
        0.0
    """
    return position / sequence_length * TWO_PI - math.pi / 2 + origin_offset


def angle_to_position(angle, sequence_length, origin_offset=0):
    """
    inverse of :func:`position_to_angle`. The result is a fractional position in [0, sequence_length)
    """
    return normalize_angle(angle + math.pi / 2 - origin_offset) / TWO_PI * sequence_length


def polar_to_cartesian(cx, cy, radius, angle):
    return (cx + radius * math.cos(angle), cy + radius * math.sin(angle))


def angular_span(start, end, sequence_length):
    """
    the clockwise angle from start to end, in [0, 2pi)
    """
    span = position_to_angle(end, sequence_length) - position_to_angle(start, sequence_length)
    if span < 0:
        span += TWO_PI
    return span


def mouse_to_position(x, y, cx, cy, sequence_length, origin_offset=0):
    """
    the nearest sequence position to a point in the view
    """
    angle = math.atan2(y - cy, x - cx)
    return int(round(angle_to_position(angle, sequence_length, origin_offset))) % sequence_length


def row_radius(row_index, backbone_radius, annotation_height, padding, gap=0):
    """
    radius of the centre line of an annotation row. Row 0 is closest to the backbone
    """
    return backbone_radius + gap + annotation_height / 2 + row_index * (annotation_height + padding)


def band_radii(radius, thickness):
    """
    Returns:
        Tuple[float, float]: inner and outer radius of a band. The inner radius never drops below 1
    """
    return max(1, radius - thickness / 2), radius + thickness / 2


def _quadrilateral(cx, cy, inner, outer, start_angle, end_angle):
    path = ArcDescriptor(
        start_angle=start_angle, angular_span=end_angle - start_angle, inner_radius=inner, outer_radius=outer)
    path.move_to(*polar_to_cartesian(cx, cy, outer, start_angle))
    path.line_to(*polar_to_cartesian(cx, cy, outer, end_angle))
    path.line_to(*polar_to_cartesian(cx, cy, inner, end_angle))
    path.line_to(*polar_to_cartesian(cx, cy, inner, start_angle))
    return path.close()


def _add_arc(path, cx, cy, radius, start_angle, span):
    """
    appends an arc from the current point (at start_angle) sweeping by span. A full circle is split in two
    since an arc command cannot end on its own start point
    """
    sweep = span >= 0
    if abs(span) >= TWO_PI - FULL_CIRCLE_TOLERANCE:
        half = start_angle + span / 2
        path.arc_to(radius, False, sweep, *polar_to_cartesian(cx, cy, radius, half))
        path.arc_to(radius, False, sweep, *polar_to_cartesian(cx, cy, radius, start_angle + span))
        return path
    return path.arc_to(radius, abs(span) > math.pi, sweep, *polar_to_cartesian(cx, cy, radius, start_angle + span))


def arc_path(start, end, sequence_length, cx, cy, radius, thickness, wrap_around=False, origin_offset=0):
    """
    closed band between two positions: the outer arc, the end cap, the inner arc back and the closing start cap

    Args:
        start (int): start position
        end (int): end position
        sequence_length (int): length of the sequence
        cx (float): x of the centre
        cy (float): y of the centre
        radius (float): radius of the centre line of the band
        thickness (float): width of the band
        wrap_around (bool): go the long way around the circle, the complement of the direct arc between the positions
        origin_offset (float): rotation applied to the position to angle mapping

    Returns:
        ArcDescriptor: the band. Empty when start and end are the same position and the band does not wrap
    """
    if start == end and not wrap_around:
        return ArcDescriptor()
    inner, outer = band_radii(radius, thickness)
    start_angle = position_to_angle(start, sequence_length, origin_offset)
    end_angle = position_to_angle(end, sequence_length, origin_offset)

    fraction = (end - start) / sequence_length
    if not wrap_around and 0 < fraction < 1 / 360:
        return _quadrilateral(cx, cy, inner, outer, start_angle, end_angle)

    span = end_angle - start_angle
    if wrap_around:
        if span > 0:
            span -= TWO_PI
        elif span < 0:
            span += TWO_PI
        else:
            span = TWO_PI
    elif span < 0:
        span += TWO_PI

    path = ArcDescriptor(start_angle=start_angle, angular_span=span, inner_radius=inner, outer_radius=outer)
    path.move_to(*polar_to_cartesian(cx, cy, outer, start_angle))
    _add_arc(path, cx, cy, outer, start_angle, span)
    path.line_to(*polar_to_cartesian(cx, cy, inner, start_angle + span))
    _add_arc(path, cx, cy, inner, start_angle + span, -span)
    return path.close()


def arrow_arc_path(
    start, end, sequence_length, cx, cy, radius, thickness, orientation, arrow_length=8, origin_offset=0
):
    """
    band with a triangular head at the 3' end (plus strand) or the 5' end (minus strand)

    The head takes ``arrow_length / radius`` radians of the band and its base is widened by a quarter of the
    thickness on either side. Bands too short to fit the head plus one degree are drawn as a plain
    quadrilateral. Undirected bands are drawn with :func:`arc_path`
    """
    if start == end:
        return ArcDescriptor()
    inner, outer = band_radii(radius, thickness)
    start_angle = position_to_angle(start, sequence_length, origin_offset)
    end_angle = position_to_angle(end, sequence_length, origin_offset)
    span = end_angle - start_angle
    if span < 0:
        span += TWO_PI

    arrow_angle = arrow_length / radius
    if span < ONE_DEGREE + arrow_angle:
        return _quadrilateral(cx, cy, inner, outer, start_angle, end_angle)

    if orientation == ORIENT.NONE:
        return arc_path(start, end, sequence_length, cx, cy, radius, thickness, origin_offset=origin_offset)

    body_span = span - arrow_angle
    body_large_arc = body_span > math.pi
    ear = thickness / 4
    path = ArcDescriptor(
        start_angle=start_angle, angular_span=span, inner_radius=inner, outer_radius=outer, has_arrow=True)

    if orientation == ORIENT.PLUS:
        body_end = start_angle + body_span
        path.move_to(*polar_to_cartesian(cx, cy, outer, start_angle))
        path.arc_to(outer, body_large_arc, True, *polar_to_cartesian(cx, cy, outer, body_end))
        path.line_to(*polar_to_cartesian(cx, cy, outer + ear, body_end))
        path.line_to(*polar_to_cartesian(cx, cy, radius, start_angle + span))
        path.line_to(*polar_to_cartesian(cx, cy, inner - ear, body_end))
        path.line_to(*polar_to_cartesian(cx, cy, inner, body_end))
        path.arc_to(inner, body_large_arc, False, *polar_to_cartesian(cx, cy, inner, start_angle))
        return path.close()

    body_start = start_angle + arrow_angle
    path.move_to(*polar_to_cartesian(cx, cy, radius, start_angle))
    path.line_to(*polar_to_cartesian(cx, cy, outer + ear, body_start))
    path.line_to(*polar_to_cartesian(cx, cy, outer, body_start))
    path.arc_to(outer, body_large_arc, True, *polar_to_cartesian(cx, cy, outer, start_angle + span))
    path.line_to(*polar_to_cartesian(cx, cy, inner, start_angle + span))
    path.arc_to(inner, body_large_arc, False, *polar_to_cartesian(cx, cy, inner, body_start))
    path.line_to(*polar_to_cartesian(cx, cy, inner - ear, body_start))
    return path.close()


def text_arc_path(start, end, sequence_length, cx, cy, radius, reverse=False, origin_offset=0):
    """
    open arc for text to follow. Reversed arcs run from end to start (anticlockwise) so that labels on the
    bottom half of the circle read left to right
    """
    if start == end:
        return PathDescriptor()
    start_angle = position_to_angle(start, sequence_length, origin_offset)
    end_angle = position_to_angle(end, sequence_length, origin_offset)
    span = end_angle - start_angle
    if span < 0:
        span += TWO_PI
    large_arc = span > math.pi
    path = PathDescriptor()
    if reverse:
        path.move_to(*polar_to_cartesian(cx, cy, radius, end_angle))
        return path.arc_to(radius, large_arc, False, *polar_to_cartesian(cx, cy, radius, start_angle))
    path.move_to(*polar_to_cartesian(cx, cy, radius, start_angle))
    return path.arc_to(radius, large_arc, True, *polar_to_cartesian(cx, cy, radius, end_angle))


def tick_interval(sequence_length):
    for max_length, interval in TICK_INTERVALS:
        if sequence_length <= max_length:
            return interval
    return MAX_TICK_INTERVAL


def tick_label(position):
    """
    Example:
        >>> tick_label(0), tick_label(500), tick_label(1500), tick_label(20000)
        ('0', '500', '1.5k', '20k')
    """
    if position == 0:
        return '0'
    elif position >= 1000:
        return '{:g}k'.format(position / 1000)
    return str(position)


def text_anchor(angle):
    """
    horizontal anchor of a tick label: start on the right of the circle, end on the left, middle otherwise
    """
    normalized = normalize_angle(angle)
    if normalized < math.pi / 4 or normalized > 7 * math.pi / 4:
        return 'start'
    elif 3 * math.pi / 4 < normalized < 5 * math.pi / 4:
        return 'end'
    return 'middle'


def dominant_baseline(angle):
    normalized = normalize_angle(angle)
    if math.pi / 4 < normalized < 3 * math.pi / 4:
        return 'hanging'
    elif 5 * math.pi / 4 < normalized < 7 * math.pi / 4:
        return 'auto'
    return 'middle'


class Tick:
    def __init__(self, position, angle, inner_point, outer_point, label_point, label):
        self.position = position
        self.angle = angle
        self.inner_point = inner_point
        self.outer_point = outer_point
        self.label_point = label_point
        self.label = label
        self.text_anchor = text_anchor(angle)
        self.dominant_baseline = dominant_baseline(angle)

    def __repr__(self):
        return 'Tick({}, {})'.format(self.position, repr(self.label))


class CircularMap:
    """
    viewport and backbone geometry of the circular view of a single sequence

    The backbone radius is the base radius scaled by the zoom scale, kept between the minimum radius and the
    largest radius which still leaves room for every annotation row plus a margin inside the view box
    """

    def __init__(self, sequence_length, settings=None, zoom_scale=1, origin_offset=0, annotation_row_count=0):
        self.settings = settings or DiagramSettings()
        self.sequence_length = sequence_length
        self.origin_offset = origin_offset
        self.width = self.settings.circular_width
        self.height = self.settings.circular_height
        self.base_radius = self.settings.backbone_radius
        self.min_backbone_radius = self.settings.min_backbone_radius
        self.annotation_height = self.settings.circular_annotation_height
        self.annotation_padding = self.settings.circular_annotation_padding
        self.annotation_gap = self.settings.backbone_gap
        self.tick_length = self.settings.tick_length
        self.margin = self.settings.viewport_margin
        self.annotation_row_count = annotation_row_count
        self.zoom_scale = 1
        self.set_zoom(zoom_scale)

    @property
    def center_x(self):
        return self.width / 2

    @property
    def center_y(self):
        return self.height / 2

    @property
    def center(self):
        return self.center_x, self.center_y

    @property
    def view_box(self):
        return '0 0 {} {}'.format(self.width, self.height)

    @property
    def annotation_space(self):
        """
        radial room needed outside the backbone for the annotation rows
        """
        rows = self.annotation_row_count
        if rows == 0:
            return 0
        return self.annotation_gap + rows * self.annotation_height + (rows - 1) * self.annotation_padding

    @property
    def max_backbone_radius(self):
        return min(self.width, self.height) / 2 - self.annotation_space - self.margin

    def _clamp_radius(self, radius):
        return max(self.min_backbone_radius, min(radius, self.max_backbone_radius))

    @property
    def backbone_radius(self):
        return self._clamp_radius(self.base_radius * self.zoom_scale)

    def set_zoom(self, zoom_scale):
        """
        set the zoom scale. Scales which would push the backbone radius outside its bounds are clamped

        Returns:
            float: the zoom scale actually applied
        """
        self.zoom_scale = self._clamp_radius(self.base_radius * zoom_scale) / self.base_radius
        return self.zoom_scale

    def set_annotation_row_count(self, count):
        self.annotation_row_count = count
        self.set_zoom(self.zoom_scale)

    def position_to_angle(self, position):
        return position_to_angle(position, self.sequence_length, self.origin_offset)

    def angle_to_position(self, angle):
        return angle_to_position(angle, self.sequence_length, self.origin_offset)

    def mouse_to_position(self, x, y):
        return mouse_to_position(x, y, self.center_x, self.center_y, self.sequence_length, self.origin_offset)

    def position_to_cartesian(self, position, radius):
        return polar_to_cartesian(self.center_x, self.center_y, radius, self.position_to_angle(position))

    def row_radius(self, row_index):
        return row_radius(
            row_index, self.backbone_radius, self.annotation_height, self.annotation_padding, self.annotation_gap)

    def tick_marks(self):
        """
        Returns:
            :class:`list` of :class:`Tick`: ticks at a regular interval chosen from the sequence length
        """
        if not self.sequence_length:
            return []
        interval = tick_interval(self.sequence_length)
        radius = self.backbone_radius
        cx, cy = self.center
        ticks = []
        for pos in range(0, self.sequence_length, interval):
            angle = self.position_to_angle(pos)
            ticks.append(Tick(
                pos,
                angle,
                polar_to_cartesian(cx, cy, radius - self.tick_length / 2, angle),
                polar_to_cartesian(cx, cy, radius + self.tick_length / 2, angle),
                polar_to_cartesian(cx, cy, radius - self.tick_length - 12, angle),
                tick_label(pos),
            ))
        return ticks

    def arc_path(self, start, end, radius, thickness, wrap_around=False):
        cx, cy = self.center
        return arc_path(start, end, self.sequence_length, cx, cy, radius, thickness, wrap_around, self.origin_offset)

    def arrow_arc_path(self, start, end, radius, thickness, orientation):
        cx, cy = self.center
        return arrow_arc_path(
            start, end, self.sequence_length, cx, cy, radius, thickness, orientation,
            arrow_length=self.settings.arrow_length, origin_offset=self.origin_offset)

    def text_arc_path(self, start, end, radius):
        """
        arc for a label over [start, end), reversed when the middle of the arc is on the bottom half
        """
        half_length = angular_span(start, end, self.sequence_length) / TWO_PI * self.sequence_length / 2
        middle = self.position_to_angle(start + half_length)
        reverse = 0 < normalize_angle(middle) < math.pi
        cx, cy = self.center
        return text_arc_path(start, end, self.sequence_length, cx, cy, radius, reverse, self.origin_offset)

    def selection_path(self, range_, wrap_around=False):
        """
        band over the backbone for a selected range
        """
        return self.arc_path(range_.start, range_.end, self.backbone_radius, self.annotation_height, wrap_around)


def pack_circular_rows(annotations, padding=0, height=1):
    """
    stacks whole annotations into rows. An annotation goes into the first row where none of its ranges
    overlap a range already in the row. CDS annotations are placed first, then the widest
    """
    return pack_rows(
        annotations,
        intervals_of=lambda a: [(r.start, r.end) for r in a.span],
        height_of=lambda a: height,
        padding=padding,
        priority=priority_of,
    )


class CircularAnnotation:
    """
    the arcs of one annotation in the circular view

    Attributes:
        annotation (Annotation): the annotation drawn
        row (int): the row index, 0 is next to the backbone
        radius (float): the centre radius of the row
        arcs (list of ArcDescriptor): one arrowed arc per range of the annotation, in span order
        label_path (PathDescriptor): arc the caption can follow
    """

    def __init__(self, annotation, row, radius, arcs, label_path):
        self.annotation = annotation
        self.row = row
        self.radius = radius
        self.arcs = arcs
        self.label_path = label_path

    def __repr__(self):
        return 'CircularAnnotation({}, row={})'.format(self.annotation.id, self.row)


def layout_circular_annotations(annotations, circular_map):
    """
    packs the annotations into rows, updates the row count of the map (which may shrink the backbone) and
    builds the arcs of every annotation

    Returns:
        :class:`list` of :class:`CircularAnnotation`: in the order the annotations were given
    """
    rows = pack_circular_rows(
        annotations, padding=circular_map.annotation_padding, height=circular_map.annotation_height)
    circular_map.set_annotation_row_count(len(rows))
    row_by_annotation = {}
    for row in rows:
        for annotation in row.members:
            row_by_annotation[id(annotation)] = row.index

    result = []
    for annotation in annotations:
        row = row_by_annotation[id(annotation)]
        radius = circular_map.row_radius(row)
        arcs = [
            circular_map.arrow_arc_path(r.start, r.end, radius, circular_map.annotation_height, r.orientation)
            for r in annotation.span
        ]
        bounds = annotation.bounds
        label_path = circular_map.text_arc_path(bounds.start, bounds.end, radius)
        result.append(CircularAnnotation(annotation, row, radius, arcs, label_path))
    logger.debug(f'circular layout: {len(annotations)} annotations in {len(rows)} rows')
    return result
