"""
geometry of the linear (wrapped lines) view: pixel metrics, annotation arrows, selection outlines and the
stacking of annotation fragments above each sequence line
"""
from ..annotate.fragment import GraphicsSpan
from ..constants import ORIENT, is_cds
from ..util import logger
from .constants import DiagramSettings
from .layout import Anchored, Box, Floating, pack_rows, priority_of, rows_height, skyline_pack
from .path import PathDescriptor


class LinearMetrics:
    """
    pixel metrics of the linear view for a given container width and zoom (bases per line)

    When a full line of text fits the available width the bases are drawn as text at the configured
    character width. Otherwise the line is compressed so that it exactly fills the available width

    Example:
        >>> metrics = LinearMetrics(80, DiagramSettings(width=800))
        >>> metrics.text_mode, metrics.char_width, metrics.line_width
        (True, 8, 640)
    """

    def __init__(self, zoom, settings=None, width=None):
        settings = settings or DiagramSettings()
        self.zoom = zoom
        self.full_width = width if width is not None else settings.width
        self.lmargin = settings.lmargin
        self.rmargin = settings.rmargin
        self.vmargin = settings.vmargin
        self.linepadding = settings.linepadding
        self.line_height = settings.line_height
        self.block_width = settings.char_width

        self.available_width = max(1, self.full_width - self.lmargin - self.rmargin)
        self.text_mode = zoom * settings.char_width <= self.available_width
        if self.text_mode:
            self.char_width = settings.char_width
        else:
            self.char_width = self.available_width / zoom
        self.line_width = zoom * self.char_width

    def pixel_to_line_position(self, x):
        """
        the position within a line for an x pixel coordinate, clamped to [0, zoom]
        """
        pos = (x - self.lmargin) / self.char_width
        return int(round(max(0, min(pos, self.zoom))))

    def line_position_to_pixel(self, pos):
        return self.lmargin + pos * self.char_width

    def line_y(self, line_index):
        """
        the top of the sequence text of a line when no extra room is reserved above lines
        """
        return self.vmargin + line_index * (self.line_height + self.linepadding)

    def total_height(self, line_count):
        if line_count == 0:
            return 0
        return self.vmargin * 2 + line_count * self.line_height + (line_count - 1) * self.linepadding

    def pixel_to_line_index(self, y, line_count):
        line_index = int((y - self.vmargin) // (self.line_height + self.linepadding))
        return max(0, min(line_index, line_count - 1))

    def pixel_to_sequence_position(self, x, y, line_count):
        return self.pixel_to_line_index(y, line_count) * self.zoom + self.pixel_to_line_position(x)

    def line_tops(self, line_count, extra_heights=None):
        """
        the top of the sequence text of each line, leaving room above each line for its stacked annotations

        Args:
            line_count (int): number of lines
            extra_heights (dict): extra height needed above a line by line index

        Returns:
            :class:`list` of :class:`float`: the y coordinate of each line
        """
        extra_heights = extra_heights or {}
        tops = []
        current = self.vmargin
        for index in range(line_count):
            if index:
                current += self.line_height + self.linepadding
            current += extra_heights.get(index, 0)
            tops.append(current)
        return tops

    def layout_height(self, line_count, extra_heights=None):
        if line_count == 0:
            return 0
        return self.line_tops(line_count, extra_heights)[-1] + self.line_height + self.vmargin


def arrow_path(left, right, height, block_width, arrow_edge, orientation):
    """
    path of an annotation arrow sitting on y=0 and extending upwards to -height

    Narrow fragments (no wider than 1.5 arrow heads) and undirected fragments are drawn as a rectangle inset
    by the arrow edge. Plus strand arrows point right and minus strand arrows point left

    Returns:
        PathDescriptor: the closed outline
    """
    path = PathDescriptor()
    if right - left <= block_width * 1.5 or orientation not in [ORIENT.PLUS, ORIENT.MINUS]:
        return path.move_to(left, -arrow_edge).horizontal_to(right).vertical_to(-(height - arrow_edge)) \
            .horizontal_to(left).close()
    if orientation == ORIENT.PLUS:
        tip, base, tail = right, right - block_width, left
    else:
        tip, base, tail = left, left + block_width, right
    path.move_to(tip, -height / 2).line_to(base, 0).vertical_to(-arrow_edge).horizontal_to(tail)
    path.vertical_to(-(height - arrow_edge)).horizontal_to(base).vertical_to(-height).close()
    return path


def selection_path(range_, zoom, metrics, line_tops=None, line_count=None):
    """
    outline of a selected range. A range on a single line is a rectangle over the line. A range spanning
    several lines is outlined as a single shape wrapping from its start to the right edge, through the
    full middle lines and back from the left edge to its end

    Args:
        range_ (Range): the selected range
        zoom (int): bases per line
        metrics (LinearMetrics): the pixel metrics
        line_tops (list): the y of each line. Defaults to the evenly spaced :meth:`LinearMetrics.line_y`
        line_count (int): when given, ranges starting beyond the last line produce an empty path
    """
    fragments = GraphicsSpan(range_, zoom).fragments()
    if not fragments:
        return PathDescriptor()
    first, last = fragments[0], fragments[-1]
    if line_count is not None and first.line >= line_count:
        return PathDescriptor()

    def top_of(line):
        if line_tops is not None:
            return line_tops[line]
        return metrics.line_y(line)

    x1 = metrics.lmargin + first.start * metrics.char_width
    x2 = metrics.lmargin + last.end * metrics.char_width
    path = PathDescriptor()

    if len(fragments) == 1:
        y1 = top_of(first.line)
        return path.move_to(x1, y1).horizontal_to(x2).vertical_to(y1 + metrics.line_height) \
            .horizontal_to(x1).close()

    start_y = top_of(first.line)
    last_y = top_of(last.line)
    path.move_to(x1, start_y).horizontal_to(metrics.lmargin + metrics.line_width).vertical_to(last_y)
    path.horizontal_to(x2).vertical_to(last_y + metrics.line_height).horizontal_to(metrics.lmargin)
    path.vertical_to(start_y + metrics.line_height).horizontal_to(x1).close()
    return path


class PlacedAnnotation:
    """
    an annotation fragment positioned in the track above its line

    Attributes:
        fragment (AnnotationFragment): the fragment drawn
        path (PathDescriptor): the arrow outline relative to the line (y=0 is the top of the sequence text)
        box (Box): the measured box of the arrow before stacking
        row (int): the row the fragment was stacked into
        offset (float): the vertical offset applied to the arrow, negative is upwards
    """

    def __init__(self, fragment, path, box, height):
        self.fragment = fragment
        self.path = path
        self.box = box
        self.height = height
        self.row = 0
        self.offset = 0

    @property
    def annotation(self):
        return self.fragment.annotation

    def placed_box(self):
        return self.box.moved(0, self.offset)

    def placed_path(self):
        return self.path.translate(0, self.offset)

    def __repr__(self):
        return 'PlacedAnnotation({!r}, row={}, offset={})'.format(self.fragment, self.row, self.offset)


class TrackLayout:
    def __init__(self):
        self.lines = {}
        self.extra_heights = {}
        self.rows = {}

    def __getitem__(self, line):
        return self.lines.get(line, [])

    def line_numbers(self):
        return sorted(self.lines.keys())


def element_height(annotation, settings):
    height = settings.annotation_height
    if settings.show_translation and is_cds(annotation.type):
        height += settings.translation_height
    return height


def layout_annotation_track(annotations, zoom, metrics=None, settings=None):
    """
    fragments every annotation by line and stacks the fragments of each line into rows above the line

    Rows are packed in sequence coordinates: CDS annotations first, then the widest. Each fragment goes into
    the first row where it overlaps nothing. Offsets are only assigned after every row on the line knows
    its final height

    Returns:
        TrackLayout: the placed fragments and extra height needed above each line
    """
    settings = settings or DiagramSettings()
    metrics = metrics or LinearMetrics(zoom, settings)
    layout = TrackLayout()

    for annotation in annotations:
        for frag in annotation.to_fragments(zoom):
            left = metrics.line_position_to_pixel(frag.start)
            right = metrics.line_position_to_pixel(frag.end)
            orientation = frag.orientation if frag.show_arrow else ORIENT.NONE
            path = arrow_path(
                left, right, settings.annotation_height, settings.arrow_block_width, settings.arrow_edge, orientation)
            height = element_height(annotation, settings)
            box = Box(left, -height, right, 0)
            layout.lines.setdefault(frag.line, []).append(PlacedAnnotation(frag, path, box, height))

    padding = settings.annotation_row_padding
    for line, placed in layout.lines.items():
        rows = pack_rows(
            placed,
            intervals_of=lambda p: [(p.fragment.start, p.fragment.end)],
            height_of=lambda p: p.height,
            padding=padding,
            priority=lambda p: priority_of(p.annotation),
        )
        for row in rows:
            for member in row.members:
                member.row = row.index
                member.offset = -row.offset
        layout.rows[line] = rows
        layout.extra_heights[line] = rows_height(rows, padding)
        logger.debug(f'line {line}: {len(placed)} annotation fragments stacked in {len(rows)} rows')
    return layout


class PlacedLabel:
    def __init__(self, placed_annotation, text, element=None):
        self.placed_annotation = placed_annotation
        self.text = text
        self.element = element
        self.shell = None

    @property
    def inside(self):
        return self.element is None

    @property
    def box(self):
        if self.shell is None:
            return self.placed_annotation.placed_box()
        return self.shell.placed_box()


def label_width(text, settings):
    return len(text) * settings.label_font_size * settings.font_width_height_ratio


def layout_labels(placed, settings=None):
    """
    positions the captions of the placed annotations of one line

    Captions that fit inside their arrow are drawn there. The remaining captions float above their arrow and
    are skyline packed against the arrows (anchored) and each other

    Args:
        placed (list of PlacedAnnotation): the stacked fragments of a single line

    Returns:
        :class:`list` of :class:`PlacedLabel`: a label for each fragment starting its range, with a caption
    """
    settings = settings or DiagramSettings()
    elements = [Anchored(p.placed_box(), None) for p in placed]
    labels = []
    label_height = settings.label_font_size + settings.contentpadding

    for item in placed:
        caption = item.annotation.caption
        if not caption or not item.fragment.is_start:
            continue
        width = label_width(caption, settings)
        box = item.placed_box()
        if width <= box.width - settings.arrow_block_width:
            labels.append(PlacedLabel(item, caption))
            continue
        element = Floating(Box(box.left, box.top - label_height, box.left + width, box.top), item)
        elements.append(element)
        labels.append(PlacedLabel(item, caption, element))

    shells = skyline_pack(elements, settings.contentpadding)
    shell_by_element = {id(s.element): s for s in shells}
    for label in labels:
        if not label.inside:
            label.shell = shell_by_element[id(label.element)]
    return labels
