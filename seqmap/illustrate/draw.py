"""
renders the layouts of the linear and circular views as svg using svgwrite. No layout decisions are made here
"""
import svgwrite
from colour import Color
from svgwrite import Drawing

from ..editor import Line
from ..util import logger
from .circular import CircularMap, layout_circular_annotations
from .linear import LinearMetrics, layout_annotation_track, layout_labels, selection_path


class Tag(svgwrite.base.BaseElement):

    def __init__(self, elementname, content='', **kwargs):
        self.elementname = elementname
        super(Tag, self).__init__(**kwargs)
        self.content = content

    def get_xml(self):
        xml = super(Tag, self).get_xml()
        xml.text = self.content
        return xml


def dynamic_label_color(color):
    """
    calculates the luminance of a color and determines if a black or white label will be more contrasting
    """
    color = Color(color)
    if color.get_luminance() < 0.5:
        return '#FFFFFF'
    return '#000000'


def annotation_title(annotation):
    return '{} ({}): {}'.format(annotation.caption or annotation.id, annotation.type, annotation.span)


def draw_legend(config, canvas, annotations):
    """
    generates an svg group with a swatch for every annotation type drawn
    """
    main_group = canvas.g(class_='legend')
    swatch_size = config.label_font_size
    y = 0
    types = []
    for annotation in annotations:
        if annotation.type not in types:
            types.append(annotation.type)
    for feature_type in types:
        svg_group = canvas.g()
        svg_group.add(canvas.rect((0, 0), (swatch_size, swatch_size), fill=config.annotation_color(feature_type)))
        svg_group.add(canvas.text(
            feature_type,
            insert=(swatch_size + config.contentpadding * 2, swatch_size - 2),
            fill=config.label_color,
            style=config.font_style.format(text_anchor='start', font_size=config.label_font_size),
            class_='label'
        ))
        svg_group.translate(0, y)
        main_group.add(svg_group)
        y += swatch_size + config.contentpadding
    width = max([len(t) for t in types] + [0]) * config.label_font_size * config.font_width_height_ratio + \
        swatch_size + config.contentpadding * 2
    setattr(main_group, 'height', y)
    setattr(main_group, 'width', width)
    return main_group


def draw_sequence_line(config, canvas, line, metrics):
    """
    draws the position number and the bases of a line (or a bar when the line is too compressed for text)
    """
    main_group = canvas.g(class_='sequence_line')
    main_group.add(canvas.text(
        str(line.start),
        insert=(metrics.lmargin - config.contentpadding * 2, metrics.line_height - 3),
        fill=config.label_color,
        style=config.font_style.format(text_anchor='end', font_size=config.position_font_size),
        class_='position'
    ))
    if metrics.text_mode:
        main_group.add(canvas.text(
            line.text,
            insert=(metrics.lmargin, metrics.line_height - 3),
            fill=config.label_color,
            style=config.font_style.format(text_anchor='start', font_size=config.sequence_font_size),
            textLength=len(line.text) * metrics.char_width,
            class_='sequence'
        ))
    else:
        main_group.add(canvas.rect(
            (metrics.lmargin, metrics.line_height / 2 - 1),
            ((line.end - line.start) * metrics.char_width, 2),
            fill=config.backbone_color,
            class_='backbone'
        ))
    setattr(main_group, 'height', metrics.line_height)
    return main_group


def draw_annotation_fragment(config, canvas, placed):
    annotation = placed.annotation
    fill = config.annotation_color(annotation.type)
    group = canvas.g(class_=annotation.css_class)
    group.add(canvas.path(
        d=placed.placed_path().to_svg(),
        fill=fill,
        stroke=config.annotation_stroke,
        stroke_width=config.annotation_stroke_width,
    ))
    group.add(Tag('title', annotation_title(annotation)))
    return group


def draw_label(config, canvas, label):
    box = label.box
    annotation = label.placed_annotation.annotation
    if label.inside:
        color = dynamic_label_color(config.annotation_color(annotation.type))
        x = box.left + config.contentpadding * 2
    else:
        color = config.label_color
        x = box.left
    return canvas.text(
        label.text,
        insert=(x, box.bottom - (box.height - config.label_font_size) / 2 - 2),
        fill=color,
        style=config.font_style.format(text_anchor='start', font_size=config.label_font_size),
        class_='label'
    )


def draw_linear_map(config, sequence, annotations, zoom, selection=None, title=None):
    """
    draws the linear view of a sequence with its annotations stacked above each line

    Args:
        config (DiagramSettings): the drawing settings
        sequence (str): the sequence text
        annotations (list of Annotation): the annotations to draw
        zoom (int): bases per line
        selection (SelectionDomain): optional selected ranges to highlight

    Returns:
        svgwrite.drawing.Drawing: the drawing
    """
    metrics = LinearMetrics(zoom, config)
    track = layout_annotation_track(annotations, zoom, metrics, config)
    line_count = -(-len(sequence) // zoom) if sequence else 0

    labels_by_line = {}
    extra_heights = {}
    for line in range(line_count):
        labels = layout_labels(track[line], config)
        labels_by_line[line] = labels
        extra = track.extra_heights.get(line, 0)
        if labels:
            extra = max([extra] + [-label.box.top for label in labels])
        extra_heights[line] = extra + (config.linetopmargin if extra else 0)

    line_tops = metrics.line_tops(line_count, extra_heights)
    top_margin = config.caption_font_size + config.vmargin if title else 0
    height = metrics.layout_height(line_count, extra_heights) + top_margin
    canvas = Drawing(size=(metrics.full_width, height))
    if title:
        canvas.add(canvas.text(
            title,
            insert=(metrics.lmargin, config.caption_font_size),
            fill=config.label_color,
            style=config.font_style.format(text_anchor='start', font_size=config.caption_font_size),
            class_='title'
        ))

    if selection is not None:
        selection_group = canvas.g(class_='selection')
        for range_ in selection.ranges:
            path = selection_path(range_, zoom, metrics, line_tops=line_tops, line_count=line_count)
            if path.is_empty():
                continue
            selection_group.add(canvas.path(
                d=path.translate(0, top_margin).to_svg(),
                fill=config.selection_color,
                fill_opacity=config.selection_opacity,
                stroke=config.selection_stroke,
            ))
        canvas.add(selection_group)

    for index in range(line_count):
        start = index * zoom
        end = min(start + zoom, len(sequence))
        line_group = canvas.g(class_='line')
        line = Line(index, start, end, sequence[start:end])
        line_group.add(draw_sequence_line(config, canvas, line, metrics))
        for placed in track[index]:
            line_group.add(draw_annotation_fragment(config, canvas, placed))
        for label in labels_by_line[index]:
            line_group.add(draw_label(config, canvas, label))
        line_group.translate(0, line_tops[index] + top_margin)
        canvas.add(line_group)

    logger.info(f'drew linear map of {len(sequence)} bases on {line_count} lines')
    return canvas


def draw_ticks(config, canvas, circular_map):
    main_group = canvas.g(class_='ticks')
    for tick in circular_map.tick_marks():
        main_group.add(canvas.line(
            tick.inner_point, tick.outer_point, stroke=config.backbone_color, stroke_width=config.tick_stroke_width))
        main_group.add(canvas.text(
            tick.label,
            insert=tick.label_point,
            fill=config.label_color,
            style=config.font_style.format(text_anchor=tick.text_anchor, font_size=config.tick_font_size),
            dominant_baseline=tick.dominant_baseline,
            class_='tick_label'
        ))
    return main_group


def draw_circular_map(config, sequence_length, annotations, zoom_scale=1, origin_offset=0, selection=None, title=None):
    """
    draws the circular (plasmid) view. Annotations are stacked in rows outside the backbone

    Returns:
        svgwrite.drawing.Drawing: the drawing
    """
    circular_map = CircularMap(sequence_length, config, zoom_scale=zoom_scale, origin_offset=origin_offset)
    placed = layout_circular_annotations(annotations, circular_map)

    canvas = Drawing(size=(circular_map.width, circular_map.height), viewBox=circular_map.view_box)
    cx, cy = circular_map.center

    canvas.add(canvas.circle(
        center=(cx, cy), r=circular_map.backbone_radius, fill='none',
        stroke=config.backbone_color, stroke_width=config.backbone_stroke_width, class_='backbone'))
    canvas.add(draw_ticks(config, canvas, circular_map))

    if selection is not None:
        selection_group = canvas.g(class_='selection')
        for range_ in selection.ranges:
            path = circular_map.selection_path(range_)
            if path.is_empty():
                continue
            selection_group.add(canvas.path(
                d=path.to_svg(), fill=config.selection_color, fill_opacity=config.selection_opacity))
        canvas.add(selection_group)

    annotation_group = canvas.g(class_='annotations')
    for index, item in enumerate(placed):
        annotation = item.annotation
        group = canvas.g(class_=annotation.css_class)
        for arc in item.arcs:
            if arc.is_empty():
                continue
            group.add(canvas.path(
                d=arc.to_svg(),
                fill=config.annotation_color(annotation.type),
                stroke=config.annotation_stroke,
                stroke_width=config.annotation_stroke_width,
            ))
        if annotation.caption and not item.label_path.is_empty():
            arc_length = abs(item.arcs[0].angular_span) * item.radius if item.arcs else 0
            if arc_length >= len(annotation.caption) * config.label_font_size * config.font_width_height_ratio:
                label_path = canvas.path(d=item.label_path.to_svg(), id='label-path-{}'.format(index), fill='none')
                canvas.defs.add(label_path)
                text = canvas.text(
                    '', class_='label', dy=[config.label_font_size / 3],
                    fill=dynamic_label_color(config.annotation_color(annotation.type)))
                text.add(canvas.textPath(
                    label_path, annotation.caption, startOffset='50%',
                    style=config.font_style.format(text_anchor='middle', font_size=config.label_font_size)))
                group.add(text)
        group.add(Tag('title', annotation_title(annotation)))
        annotation_group.add(group)
    canvas.add(annotation_group)

    if annotations:
        legend = draw_legend(config, canvas, annotations)
        legend.translate(config.contentpadding * 2, config.contentpadding * 2)
        canvas.add(legend)

    if title:
        canvas.add(canvas.text(
            title,
            insert=(cx, cy),
            fill=config.label_color,
            style=config.font_style.format(text_anchor='middle', font_size=config.caption_font_size),
            class_='title'
        ))
    canvas.add(canvas.text(
        '{} bp'.format(sequence_length),
        insert=(cx, cy + config.caption_font_size + config.contentpadding),
        fill=config.label_color,
        style=config.font_style.format(text_anchor='middle', font_size=config.position_font_size),
        class_='length'
    ))
    logger.info(f'drew circular map of {sequence_length} bases with {len(placed)} annotations')
    return canvas
