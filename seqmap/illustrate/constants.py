from colour import Color

from ..constants import ANNOTATION_COLORS, DEFAULT_ANNOTATION_COLOR
from ..util import WeakSeqMapNamespace

DEFAULTS = WeakSeqMapNamespace()
"""
- :term:`width`
- :term:`vmargin`
- :term:`lmargin`
- :term:`rmargin`
- :term:`linepadding`
- :term:`linetopmargin`
- :term:`contentpadding`
- :term:`char_width`
- :term:`line_height`
- :term:`annotation_height`
- :term:`arrow_block_width`
- :term:`arrow_edge`
- :term:`annotation_row_padding`
- :term:`translation_height`
- :term:`show_translation`
- :term:`circular_width`
- :term:`circular_height`
- :term:`backbone_radius`
- :term:`min_backbone_radius`
- :term:`viewport_margin`
- :term:`circular_annotation_height`
- :term:`circular_annotation_padding`
- :term:`backbone_gap`
- :term:`tick_length`
- :term:`arrow_length`
"""
DEFAULTS.add('width', 800, defn='The width in pixels of the container the linear map is drawn in')
DEFAULTS.add('vmargin', 10, defn='The margin above the first and below the last sequence line')
DEFAULTS.add('lmargin', 60, defn='The left margin, reserved for the position numbers')
DEFAULTS.add('rmargin', 20, defn='The right margin')
DEFAULTS.add('linepadding', 20, defn='The vertical padding between sequence lines')
DEFAULTS.add('linetopmargin', 4, defn='The margin above each sequence line, used for the selection handles')
DEFAULTS.add('contentpadding', 2, defn='The gap kept between stacked elements which would otherwise collide')
DEFAULTS.add('char_width', 8, defn='The width of a single base in text mode', cast_type=float)
DEFAULTS.add('line_height', 16, defn='The height of the sequence text of a line')
DEFAULTS.add('annotation_height', 18, defn='The height of an annotation arrow in the linear view')
DEFAULTS.add('arrow_block_width', 8, defn='The width of the arrow head of a linear annotation')
DEFAULTS.add('arrow_edge', 2, defn='The height of the notch between the arrow body and its head')
DEFAULTS.add('annotation_row_padding', 2, defn='The vertical padding between annotation rows')
DEFAULTS.add('translation_height', 14, defn='The extra height reserved in CDS rows for the translation')
DEFAULTS.add('show_translation', False, defn='Reserve room for the translation of CDS annotations')
DEFAULTS.add('label_color', '#000000', defn='The label color')
DEFAULTS.add('backbone_color', '#333333', defn='The color of the sequence line and circular backbone')
DEFAULTS.add('selection_color', '#90CAF9', defn='The fill color of selected regions')
DEFAULTS.add('circular_width', 500, defn='The width of the circular view box')
DEFAULTS.add('circular_height', 500, defn='The height of the circular view box')
DEFAULTS.add('backbone_radius', 180, defn='The radius of the circular backbone at a zoom scale of 1', cast_type=float)
DEFAULTS.add('min_backbone_radius', 50, defn='The smallest radius the circular backbone may be zoomed to', cast_type=float)
DEFAULTS.add('viewport_margin', 20, defn='The margin kept free around the outermost annotation row')
DEFAULTS.add('circular_annotation_height', 14, defn='The thickness of an annotation arc')
DEFAULTS.add('circular_annotation_padding', 4, defn='The gap between annotation arc rows')
DEFAULTS.add('backbone_gap', 6, defn='The gap between the backbone and the first annotation row')
DEFAULTS.add('tick_length', 8, defn='The length of the tick marks on the backbone')
DEFAULTS.add('arrow_length', 8, defn='The arc length of the arrow head of a circular annotation', cast_type=float)


class DiagramSettings:
    """
    holds settings related to colors/sizes for the drawing
    """
    def __init__(
        self, **kwargs
    ):
        inputs = {}
        inputs.update(DEFAULTS.items())
        inputs.update(kwargs)
        for arg, val in inputs.items():
            if arg not in DEFAULTS:
                raise KeyError('unrecognized argument', arg)
            setattr(self, arg, val)

        self.font_style = 'font-size:{font_size}px;font-weight:normal;' \
            'text-anchor:{text_anchor};font-family: consolas, courier new, monospace'
        # ratio for courier new which is wider than consolas, used for estimating width
        self.font_width_height_ratio = 1229 / 2048
        self.sequence_font_size = 14
        self.position_font_size = 12
        self.label_font_size = 11
        self.tick_font_size = 10
        self.caption_font_size = 16

        self.backbone_stroke_width = 2
        self.tick_stroke_width = 1
        self.annotation_stroke = Color(self.backbone_color).hex
        self.annotation_stroke_width = 0.5
        self.annotation_colors = {k: Color(v).hex_l for k, v in ANNOTATION_COLORS.items()}
        self.annotation_default_color = Color(DEFAULT_ANNOTATION_COLOR).hex_l
        self.selection_opacity = 0.4
        self.selection_stroke = Color(self.selection_color, luminance=Color(self.selection_color).luminance * 0.6).hex

        self.circular_label_offset = self.circular_annotation_height / 2 + self.tick_length
        self.label_min_chars = 3

    def annotation_color(self, feature_type):
        return self.annotation_colors.get(feature_type, self.annotation_default_color)
