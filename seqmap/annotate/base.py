from ..constants import FEATURE_TYPE, annotation_color, is_cds
from ..interval import Range, Span
from ..util import generate_id
from .fragment import GraphicsSpan


class Annotation:
    """
    a named feature on a sequence. The annotation owns its span, the ranges are copied on construction
    """

    def __init__(self, span=None, caption='', type=FEATURE_TYPE.MISC, id=None, attributes=None):
        """
        Args:
            span (Span|str|list): the location as a Span, span text or a list of Range objects or range text
            caption (str): short label
            type (str): the feature type (gene, CDS, promoter, etc.)
            id (str): unique identifier. A short uuid is generated when not given
            attributes (dict): additional key-value metadata

        Example:
            >>> Annotation('10..50', caption='lacZ', type='gene', id='a1').bounds
            Range(10, 50, 0)
        """
        self.id = id if id is not None else generate_id()
        self.caption = caption or ''
        self.type = type or FEATURE_TYPE.MISC
        self.attributes = {}
        self.attributes.update(attributes or {})

        if isinstance(span, str):
            self.span = Span.parse(span)
        elif isinstance(span, Span):
            self.span = span.copy()
        elif span:
            self.span = Span([r if isinstance(r, Range) else Range.parse(r) for r in span])
        else:
            self.span = Span()

    @property
    def orientation(self):
        return self.span.orientation

    @property
    def length(self):
        return self.span.total_length

    @property
    def bounds(self):
        return self.span.bounds

    @property
    def css_class(self):
        return 'annotation annotation-{} annotation-{}'.format(self.type, self.id)

    @property
    def color(self):
        return annotation_color(self.type)

    def is_cds(self):
        return is_cds(self.type)

    def overlaps(self, start, end):
        """
        check if the bounds of the annotation overlap the half-open interval [start, end)
        """
        if not self.span.ranges:
            return False
        bounds = self.bounds
        return bounds.start < end and bounds.end > start

    def extract(self, sequence):
        return self.span.extract(sequence)

    def to_fragments(self, zoom):
        """
        split the annotation into the pieces visible on each display line

        Args:
            zoom (int): the number of bases per line

        Returns:
            :class:`list` of :class:`~seqmap.annotate.fragment.AnnotationFragment`: fragments for every range, in span order
        """
        return GraphicsSpan(self.span, zoom, annotation=self).fragments()

    def copy(self):
        return Annotation(
            self.span, caption=self.caption, type=self.type, id=self.id, attributes=self.attributes)

    def to_dict(self, interchange=False):
        return {
            'id': self.id,
            'caption': self.caption,
            'type': self.type,
            'span': self.span.to_interchange() if interchange else str(self.span),
            'attributes': dict(self.attributes),
        }

    def __repr__(self):
        return '{}(id={}, caption={}, type={}, span={})'.format(
            self.__class__.__name__, repr(self.id), repr(self.caption), repr(self.type), repr(str(self.span)))

    def __str__(self):
        return '{} ({}): {}'.format(self.caption, self.type, self.span)
