import re

from .constants import ORIENT, reverse_complement
from .error import InvariantViolation, ParseError


_POSITIONS_PATTERN = re.compile(r'^\s*(\d+)\s*(?:\.\.\s*(\d+)\s*)?$')
_INTERCHANGE_RANGE_PATTERN = re.compile(r'^\s*<?(\d+)\s*(?:(\.\.|\^)\s*>?(\d+)\s*)?$')
_COMPLEMENT_PATTERN = re.compile(r'^\s*complement\s*\((.*)\)\s*$', re.DOTALL)
_JOIN_PATTERN = re.compile(r'^\s*(?:join|order)\s*\((.*)\)\s*$', re.DOTALL)


class Range:
    """
    a contiguous region of a sequence in fenced (0-based, half-open) coordinates. Positions are the fence posts
    between bases so ``Range(0, 1)`` is the first base and ``Range(5, 5)`` is a cursor sitting before the sixth base

    The fields are plain attributes and may be reassigned directly. Methods which produce a changed range
    (:meth:`shift`, :meth:`flip`) return a new instance instead
    """

    def __init__(self, start, end=None, orientation=ORIENT.PLUS):
        """
        Args:
            start (int): the start position (inclusive)
            end (int): the end position (exclusive). Defaults to the start, a zero-width cursor
            orientation (ORIENT): the strand of the range

        Raises:
            InvariantViolation: on a negative position or an end before the start
        """
        end = start if end is None else end
        if start < 0 or end < 0:
            raise InvariantViolation('range positions must be non-negative', start, end)
        if end < start:
            raise InvariantViolation('range end must not be before the start', start, end)
        self.start = int(start)
        self.end = int(end)
        self.orientation = ORIENT.enforce(orientation)

    @classmethod
    def parse(cls, text):
        """
        parse a range from its fenced coordinate notation

        Example:
            >>> Range.parse('10..20')
            Range(10, 20, 1)
            >>> Range.parse('(10..20)')
            Range(10, 20, -1)
            >>> Range.parse('[10..20]')
            Range(10, 20, 0)
            >>> Range.parse('15')
            Range(15, 15, 1)

        Raises:
            ParseError: the text is not a valid range
        """
        if not isinstance(text, str):
            raise ParseError('expected range text', text)
        stripped = text.strip()
        orientation = ORIENT.PLUS
        inner = stripped
        if stripped.startswith('(') or stripped.endswith(')'):
            if not (stripped.startswith('(') and stripped.endswith(')')):
                raise ParseError('unbalanced brackets in range', text)
            orientation = ORIENT.MINUS
            inner = stripped[1:-1]
        elif stripped.startswith('[') or stripped.endswith(']'):
            if not (stripped.startswith('[') and stripped.endswith(']')):
                raise ParseError('unbalanced brackets in range', text)
            orientation = ORIENT.NONE
            inner = stripped[1:-1]

        match = _POSITIONS_PATTERN.match(inner)
        if not match:
            raise ParseError('invalid range text', text)
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) is not None else start
        if end < start:
            raise ParseError('range end must not be before the start', text)
        return cls(start, end, orientation)

    @classmethod
    def from_interchange(cls, text):
        """
        parse a range from the 1-based inclusive interchange notation

        Example:
            >>> Range.from_interchange('11..20')
            Range(10, 20, 1)
            >>> Range.from_interchange('complement(11..20)')
            Range(10, 20, -1)
            >>> Range.from_interchange('7')
            Range(6, 7, 1)
            >>> Range.from_interchange('7^8')
            Range(7, 7, 1)
        """
        if not isinstance(text, str):
            raise ParseError('expected range text', text)
        orientation = ORIENT.PLUS
        match = _COMPLEMENT_PATTERN.match(text)
        if match:
            orientation = ORIENT.MINUS
            text = match.group(1)

        match = _INTERCHANGE_RANGE_PATTERN.match(text)
        if not match:
            raise ParseError('invalid interchange range text', text)
        first = int(match.group(1))
        if first < 1:
            raise ParseError('interchange positions are 1-based', text)
        if match.group(2) is None:
            return cls(first - 1, first, orientation)
        second = int(match.group(3))
        if match.group(2) == '^':
            if second != first + 1:
                raise ParseError('a site between bases must reference adjacent positions', text)
            return cls(first, first, orientation)
        if second < first:
            raise ParseError('range end must not be before the start', text)
        return cls(first - 1, second, orientation)

    def to_interchange(self):
        """
        Example:
            >>> Range(10, 20).to_interchange()
            '11..20'
            >>> Range(10, 20, ORIENT.MINUS).to_interchange()
            'complement(11..20)'
            >>> Range(4, 4).to_interchange()
            '4^5'
        """
        if self.start == self.end:
            content = '{}^{}'.format(self.start, self.start + 1)
        elif self.length == 1:
            content = str(self.end)
        else:
            content = '{}..{}'.format(self.start + 1, self.end)
        if self.orientation == ORIENT.MINUS:
            return 'complement({})'.format(content)
        return content

    @property
    def length(self):
        return self.end - self.start

    def contains(self, target):
        """
        check if a position or another range falls inside this range

        Example:
            >>> Range(10, 20).contains(10)
            True
            >>> Range(10, 20).contains(20)
            False
            >>> Range(10, 20).contains(Range(12, 20))
            True
        """
        if isinstance(target, Range):
            return target.start >= self.start and target.end <= self.end
        return self.start <= target < self.end

    def __contains__(self, target):
        return self.contains(target)

    def overlaps(self, other):
        """
        half-open overlap. Ranges which only touch do not overlap

        Example:
            >>> Range(0, 10).overlaps(Range(10, 20))
            False
            >>> Range(0, 11).overlaps(Range(10, 20))
            True
        """
        return not (other.end <= self.start or other.start >= self.end)

    def extract(self, sequence):
        """
        slice the bases covered by this range, reverse complemented when on the minus strand
        """
        sub = sequence[self.start:self.end]
        if self.orientation == ORIENT.MINUS:
            return reverse_complement(sub)
        return sub

    def shift(self, offset):
        return Range(self.start + offset, self.end + offset, self.orientation)

    def flip(self):
        return Range(self.start, self.end, self.orientation * -1)

    def copy(self):
        return Range(self.start, self.end, self.orientation)

    def __eq__(self, other):
        if not isinstance(other, Range):
            return NotImplemented
        return (self.start, self.end, self.orientation) == (other.start, other.end, other.orientation)

    __hash__ = None

    def __repr__(self):
        return '{}({}, {}, {})'.format(self.__class__.__name__, self.start, self.end, self.orientation)

    def __str__(self):
        """
        A zero-width range is written in the short cursor form, so ``5..5`` is written as ``5``
        """
        if self.start == self.end:
            content = str(self.start)
        else:
            content = '{}..{}'.format(self.start, self.end)
        if self.orientation == ORIENT.MINUS:
            return '({})'.format(content)
        elif self.orientation == ORIENT.NONE:
            return '[{}]'.format(content)
        return content


def _split_top_level(text, delim=','):
    parts = []
    depth = 0
    current = []
    for char in text:
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth < 0:
                raise ParseError('unbalanced brackets', text)
        if char == delim and depth == 0:
            parts.append(''.join(current))
            current = []
        else:
            current.append(char)
    if depth != 0:
        raise ParseError('unbalanced brackets', text)
    parts.append(''.join(current))
    return parts


class Span:
    """
    ordered collection of ranges. The order is the traversal (coding) order and is not necessarily
    increasing in coordinate order
    """

    def __init__(self, ranges=None):
        self.ranges = [r.copy() for r in (ranges or [])]

    @classmethod
    def parse(cls, text):
        """
        Example:
            >>> Span.parse('0..10 + (20..30)')
            Span([Range(0, 10, 1), Range(20, 30, -1)])
        """
        if not isinstance(text, str):
            raise ParseError('expected span text', text)
        terms = [t.strip() for t in text.split('+')]
        return cls([Range.parse(t) for t in terms if t])

    @classmethod
    def from_interchange(cls, text):
        """
        parse the 1-based interchange notation, including ``join(...)`` and ``complement(join(...))``

        Example:
            >>> str(Span.from_interchange('join(1..10,21..30)'))
            '0..10 + 20..30'
            >>> str(Span.from_interchange('complement(join(1..10,21..30))'))
            '(20..30) + (0..10)'
        """
        if not isinstance(text, str):
            raise ParseError('expected span text', text)
        if not text.strip():
            return cls()
        match = _JOIN_PATTERN.match(text)
        if match:
            ranges = []
            for term in _split_top_level(match.group(1)):
                if not term.strip():
                    raise ParseError('empty term in join', text)
                ranges.extend(cls.from_interchange(term).ranges)
            return cls(ranges)
        match = _COMPLEMENT_PATTERN.match(text)
        if match and _JOIN_PATTERN.match(match.group(1)):
            inner = cls.from_interchange(match.group(1))
            return cls([Range(r.start, r.end, ORIENT.MINUS) for r in reversed(inner.ranges)])
        return cls([Range.from_interchange(text)])

    def to_interchange(self):
        if not self.ranges:
            return ''
        if len(self.ranges) == 1:
            return self.ranges[0].to_interchange()
        if all([r.orientation == ORIENT.MINUS for r in self.ranges]):
            terms = [Range(r.start, r.end).to_interchange() for r in reversed(self.ranges)]
            return 'complement(join({}))'.format(','.join(terms))
        return 'join({})'.format(','.join([r.to_interchange() for r in self.ranges]))

    def append(self, range_):
        self.ranges.append(range_)

    def __len__(self):
        return len(self.ranges)

    def __iter__(self):
        return iter(self.ranges)

    def __getitem__(self, index):
        return self.ranges[index]

    @property
    def total_length(self):
        return sum([r.length for r in self.ranges])

    @property
    def bounds(self):
        """
        undirected range covering every range in the span

        Example:
            >>> Span.parse('(20..30) + 0..10').bounds
            Range(0, 30, 0)
        """
        if not self.ranges:
            return Range(0, 0, ORIENT.NONE)
        return Range(min([r.start for r in self.ranges]), max([r.end for r in self.ranges]), ORIENT.NONE)

    @property
    def orientation(self):
        """
        the dominant orientation. Plus unless the minus strand ranges cover strictly more bases
        """
        plus = sum([r.length for r in self.ranges if r.orientation == ORIENT.PLUS])
        minus = sum([r.length for r in self.ranges if r.orientation == ORIENT.MINUS])
        return ORIENT.MINUS if minus > plus else ORIENT.PLUS

    def contains(self, position):
        return any([r.contains(position) for r in self.ranges])

    def overlaps(self, other):
        """
        True if any range in this span overlaps the given range
        """
        return any([r.overlaps(other) for r in self.ranges])

    def extract(self, sequence):
        return ''.join([r.extract(sequence) for r in self.ranges])

    def copy(self):
        return Span(self.ranges)

    def __eq__(self, other):
        if not isinstance(other, Span):
            return NotImplemented
        return self.ranges == other.ranges

    __hash__ = None

    def __repr__(self):
        return '{}([{}])'.format(self.__class__.__name__, ', '.join([repr(r) for r in self.ranges]))

    def __str__(self):
        return ' + '.join([str(r) for r in self.ranges])
