"""
module responsible for small utility functions and constants used throughout the seqmap package
"""
import os

from Bio.Seq import reverse_complement as _bio_reverse_complement


PROGNAME = 'seqmap'
ENV_PREFIX = 'SEQMAP'


def cast_boolean(input_value):
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class SeqMapNamespace:
    """
    Namespace to hold a controlled vocabulary or a set of documented settings. Members flagged as
    environment overwritable are read from ``SEQMAP_<NAME>`` when that variable is set

    Example:
        >>> nspace = SeqMapNamespace(PLUS=1, MINUS=-1)
        >>> nspace.PLUS
        1
        >>> nspace.enforce(-1)
        -1
    """

    def __init__(self, **kwargs):
        object.__setattr__(self, '_defns', {})
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_env_overwritable', set())

        for attr, value in kwargs.items():
            self.add(attr, value)

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__, ', '.join(sorted(['{}={}'.format(k, repr(v)) for k, v in self.items()])))

    def get_env_name(self, attr):
        """
        Example:
            >>> SeqMapNamespace(a=1).get_env_name('a')
            'SEQMAP_A'
        """
        return '{}_{}'.format(ENV_PREFIX, attr).upper()

    def is_env_overwritable(self, attr):
        return attr in self._env_overwritable

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError as err:
            members = object.__getattribute__(self, '_members')
            if attr not in members:
                raise err
            if self.is_env_overwritable(attr):
                env = os.environ.get(self.get_env_name(attr))
                if env is not None:
                    return self._types[attr](env.strip())
            return members[attr]

    def __getitem__(self, key):
        return getattr(self, key)

    def __setattr__(self, attr, val):
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        object.__getattribute__(self, '_members')[attr] = val

    def __contains__(self, attr):
        return attr in self._members

    def keys(self):
        return list(self._members)

    def values(self):
        return [self[k] for k in self._members]

    def items(self):
        """
        Example:
            >>> SeqMapNamespace(thing=1, otherthing=2).items()
            [('thing', 1), ('otherthing', 2)]
        """
        return [(k, self[k]) for k in self._members]

    def get(self, key, *pos):
        """
        get an attribute, return a default (if given) if the attribute does not exist

        Example:
            >>> SeqMapNamespace(thing=1).get('other', 2)
            2
        """
        if len(pos) > 1:
            raise TypeError('too many arguments. get takes a single \'default\' value argument')
        try:
            return self[key]
        except AttributeError as err:
            if pos:
                return pos[0]
            raise err

    def enforce(self, value):
        """
        checks that the current namespace has a given value

        Raises:
            KeyError: the value did not exist
        """
        if value not in self.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), self.values())
        return value

    def define(self, attr, *pos):
        """
        Get the definition of a given attribute or return a default (when given) if it has none
        """
        if len(pos) > 1:
            raise TypeError('too many arguments. define takes a single \'default\' value argument')
        try:
            return self._defns[attr]
        except KeyError as err:
            if pos:
                return pos[0]
            raise err

    def add(self, attr, value, defn=None, cast_type=None, env_overwritable=False):
        """
        Add an attribute to the name space

        Args:
            attr (str): name of the attribute being added
            value: the value of the attribute
            defn (str): the definition, used in the settings documentation
            cast_type (callable): the function used to cast the environment variable, defaults to the type of the value
            env_overwritable (bool): True if this attribute is overridden by its environment variable
        """
        if attr in self._members:
            raise AttributeError('Cannot respecify existing attribute', attr, self._members[attr])
        cast_type = cast_type or type(value)
        self._types[attr] = cast_boolean if cast_type == bool else cast_type
        if defn:
            self._defns[attr] = defn
        if env_overwritable:
            self._env_overwritable.add(attr)
        setattr(self, attr, value)


ORIENT = SeqMapNamespace(MINUS=-1, NONE=0, PLUS=1)
"""
holds controlled vocabulary for the strand orientation of a range

- ``MINUS``: the reverse (complement) strand
- ``NONE``: undirected
- ``PLUS``: the forward strand
"""

EDIT_KIND = SeqMapNamespace(INSERT='insert', REPLACE='replace')
"""
the kinds of local sequence edits that annotation coordinates are adjusted for
"""

FEATURE_TYPE = SeqMapNamespace(
    GENE='gene',
    CDS='CDS',
    PROMOTER='promoter',
    TERMINATOR='terminator',
    MISC='misc_feature',
    REP_ORIGIN='rep_origin',
    PRIMER_BIND='primer_bind',
    PROTEIN_BIND='protein_bind',
    REGULATORY='regulatory',
)
"""
common annotation (feature) types
"""

ANNOTATION_COLORS = {
    FEATURE_TYPE.GENE: '#4CAF50',
    FEATURE_TYPE.CDS: '#2196F3',
    FEATURE_TYPE.PROMOTER: '#FF9800',
    FEATURE_TYPE.TERMINATOR: '#F44336',
    FEATURE_TYPE.MISC: '#9E9E9E',
    FEATURE_TYPE.REP_ORIGIN: '#9C27B0',
    FEATURE_TYPE.PRIMER_BIND: '#00BCD4',
    FEATURE_TYPE.PROTEIN_BIND: '#795548',
    FEATURE_TYPE.REGULATORY: '#FFEB3B',
}
DEFAULT_ANNOTATION_COLOR = '#607D8B'


def annotation_color(feature_type):
    """
    Example:
        >>> annotation_color('gene')
        '#4CAF50'
        >>> annotation_color('unknown_type')
        '#607D8B'
    """
    return ANNOTATION_COLORS.get(feature_type, DEFAULT_ANNOTATION_COLOR)


def is_cds(feature_type):
    return str(feature_type).upper() == FEATURE_TYPE.CDS


def reverse_complement(s):
    """
    wrapper for the Bio.Seq reverse_complement method. Preserves case and IUPAC ambiguity codes

    Args:
        s (str): the input DNA sequence

    Returns:
        str: the reverse complement of the input sequence

    Example:
        >>> reverse_complement('ATCGAA')
        'TTCGAT'
    """
    return str(_bio_reverse_complement(str(s)))
