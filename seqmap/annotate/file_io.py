"""
module which holds all functions relating to loading and writing sequence and annotation files
"""
import json

from Bio import SeqIO

from ..interval import Span
from ..util import logger
from .base import Annotation


def load_sequences(*filepaths, file_format='fasta'):
    """
    Args:
        filepaths (list of str): the paths to the sequence files

    Returns:
        :class:`dict` of :class:`str` by :class:`str`: the sequence text by record name
    """
    sequences = {}
    for filename in filepaths:
        logger.info(f'loading: {filename}')
        with open(filename, 'r') as fh:
            for record in SeqIO.parse(fh, file_format):
                if record.id in sequences:
                    raise KeyError('Duplicate sequence name', record.id, filename)
                sequences[record.id] = str(record.seq)
    return sequences


def load_sequence(filepath, name=None, file_format='fasta'):
    """
    load a single sequence from a file. When no name is given the first record is used

    Returns:
        Tuple[str, str]: the record name and the sequence text
    """
    sequences = load_sequences(filepath, file_format=file_format)
    if not sequences:
        raise ValueError('no sequence records found', filepath)
    if name is None:
        name = list(sequences.keys())[0]
    return name, sequences[name]


def parse_annotations_json(data, interchange=False):
    """
    parses a json of annotation records into annotation objects

    Args:
        data (list|dict): list of records or a dict with an ``annotations`` list
        interchange (bool): the spans are in the 1-based interchange notation
    """
    if isinstance(data, dict):
        data = data['annotations']
    annotations = []
    for record in data:
        span = record['span']
        if isinstance(span, str):
            span = Span.from_interchange(span) if interchange else Span.parse(span)
        elif interchange:
            span = Span([r for s in span for r in Span.from_interchange(s).ranges])
        annotations.append(Annotation(
            span,
            caption=record.get('caption', ''),
            type=record.get('type'),
            id=record.get('id'),
            attributes=record.get('attributes', {}),
        ))
    return annotations


def load_annotations(*filepaths, interchange=False):
    """
    loads annotations from one or more json files

    Args:
        filepaths (list of str): the json files to read
        interchange (bool): the spans are in the 1-based interchange notation

    Returns:
        :class:`list` of :class:`Annotation`: the annotations in file order
    """
    annotations = []
    for filename in filepaths:
        logger.info(f'loading: {filename}')
        with open(filename, 'r') as fh:
            data = json.load(fh)
        current = parse_annotations_json(data, interchange=interchange)
        logger.info(f'loaded {len(current)} annotations from {filename}')
        annotations.extend(current)
    return annotations


def write_annotations(filepath, annotations, interchange=False):
    logger.info(f'writing: {filepath}')
    with open(filepath, 'w') as fh:
        json.dump({'annotations': [a.to_dict(interchange=interchange) for a in annotations]}, fh, indent='  ')
