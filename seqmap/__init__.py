"""
annotated DNA sequence maps: interval notation, edit-aware annotation tracking and the layout of linear and
circular (plasmid) views
"""
__version__ = '0.1.0'
