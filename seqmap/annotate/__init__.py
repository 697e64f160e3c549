"""
Sub-package Documentation
==========================

Annotations are named, typed spans on a single sequence. This sub-package holds the annotation model,
its per-line fragmentation, the editable multi-range selection and the adjustment of annotation coordinates
as the sequence is edited.

Coordinates
------------

All positions are fenced (0-based, half-open). The 1-based interchange notation is only used when reading
or writing annotation files with ``interchange=True``

+-------------------+-----------------------+----------------------------+
| fenced            | interchange           | meaning                    |
+===================+=======================+============================+
| ``10..20``        | ``11..20``            | bases 11 to 20, plus       |
+-------------------+-----------------------+----------------------------+
| ``(10..20)``      | ``complement(11..20)``| bases 11 to 20, minus      |
+-------------------+-----------------------+----------------------------+
| ``7``             | ``7^8``               | site between bases 7 and 8 |
+-------------------+-----------------------+----------------------------+
"""
