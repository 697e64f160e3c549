"""
layout and drawing of the linear and circular views. The layout modules (:mod:`~seqmap.illustrate.linear`,
:mod:`~seqmap.illustrate.circular` and :mod:`~seqmap.illustrate.layout`) produce plain path descriptors and boxes,
:mod:`~seqmap.illustrate.draw` turns these into svg
"""
