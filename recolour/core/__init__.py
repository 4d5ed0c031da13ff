"""recolour.core — Foundation layer.

Contains the types, palettes, fit planner, resample orchestration, quantizer,
codec and report builder. This module has NO dependencies on
recolour.resamplers except through recolour.registry lookups at call time.
Only stdlib, numpy, and PIL are allowed here.
"""
