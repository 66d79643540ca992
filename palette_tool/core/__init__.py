"""palette_tool.core — Foundation layer.

Contains the quantizer, type definitions, image sampler, config and report builder.
This module has NO dependencies on palette_tool.techniques or palette_tool.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
