"""Techniques runnable from the palette-tool CLI, one module each.

See palette_tool.registry for how they are found.
"""
