"""
Build tooling for "The Blue Print" manuscript.

Turns the ordered Markdown chapters into a PDF through an external
Pandoc + XeLaTeX toolchain and optionally merges covers and a table of
contents into the result.
"""

__version__ = "0.1.0"
