"""
donorbrief.report
=================
Text and JSON renderings of a donor brief.
"""

from ._json import brief_to_dict, brief_to_json
from ._text import format_money, format_pct, render_text

__all__ = ["brief_to_dict", "brief_to_json", "format_money", "format_pct", "render_text"]
