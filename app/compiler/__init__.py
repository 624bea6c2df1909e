"""Contract content compiler: template parsing, data merge and assembly."""

from app.compiler.assembler import compile_content_with_data, compile_preview, sort_parts, wrap_section
from app.compiler.payments import render_payments_table
from app.compiler.renderer import expand_each_blocks, render_payments, render_template, substitute
from app.compiler.template import EachBlock, Template, Text, Variable, parse_template

__all__ = [
    "EachBlock",
    "Template",
    "Text",
    "Variable",
    "compile_content_with_data",
    "compile_preview",
    "expand_each_blocks",
    "parse_template",
    "render_payments",
    "render_payments_table",
    "render_template",
    "sort_parts",
    "substitute",
    "wrap_section",
]
