"""
File conversion for dev-swiss.

PDF text is extracted with pypdf and written out as DOCX paragraphs with
python-docx.
"""

from .converter import ConvertConfig, ConvertResult, Format, convert

__all__ = ['ConvertConfig', 'ConvertResult', 'Format', 'convert']
