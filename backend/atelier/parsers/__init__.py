"""
Statement parsers package.
"""

from atelier.parsers.base import BaseParser
from atelier.parsers.xml_parser import CartolaXMLParser, parse_amount, parse_bank_statement_xml

__all__ = ['BaseParser', 'CartolaXMLParser', 'parse_amount', 'parse_bank_statement_xml']
