"""
Parser for cartola XML bank statements.

Expected shape::

    <cartola>
      <empresa_nombre/> <cuenta_numero/> <moneda/>
      <fecha_desde/> <fecha_hasta/>
      <movimientos>
        <movimiento>
          <fecha_movimiento/> <descripcion/>
          <abono/>          credit, optional
          <giro/>           debit, optional, already negative
          <saldo_diario/>
        </movimiento>
      </movimientos>
    </cartola>
"""

import logging
import math
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Union

from atelier.errors import StatementParseError
from atelier.parsers.base import BaseParser
from atelier.schemas.statement import BankStatementData, StatementPeriod, TransactionData

logger = logging.getLogger(__name__)


def parse_amount(text: Optional[str]) -> float:
    """
    Coerce a numeric leaf to float.

    Absent, empty, non-numeric, NaN or infinite content becomes 0.0. This
    never raises: the source format is loose and a bad cell must not sink
    the whole statement.
    """
    if text is None:
        return 0.0
    text = text.strip()
    if not text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def _text(node: ET.Element, tag: str) -> str:
    """Trimmed text of the first descendant named `tag`, or ""."""
    element = node.find(f".//{tag}")
    if element is None:
        return ""
    return "".join(element.itertext()).strip()


class CartolaXMLParser(BaseParser):
    """Parser for cartola XML exports"""

    extensions = ('.xml',)

    def can_parse(self, file_name: str) -> bool:
        return Path(file_name).suffix.lower() in self.extensions

    def parse(
        self,
        content: Union[str, bytes],
        file_name: str
    ) -> BankStatementData:
        """Parse cartola XML and return the statement"""
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            raise StatementParseError(f"Malformed XML in {file_name}: {e}", file_name) from e

        cartola = root if root.tag == 'cartola' else root.find('.//cartola')
        if cartola is None:
            raise StatementParseError(f"<cartola> element not found in {file_name}", file_name)

        containers = list(cartola.iter('movimientos'))
        if not containers:
            raise StatementParseError(f"<movimientos> element not found in {file_name}", file_name)

        from_date = _text(cartola, 'fecha_desde')
        if not from_date:
            raise StatementParseError(f"<fecha_desde> missing or empty in {file_name}", file_name)

        transactions: List[TransactionData] = []
        for container in containers:
            for movement in container.findall('movimiento'):
                index = len(transactions)
                credit = parse_amount(_text(movement, 'abono'))
                debit = parse_amount(_text(movement, 'giro'))
                transactions.append(TransactionData(
                    id=f"{file_name}-{index}",
                    date=_text(movement, 'fecha_movimiento'),
                    description=_text(movement, 'descripcion'),
                    amount=credit + debit,
                    balance=parse_amount(_text(movement, 'saldo_diario')),
                ))

        statement = BankStatementData(
            id=from_date,
            file_name=file_name,
            company_name=_text(cartola, 'empresa_nombre'),
            account_number=_text(cartola, 'cuenta_numero'),
            currency=_text(cartola, 'moneda'),
            period=StatementPeriod(from_=from_date, to=_text(cartola, 'fecha_hasta')),
            transactions=tuple(transactions),
        )
        logger.debug("Parsed %s: %d movements", file_name, len(transactions))
        return statement


def parse_bank_statement_xml(
    content: Union[str, bytes],
    file_name: str
) -> Optional[BankStatementData]:
    """
    Parse a cartola, returning None when nothing usable was extracted.

    None means failure, never an empty statement: a document without a
    <movimientos> container yields None, while an empty container yields a
    statement with no transactions.
    """
    try:
        return CartolaXMLParser().parse(content, file_name)
    except StatementParseError as e:
        logger.error(f"Failed to parse statement: {e}")
        return None
