"""
Inferência do tipo de uma coluna a partir dos valores de amostra.
"""
import re

from app.schemas.analysis import FieldType

NUMBER_REGEX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
ISO_DATE_REGEX = re.compile(r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}:\d{2}Z?)?$")


def is_numeric(value: str) -> bool:
    """Verifica se o texto é um literal numérico decimal (espaços nas pontas são ignorados)."""
    return bool(NUMBER_REGEX.match(value.strip()))


def infer_type(values: list[str]) -> FieldType:
    """
    Classifica uma coluna pelos seus valores não vazios.

    Ordem das verificações: número, data ISO, array, texto.
    O formato data/data-hora é decidido pelo primeiro valor.
    """
    values = [value for value in values if value != ""]

    if not values:
        return FieldType.STRING

    if all(is_numeric(value) for value in values):
        return FieldType.NUMBER

    if all(ISO_DATE_REGEX.match(value) for value in values):
        return FieldType.DATETIME if "T" in values[0] else FieldType.DATE

    if values[0].startswith("[") and values[0].endswith("]"):
        return FieldType.ARRAY

    return FieldType.STRING
