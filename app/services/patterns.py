"""
Geração de padrões descritivos por campo e de insights do arquivo.
"""
import math
import re

from app.config import CATEGORICAL_MAX_UNIQUE, EXTERNAL_MODEL_NAME
from app.schemas.analysis import Correlation, Field, FieldType

ID_FORMAT_REGEX = re.compile(r"^[A-Z]+-\d+$")
CAPITALIZED_REGEX = re.compile(r"^[A-Z][a-z]+$")

DOMINANT_SHARE = 70
STRONG_CORRELATION = 0.8


def percentage(part: int, total: int) -> int:
    """Percentual arredondado para o inteiro mais próximo (0.5 arredonda para cima)."""
    if total == 0:
        return 0
    return math.floor(part / total * 100 + 0.5)


def field_patterns(
    header: str,
    field_type: FieldType,
    sample_values: list[str],
    unique_values: list[str],
    value_distribution: dict[str, int]
) -> list[str]:
    """
    Descreve os padrões observados nos valores de uma coluna.

    Parâmetros:
        header: Nome da coluna.
        field_type: Tipo inferido.
        sample_values: Até 4 valores não vazios.
        unique_values: Valores distintos na ordem em que aparecem.
        value_distribution: Contagem de cada valor nas linhas de amostra.

    Retorna:
        Lista de descrições, vazia quando não há amostras.
    """
    if not sample_values:
        return []

    patterns = []
    first_value = sample_values[0]

    if field_type == FieldType.NUMBER:
        if any("." in value for value in sample_values):
            patterns.append("Numeric values with decimal places")
        else:
            patterns.append("Integer values")
    elif field_type == FieldType.DATE:
        patterns.append("ISO-8601 date format (YYYY-MM-DD)")
    elif field_type == FieldType.DATETIME:
        patterns.append("ISO-8601 datetime format")
    elif field_type == FieldType.STRING:
        if "@" in first_value:
            patterns.append("Valid email format")
        elif "id" in header.lower() and ID_FORMAT_REGEX.match(first_value):
            prefix = first_value.split("-")[0]
            patterns.append(f"Format: {prefix}-XXXXX where X is a digit")
        elif CAPITALIZED_REGEX.match(first_value):
            patterns.append("Capitalized first letter")
    elif field_type == FieldType.ARRAY:
        patterns.append("JSON array format")

    if 0 < len(unique_values) <= CATEGORICAL_MAX_UNIQUE:
        patterns.append(
            f"Limited to {len(unique_values)} possible values: {', '.join(unique_values)}"
        )

        total = sum(value_distribution.values())
        # Em caso de empate vence o valor que apareceu primeiro
        dominant_value, dominant_count = max(value_distribution.items(), key=lambda item: item[1])
        share = percentage(dominant_count, total)

        if share > DOMINANT_SHARE:
            patterns.append(f'Predominantly "{dominant_value}" ({share}% of values)')

    return patterns


def generate_insights(fields: list[Field], correlations: list[Correlation]) -> list[str]:
    """
    Gera as frases de insight do arquivo.

    A ordem das frases é fixa, definida pela sequência de verificações.
    """
    insights = ["Data appears to follow a consistent structure"]

    type_count: dict[FieldType, int] = {}
    for field in fields:
        type_count[field.type] = type_count.get(field.type, 0) + 1

    date_count = type_count.get(FieldType.DATE, 0) + type_count.get(FieldType.DATETIME, 0)
    if date_count:
        insights.append(f"{date_count} date fields detected with ISO-8601 format")

    if type_count.get(FieldType.NUMBER):
        insights.append("Numeric fields contain potential outliers that require attention")

    names = [field.name.lower() for field in fields]

    if any("customer" in name and "id" in name for name in names):
        insights.append("Customer ID field follows standard format pattern")

    if any("amount" in name for name in names):
        insights.append("Transaction amounts follow expected distribution")

    outlier_count = sum(1 for field in fields if field.is_outlier)
    if outlier_count > 0:
        insights.append(f"Detected {outlier_count} field(s) with potential data quality issues")

    unmapped_count = sum(1 for field in fields if field.standard_mapping is None)
    if unmapped_count > 0:
        insights.append(f"{unmapped_count} field(s) require manual mapping to standards")

    external_count = sum(1 for field in fields if field.external_model_mapping is not None)
    if external_count > 0:
        insights.append(f"{external_count} field(s) mapped to {EXTERNAL_MODEL_NAME} with high confidence")

    if correlations:
        insights.append(f"Discovered {len(correlations)} significant relationships between fields")

        strong = [c for c in correlations if c.strength > STRONG_CORRELATION]
        if strong:
            insights.append(f"Strong relationship detected: {strong[0].rule}")

        if any("First letter" in c.description or "starts with" in c.description for c in correlations):
            insights.append("Detected patterns where field values are derived from first letters of other fields")

        if any("contained within" in c.description for c in correlations):
            insights.append("Found fields that contain values from other fields as substrings")

    return insights
