"""
Serviço de perfil das colunas de um CSV a partir das linhas de amostra.
"""
import pandas as pd

from app.config import SAMPLE_VALUE_LIMIT
from app.schemas.analysis import Field
from app.services.mapping import ExternalModelMapper, StandardMapper
from app.services.patterns import field_patterns
from app.services.randomness import RandomSource
from app.services.type_inference import infer_type

MIN_COMPLETENESS = 70
COMPLETENESS_SPREAD = 30


def sample_frame(width: int, sample_rows: list[list[str]]) -> pd.DataFrame:
    """
    Monta um DataFrame com as linhas de amostra, indexado pela posição da coluna.

    Linhas curtas são completadas com "" e valores excedentes são descartados.
    """
    padded = [(list(row) + [""] * width)[:width] for row in sample_rows]
    return pd.DataFrame(padded, columns=range(width), dtype=object)


class ProfilingService:
    """
    Gera o perfil de cada coluna: tipo, mapeamentos, padrões e distribuição.

    Uma coluna por arquivo é sorteada como outlier.
    """

    def __init__(
        self,
        rng: RandomSource,
        standard_mapper: StandardMapper | None = None,
        external_mapper: ExternalModelMapper | None = None
    ):
        self.rng = rng
        self.standard_mapper = standard_mapper or StandardMapper(rng)
        self.external_mapper = external_mapper or ExternalModelMapper(rng)

    def profile_fields(self, headers: list[str], sample_rows: list[list[str]]) -> list[Field]:
        """
        Analisa as colunas do arquivo.

        Parâmetros:
            headers: Cabeçalhos na ordem do CSV.
            sample_rows: Linhas de amostra já separadas em valores.

        Retorna:
            Lista de Field na mesma ordem dos cabeçalhos.
        """
        if not headers:
            return []

        df = sample_frame(len(headers), sample_rows)
        outlier_index = self.rng.randint(len(headers))

        fields = []
        for index, header in enumerate(headers):
            column = df[index]
            values = column[column != ""]

            field_type = infer_type(values.tolist())
            sample_values = [str(v) for v in values.head(SAMPLE_VALUE_LIMIT).tolist()]
            unique_values = [str(v) for v in values.unique().tolist()]

            # reindex mantém a ordem de aparição dos valores
            counts = values.value_counts().reindex(unique_values)
            value_distribution = {str(value): int(count) for value, count in counts.items()}

            is_outlier = index == outlier_index
            completeness = MIN_COMPLETENESS + self.rng.randint(COMPLETENESS_SPREAD)

            # Campo outlier nunca recebe mapeamento padrão
            standard_mapping = None if is_outlier else self.standard_mapper.map(header, field_type)
            external_mapping = self.external_mapper.map(header, field_type, is_outlier)

            fields.append(Field(
                name=header,
                type=field_type,
                completeness=completeness,
                is_outlier=is_outlier,
                standard_mapping=standard_mapping,
                external_model_mapping=external_mapping,
                patterns=field_patterns(
                    header, field_type, sample_values, unique_values, value_distribution
                ),
                sample_values=sample_values,
                unique_values=unique_values,
                value_distribution=value_distribution
            ))

        return fields
