"""
Detecção de relacionamentos entre pares de campos.

Cada detector examina um par ordenado (origem, destino) e retorna
no máximo uma correlação. Os resultados de todos os pares são
ordenados pela força e apenas os mais fortes são mantidos.
"""
import logging
from collections import Counter

from app.config import CATEGORICAL_MAX_UNIQUE, MAX_CORRELATIONS
from app.schemas.analysis import (
    Correlation,
    CorrelationExample,
    CorrelationType,
    Field,
    FieldType,
)
from app.services.patterns import percentage
from app.services.profiling import sample_frame
from app.services.randomness import RandomSource
from app.services.type_inference import is_numeric

logger = logging.getLogger(__name__)

MATCH_THRESHOLD = 0.7
MIN_VALUES = 3
MAX_EXAMPLES = 2


class CorrelationDetector:
    """
    Interface dos detectores de correlação.

    applies() filtra os pares elegíveis pelo perfil dos campos;
    detect() recebe os valores brutos de cada linha das duas colunas.
    """

    def __init__(self, rng: RandomSource):
        self.rng = rng

    def applies(self, source: Field, target: Field) -> bool:
        return True

    def detect(
        self,
        source: Field,
        target: Field,
        source_values: list[str],
        target_values: list[str]
    ) -> Correlation | None:
        raise NotImplementedError


class ConditionalDetector(CorrelationDetector):
    """Valores do destino determinados pelas categorias da origem."""

    def applies(self, source: Field, target: Field) -> bool:
        return len(source.unique_values) <= CATEGORICAL_MAX_UNIQUE

    def detect(self, source, target, source_values, target_values):
        unique_sources = list(dict.fromkeys(v for v in source_values if v != ""))

        if not 2 <= len(unique_sources) <= CATEGORICAL_MAX_UNIQUE:
            return None

        rules = []
        for source_value in unique_sources:
            matching = [t for s, t in zip(source_values, target_values) if s == source_value]

            if len(matching) < 2:
                continue

            counts = Counter(matching)
            if len(counts) == 1:
                rules.append((source_value, matching[0]))
            elif len(counts) < len(matching) / 2:
                common_value, common_count = counts.most_common(1)[0]
                share = percentage(common_count, len(matching))
                if share > MATCH_THRESHOLD * 100:
                    rules.append((source_value, f"{common_value} ({share}% of the time)"))

        if not rules:
            return None

        if len(rules) == len(unique_sources):
            rule = f"{target.name} value is determined by {source.name}"
        elif len(rules) > 1:
            rule = f"{target.name} shows strong patterns based on {source.name} values"
        else:
            value, pattern = rules[0]
            rule = f'When {source.name} is "{value}", {target.name} is typically "{pattern}"'

        return Correlation(
            source_field=source.name,
            target_field=target.name,
            correlation_type=CorrelationType.CONDITIONAL,
            strength=0.7 + self.rng.random() * 0.3,
            description=f"{target.name} values show patterns based on {source.name} values",
            rule=rule,
            examples=[
                CorrelationExample(
                    condition=f'{source.name} = "{value}"',
                    result=f'{target.name} = "{pattern}"'
                )
                for value, pattern in rules
            ]
        )


class TemporalDetector(CorrelationDetector):
    """
    Tendência de um valor numérico ao longo de uma data.

    A tendência é sorteada; nenhum teste estatístico é aplicado.
    """

    fire_probability = 0.3

    def applies(self, source: Field, target: Field) -> bool:
        return source.type in (FieldType.DATE, FieldType.DATETIME)

    def detect(self, source, target, source_values, target_values):
        if not all(v == "" or is_numeric(v) for v in target_values):
            return None

        if not self.rng.chance(self.fire_probability):
            return None

        increasing = self.rng.chance(0.5)
        trend = "increasing" if increasing else "decreasing"
        lower, higher = f"Lower {target.name}", f"Higher {target.name}"

        return Correlation(
            source_field=source.name,
            target_field=target.name,
            correlation_type=CorrelationType.TEMPORAL,
            strength=0.6 + self.rng.random() * 0.3,
            description=f"{target.name} shows a {trend} trend over time",
            rule=f"{target.name} tends to {'increase' if increasing else 'decrease'} over time",
            examples=[
                CorrelationExample(
                    condition=f"Earlier {source.name}",
                    result=lower if increasing else higher
                ),
                CorrelationExample(
                    condition=f"Recent {source.name}",
                    result=higher if increasing else lower
                ),
            ]
        )


class NumericalDetector(CorrelationDetector):
    """
    Correlação entre dois campos numéricos.

    Sorteada a partir de pelo menos 3 pares válidos; o fator da
    relação proporcional também é sorteado.
    """

    fire_probability = 0.3
    proportional_probability = 0.3

    def applies(self, source: Field, target: Field) -> bool:
        return source.type == FieldType.NUMBER and target.type == FieldType.NUMBER

    def detect(self, source, target, source_values, target_values):
        pairs = [
            (s, t) for s, t in zip(source_values, target_values)
            if s != "" and t != "" and is_numeric(s) and is_numeric(t)
        ]

        if len(pairs) < MIN_VALUES:
            return None

        if not self.rng.chance(self.fire_probability):
            return None

        positive = self.rng.chance(0.5)
        direction = "positive" if positive else "negative"

        if self.rng.chance(self.proportional_probability):
            factor = f"{self.rng.uniform(1, 6):.2f}"
            if positive:
                rule = f"{target.name} ≈ {factor} × {source.name}"
            else:
                rule = f"{target.name} ≈ {factor} × (1/{source.name})"
        else:
            rule = f"{target.name} tends to {'increase' if positive else 'decrease'} as {source.name} increases"

        lower, higher = f"Lower {target.name}", f"Higher {target.name}"

        return Correlation(
            source_field=source.name,
            target_field=target.name,
            correlation_type=CorrelationType.NUMERICAL,
            strength=0.6 + self.rng.random() * 0.3,
            description=f"{target.name} shows a {direction} correlation with {source.name}",
            rule=rule,
            examples=[
                CorrelationExample(
                    condition=f"Higher {source.name}",
                    result=higher if positive else lower
                ),
                CorrelationExample(
                    condition=f"Lower {source.name}",
                    result=lower if positive else higher
                ),
            ]
        )


def _aligned_values(source_values: list[str], target_values: list[str]) -> list[tuple[str, str]] | None:
    """
    Pares (origem, destino) das linhas em que ambos estão preenchidos.

    Retorna None quando algum dos lados tem menos de 3 valores.
    """
    if sum(1 for v in source_values if v) < MIN_VALUES:
        return None
    if sum(1 for v in target_values if v) < MIN_VALUES:
        return None

    pairs = [(s, t) for s, t in zip(source_values, target_values) if s and t]
    return pairs or None


class FirstLetterDetector(CorrelationDetector):
    """Primeira letra do destino contida no valor da origem."""

    def detect(self, source, target, source_values, target_values):
        pairs = _aligned_values(source_values, target_values)
        if pairs is None:
            return None

        matches = 0
        examples = []
        for source_value, target_value in pairs:
            if target_value[0] in source_value:
                matches += 1
                if len(examples) < MAX_EXAMPLES:
                    examples.append(CorrelationExample(
                        condition=f'{source.name} = "{source_value}"',
                        result=f'{target.name} starts with "{target_value[0]}" (found in {source.name})'
                    ))

        match_rate = matches / len(pairs)
        if match_rate <= MATCH_THRESHOLD:
            return None

        return Correlation(
            source_field=source.name,
            target_field=target.name,
            correlation_type=CorrelationType.CONDITIONAL,
            strength=0.6 + match_rate * 0.3,
            description=f"First letter of {target.name} is often found within {source.name}",
            rule=f"{target.name} typically starts with a letter contained in {source.name}",
            examples=examples
        )


class SubstringDetector(CorrelationDetector):
    """Valor de um campo contido no valor do outro (sem distinção de maiúsculas)."""

    min_length = 3

    def detect(self, source, target, source_values, target_values):
        pairs = _aligned_values(source_values, target_values)
        if pairs is None:
            return None

        source_in_target = 0
        target_in_source = 0
        examples = []

        for source_value, target_value in pairs:
            source_lower = source_value.lower()
            target_lower = target_value.lower()

            if len(source_lower) >= self.min_length and source_lower in target_lower:
                source_in_target += 1
                if len(examples) < MAX_EXAMPLES:
                    examples.append(CorrelationExample(
                        condition=f'{source.name} = "{source_value}"',
                        result=f'{target.name} contains "{source_value}"'
                    ))

            if len(target_lower) >= self.min_length and target_lower in source_lower:
                target_in_source += 1
                if len(examples) < MAX_EXAMPLES:
                    examples.append(CorrelationExample(
                        condition=f'{source.name} contains "{target_value}"',
                        result=f'{target.name} = "{target_value}"'
                    ))

        source_in_target_rate = source_in_target / len(pairs)
        target_in_source_rate = target_in_source / len(pairs)

        if source_in_target_rate > MATCH_THRESHOLD:
            return Correlation(
                source_field=source.name,
                target_field=target.name,
                correlation_type=CorrelationType.CONDITIONAL,
                strength=0.6 + source_in_target_rate * 0.3,
                description=f"{source.name} is often contained within {target.name}",
                rule=f"{target.name} typically contains the full value of {source.name}",
                examples=examples
            )

        if target_in_source_rate > MATCH_THRESHOLD:
            return Correlation(
                source_field=source.name,
                target_field=target.name,
                correlation_type=CorrelationType.CONDITIONAL,
                strength=0.6 + target_in_source_rate * 0.3,
                description=f"{target.name} is often contained within {source.name}",
                rule=f"{source.name} typically contains the full value of {target.name}",
                examples=examples
            )

        return None


def default_detectors(rng: RandomSource) -> list[CorrelationDetector]:
    return [
        ConditionalDetector(rng),
        TemporalDetector(rng),
        NumericalDetector(rng),
        FirstLetterDetector(rng),
        SubstringDetector(rng),
    ]


class CorrelationService:
    """
    Executa os detectores sobre todos os pares ordenados de campos.
    """

    def __init__(
        self,
        rng: RandomSource,
        detectors: list[CorrelationDetector] | None = None,
        limit: int = MAX_CORRELATIONS
    ):
        self.detectors = detectors if detectors is not None else default_detectors(rng)
        self.limit = limit

    def analyze(self, fields: list[Field], sample_rows: list[list[str]]) -> list[Correlation]:
        """
        Detecta correlações entre os campos.

        Parâmetros:
            fields: Campos já analisados, na ordem das colunas.
            sample_rows: Linhas de amostra.

        Retorna:
            As correlações mais fortes, em ordem decrescente de força.
        """
        df = sample_frame(len(fields), sample_rows)
        columns = [df[index].tolist() for index in range(len(fields))]

        found = []
        for i, source in enumerate(fields):
            for j, target in enumerate(fields):
                if i == j:
                    continue

                for detector in self.detectors:
                    if not detector.applies(source, target):
                        continue
                    correlation = detector.detect(source, target, columns[i], columns[j])
                    if correlation is not None:
                        found.append(correlation)

        found.sort(key=lambda c: c.strength, reverse=True)

        logger.debug("%d correlações encontradas, mantendo %d", len(found), min(len(found), self.limit))
        return found[:self.limit]
