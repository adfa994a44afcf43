"""Fixtures compartilhadas pelos testes."""

from collections.abc import Generator
from itertools import cycle

import pytest
from fastapi.testclient import TestClient

from app.schemas.analysis import (
    AnalysisResult,
    Correlation,
    CorrelationType,
    Field,
    FieldType,
)
from app.services.randomness import RandomSource
from app.store import InMemoryAnalysisStore
from main import create_app


class FixedRandom(RandomSource):
    """random() sempre retorna o mesmo valor."""

    def __init__(self, value: float):
        super().__init__(seed=0)
        self.value = value

    def random(self) -> float:
        return self.value


class SequenceRandom(RandomSource):
    """random() percorre a lista de valores em ciclo."""

    def __init__(self, values: list[float]):
        super().__init__(seed=0)
        self._values = cycle(values)

    def random(self) -> float:
        return next(self._values)


@pytest.fixture
def fixed_rng():
    """Fábrica de fontes de aleatoriedade constantes."""
    return FixedRandom


@pytest.fixture
def sequence_rng():
    """Fábrica de fontes de aleatoriedade com sequência definida."""
    return SequenceRandom


@pytest.fixture
def store() -> InMemoryAnalysisStore:
    return InMemoryAnalysisStore()


@pytest.fixture
def client(store: InMemoryAnalysisStore) -> Generator[TestClient, None, None]:
    """Cliente HTTP com armazenamento isolado e aleatoriedade semeada."""
    app = create_app(store=store, rng=RandomSource(seed=7))
    with TestClient(app) as test_client:
        yield test_client


def make_field(
    name: str,
    field_type: FieldType = FieldType.STRING,
    unique_values: list[str] | None = None,
    **kwargs
) -> Field:
    return Field(
        name=name,
        type=field_type,
        completeness=80,
        unique_values=unique_values or [],
        **kwargs
    )


def make_result(file_id: str = "file_1_abc", fields: list[Field] | None = None) -> AnalysisResult:
    fields = fields if fields is not None else [make_field("id", FieldType.NUMBER), make_field("name")]
    return AnalysisResult(
        file_id=file_id,
        file_name="people.csv",
        progress=15,
        completeness=25,
        fields=fields,
        correlations=[
            Correlation(
                source_field="id",
                target_field="name",
                correlation_type=CorrelationType.CONDITIONAL,
                strength=0.75,
                description="name values show patterns based on id values",
                rule="name value is determined by id",
            )
        ],
        insights=["Data appears to follow a consistent structure"],
    )


@pytest.fixture
def result_factory():
    return make_result


@pytest.fixture
def field_factory():
    return make_field
