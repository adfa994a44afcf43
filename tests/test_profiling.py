"""Testes do perfil das colunas."""

from app.schemas.analysis import FieldType
from app.services.profiling import ProfilingService, sample_frame
from app.services.randomness import RandomSource

HEADERS = ["id", "name", "status"]
ROWS = [
    ["1", "Alice", "Active"],
    ["2", "Bob", "Active"],
    ["3", "Carol", ""],
    ["4", "Dan", "Active"],
    ["5", "Eve", "Closed"],
]


def test_sample_frame_pads_and_truncates():
    df = sample_frame(3, [["a"], ["b", "c", "d", "e"]])

    assert df.shape == (2, 3)
    assert df.loc[0].tolist() == ["a", "", ""]
    assert df.loc[1].tolist() == ["b", "c", "d"]


class TestProfilingService:
    def test_profile(self, fixed_rng):
        fields = ProfilingService(fixed_rng(0.0)).profile_fields(HEADERS, ROWS)

        assert [f.name for f in fields] == HEADERS
        assert [f.type for f in fields] == [FieldType.NUMBER, FieldType.STRING, FieldType.STRING]
        assert [f.completeness for f in fields] == [70, 70, 70]

    def test_outlier_has_no_standard_mapping(self, fixed_rng):
        id_field, name_field, status_field = ProfilingService(fixed_rng(0.0)).profile_fields(HEADERS, ROWS)

        assert id_field.is_outlier
        assert id_field.standard_mapping is None
        assert id_field.external_model_mapping is None
        assert not name_field.is_outlier
        assert name_field.standard_mapping == "Standard.Name"
        assert status_field.standard_mapping == "Standard.Status"

    def test_values_and_distribution(self, fixed_rng):
        status = ProfilingService(fixed_rng(0.0)).profile_fields(HEADERS, ROWS)[2]

        assert status.sample_values == ["Active", "Active", "Active", "Closed"]
        assert status.unique_values == ["Active", "Closed"]
        assert status.value_distribution == {"Active": 3, "Closed": 1}
        assert status.patterns == [
            "Capitalized first letter",
            "Limited to 2 possible values: Active, Closed",
            'Predominantly "Active" (75% of values)',
        ]

    def test_sample_values_are_limited(self, fixed_rng):
        name = ProfilingService(fixed_rng(0.0)).profile_fields(HEADERS, ROWS)[1]

        assert name.sample_values == ["Alice", "Bob", "Carol", "Dan"]
        assert len(name.unique_values) == 5
        assert name.patterns == ["Capitalized first letter"]

    def test_exactly_one_outlier(self):
        for seed in range(20):
            fields = ProfilingService(RandomSource(seed=seed)).profile_fields(HEADERS, ROWS)

            assert sum(f.is_outlier for f in fields) == 1
            for field in fields:
                assert 70 <= field.completeness < 100
                if field.is_outlier:
                    assert field.standard_mapping is None

    def test_short_and_long_rows(self, fixed_rng):
        rows = [["1", "Alice", "Active", "extra"], ["2"]]

        fields = ProfilingService(fixed_rng(0.0)).profile_fields(HEADERS, rows)

        assert len(fields) == 3
        assert fields[0].unique_values == ["1", "2"]
        assert fields[1].unique_values == ["Alice"]
        assert "extra" not in fields[2].value_distribution

    def test_column_without_values(self, fixed_rng):
        fields = ProfilingService(fixed_rng(0.0)).profile_fields(["a", "empty"], [["1", ""], ["2", ""]])

        empty = fields[1]
        assert empty.type == FieldType.STRING
        assert empty.sample_values == []
        assert empty.value_distribution == {}
        assert empty.patterns == []

    def test_no_headers(self, fixed_rng):
        assert ProfilingService(fixed_rng(0.0)).profile_fields([], []) == []
