"""Testes dos padrões por campo e dos insights."""

from app.schemas.analysis import (
    Correlation,
    CorrelationType,
    ExternalModelMapping,
    FieldType,
)
from app.services.patterns import field_patterns, generate_insights, percentage


class TestFieldPatterns:
    def test_integer_values(self):
        patterns = field_patterns(
            "qty", FieldType.NUMBER, ["1", "2", "3"], ["1", "2", "3"], {"1": 1, "2": 1, "3": 1}
        )
        assert patterns == ["Integer values", "Limited to 3 possible values: 1, 2, 3"]

    def test_decimal_values(self):
        patterns = field_patterns("price", FieldType.NUMBER, ["1.5", "2"], [], {})
        assert patterns == ["Numeric values with decimal places"]

    def test_date_and_datetime(self):
        assert field_patterns("d", FieldType.DATE, ["2024-01-01"], [], {}) == [
            "ISO-8601 date format (YYYY-MM-DD)"
        ]
        assert field_patterns("d", FieldType.DATETIME, ["2024-01-01T00:00:00Z"], [], {}) == [
            "ISO-8601 datetime format"
        ]

    def test_email(self):
        assert field_patterns("contact", FieldType.STRING, ["a@b.com"], [], {}) == ["Valid email format"]

    def test_id_format(self):
        patterns = field_patterns("order_id", FieldType.STRING, ["ORD-123"], [], {})
        assert patterns == ["Format: ORD-XXXXX where X is a digit"]

    def test_id_format_requires_id_header(self):
        assert field_patterns("code", FieldType.STRING, ["ORD-123"], [], {}) == []

    def test_array(self):
        assert field_patterns("tags", FieldType.ARRAY, ["[1]"], [], {}) == ["JSON array format"]

    def test_dominant_value(self):
        patterns = field_patterns(
            "status",
            FieldType.STRING,
            ["Active", "Active", "Active", "Active"],
            ["Active", "Closed"],
            {"Active": 4, "Closed": 1},
        )

        assert patterns == [
            "Capitalized first letter",
            "Limited to 2 possible values: Active, Closed",
            'Predominantly "Active" (80% of values)',
        ]

    def test_no_dominant_value_at_seventy_percent(self):
        patterns = field_patterns(
            "flag", FieldType.STRING, ["y"], ["y", "n"], {"y": 7, "n": 3}
        )
        assert patterns == ["Limited to 2 possible values: y, n"]

    def test_many_unique_values(self):
        values = ["a", "b", "c", "d", "e", "f"]
        patterns = field_patterns("code", FieldType.STRING, values[:4], values, {v: 1 for v in values})
        assert patterns == []

    def test_no_samples(self):
        assert field_patterns("empty", FieldType.STRING, [], [], {}) == []


def test_percentage_rounds_half_up():
    assert percentage(1, 8) == 13
    assert percentage(3, 4) == 75
    assert percentage(0, 0) == 0


def _correlation(strength, description="x", rule="r"):
    return Correlation(
        source_field="a",
        target_field="b",
        correlation_type=CorrelationType.CONDITIONAL,
        strength=strength,
        description=description,
        rule=rule,
    )


class TestGenerateInsights:
    def test_minimal(self, field_factory):
        fields = [field_factory("notes", standard_mapping="Standard.Notes")]

        assert generate_insights(fields, []) == ["Data appears to follow a consistent structure"]

    def test_fixed_order(self, field_factory):
        fields = [
            field_factory("customer_id", standard_mapping="Standard.CustomerID"),
            field_factory("created", FieldType.DATE, standard_mapping="Standard.Timestamp.Date"),
            field_factory("updated", FieldType.DATETIME, standard_mapping="Standard.Timestamp.Updated"),
            field_factory(
                "amount",
                FieldType.NUMBER,
                is_outlier=True,
                external_model_mapping=ExternalModelMapping(field="Flume.Transaction.Amount", confidence=60),
            ),
        ]
        correlations = [
            _correlation(0.85, rule="amount tends to increase over time"),
            _correlation(0.75, description="First letter of b is often found within a"),
            _correlation(0.7, description="a is often contained within b"),
        ]

        assert generate_insights(fields, correlations) == [
            "Data appears to follow a consistent structure",
            "2 date fields detected with ISO-8601 format",
            "Numeric fields contain potential outliers that require attention",
            "Customer ID field follows standard format pattern",
            "Transaction amounts follow expected distribution",
            "Detected 1 field(s) with potential data quality issues",
            "1 field(s) require manual mapping to standards",
            "1 field(s) mapped to Flume Data Model with high confidence",
            "Discovered 3 significant relationships between fields",
            "Strong relationship detected: amount tends to increase over time",
            "Detected patterns where field values are derived from first letters of other fields",
            "Found fields that contain values from other fields as substrings",
        ]

    def test_no_strong_callout_at_threshold(self, field_factory):
        fields = [field_factory("notes", standard_mapping="Standard.Notes")]

        insights = generate_insights(fields, [_correlation(0.8)])

        assert "Discovered 1 significant relationships between fields" in insights
        assert not any(i.startswith("Strong relationship") for i in insights)
