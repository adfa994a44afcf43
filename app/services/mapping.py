"""
Mapeamento heurístico de cabeçalhos para esquemas conhecidos.

As regras ficam em tabelas ordenadas (predicado, destino, confiança);
a primeira regra cujo predicado aceita o cabeçalho vence.
"""
from typing import Callable, NamedTuple

from app.config import EXTERNAL_MODEL_NAMESPACE
from app.schemas.analysis import ExternalModelMapping, FieldType
from app.services.randomness import RandomSource

Predicate = Callable[[str, FieldType], bool]

TEMPORAL_TYPES = (FieldType.DATE, FieldType.DATETIME)


class MappingRule(NamedTuple):
    predicate: Predicate
    target: str
    base_confidence: int = 0
    confidence_spread: int = 0


def contains(*keywords: str) -> Predicate:
    """Todas as palavras aparecem no cabeçalho."""
    return lambda header, field_type: all(keyword in header for keyword in keywords)


def contains_any(*keywords: str) -> Predicate:
    return lambda header, field_type: any(keyword in header for keyword in keywords)


def equals(word: str) -> Predicate:
    return lambda header, field_type: header == word


def of_type(*types: FieldType) -> Predicate:
    return lambda header, field_type: field_type in types


def both(*predicates: Predicate) -> Predicate:
    return lambda header, field_type: all(p(header, field_type) for p in predicates)


def match_rule(rules: list[MappingRule], header: str, field_type: FieldType) -> MappingRule | None:
    """
    Retorna a primeira regra que aceita o cabeçalho (comparação sem distinção de maiúsculas).
    """
    header_lower = header.lower()
    for rule in rules:
        if rule.predicate(header_lower, field_type):
            return rule
    return None


def capitalize_header(header: str) -> str:
    return header[:1].upper() + header[1:]


STANDARD_RULES = [
    MappingRule(contains("id", "customer"), "Standard.CustomerID"),
    MappingRule(contains("id", "transaction"), "Standard.TransactionID"),
    MappingRule(contains("id", "product"), "Standard.ProductID"),
    MappingRule(equals("id"), "Standard.ID"),
    MappingRule(contains("name", "first"), "Standard.Person.FirstName"),
    MappingRule(contains("name", "last"), "Standard.Person.LastName"),
    MappingRule(equals("name"), "Standard.Name"),
    MappingRule(contains("email"), "Standard.Contact.Email"),
    MappingRule(contains("phone"), "Standard.Contact.Phone"),
    MappingRule(both(of_type(*TEMPORAL_TYPES), contains("created")), "Standard.Timestamp.Created"),
    MappingRule(both(of_type(*TEMPORAL_TYPES), contains("updated")), "Standard.Timestamp.Updated"),
    MappingRule(both(of_type(*TEMPORAL_TYPES), contains("birth")), "Standard.Person.BirthDate"),
    MappingRule(of_type(*TEMPORAL_TYPES), "Standard.Timestamp.Date"),
    MappingRule(both(of_type(FieldType.NUMBER), contains_any("amount", "price")), "Standard.Currency.Amount"),
    MappingRule(contains("status"), "Standard.Status"),
    MappingRule(contains("description"), "Standard.Description"),
]

_id = contains("id")
_name = contains("name")
_address = contains("address")
_temporal = of_type(*TEMPORAL_TYPES)
_numeric = of_type(FieldType.NUMBER)
_status = contains("status")
_description = contains("description")

# Destinos relativos ao namespace do modelo externo
EXTERNAL_RULES = [
    # Identificadores
    MappingRule(both(_id, contains("customer")), "Customer.Identifier", 85, 15),
    MappingRule(both(_id, contains("transaction")), "Transaction.Identifier", 85, 15),
    MappingRule(both(_id, contains("product")), "Product.Identifier", 85, 15),
    MappingRule(both(_id, contains("order")), "Order.Identifier", 85, 15),
    MappingRule(_id, "Core.Identifier", 70, 20),
    # Nomes
    MappingRule(both(_name, contains("first")), "Person.FirstName", 90, 10),
    MappingRule(both(_name, contains("last")), "Person.LastName", 90, 10),
    MappingRule(both(_name, contains("product")), "Product.Name", 85, 15),
    MappingRule(_name, "Core.Name", 75, 15),
    # Contato
    MappingRule(contains("email"), "Contact.EmailAddress", 90, 10),
    MappingRule(contains("phone"), "Contact.PhoneNumber", 85, 15),
    # Endereço
    MappingRule(both(_address, contains("street")), "Address.Street", 85, 15),
    MappingRule(both(_address, contains("city")), "Address.City", 90, 10),
    MappingRule(both(_address, contains("state")), "Address.State", 90, 10),
    MappingRule(both(_address, contains_any("zip", "postal")), "Address.PostalCode", 90, 10),
    MappingRule(both(_address, contains("country")), "Address.Country", 90, 10),
    MappingRule(_address, "Address.FullAddress", 75, 15),
    # Datas
    MappingRule(both(_temporal, contains_any("created", "creation")), "Temporal.CreationDate", 85, 15),
    MappingRule(both(_temporal, contains_any("updated", "modified")), "Temporal.ModificationDate", 85, 15),
    MappingRule(both(_temporal, contains("birth")), "Person.BirthDate", 90, 10),
    MappingRule(both(_temporal, contains_any("order", "purchase")), "Order.Date", 85, 15),
    MappingRule(_temporal, "Temporal.Timestamp", 70, 20),
    # Valores numéricos
    MappingRule(both(_numeric, contains("price")), "Product.Price", 85, 15),
    MappingRule(both(_numeric, contains_any("amount", "total")), "Transaction.Amount", 85, 15),
    MappingRule(both(_numeric, contains_any("quantity", "count")), "Product.Quantity", 85, 15),
    MappingRule(both(_numeric, contains("age")), "Person.Age", 90, 10),
    MappingRule(_numeric, "Core.NumericValue", 60, 20),
    # Status
    MappingRule(both(_status, contains("order")), "Order.Status", 85, 15),
    MappingRule(both(_status, contains("payment")), "Payment.Status", 85, 15),
    MappingRule(_status, "Core.Status", 75, 15),
    # Descrições
    MappingRule(both(_description, contains("product")), "Product.Description", 85, 15),
    MappingRule(_description, "Core.Description", 75, 15),
]

DERIVED_BASE_CONFIDENCE = 40
DERIVED_CONFIDENCE_SPREAD = 30
OUTLIER_CONFIDENCE_PENALTY = 30
MIN_OUTLIER_CONFIDENCE = 30


class StandardMapper:
    """
    Mapeia cabeçalhos para o esquema padrão.

    Cabeçalhos sem regra ficam sem mapeamento em 30% dos casos,
    simulando campos que exigem mapeamento manual.
    """

    unmapped_probability = 0.3

    def __init__(self, rng: RandomSource, rules: list[MappingRule] | None = None):
        self.rng = rng
        self.rules = rules if rules is not None else STANDARD_RULES

    def map(self, header: str, field_type: FieldType) -> str | None:
        rule = match_rule(self.rules, header, field_type)
        if rule is not None:
            return rule.target

        if self.rng.chance(self.unmapped_probability):
            return None
        return f"Standard.{capitalize_header(header)}"


class ExternalModelMapper:
    """
    Mapeia cabeçalhos para o modelo de dados externo, com uma confiança sintética.

    Campos outlier podem ficar sem mapeamento e, quando mapeados,
    têm a confiança reduzida.
    """

    outlier_unmapped_probability = 0.3
    derived_unmapped_probability = 0.5

    def __init__(
        self,
        rng: RandomSource,
        namespace: str = EXTERNAL_MODEL_NAMESPACE,
        rules: list[MappingRule] | None = None
    ):
        self.rng = rng
        self.namespace = namespace
        self.rules = rules if rules is not None else EXTERNAL_RULES

    def map(self, header: str, field_type: FieldType, is_outlier: bool = False) -> ExternalModelMapping | None:
        """
        Gera o mapeamento de um campo.

        Parâmetros:
            header: Nome da coluna.
            field_type: Tipo inferido da coluna.
            is_outlier: Se o campo foi marcado como outlier.

        Retorna:
            ExternalModelMapping ou None quando o campo não é mapeado.
        """
        if is_outlier and self.rng.chance(self.outlier_unmapped_probability):
            return None

        rule = match_rule(self.rules, header, field_type)

        if rule is not None:
            target = rule.target
            confidence = rule.base_confidence + self.rng.randint(rule.confidence_spread)
        else:
            if is_outlier and self.rng.chance(self.derived_unmapped_probability):
                return None
            target = f"Derived.{capitalize_header(header)}"
            confidence = DERIVED_BASE_CONFIDENCE + self.rng.randint(DERIVED_CONFIDENCE_SPREAD)

        if is_outlier:
            confidence = max(MIN_OUTLIER_CONFIDENCE, confidence - OUTLIER_CONFIDENCE_PENALTY)

        return ExternalModelMapping(field=f"{self.namespace}.{target}", confidence=confidence)
