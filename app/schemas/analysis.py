"""
Schemas Pydantic para o resultado da análise de arquivos CSV.
"""
import enum
from pydantic import BaseModel, Field as PydanticField


class FieldType(str, enum.Enum):
    """Tipo inferido de uma coluna."""
    NUMBER = "Number"
    DATE = "Date"
    DATETIME = "DateTime"
    ARRAY = "Array"
    STRING = "String"


class CorrelationType(str, enum.Enum):
    """Tipo de relacionamento entre dois campos."""
    CATEGORICAL = "categorical"
    NUMERICAL = "numerical"
    TEMPORAL = "temporal"
    CONDITIONAL = "conditional"


class AnalysisStatus(str, enum.Enum):
    """Status da análise."""
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class ExternalModelMapping(BaseModel):
    """Mapeamento para o modelo de dados externo."""
    field: str
    confidence: int = PydanticField(ge=0, le=100)


class Field(BaseModel):
    """Resultado da análise de uma coluna do CSV."""
    name: str
    type: FieldType
    completeness: float = PydanticField(ge=0, le=100)
    is_outlier: bool = False
    standard_mapping: str | None = None
    external_model_mapping: ExternalModelMapping | None = None
    patterns: list[str] = []
    sample_values: list[str] = []
    unique_values: list[str] = []
    value_distribution: dict[str, int] = {}


class CorrelationExample(BaseModel):
    condition: str
    result: str


class Correlation(BaseModel):
    """Relacionamento direcional detectado entre dois campos."""
    source_field: str
    target_field: str
    correlation_type: CorrelationType
    strength: float = PydanticField(gt=0, le=1)
    description: str
    rule: str
    examples: list[CorrelationExample] = []


class AnalysisResult(BaseModel):
    """Resultado completo da análise de um arquivo."""
    file_id: str
    file_name: str
    status: AnalysisStatus = AnalysisStatus.IN_PROGRESS
    progress: float = PydanticField(ge=0, le=100)
    completeness: float = PydanticField(ge=0, le=100)
    fields: list[Field]
    correlations: list[Correlation] = []
    insights: list[str] = []


class FileUploadData(BaseModel):
    """Conteúdo de um arquivo já lido pelo cliente."""
    file_name: str
    file_type: str = ""
    file_content: str = ""
    headers: list[str]
    sample_rows: list[list[str]] = []


class UploadResponse(BaseModel):
    file_id: str
    file_name: str | None = None
    status: AnalysisStatus | None = None


class FieldDetail(BaseModel):
    """Um campo e os relacionamentos em que ele aparece."""
    file_id: str
    field: Field
    correlations: list[Correlation]


class AnalysisSummary(BaseModel):
    """Números agregados exibidos no resumo do relatório."""
    file_id: str
    file_name: str
    status: AnalysisStatus
    progress: float
    total_fields: int
    mapped_fields: int
    mapped_percentage: int
    external_mapped_fields: int
    outlier_fields: list[str]
    correlation_count: int
