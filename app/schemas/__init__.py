from app.schemas.analysis import (
    AnalysisResult,
    AnalysisStatus,
    AnalysisSummary,
    Correlation,
    CorrelationExample,
    CorrelationType,
    ExternalModelMapping,
    Field,
    FieldDetail,
    FieldType,
    FileUploadData,
    UploadResponse,
)

__all__ = [
    "AnalysisResult",
    "AnalysisStatus",
    "AnalysisSummary",
    "Correlation",
    "CorrelationExample",
    "CorrelationType",
    "ExternalModelMapping",
    "Field",
    "FieldDetail",
    "FieldType",
    "FileUploadData",
    "UploadResponse",
]
