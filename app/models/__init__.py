from app.models.analysis import StoredAnalysis

__all__ = ["StoredAnalysis"]
