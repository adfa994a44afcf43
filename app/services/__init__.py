from app.services.analysis import AnalysisService
from app.services.correlations import CorrelationService
from app.services.profiling import ProfilingService
from app.services.randomness import RandomSource

__all__ = ["AnalysisService", "CorrelationService", "ProfilingService", "RandomSource"]
