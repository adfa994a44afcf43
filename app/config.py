"""
Configurações centralizadas da aplicação.

Cada valor pode ser sobrescrito por variável de ambiente.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Armazenamento das análises: "memory" (padrão) ou "sql"
ANALYSIS_STORE_BACKEND = os.getenv("ANALYSIS_STORE_BACKEND", "memory")
ANALYSIS_STORE_MAX_ENTRIES = int(os.getenv("ANALYSIS_STORE_MAX_ENTRIES", "500"))
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/analyses.db")

# Semente opcional para reproduzir as análises simuladas
_seed = os.getenv("ANALYSIS_RANDOM_SEED")
ANALYSIS_RANDOM_SEED = int(_seed) if _seed else None

# Upload
ALLOWED_CONTENT_TYPES = {"text/csv", "application/vnd.ms-excel"}
ALLOWED_EXTENSIONS = {".csv"}
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

# Amostragem
SAMPLE_ROW_LIMIT = 5
SAMPLE_VALUE_LIMIT = 4
CATEGORICAL_MAX_UNIQUE = 5
MAX_CORRELATIONS = 5

# Modelo de dados externo usado no mapeamento
EXTERNAL_MODEL_NAMESPACE = os.getenv("EXTERNAL_MODEL_NAMESPACE", "Flume")
EXTERNAL_MODEL_NAME = os.getenv("EXTERNAL_MODEL_NAME", "Flume Data Model")

# Simulação de progresso
INITIAL_PROGRESS = 15
INITIAL_COMPLETENESS = 25
PROGRESS_STEP = 5
COMPLETENESS_STEP = 3
FIELD_COMPLETENESS_JITTER = 5
MAX_PROGRESS_TICKS = 20
