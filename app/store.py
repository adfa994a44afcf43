"""
Armazenamento dos resultados de análise.

A aplicação recebe uma instância de AnalysisStore na inicialização
(app.state.store). Cada identificador é gravado uma única vez.
"""
import logging
import threading
from collections import OrderedDict

from app.config import ANALYSIS_STORE_BACKEND, ANALYSIS_STORE_MAX_ENTRIES
from app.database import SessionLocal, init_db
from app.models.analysis import StoredAnalysis
from app.schemas.analysis import AnalysisResult

logger = logging.getLogger(__name__)


class DuplicateAnalysisId(KeyError):
    """Tentativa de gravar um identificador já existente."""


class AnalysisStore:
    """Interface de armazenamento: put uma vez, get quantas vezes quiser."""

    def put(self, file_id: str, result: AnalysisResult) -> None:
        raise NotImplementedError

    def get(self, file_id: str) -> AnalysisResult | None:
        raise NotImplementedError

    def __contains__(self, file_id: str) -> bool:
        return self.get(file_id) is not None


class InMemoryAnalysisStore(AnalysisStore):
    """
    Armazenamento em memória com limite de entradas.

    Ao passar do limite, remove as análises menos acessadas recentemente.
    Não é compartilhado entre processos.
    """

    def __init__(self, max_entries: int = ANALYSIS_STORE_MAX_ENTRIES):
        self.max_entries = max_entries
        self._entries: OrderedDict[str, AnalysisResult] = OrderedDict()
        self._lock = threading.Lock()

    def put(self, file_id: str, result: AnalysisResult) -> None:
        with self._lock:
            if file_id in self._entries:
                raise DuplicateAnalysisId(file_id)

            self._entries[file_id] = result.model_copy(deep=True)

            while len(self._entries) > self.max_entries:
                evicted_id, _ = self._entries.popitem(last=False)
                logger.info("Análise %s removida da memória (limite de %d)", evicted_id, self.max_entries)

    def get(self, file_id: str) -> AnalysisResult | None:
        with self._lock:
            result = self._entries.get(file_id)
            if result is None:
                logger.debug("Análise %s não encontrada", file_id)
                return None

            self._entries.move_to_end(file_id)
            # Cópia para que simulações de progresso não alterem o original
            return result.model_copy(deep=True)

    def __contains__(self, file_id: str) -> bool:
        with self._lock:
            return file_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class SqlAnalysisStore(AnalysisStore):
    """
    Armazenamento em banco de dados via SQLAlchemy.

    O resultado é gravado como documento JSON na tabela analyses.
    """

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def put(self, file_id: str, result: AnalysisResult) -> None:
        db = self.session_factory()
        try:
            if db.get(StoredAnalysis, file_id) is not None:
                raise DuplicateAnalysisId(file_id)

            db.add(StoredAnalysis(
                file_id=file_id,
                file_name=result.file_name,
                payload=result.model_dump(mode="json")
            ))
            db.commit()
        finally:
            db.close()

    def get(self, file_id: str) -> AnalysisResult | None:
        db = self.session_factory()
        try:
            record = db.get(StoredAnalysis, file_id)
            if record is None:
                logger.debug("Análise %s não encontrada no banco", file_id)
                return None
            return AnalysisResult.model_validate(record.payload)
        finally:
            db.close()


def create_store(backend: str = ANALYSIS_STORE_BACKEND) -> AnalysisStore:
    """
    Cria o armazenamento configurado.

    Parâmetros:
        backend: "memory" ou "sql".
    """
    if backend == "memory":
        return InMemoryAnalysisStore()

    if backend == "sql":
        init_db()
        return SqlAnalysisStore()

    raise ValueError(f"Backend de armazenamento desconhecido: {backend}")
