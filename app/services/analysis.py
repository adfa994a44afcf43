"""
Serviço de análise de arquivos CSV.

Gera a análise simulada (tipos, mapeamentos, correlações e insights)
a partir do cabeçalho e das primeiras linhas do arquivo, grava o
resultado no armazenamento e o disponibiliza para consulta.
"""
import logging
import time
from typing import Callable

from app.config import (
    COMPLETENESS_STEP,
    FIELD_COMPLETENESS_JITTER,
    INITIAL_COMPLETENESS,
    INITIAL_PROGRESS,
    PROGRESS_STEP,
    SAMPLE_ROW_LIMIT,
)
from app.exceptions import AnalysisNotFound, EmptyFile, FieldNotFound
from app.schemas.analysis import (
    AnalysisResult,
    AnalysisStatus,
    AnalysisSummary,
    FieldDetail,
    FileUploadData,
)
from app.services.correlations import CorrelationService
from app.services.csv_parser import split_csv_text
from app.services.patterns import generate_insights, percentage
from app.services.profiling import ProfilingService
from app.services.randomness import RandomSource
from app.services.upload_validation import validate_upload
from app.store import AnalysisStore

logger = logging.getLogger(__name__)

FILE_ID_SUFFIX_LENGTH = 7


class AnalysisService:
    """
    Orquestra a análise e a consulta dos resultados.

    Toda a aleatoriedade vem da RandomSource recebida, repassada
    ao perfil das colunas e aos detectores de correlação.
    """

    def __init__(
        self,
        store: AnalysisStore,
        rng: RandomSource | None = None,
        profiler: ProfilingService | None = None,
        correlation_service: CorrelationService | None = None,
        clock: Callable[[], float] = time.time
    ):
        self.store = store
        self.rng = rng or RandomSource()
        self.profiler = profiler or ProfilingService(self.rng)
        self.correlation_service = correlation_service or CorrelationService(self.rng)
        self.clock = clock

    def new_file_id(self) -> str:
        """Gera um identificador file_<milissegundos>_<sufixo base36> ainda não usado."""
        while True:
            millis = int(self.clock() * 1000)
            file_id = f"file_{millis}_{self.rng.token(FILE_ID_SUFFIX_LENGTH)}"
            if file_id not in self.store:
                return file_id

    def analyze_upload(self, file_name: str, content_type: str | None, content: bytes) -> str:
        """
        Valida, lê e analisa um arquivo enviado.

        Parâmetros:
            file_name: Nome original do arquivo.
            content_type: Tipo MIME informado pelo cliente.
            content: Conteúdo bruto.

        Retorna:
            Identificador da análise criada.
        """
        validate_upload(file_name, content_type, len(content))

        text = content.decode("utf-8-sig", errors="replace")
        headers, sample_rows = split_csv_text(text)

        return self._create_analysis(FileUploadData(
            file_name=file_name,
            file_type=content_type or "",
            file_content=text,
            headers=headers,
            sample_rows=sample_rows
        ))

    def analyze_file(self, upload: FileUploadData) -> str:
        """
        Analisa um arquivo já separado em cabeçalho e linhas de amostra.

        O tipo e o tamanho são validados como no upload, usando
        file_type, file_name e o conteúdo em UTF-8.

        Levanta:
            InvalidFileType: Arquivo que não é CSV.
            FileTooLarge: Conteúdo acima do limite.
            EmptyFile: Quando não há cabeçalho.
        """
        validate_upload(
            upload.file_name,
            upload.file_type or None,
            len(upload.file_content.encode("utf-8"))
        )
        return self._create_analysis(upload)

    def _create_analysis(self, upload: FileUploadData) -> str:
        # Nenhum identificador é gerado para arquivos sem cabeçalho
        if not any(header.strip() for header in upload.headers):
            raise EmptyFile("Arquivo CSV vazio")

        sample_rows = upload.sample_rows[:SAMPLE_ROW_LIMIT]
        file_id = self.new_file_id()

        result = self.build_result(file_id, upload.file_name, upload.headers, sample_rows)
        self.store.put(file_id, result)

        logger.info(
            "Análise %s criada para %s: %d campos, %d correlações",
            file_id, upload.file_name, len(result.fields), len(result.correlations)
        )
        return file_id

    def build_result(
        self,
        file_id: str,
        file_name: str,
        headers: list[str],
        sample_rows: list[list[str]]
    ) -> AnalysisResult:
        fields = self.profiler.profile_fields(headers, sample_rows)
        correlations = self.correlation_service.analyze(fields, sample_rows)

        return AnalysisResult(
            file_id=file_id,
            file_name=file_name,
            status=AnalysisStatus.IN_PROGRESS,
            progress=INITIAL_PROGRESS,
            completeness=INITIAL_COMPLETENESS,
            fields=fields,
            correlations=correlations,
            insights=generate_insights(fields, correlations)
        )

    def get_analysis(self, file_id: str) -> AnalysisResult:
        """
        Busca uma análise pelo identificador.

        Levanta:
            AnalysisNotFound: Identificador desconhecido.
        """
        result = self.store.get(file_id)
        if result is None:
            raise AnalysisNotFound(file_id)
        return result

    def simulate_progress(self, result: AnalysisResult, ticks: int) -> AnalysisResult:
        """
        Avança o progresso exibido da análise, sem gravar no armazenamento.

        A cada passo o progresso sobe 5 pontos, a completude geral 3 e a
        de cada campo um valor sorteado até 5, todos limitados a 100.
        """
        snapshot = result.model_copy(deep=True)

        for _ in range(ticks):
            if snapshot.status == AnalysisStatus.COMPLETE:
                break

            snapshot.progress = min(snapshot.progress + PROGRESS_STEP, 100)
            snapshot.completeness = min(snapshot.completeness + COMPLETENESS_STEP, 100)
            for field in snapshot.fields:
                field.completeness = min(
                    field.completeness + self.rng.random() * FIELD_COMPLETENESS_JITTER, 100
                )

            if snapshot.progress >= 100:
                snapshot.status = AnalysisStatus.COMPLETE

        return snapshot

    def field_detail(self, file_id: str, field_name: str) -> FieldDetail:
        result = self.get_analysis(file_id)

        field = next((f for f in result.fields if f.name == field_name), None)
        if field is None:
            raise FieldNotFound(file_id, field_name)

        correlations = [
            c for c in result.correlations
            if c.source_field == field_name or c.target_field == field_name
        ]
        return FieldDetail(file_id=file_id, field=field, correlations=correlations)

    def summarize(self, file_id: str) -> AnalysisSummary:
        """Números do resumo do relatório: campos, mapeados, outliers e relacionamentos."""
        result = self.get_analysis(file_id)

        total = len(result.fields)
        mapped = sum(1 for f in result.fields if f.standard_mapping)

        return AnalysisSummary(
            file_id=result.file_id,
            file_name=result.file_name,
            status=result.status,
            progress=result.progress,
            total_fields=total,
            mapped_fields=mapped,
            mapped_percentage=percentage(mapped, total),
            external_mapped_fields=sum(1 for f in result.fields if f.external_model_mapping is not None),
            outlier_fields=[f.name for f in result.fields if f.is_outlier],
            correlation_count=len(result.correlations)
        )
