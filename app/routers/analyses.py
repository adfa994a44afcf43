"""
Rotas para envio e consulta das análises de arquivos CSV.
"""
from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile

from app.config import MAX_PROGRESS_TICKS
from app.exceptions import AnalysisError
from app.schemas.analysis import (
    AnalysisResult,
    AnalysisStatus,
    AnalysisSummary,
    FieldDetail,
    FileUploadData,
    UploadResponse,
)
from app.services.analysis import AnalysisService
from app.services.upload_validation import validate_upload

router = APIRouter(prefix="/api/analyses", tags=["analyses"])


def get_analysis_service(request: Request) -> AnalysisService:
    """Dependência com o serviço de análise da aplicação."""
    return request.app.state.analysis_service


def _http_error(error: AnalysisError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.detail)


@router.post("/upload", response_model=UploadResponse)
async def upload_file(
    file: UploadFile = File(...),
    service: AnalysisService = Depends(get_analysis_service)
):
    """
    Faz upload de um arquivo CSV e gera a análise.

    Parâmetros:
        file: Arquivo CSV (até 10MB).

    Retorna:
        Identificador da análise criada.
    """
    try:
        # Rejeita pelo tamanho declarado antes de carregar o conteúdo
        if file.size is not None:
            validate_upload(file.filename or "", file.content_type, file.size)

        content = await file.read()
        file_id = service.analyze_upload(file.filename or "", file.content_type, content)
    except AnalysisError as e:
        raise _http_error(e)

    return {
        "file_id": file_id,
        "file_name": file.filename,
        "status": AnalysisStatus.IN_PROGRESS
    }


@router.post("", response_model=UploadResponse)
def analyze_file(
    upload: FileUploadData,
    service: AnalysisService = Depends(get_analysis_service)
):
    """
    Gera a análise a partir do cabeçalho e das linhas já lidas pelo cliente.

    Parâmetros:
        upload: Nome, tipo, conteúdo, cabeçalhos e até 5 linhas de amostra.

    O tipo e o tamanho são validados como no upload de arquivo.
    """
    try:
        file_id = service.analyze_file(upload)
    except AnalysisError as e:
        raise _http_error(e)

    return {"file_id": file_id}


@router.get("/{file_id}", response_model=AnalysisResult)
def get_analysis(file_id: str, service: AnalysisService = Depends(get_analysis_service)):
    """
    Obtém o resultado de uma análise.

    Parâmetros:
        file_id: Identificador retornado no upload.
    """
    try:
        return service.get_analysis(file_id)
    except AnalysisError as e:
        raise _http_error(e)


@router.get("/{file_id}/progress", response_model=AnalysisResult)
def get_analysis_progress(
    file_id: str,
    ticks: int = Query(1, ge=0, le=MAX_PROGRESS_TICKS),
    service: AnalysisService = Depends(get_analysis_service)
):
    """
    Retorna a análise com o progresso avançado em `ticks` passos.

    A simulação não é gravada; cada chamada parte do resultado armazenado.
    """
    try:
        result = service.get_analysis(file_id)
    except AnalysisError as e:
        raise _http_error(e)

    return service.simulate_progress(result, ticks)


@router.get("/{file_id}/summary", response_model=AnalysisSummary)
def get_analysis_summary(file_id: str, service: AnalysisService = Depends(get_analysis_service)):
    try:
        return service.summarize(file_id)
    except AnalysisError as e:
        raise _http_error(e)


@router.get("/{file_id}/fields/{field_name:path}", response_model=FieldDetail)
def get_field_detail(
    file_id: str,
    field_name: str,
    service: AnalysisService = Depends(get_analysis_service)
):
    """
    Obtém um campo da análise e os relacionamentos em que ele aparece.
    """
    try:
        return service.field_detail(file_id, field_name)
    except AnalysisError as e:
        raise _http_error(e)
