"""
Validação do arquivo enviado, antes de qualquer análise.
"""
import logging
from pathlib import Path

from app.config import ALLOWED_CONTENT_TYPES, ALLOWED_EXTENSIONS, MAX_UPLOAD_BYTES
from app.exceptions import FileTooLarge, InvalidFileType

logger = logging.getLogger(__name__)


def is_csv_upload(file_name: str, content_type: str | None) -> bool:
    """Aceita pelo tipo MIME ou, na falta dele, pela extensão do arquivo."""
    if content_type in ALLOWED_CONTENT_TYPES:
        return True
    return Path(file_name or "").suffix.lower() in ALLOWED_EXTENSIONS


def validate_upload(
    file_name: str,
    content_type: str | None,
    size: int,
    max_bytes: int = MAX_UPLOAD_BYTES
) -> None:
    """
    Verifica tipo e tamanho do arquivo.

    Parâmetros:
        file_name: Nome original do arquivo.
        content_type: Tipo MIME informado pelo cliente.
        size: Tamanho em bytes.
        max_bytes: Limite de tamanho (inclusivo).

    Levanta:
        InvalidFileType: Arquivo que não é CSV.
        FileTooLarge: Arquivo acima do limite.
    """
    if not is_csv_upload(file_name, content_type):
        logger.warning("Upload rejeitado: tipo inválido (%s, %s)", file_name, content_type)
        raise InvalidFileType(file_name, content_type)

    if size > max_bytes:
        logger.warning("Upload rejeitado: %s tem %d bytes (limite %d)", file_name, size, max_bytes)
        raise FileTooLarge(size, max_bytes)
