"""
Erros de domínio da análise de arquivos.

Os serviços levantam estas exceções; as rotas as convertem em HTTPException.
"""


class AnalysisError(Exception):
    """Erro base com status HTTP e mensagem para o usuário."""
    status_code = 400
    title = "Erro na análise"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.title
        super().__init__(self.detail)


class InvalidFileType(AnalysisError):
    title = "Tipo de arquivo inválido"

    def __init__(self, file_name: str, content_type: str | None):
        self.file_name = file_name
        self.content_type = content_type
        super().__init__("Tipo de arquivo inválido. Envie um arquivo CSV.")


class FileTooLarge(AnalysisError):
    status_code = 413
    title = "Arquivo muito grande"

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        limit_mb = limit / (1024 * 1024)
        super().__init__(f"Arquivo muito grande. Envie um arquivo menor que {limit_mb:g}MB.")


class EmptyFile(AnalysisError):
    title = "Arquivo CSV vazio"


class AnalysisNotFound(AnalysisError):
    status_code = 404
    title = "Análise não encontrada"

    def __init__(self, file_id: str):
        self.file_id = file_id
        super().__init__()


class FieldNotFound(AnalysisError):
    status_code = 404
    title = "Campo não encontrado"

    def __init__(self, file_id: str, field_name: str):
        self.file_id = file_id
        self.field_name = field_name
        super().__init__(f"Campo '{field_name}' não encontrado na análise {file_id}")
