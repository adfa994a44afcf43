"""
Leitura leve de CSV para a análise.

Apenas o cabeçalho e as primeiras linhas são usados, então o texto
é dividido linha a linha em vez de carregado por completo.
"""
from app.config import SAMPLE_ROW_LIMIT


def parse_line(line: str) -> list[str]:
    """
    Divide uma linha em valores, respeitando vírgulas entre aspas duplas.

    Uma aspa alterna o estado de citação, exceto quando precedida por
    barra invertida. Cada valor perde uma aspa inicial e uma final
    e tem os espaços das pontas removidos.

    Parâmetros:
        line: Linha bruta do arquivo.

    Retorna:
        Lista de valores. Linha vazia retorna lista vazia.
    """
    if line == "":
        return []

    values = []
    current = ""
    in_quotes = False

    for i, char in enumerate(line):
        if char == '"' and (i == 0 or line[i - 1] != "\\"):
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append(current)
            current = ""
        else:
            current += char

    # Campo final vazio (linha terminada em vírgula) também é emitido
    values.append(current)

    return [_strip_value(value) for value in values]


def _strip_value(value: str) -> str:
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value.strip()


def split_csv_text(text: str, max_rows: int = SAMPLE_ROW_LIMIT) -> tuple[list[str], list[list[str]]]:
    """
    Extrai o cabeçalho e as linhas de amostra de um texto CSV.

    Parâmetros:
        text: Conteúdo completo do arquivo.
        max_rows: Quantidade de linhas após o cabeçalho consideradas.

    Retorna:
        Tupla com (cabeçalhos, linhas de amostra). Linhas em branco
        dentro da janela são descartadas.
    """
    lines = text.split("\n")
    headers = parse_line(lines[0])

    sample_rows = [
        parse_line(line)
        for line in lines[1:max_rows + 1]
        if line.strip() != ""
    ]

    return headers, sample_rows
