"""
Fonte única de aleatoriedade da análise simulada.

Todos os sorteios passam por RandomSource, que pode ser semeada
ou substituída nos testes.
"""
import numpy as np

BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


class RandomSource:
    """
    Gerador de números aleatórios injetável.

    Os demais métodos derivam de random(); basta sobrescrevê-lo
    para obter sorteios determinísticos.
    """

    def __init__(self, seed: int | None = None):
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        """Retorna um float uniforme em [0, 1)."""
        return float(self._rng.random())

    def randint(self, high: int) -> int:
        """Retorna um inteiro uniforme em [0, high)."""
        if high <= 0:
            return 0
        return min(int(self.random() * high), high - 1)

    def chance(self, probability: float) -> bool:
        """Retorna True com a probabilidade informada."""
        return self.random() < probability

    def uniform(self, low: float, high: float) -> float:
        return low + self.random() * (high - low)

    def token(self, length: int, alphabet: str = BASE36_ALPHABET) -> str:
        return "".join(alphabet[self.randint(len(alphabet))] for _ in range(length))
