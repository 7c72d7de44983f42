from typing import Iterable, List, Optional, Tuple

from nucleo.rotulos import LEFT, RIGHT

BLANK_SYMBOL = "_"
EMPTY_STACK = None


class Pilha:
    """Pilha do autômato de pilha. O topo é o último elemento."""
    def __init__(self, symbols: Iterable[str] = ()):
        self._items: List[str] = list(symbols)

    def push(self, symbol: str):
        self._items.append(symbol)

    def pop(self) -> Optional[str]:
        """Remove e retorna o topo; com a pilha vazia não faz nada e
        retorna EMPTY_STACK."""
        if not self._items:
            return EMPTY_STACK
        return self._items.pop()

    def peek(self) -> Optional[str]:
        return self._items[-1] if self._items else EMPTY_STACK

    def is_empty(self) -> bool:
        return not self._items

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self._items)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __repr__(self):
        return f"Pilha({self._items!r})"


class Fita:
    """
    Fita da máquina de Turing. Começa com a entrada separada em símbolos e
    cresce com brancos quando a cabeça escreve além do fim.
    """
    def __init__(self, input_str: str = "", blank: str = BLANK_SYMBOL):
        self.blank = blank
        self.cells: List[str] = list(input_str)

    def read(self, head: int) -> str:
        if 0 <= head < len(self.cells):
            return self.cells[head]
        return self.blank

    def write(self, head: int, symbol: str):
        """Escreve na célula `head`. Posições negativas valem como 0, a borda
        esquerda da fita."""
        head = max(0, head)
        if head >= len(self.cells):
            self.cells.extend([self.blank] * (head + 1 - len(self.cells)))
        self.cells[head] = symbol

    @staticmethod
    def move(head: int, direction: str) -> int:
        if direction == RIGHT:
            return head + 1
        if direction == LEFT:
            return max(0, head - 1)
        return head

    def content(self) -> str:
        """Conteúdo da fita sem os brancos das pontas."""
        return "".join(self.cells).strip(self.blank)

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self.cells)

    def __len__(self):
        return len(self.cells)

    def __repr__(self):
        return f"Fita({self.cells!r})"
