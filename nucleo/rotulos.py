from typing import NamedTuple, Union

EPSILON = "ε"
EPSILON_ALIASES = {EPSILON, "&", ""}
ARROW = "→"
ASCII_ARROW = "->"

LEFT, RIGHT, STAY = "L", "R", "S"
DIRECTIONS = {LEFT: LEFT, RIGHT: RIGHT, STAY: STAY, "N": STAY}


class RotuloAF(NamedTuple):
    """Rótulo de autômato finito: um único símbolo de entrada."""
    symbol: str

    def __str__(self):
        return self.symbol


class RotuloAP(NamedTuple):
    """Rótulo de autômato de pilha: (entrada, desempilha, empilha)."""
    input: str
    pop: str
    push: str

    @property
    def consumes_input(self) -> bool:
        return self.input != EPSILON

    def __str__(self):
        return f"{self.input},{self.pop}{ARROW}{self.push}"


class RotuloMT(NamedTuple):
    """Rótulo de máquina de Turing: (lê, escreve, direção)."""
    read: str
    write: str
    direction: str

    def __str__(self):
        return f"{self.read}{ARROW}{self.write},{self.direction}"


Rotulo = Union[RotuloAF, RotuloAP, RotuloMT]


def _epsilon(part: str) -> str:
    part = part.strip()
    return EPSILON if part in EPSILON_ALIASES else part


def parse_fa_label(text: str) -> RotuloAF:
    if not text:
        raise ValueError("Rótulo de AF vazio.")
    return RotuloAF(text)


def parse_pda_label(text: str) -> RotuloAP:
    """Lê um rótulo no formato 'entrada,desempilha→empilha'."""
    text = text.replace(ASCII_ARROW, ARROW)
    if ARROW not in text:
        raise ValueError(f"Rótulo de PDA sem '{ARROW}': {text!r}")
    left, push = text.split(ARROW, 1)
    parts = left.split(",")
    if len(parts) != 2:
        raise ValueError(f"Rótulo de PDA deve ser 'entrada,desempilha{ARROW}empilha': {text!r}")
    input_sym, pop_sym = parts
    return RotuloAP(_epsilon(input_sym), _epsilon(pop_sym), _epsilon(push))


def parse_tm_label(text: str) -> RotuloMT:
    """Lê um rótulo no formato 'lê→escreve,direção'."""
    text = text.replace(ASCII_ARROW, ARROW)
    if ARROW not in text:
        raise ValueError(f"Rótulo de MT sem '{ARROW}': {text!r}")
    read, rest = text.split(ARROW, 1)
    if "," not in rest:
        raise ValueError(f"Rótulo de MT sem direção: {text!r}")
    write, direction = rest.rsplit(",", 1)
    read, write, direction = read.strip(), write.strip(), direction.strip().upper()
    if not read or not write:
        raise ValueError(f"Rótulo de MT com símbolo vazio: {text!r}")
    if direction not in DIRECTIONS:
        raise ValueError("Direção deve ser 'L', 'R' ou 'S'.")
    return RotuloMT(read, write, DIRECTIONS[direction])


def format_label(label: Rotulo) -> str:
    return str(label)
