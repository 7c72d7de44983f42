from typing import Any, Dict, Tuple

from nucleo.automato import FA, PDA, TM, Automato

EXEMPLOS: Dict[str, Dict[str, Any]] = {
    'ends-with-a': {
        "title": "AF: termina em 'a'",
        "formalism": FA,
        "states": [
            {"name": "q0", "initial": True, "final": False},
            {"name": "q1", "initial": False, "final": True},
        ],
        "transitions": [
            {"from": "q0", "to": "q0", "label": "b"}, {"from": "q0", "to": "q1", "label": "a"},
            {"from": "q1", "to": "q0", "label": "b"}, {"from": "q1", "to": "q1", "label": "a"},
        ],
        "input": "aabba",
    },
    'even-a': {
        "title": "AF: número par de 'a'",
        "formalism": FA,
        "states": [
            {"name": "even", "initial": True, "final": True},
            {"name": "odd", "initial": False, "final": False},
        ],
        "transitions": [
            {"from": "even", "to": "odd", "label": "a"}, {"from": "even", "to": "even", "label": "b"},
            {"from": "odd", "to": "even", "label": "a"}, {"from": "odd", "to": "odd", "label": "b"},
        ],
        "input": "aabab",
    },
    'starts-with-ab': {
        "title": "AF: começa com 'ab'",
        "formalism": FA,
        "states": [
            {"name": "q0", "initial": True, "final": False},
            {"name": "q1", "initial": False, "final": False},
            {"name": "q2", "initial": False, "final": True},
            {"name": "q3", "initial": False, "final": False},
        ],
        "transitions": [
            {"from": "q0", "to": "q1", "label": "a"}, {"from": "q0", "to": "q3", "label": "b"},
            {"from": "q1", "to": "q2", "label": "b"}, {"from": "q1", "to": "q3", "label": "a"},
            {"from": "q2", "to": "q2", "label": "a"}, {"from": "q2", "to": "q2", "label": "b"},
            {"from": "q3", "to": "q3", "label": "a"}, {"from": "q3", "to": "q3", "label": "b"},
        ],
        "input": "abaa",
    },
    'palindrome': {
        "title": "AP: palíndromos pares",
        "formalism": PDA,
        "states": [
            {"name": "q0", "initial": True, "final": False},
            {"name": "q1", "initial": False, "final": False},
            {"name": "q2", "initial": False, "final": True},
        ],
        "transitions": [
            {"from": "q0", "to": "q0", "label": "a,ε→a"}, {"from": "q0", "to": "q0", "label": "b,ε→b"},
            {"from": "q0", "to": "q1", "label": "ε,ε→ε"}, {"from": "q1", "to": "q1", "label": "a,a→ε"},
            {"from": "q1", "to": "q1", "label": "b,b→ε"}, {"from": "q1", "to": "q2", "label": "ε,ε→ε"},
        ],
        "input": "abba",
    },
    'anbn': {
        "title": "AP: aⁿbⁿ",
        "formalism": PDA,
        "states": [
            {"name": "q0", "initial": True, "final": False},
            {"name": "q1", "initial": False, "final": False},
            {"name": "q2", "initial": False, "final": True},
        ],
        "transitions": [
            {"from": "q0", "to": "q1", "label": "a,ε→X"}, {"from": "q1", "to": "q1", "label": "a,ε→X"},
            {"from": "q1", "to": "q2", "label": "b,X→ε"}, {"from": "q2", "to": "q2", "label": "b,X→ε"},
        ],
        "input": "aaabbb",
    },
    'tm-binary-add': {
        "title": "MT: incremento binário",
        "formalism": TM,
        "states": [
            {"name": "q0", "initial": True, "final": False},
            {"name": "q1", "initial": False, "final": False},
            {"name": "q2", "initial": False, "final": True},
        ],
        "transitions": [
            {"from": "q0", "to": "q0", "label": "1→1,R"}, {"from": "q0", "to": "q0", "label": "0→0,R"},
            {"from": "q0", "to": "q1", "label": "_→_,L"}, {"from": "q1", "to": "q1", "label": "1→0,L"},
            {"from": "q1", "to": "q2", "label": "0→1,R"}, {"from": "q1", "to": "q2", "label": "_→1,R"},
        ],
        "input": "1011",
    },
}

DEFAULT_EXAMPLE = {FA: 'ends-with-a', PDA: 'anbn', TM: 'tm-binary-add'}


def load_example(name: str) -> Tuple[Automato, str]:
    """Retorna (autômato, entrada padrão) do exemplo pedido."""
    data = EXEMPLOS[name]
    return Automato.from_dict(data), data.get("input", "")
