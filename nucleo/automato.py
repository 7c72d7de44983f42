import json
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Union

from nucleo.rotulos import (
    Rotulo,
    RotuloAF,
    RotuloAP,
    RotuloMT,
    parse_fa_label,
    parse_pda_label,
    parse_tm_label,
)

logger = logging.getLogger(__name__)

FA = "fa"
PDA = "pda"
TM = "tm"
FORMALISMS = (FA, PDA, TM)

FORMALISM_NAMES = {
    FA: "Autômato Finito",
    PDA: "Autômato de Pilha",
    TM: "Máquina de Turing",
}

_PARSERS = {FA: parse_fa_label, PDA: parse_pda_label, TM: parse_tm_label}
_LABEL_TYPES = {FA: RotuloAF, PDA: RotuloAP, TM: RotuloMT}


class AutomatoMalformado(ValueError):
    """Violação estrutural detectada ao carregar um autômato."""


class Estado(NamedTuple):
    name: str
    initial: bool = False
    final: bool = False


class Transicao(NamedTuple):
    source: str
    target: str
    label: Rotulo

    def __str__(self):
        return f"{self.source} --{self.label}--> {self.target}"


def parse_label(formalism: str, label: Union[str, Rotulo]) -> Rotulo:
    """Converte o texto de um rótulo no tipo correspondente ao formalismo.

    Rótulos já estruturados são aceitos se forem do tipo certo.
    """
    if formalism not in _PARSERS:
        raise ValueError(f"Formalismo desconhecido: {formalism!r}")
    expected = _LABEL_TYPES[formalism]
    if isinstance(label, expected):
        return label
    if not isinstance(label, str):
        raise ValueError(f"Rótulo {label!r} não pertence ao formalismo '{formalism}'.")
    return _PARSERS[formalism](label)


class Automato:
    """
    Descrição de um autômato (AF, AP ou MT): estados e transições em ordem
    de declaração. A ordem das transições é o critério de desempate do
    resolvedor.
    """
    def __init__(self, formalism: str = FA):
        if formalism not in FORMALISMS:
            raise ValueError(f"Formalismo desconhecido: {formalism!r}")
        self.formalism: str = formalism
        self.states: List[Estado] = []
        self.transitions: List[Transicao] = []

    def add_state(self, name: str, is_start: bool = False, is_final: bool = False) -> Estado:
        if self.get_state(name) is not None:
            raise ValueError(f"O nome '{name}' já está em uso.")
        state = Estado(name, is_start, is_final)
        self.states.append(state)
        return state

    def add_transition(self, src: str, dst: str, label: Union[str, Rotulo]) -> Transicao:
        if self.get_state(src) is None or self.get_state(dst) is None:
            raise AutomatoMalformado("Estado de origem ou destino inválido.")
        transition = Transicao(src, dst, parse_label(self.formalism, label))
        self.transitions.append(transition)
        return transition

    def get_state(self, name: str) -> Optional[Estado]:
        for state in self.states:
            if state.name == name:
                return state
        return None

    def is_final(self, name: str) -> bool:
        state = self.get_state(name)
        return state is not None and state.final

    @property
    def start_state(self) -> Optional[str]:
        for state in self.states:
            if state.initial:
                return state.name
        return None

    @property
    def final_states(self) -> List[str]:
        return [s.name for s in self.states if s.final]

    def transitions_from(self, name: str) -> List[Transicao]:
        return [t for t in self.transitions if t.source == name]

    def validate(self):
        """Falha com AutomatoMalformado se houver nome de estado repetido,
        referência a estado inexistente ou se não houver exatamente um
        estado inicial."""
        names = set()
        for s in self.states:
            if s.name in names:
                raise AutomatoMalformado(f"O nome de estado '{s.name}' aparece mais de uma vez.")
            names.add(s.name)

        for t in self.transitions:
            if t.source not in names:
                raise AutomatoMalformado(f"Transição {t} parte de estado inexistente '{t.source}'.")
            if t.target not in names:
                raise AutomatoMalformado(f"Transição {t} chega em estado inexistente '{t.target}'.")

        initials = [s.name for s in self.states if s.initial]
        if len(initials) != 1:
            raise AutomatoMalformado(
                f"O autômato deve ter exatamente um estado inicial (encontrados: {len(initials)})."
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "formalism": self.formalism,
            "states": [
                {"name": s.name, "initial": s.initial, "final": s.final}
                for s in self.states
            ],
            "transitions": [
                {"from": t.source, "to": t.target, "label": str(t.label)}
                for t in self.transitions
            ],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Automato':
        """Monta e valida um autômato a partir da definição
        {formalism, states, transitions}. Transições com rótulo ilegível
        são ignoradas com um aviso; qualquer outro defeito gera
        AutomatoMalformado."""
        if not isinstance(data, dict):
            raise AutomatoMalformado("A definição do autômato deve ser um objeto JSON.")
        formalism = data.get("formalism", FA)
        if formalism not in FORMALISMS:
            raise AutomatoMalformado(f"Formalismo desconhecido: {formalism!r}")
        a = cls(formalism)

        for s in data.get("states", []):
            try:
                name = s["name"]
                initial, final = bool(s.get("initial", False)), bool(s.get("final", False))
            except (KeyError, TypeError, AttributeError):
                raise AutomatoMalformado(f"Estado sem nome: {s!r}") from None
            if not isinstance(name, str):
                raise AutomatoMalformado(f"Nome de estado inválido: {name!r}")
            a.states.append(Estado(name, initial, final))

        for t in data.get("transitions", []):
            try:
                source, target = t["from"], t["to"]
            except (KeyError, TypeError):
                raise AutomatoMalformado(f"Transição sem origem ou destino: {t!r}") from None
            try:
                label = parse_label(a.formalism, t["label"])
            except (KeyError, ValueError) as e:
                logger.warning("Ignorando transição malformada %s: %s", t, e)
                continue
            a.transitions.append(Transicao(source, target, label))

        a.validate()
        return a

    @classmethod
    def from_json(cls, json_str: str) -> 'Automato':
        return cls.from_dict(json.loads(json_str))
