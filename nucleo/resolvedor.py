"""
Escolha da transição a aplicar em cada passo.

Nenhum resolvedor explora alternativas: a primeira transição aplicável em
ordem de declaração é a escolhida. Lista vazia significa rejeição (AF/AP)
ou parada sem transição (MT), nunca erro.
"""
from typing import List, Optional, Sequence

from nucleo.automato import FA, PDA, TM, Automato, Transicao
from nucleo.rotulos import EPSILON


def applicable_fa(transitions: Sequence[Transicao], state: str, symbol: Optional[str]) -> List[Transicao]:
    return [t for t in transitions if t.source == state and t.label.symbol == symbol]


def applicable_pda(transitions: Sequence[Transicao], state: str,
                   symbol: Optional[str], stack_top: Optional[str]) -> List[Transicao]:
    """Transições aplicáveis do AP: as que consomem o símbolo atual vêm
    antes das transições-ε."""
    consuming: List[Transicao] = []
    epsilon: List[Transicao] = []
    for t in transitions:
        if t.source != state:
            continue
        label = t.label
        if label.pop != EPSILON and label.pop != stack_top:
            continue
        if label.input == EPSILON:
            epsilon.append(t)
        elif symbol is not None and label.input == symbol:
            consuming.append(t)
    return consuming + epsilon


def applicable_tm(transitions: Sequence[Transicao], state: str, tape_symbol: str) -> List[Transicao]:
    return [t for t in transitions if t.source == state and t.label.read == tape_symbol]


def resolve_fa(transitions, state, symbol) -> Optional[Transicao]:
    return next(iter(applicable_fa(transitions, state, symbol)), None)


def resolve_pda(transitions, state, symbol, stack_top) -> Optional[Transicao]:
    return next(iter(applicable_pda(transitions, state, symbol, stack_top)), None)


def resolve_tm(transitions, state, tape_symbol) -> Optional[Transicao]:
    return next(iter(applicable_tm(transitions, state, tape_symbol)), None)


def applicable(automato: Automato, config) -> List[Transicao]:
    """Lista ordenada de transições aplicáveis à configuração atual."""
    if automato.formalism == FA:
        return applicable_fa(automato.transitions, config.state, config.current_symbol())
    if automato.formalism == PDA:
        return applicable_pda(automato.transitions, config.state,
                              config.current_symbol(), config.stack.peek())
    if automato.formalism == TM:
        return applicable_tm(automato.transitions, config.state, config.tape.read(config.head))
    raise ValueError(f"Formalismo desconhecido: {automato.formalism!r}")


def resolve(automato: Automato, config) -> Optional[Transicao]:
    return next(iter(applicable(automato, config)), None)
