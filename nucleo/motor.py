"""
Motor de execução passo a passo para AF, AP e MT.

O motor é dono da configuração corrente e é o único que altera o status da
execução. Cada passo é decidido e aplicado de forma síncrona
(`decide_and_apply`); a execução automática (`run`) é uma cadeia de passos
adiados por um agendador com a interface `after`/`after_cancel` do tkinter.
"""
import logging
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Tuple

from nucleo.automato import FA, PDA, TM, Automato, Transicao
from nucleo.memoria import Fita, Pilha
from nucleo.resolvedor import resolve_fa, resolve_pda, resolve_tm
from nucleo.rotulos import EPSILON

logger = logging.getLogger(__name__)

DEFAULT_STEP_DELAY_MS = 200
DEFAULT_MAX_STEPS = 1000


class StatusExecucao(Enum):
    PRONTO = "PRONTO"
    EXECUTANDO = "EXECUTANDO"
    ACEITO = "ACEITO"
    REJEITADO = "REJEITADO"
    SEM_TRANSICAO = "SEM_TRANSICAO"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL


_TERMINAL = {StatusExecucao.ACEITO, StatusExecucao.REJEITADO, StatusExecucao.SEM_TRANSICAO}


class Snapshot(NamedTuple):
    state: str
    cursor: int
    head: int
    stack: Tuple[str, ...]
    tape: Tuple[str, ...]


class EventoPasso(NamedTuple):
    transition: Optional[Transicao]
    snapshot: Snapshot
    status: StatusExecucao
    generation: int = 0


class Configuracao:
    """Estado mutável de uma execução: estado de controle, cursor de
    entrada, pilha, fita e cabeça."""
    def __init__(self, automato: Automato, input_str: str):
        self.input_str = input_str
        self.state: str = automato.start_state
        self.cursor = 0
        self.stack = Pilha()
        self.tape = Fita(input_str if automato.formalism == TM else "")
        self.head = 0

    def at_end_of_input(self) -> bool:
        return self.cursor >= len(self.input_str)

    def current_symbol(self) -> Optional[str]:
        if self.at_end_of_input():
            return None
        return self.input_str[self.cursor]

    def snapshot(self) -> Snapshot:
        return Snapshot(self.state, self.cursor, self.head,
                        self.stack.snapshot(), self.tape.snapshot())

    def __eq__(self, other):
        if not isinstance(other, Configuracao):
            return NotImplemented
        return self.input_str == other.input_str and self.snapshot() == other.snapshot()

    def __repr__(self):
        return f"Configuracao({self.snapshot()!r})"


class MotorExecucao:
    def __init__(self, automato: Automato, input_str: str = "", scheduler=None,
                 step_delay_ms: int = DEFAULT_STEP_DELAY_MS, manual_ack: bool = False,
                 max_steps: Optional[int] = DEFAULT_MAX_STEPS):
        """
        - scheduler: objeto com after(ms, callback) e after_cancel(handle),
          normalmente a janela tkinter. Sem ele, run() executa tudo de uma vez.
        - manual_ack: se True, cada transição aplicada deixa um passo "em voo"
          até que a camada visual chame acknowledge_step().
        - max_steps: limite de transições na execução automática (None = sem limite).
        """
        automato.validate()
        self.automato = automato
        self.input_str = input_str
        self.scheduler = scheduler
        self.step_delay_ms = step_delay_ms
        self.manual_ack = manual_ack
        self.max_steps = max_steps

        self._listeners: List[Callable[[EventoPasso], None]] = []
        self._pending = None
        self._generation = 0
        self._draining = False
        self.reset()

    # Estado observável

    @property
    def status(self) -> StatusExecucao:
        return self._status

    @property
    def configuration(self) -> Configuracao:
        return self._config

    @property
    def step_in_flight(self) -> bool:
        return self._in_flight

    @property
    def running(self) -> bool:
        return self._auto

    @property
    def generation(self) -> int:
        """Incrementado a cada reset; identifica a execução corrente."""
        return self._generation

    def snapshot(self) -> Snapshot:
        return self._config.snapshot()

    def add_listener(self, callback: Callable[[EventoPasso], None]):
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[EventoPasso], None]):
        if callback in self._listeners:
            self._listeners.remove(callback)

    # Ciclo de vida

    def load(self, automato: Automato, input_str: Optional[str] = None):
        """Instala um novo autômato. Se ele for malformado, o anterior continua instalado."""
        automato.validate()
        self.automato = automato
        self.reset(input_str)

    def reset(self, input_str: Optional[str] = None):
        self._cancel_pending()
        self._generation += 1
        if input_str is not None:
            self.input_str = input_str
        self._config = Configuracao(self.automato, self.input_str)
        self._status = StatusExecucao.PRONTO
        self._in_flight = False
        self._auto = False
        self.steps = 0
        self.consumed = 0
        self.history: List[EventoPasso] = []
        logger.debug("Pronto no modo %s a partir de %s.",
                     self.automato.formalism.upper(), self._config.state)

    def step(self) -> Optional[EventoPasso]:
        """Executa um passo. Interrompe a execução automática, se houver.
        Retorna None se o passo foi ignorado."""
        if self._in_flight:
            logger.debug("Passo ignorado: o passo anterior ainda não foi concluído.")
            return None
        if self._status.is_terminal:
            return None
        self._auto = False
        self._cancel_pending()
        return self._advance()

    def run(self) -> bool:
        """Inicia a execução automática. Retorna False se ela foi ignorada,
        inclusive quando o limite de passos já foi atingido."""
        if self._in_flight or self._auto or self._status.is_terminal:
            return False
        if self._limit_reached():
            return False
        self._auto = True
        self._status = StatusExecucao.EXECUTANDO
        logger.debug("Execução iniciada com entrada %r.", self.input_str)
        if self.scheduler is None:
            self._drain()
        else:
            self._advance()
        return True

    def pause(self):
        self._auto = False
        self._cancel_pending()

    def acknowledge_step(self, generation: Optional[int] = None):
        """Chamado pela camada visual quando a animação do passo termina.

        Com `generation` (o do EventoPasso animado), confirmações de uma
        execução anterior a um reset são ignoradas."""
        if not self._in_flight:
            return
        if generation is not None and generation != self._generation:
            logger.debug("Confirmação obsoleta ignorada (geração %d).", generation)
            return
        self._in_flight = False
        if not self._auto or self._draining:
            return
        if self.scheduler is None:
            self._drain()
        else:
            self._schedule_next()

    # Decisão e aplicação

    def decide_and_apply(self) -> EventoPasso:
        """Decide e aplica um passo de forma síncrona, sem notificar ninguém."""
        if self._status.is_terminal:
            return EventoPasso(None, self._config.snapshot(), self._status, self._generation)

        self._status = StatusExecucao.EXECUTANDO
        formalism = self.automato.formalism
        if formalism == FA:
            transition = self._step_fa()
        elif formalism == PDA:
            transition = self._step_pda()
        elif formalism == TM:
            transition = self._step_tm()
        else:
            raise ValueError(f"Formalismo desconhecido: {formalism!r}")

        if transition is not None:
            self.steps += 1
            if formalism == TM:
                self.consumed = max(self.consumed, self._config.head)
            else:
                self.consumed = self._config.cursor

        evento = EventoPasso(transition, self._config.snapshot(), self._status, self._generation)
        self.history.append(evento)
        return evento

    def _finish_at_end_of_input(self):
        config = self._config
        if self.automato.is_final(config.state):
            self._finish(StatusExecucao.ACEITO)
        else:
            self._finish(StatusExecucao.REJEITADO)

    def _finish(self, status: StatusExecucao):
        self._status = status
        self._auto = False
        logger.info("Execução terminou em %s: %s.", self._config.state, status.value)

    def _step_fa(self) -> Optional[Transicao]:
        config = self._config
        if config.at_end_of_input():
            self._finish_at_end_of_input()
            return None

        symbol = config.current_symbol()
        transition = resolve_fa(self.automato.transitions, config.state, symbol)
        if transition is None:
            logger.info("Sem transição para %r a partir de %s.", symbol, config.state)
            self._finish(StatusExecucao.REJEITADO)
            return None

        config.state = transition.target
        config.cursor += 1
        logger.debug("Leu %s: %s → %s.", symbol, transition.source, transition.target)
        return transition

    def _step_pda(self) -> Optional[Transicao]:
        config = self._config
        if config.at_end_of_input():
            self._finish_at_end_of_input()
            return None

        transition = resolve_pda(self.automato.transitions, config.state,
                                 config.current_symbol(), config.stack.peek())
        if transition is None:
            logger.info("Nenhuma transição válida do AP a partir de %s.", config.state)
            self._finish(StatusExecucao.REJEITADO)
            return None

        label = transition.label
        if label.pop != EPSILON:
            config.stack.pop()
        if label.push != EPSILON:
            config.stack.push(label.push)
        if label.consumes_input:
            config.cursor += 1
        config.state = transition.target
        logger.debug("AP %s → %s usando %s.", transition.source, transition.target, label)
        return transition

    def _step_tm(self) -> Optional[Transicao]:
        config = self._config
        if self.automato.is_final(config.state):
            self._finish(StatusExecucao.ACEITO)
            return None

        symbol = config.tape.read(config.head)
        transition = resolve_tm(self.automato.transitions, config.state, symbol)
        if transition is None:
            logger.info("MT parou: sem transição para %r em %s.", symbol, config.state)
            self._finish(StatusExecucao.SEM_TRANSICAO)
            return None

        label = transition.label
        config.tape.write(config.head, label.write)
        config.head = Fita.move(config.head, label.direction)
        config.state = transition.target
        logger.debug("MT %s → %s escreveu %s, moveu %s.",
                     transition.source, transition.target, label.write, label.direction)
        return transition

    # Encadeamento de passos

    def _advance(self) -> EventoPasso:
        evento = self.decide_and_apply()
        if evento.transition is not None and self.manual_ack:
            self._in_flight = True
        self._emit(evento)
        if self._auto and not self._in_flight and self.scheduler is not None:
            self._schedule_next()
        return evento

    def _emit(self, evento: EventoPasso):
        for listener in list(self._listeners):
            listener(evento)

    def _drain(self):
        self._draining = True
        try:
            while self._auto and not self._in_flight and not self._status.is_terminal:
                if self._limit_reached():
                    return
                self._advance()
        finally:
            self._draining = False

    def _schedule_next(self):
        if self._pending is not None or not self._auto or self._status.is_terminal:
            return
        if self._limit_reached():
            return
        generation = self._generation
        self._pending = self.scheduler.after(self.step_delay_ms,
                                             lambda: self._deferred_step(generation))

    def _deferred_step(self, generation: int):
        self._pending = None
        if generation != self._generation or not self._auto or self._in_flight:
            return
        self._advance()

    def _limit_reached(self) -> bool:
        if self.max_steps is not None and self.steps >= self.max_steps:
            logger.warning("Limite de %d passos atingido; execução automática pausada.",
                           self.max_steps)
            self._auto = False
            return True
        return False

    def _cancel_pending(self):
        if self._pending is not None and self.scheduler is not None:
            self.scheduler.after_cancel(self._pending)
        self._pending = None


def simulate_history(automato: Automato, input_str: str,
                     max_steps: Optional[int] = DEFAULT_MAX_STEPS) -> Tuple[List[EventoPasso], StatusExecucao]:
    """
    Executa o autômato até o fim sem animação.

    Retorna (eventos, status). Se o limite de passos for atingido, o status
    fica em EXECUTANDO.
    """
    motor = MotorExecucao(automato, input_str, max_steps=max_steps)
    motor.run()
    return list(motor.history), motor.status


def simulate(automato: Automato, input_str: str) -> bool:
    """Simulação rápida que retorna apenas se foi aceito ou não."""
    _, status = simulate_history(automato, input_str)
    return status == StatusExecucao.ACEITO
