import unittest

from nucleo.automato import FA, PDA, TM, Automato
from nucleo.motor import Configuracao
from nucleo.resolvedor import (
    applicable,
    applicable_pda,
    resolve,
    resolve_fa,
    resolve_pda,
    resolve_tm,
)


def build(formalism, states, transitions):
    a = Automato(formalism)
    for name, initial, final in states:
        a.add_state(name, initial, final)
    for src, dst, label in transitions:
        a.add_transition(src, dst, label)
    return a


class TestResolveFA(unittest.TestCase):
    def setUp(self):
        self.automato = build(FA, [("q0", True, False), ("q1", False, True), ("q2", False, False)], [
            ("q0", "q1", "a"),
            ("q0", "q2", "a"),
            ("q1", "q0", "b"),
        ])

    def test_first_in_declaration_order(self):
        t = resolve_fa(self.automato.transitions, "q0", "a")
        self.assertEqual(t.target, "q1")

    def test_no_match(self):
        self.assertIsNone(resolve_fa(self.automato.transitions, "q0", "b"))
        self.assertIsNone(resolve_fa(self.automato.transitions, "q0", None))

    def test_only_from_current_state(self):
        self.assertIsNone(resolve_fa(self.automato.transitions, "q2", "a"))


class TestResolvePDA(unittest.TestCase):
    def test_consuming_transition_wins_over_epsilon(self):
        a = build(PDA, [("q0", True, False), ("q1", False, False), ("q2", False, False)], [
            ("q0", "q1", "ε,ε→Y"),
            ("q0", "q2", "a,ε→X"),
        ])
        t = resolve_pda(a.transitions, "q0", "a", None)
        self.assertEqual(t.target, "q2")
        self.assertEqual([t.target for t in applicable_pda(a.transitions, "q0", "a", None)], ["q2", "q1"])

    def test_epsilon_used_when_nothing_consumes(self):
        a = build(PDA, [("q0", True, False), ("q1", False, False)], [
            ("q0", "q1", "ε,ε→Y"),
            ("q0", "q1", "b,ε→X"),
        ])
        t = resolve_pda(a.transitions, "q0", "a", None)
        self.assertEqual(str(t.label), "ε,ε→Y")

    def test_pop_must_match_stack_top(self):
        a = build(PDA, [("q0", True, False), ("q1", False, False)], [
            ("q0", "q1", "b,X→ε"),
        ])
        self.assertIsNone(resolve_pda(a.transitions, "q0", "b", None))
        self.assertIsNone(resolve_pda(a.transitions, "q0", "b", "Y"))
        self.assertIsNotNone(resolve_pda(a.transitions, "q0", "b", "X"))

    def test_ineligible_consuming_falls_back_to_epsilon(self):
        a = build(PDA, [("q0", True, False), ("q1", False, False), ("q2", False, False)], [
            ("q0", "q1", "a,X→ε"),
            ("q0", "q2", "ε,ε→ε"),
        ])
        t = resolve_pda(a.transitions, "q0", "a", None)
        self.assertEqual(t.target, "q2")

    def test_end_of_input_only_epsilon(self):
        a = build(PDA, [("q0", True, False), ("q1", False, False)], [
            ("q0", "q1", "a,ε→ε"),
            ("q0", "q1", "ε,ε→ε"),
        ])
        self.assertEqual([str(t.label) for t in applicable_pda(a.transitions, "q0", None, None)], ["ε,ε→ε"])


class TestResolveTM(unittest.TestCase):
    def test_matches_tape_symbol(self):
        a = build(TM, [("q0", True, False), ("q1", False, True)], [
            ("q0", "q0", "1→1,R"),
            ("q0", "q1", "_→_,L"),
            ("q0", "q0", "_→1,R"),
        ])
        self.assertEqual(resolve_tm(a.transitions, "q0", "1").target, "q0")
        self.assertEqual(resolve_tm(a.transitions, "q0", "_").target, "q1")
        self.assertIsNone(resolve_tm(a.transitions, "q0", "0"))
        self.assertIsNone(resolve_tm(a.transitions, "q1", "1"))


class TestResolveWithConfiguration(unittest.TestCase):
    def test_dispatch_reads_the_right_context(self):
        a = build(TM, [("q0", True, False), ("q1", False, True)], [("q0", "q1", "x→y,R")])
        config = Configuracao(a, "x")
        self.assertEqual(resolve(a, config).target, "q1")
        config.head = 3
        self.assertEqual(applicable(a, config), [])

    def test_fa_context(self):
        a = build(FA, [("q0", True, False), ("q1", False, True)], [("q0", "q1", "b")])
        config = Configuracao(a, "ab")
        self.assertIsNone(resolve(a, config))
        config.cursor = 1
        self.assertEqual(resolve(a, config).target, "q1")

    def test_pda_context_uses_stack_top(self):
        a = build(PDA, [("q0", True, False), ("q1", False, True)], [("q0", "q1", "a,Z→ε")])
        config = Configuracao(a, "a")
        self.assertIsNone(resolve(a, config))
        config.stack.push("Z")
        self.assertEqual(resolve(a, config).target, "q1")


if __name__ == '__main__':
    unittest.main()
