import unittest

from nucleo.automato import (
    FA,
    PDA,
    TM,
    Automato,
    AutomatoMalformado,
    Estado,
    Transicao,
    parse_label,
)
from nucleo.rotulos import EPSILON, RotuloAF, RotuloAP, RotuloMT


def fa_definition():
    return {
        "formalism": FA,
        "states": [
            {"name": "q0", "initial": True, "final": False},
            {"name": "q1", "initial": False, "final": True},
        ],
        "transitions": [
            {"from": "q0", "to": "q1", "label": "a"},
            {"from": "q1", "to": "q0", "label": "b"},
        ],
    }


class TestRotulos(unittest.TestCase):
    def test_fa_label_is_the_symbol(self):
        self.assertEqual(parse_label(FA, "a"), RotuloAF("a"))
        self.assertEqual(str(parse_label(FA, "ab")), "ab")

    def test_fa_label_must_not_be_empty(self):
        with self.assertRaises(ValueError):
            parse_label(FA, "")

    def test_pda_label(self):
        self.assertEqual(parse_label(PDA, "a,ε→X"), RotuloAP("a", EPSILON, "X"))
        self.assertEqual(parse_label(PDA, "b,X→ε"), RotuloAP("b", "X", EPSILON))

    def test_pda_label_aliases(self):
        # '&' as epsilon, ASCII arrow, and empty components
        self.assertEqual(parse_label(PDA, "&,&->X"), RotuloAP(EPSILON, EPSILON, "X"))
        self.assertEqual(parse_label(PDA, "a,→"), RotuloAP("a", EPSILON, EPSILON))

    def test_pda_label_serialization(self):
        self.assertEqual(str(RotuloAP("a", EPSILON, "X")), "a,ε→X")
        self.assertFalse(RotuloAP(EPSILON, "X", "Y").consumes_input)

    def test_pda_label_malformed(self):
        for text in ("aX", "a→X", "a,b,c→X"):
            with self.assertRaises(ValueError):
                parse_label(PDA, text)

    def test_tm_label(self):
        self.assertEqual(parse_label(TM, "1→0,L"), RotuloMT("1", "0", "L"))
        self.assertEqual(parse_label(TM, "_->1,r"), RotuloMT("_", "1", "R"))
        self.assertEqual(parse_label(TM, "1→1,N"), RotuloMT("1", "1", "S"))
        self.assertEqual(str(RotuloMT("_", "_", "L")), "_→_,L")

    def test_tm_label_malformed(self):
        for text in ("1,0", "1→0", "1→0,X", "→0,R"):
            with self.assertRaises(ValueError):
                parse_label(TM, text)

    def test_structured_label_passes_through(self):
        label = RotuloMT("1", "0", "R")
        self.assertIs(parse_label(TM, label), label)
        with self.assertRaises(ValueError):
            parse_label(FA, label)

    def test_unknown_formalism(self):
        with self.assertRaises(ValueError):
            parse_label("nfa", "a")


class TestAutomato(unittest.TestCase):
    def test_builder(self):
        a = Automato(TM)
        a.add_state("q0", is_start=True)
        a.add_state("q1", is_final=True)
        t = a.add_transition("q0", "q1", "1→1,R")

        self.assertEqual(t, Transicao("q0", "q1", RotuloMT("1", "1", "R")))
        self.assertEqual(a.start_state, "q0")
        self.assertEqual(a.final_states, ["q1"])
        self.assertTrue(a.is_final("q1"))
        self.assertFalse(a.is_final("missing"))
        self.assertEqual(a.get_state("q0"), Estado("q0", True, False))
        self.assertEqual(a.transitions_from("q0"), [t])
        a.validate()

    def test_add_state_rejects_duplicate_name(self):
        a = Automato()
        a.add_state("q0", is_start=True)
        with self.assertRaises(ValueError):
            a.add_state("q0")

    def test_add_transition_rejects_unknown_state(self):
        a = Automato()
        a.add_state("q0", is_start=True)
        with self.assertRaises(AutomatoMalformado):
            a.add_transition("q0", "q9", "a")

    def test_malformed_is_a_value_error(self):
        self.assertTrue(issubclass(AutomatoMalformado, ValueError))

    def test_unknown_formalism(self):
        with self.assertRaises(ValueError):
            Automato("nfa")

    def test_validate_undefined_source(self):
        data = fa_definition()
        data["transitions"].append({"from": "q7", "to": "q0", "label": "a"})
        with self.assertRaises(AutomatoMalformado):
            Automato.from_dict(data)

    def test_validate_undefined_target(self):
        data = fa_definition()
        data["transitions"].append({"from": "q0", "to": "q7", "label": "a"})
        with self.assertRaises(AutomatoMalformado):
            Automato.from_dict(data)

    def test_validate_no_initial_state(self):
        data = fa_definition()
        data["states"][0]["initial"] = False
        with self.assertRaises(AutomatoMalformado):
            Automato.from_dict(data)

    def test_validate_two_initial_states(self):
        data = fa_definition()
        data["states"][1]["initial"] = True
        with self.assertRaises(AutomatoMalformado):
            Automato.from_dict(data)

    def test_other_oddities_are_legal(self):
        data = fa_definition()
        data["states"].append({"name": "lonely", "initial": False, "final": True})
        data["transitions"].append({"from": "q0", "to": "q1", "label": "a"})
        a = Automato.from_dict(data)
        self.assertEqual(len(a.transitions), 3)
        self.assertEqual(a.final_states, ["q1", "lonely"])

    def test_declaration_order_is_preserved(self):
        a = Automato.from_dict(fa_definition())
        self.assertEqual([t.label.symbol for t in a.transitions], ["a", "b"])
        self.assertEqual([s.name for s in a.states], ["q0", "q1"])

    def test_malformed_label_is_skipped(self):
        data = {
            "formalism": PDA,
            "states": [{"name": "q0", "initial": True, "final": True}],
            "transitions": [
                {"from": "q0", "to": "q0", "label": "a,ε→X"},
                {"from": "q0", "to": "q0", "label": "nonsense"},
            ],
        }
        with self.assertLogs("nucleo.automato", level="WARNING"):
            a = Automato.from_dict(data)
        self.assertEqual(len(a.transitions), 1)

    def test_duplicate_state_name_is_malformed(self):
        data = fa_definition()
        data["states"].append({"name": "q0", "initial": False, "final": True})
        with self.assertRaises(AutomatoMalformado):
            Automato.from_dict(data)

    def test_validate_rejects_duplicate_state_name(self):
        a = Automato()
        a.add_state("q0", is_start=True)
        a.states.append(Estado("q0", False, True))
        with self.assertRaises(AutomatoMalformado):
            a.validate()

    def test_transition_without_source_is_malformed(self):
        data = fa_definition()
        data["transitions"].append({"to": "q0", "label": "a"})
        with self.assertRaises(AutomatoMalformado):
            Automato.from_dict(data)

    def test_transition_without_target_is_malformed(self):
        data = fa_definition()
        data["transitions"].append({"from": "q0", "label": "a"})
        with self.assertRaises(AutomatoMalformado):
            Automato.from_dict(data)

    def test_state_without_name_is_malformed(self):
        data = fa_definition()
        data["states"].append({"initial": False})
        with self.assertRaises(AutomatoMalformado):
            Automato.from_dict(data)

    def test_unknown_formalism_in_definition_is_malformed(self):
        data = fa_definition()
        data["formalism"] = "nfa"
        with self.assertRaises(AutomatoMalformado):
            Automato.from_dict(data)

    def test_definition_must_be_an_object(self):
        for data in ([], "fa", None):
            with self.subTest(data=data):
                with self.assertRaises(AutomatoMalformado):
                    Automato.from_dict(data)

    def test_json_round_trip(self):
        a = Automato.from_dict(fa_definition())
        b = Automato.from_json(a.to_json())
        self.assertEqual(b.to_dict(), a.to_dict())
        self.assertEqual(b.transitions, a.transitions)

    def test_to_dict_uses_label_encoding(self):
        a = Automato(PDA)
        a.add_state("q0", is_start=True)
        a.add_transition("q0", "q0", "a,&→X")
        self.assertEqual(a.to_dict()["transitions"], [{"from": "q0", "to": "q0", "label": "a,ε→X"}])


if __name__ == '__main__':
    unittest.main()
