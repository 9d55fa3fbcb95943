"""
Tests for host expression evaluation.
"""

import pytest

from ghosts.directory.model import Directory
from ghosts.engine.errors import BadExpression, CyclicMacro
from ghosts.engine.evaluator import MAX_MACRO_DEPTH, ExpressionEvaluator, tokenize


def names(hosts):
    return [h.name for h in hosts]


class TestTokenize:
    """Test splitting expressions into atoms and operators."""

    def test_single_atom(self):
        assert tokenize("prod") == (["prod"], [])

    def test_operators_with_whitespace(self):
        assert tokenize(" solaris ^ e450 + bilbo ") == (["solaris", "e450", "bilbo"], ["^", "+"])

    @pytest.mark.parametrize("expression,problem", [
        ("", "empty expression"),
        ("   ", "empty expression"),
        ("+prod", "leading operator"),
        ("prod^", "trailing operator"),
        ("prod+^intel", "consecutive operators"),
        ("prod intel", "missing operator"),
    ])
    def test_bad_expressions(self, expression: str, problem: str):
        with pytest.raises(BadExpression, match=problem):
            tokenize(expression)


class TestEvaluate:
    """Test evaluation against the sample directory."""

    def test_union(self, directory: Directory):
        evaluator = ExpressionEvaluator(directory)
        assert names(evaluator.evaluate("intel+e450")) == ["bilbo", "tolkien"]

    def test_difference(self, directory: Directory):
        evaluator = ExpressionEvaluator(directory)
        assert names(evaluator.evaluate("prod^intel")) == ["baggins"]

    def test_macro(self, directory: Directory):
        evaluator = ExpressionEvaluator(directory)
        assert names(evaluator.evaluate("sunprod")) == ["baggins"]

    def test_unknown_tag_is_empty(self, directory: Directory):
        evaluator = ExpressionEvaluator(directory)
        assert evaluator.evaluate("nosuchtag") == []

    def test_unknown_operand_contributes_nothing(self, directory: Directory):
        evaluator = ExpressionEvaluator(directory)
        assert names(evaluator.evaluate("prod+nosuchtag")) == ["bilbo", "baggins"]
        assert names(evaluator.evaluate("prod^nosuchtag")) == ["bilbo", "baggins"]

    def test_hostname_atoms(self, directory: Directory):
        evaluator = ExpressionEvaluator(directory)
        assert names(evaluator.evaluate("gandalf+bilbo")) == ["bilbo", "gandalf"]
        assert names(evaluator.evaluate("mordor^frodo")) == ["gandalf"]

    def test_result_in_declaration_order(self, directory: Directory):
        evaluator = ExpressionEvaluator(directory)
        result = evaluator.evaluate("mordor+devel+intel")
        assert names(result) == ["bilbo", "tolkien", "frodo", "gandalf"]
        sequences = [h.sequence for h in result]
        assert sequences == sorted(sequences)

    def test_left_to_right_without_precedence(self, directory: Directory):
        evaluator = ExpressionEvaluator(directory)
        # (prod ^ intel) + intel, not prod ^ (intel + intel)
        assert names(evaluator.evaluate("prod^intel+intel")) == ["bilbo", "baggins"]
        assert names(evaluator.evaluate("intel+prod^intel")) == ["baggins"]

    def test_union_is_idempotent_and_commutative(self, directory: Directory):
        evaluator = ExpressionEvaluator(directory)
        assert evaluator.evaluate("prod+prod") == evaluator.evaluate("prod")
        assert evaluator.evaluate("solaris+intel") == evaluator.evaluate("intel+solaris")

    def test_difference_is_not_commutative(self, directory: Directory):
        evaluator = ExpressionEvaluator(directory)
        assert names(evaluator.evaluate("prod^solaris")) == ["bilbo"]
        assert names(evaluator.evaluate("solaris^prod")) == ["tolkien"]

    def test_macro_is_referentially_transparent(self):
        directory = Directory.from_string(
            "inner = solaris ^ e450\n"
            "outer = inner + intel\n"
            "bilbo     prod  intel  linux\n"
            "baggins   prod  e4500  solaris\n"
            "tolkien   devel e450   solaris\n"
        )
        evaluator = ExpressionEvaluator(directory)

        assert evaluator.evaluate("outer") == evaluator.evaluate("solaris^e450+intel")
        assert names(evaluator.evaluate("outer")) == ["bilbo", "baggins"]

    def test_macro_defined_after_use(self):
        directory = Directory.from_string(
            "first = second\n"
            "bilbo prod\n"
            "second = prod\n"
        )
        assert names(ExpressionEvaluator(directory).evaluate("first")) == ["bilbo"]

    def test_macro_with_unknown_reference(self):
        directory = Directory.from_string("ghost = nowhere + prod\nbilbo prod\n")
        assert names(ExpressionEvaluator(directory).evaluate("ghost")) == ["bilbo"]

    def test_same_macro_twice_is_not_a_cycle(self):
        directory = Directory.from_string(
            "base = prod\n"
            "twice = base + base\n"
            "bilbo prod\n"
        )
        assert names(ExpressionEvaluator(directory).evaluate("twice")) == ["bilbo"]


class TestMacroCycles:
    """Test cycle detection during macro expansion."""

    def test_self_reference(self):
        directory = Directory.from_string("m = m\n")

        with pytest.raises(CyclicMacro) as exc_info:
            ExpressionEvaluator(directory).evaluate("m")

        assert exc_info.value.cycle == ("m", "m")
        assert "m -> m" in str(exc_info.value)

    def test_mutual_reference(self):
        directory = Directory.from_string(
            "a = b + prod\n"
            "b = c\n"
            "c = a\n"
            "bilbo prod\n"
        )

        with pytest.raises(CyclicMacro) as exc_info:
            ExpressionEvaluator(directory).evaluate("bilbo+a")

        assert exc_info.value.cycle == ("a", "b", "c", "a")

    def test_cycle_below_entry_point(self):
        directory = Directory.from_string(
            "top = loop\n"
            "loop = prod + loop\n"
        )

        with pytest.raises(CyclicMacro) as exc_info:
            ExpressionEvaluator(directory).evaluate("top")

        assert exc_info.value.cycle == ("loop", "loop")

    def test_cycle_is_a_bad_expression(self):
        directory = Directory.from_string("m = m\n")
        with pytest.raises(BadExpression):
            ExpressionEvaluator(directory).evaluate("m")

    def test_malformed_macro_body(self):
        directory = Directory.from_string("broken = prod + + intel\n")

        with pytest.raises(BadExpression) as exc_info:
            ExpressionEvaluator(directory).evaluate("broken")

        assert exc_info.value.macro == "broken"
        assert "in macro 'broken'" in str(exc_info.value)


class TestEvaluateMany:
    """Test evaluating several independent expressions."""

    def test_concatenated_and_deduplicated(self, directory: Directory):
        evaluator = ExpressionEvaluator(directory)
        result = evaluator.evaluate_many(["mordor", "intel+e450", "gandalf"])
        assert names(result) == ["frodo", "gandalf", "bilbo", "tolkien"]

    def test_empty_list(self, directory: Directory):
        assert ExpressionEvaluator(directory).evaluate_many([]) == []

    def test_first_error_raises(self, directory: Directory):
        with pytest.raises(BadExpression):
            ExpressionEvaluator(directory).evaluate_many(["prod", "+bad"])


def doubling_chain(levels: int) -> str:
    """Macros where each level references the previous one twice."""
    lines = ["bilbo prod", "tolkien devel", "m0 = prod"]
    for level in range(1, levels + 1):
        lines.append(f"m{level} = m{level - 1} + m{level - 1}")
    return "\n".join(lines) + "\n"


def linear_chain(length: int) -> str:
    """Macros c0 = c1, c1 = c2, ... ending in the prod tag."""
    lines = ["bilbo prod"]
    for index in range(length):
        lines.append(f"c{index} = c{index + 1}")
    lines.append(f"c{length} = prod")
    return "\n".join(lines) + "\n"


class TestMacroNesting:
    """Test deeply shared and deeply nested macros."""

    def test_shared_macros_evaluated_once(self):
        directory = Directory.from_string(doubling_chain(30))
        evaluator = ExpressionEvaluator(directory)

        assert names(evaluator.evaluate("m30")) == ["bilbo"]
        assert names(evaluator.evaluate("m30+devel")) == ["bilbo", "tolkien"]

    def test_cached_macro_not_changed_by_later_expressions(self):
        directory = Directory.from_string(doubling_chain(3))
        evaluator = ExpressionEvaluator(directory)

        assert names(evaluator.evaluate("m3+devel")) == ["bilbo", "tolkien"]
        assert names(evaluator.evaluate("m3^bilbo")) == []
        assert names(evaluator.evaluate("m3")) == ["bilbo"]

    def test_long_chain_within_limit(self):
        directory = Directory.from_string(linear_chain(MAX_MACRO_DEPTH - 1))
        assert names(ExpressionEvaluator(directory).evaluate("c0")) == ["bilbo"]

    def test_chain_deeper_than_limit(self):
        directory = Directory.from_string(linear_chain(600))

        with pytest.raises(BadExpression, match="nested deeper than"):
            ExpressionEvaluator(directory).evaluate("c0")
