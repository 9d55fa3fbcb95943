"""
Ghosts Expression Evaluator

Resolves host expressions against a Directory.

Grammar (evaluated strictly left to right, no grouping)::

    expr := atom (op atom)*
    op   := '+'     union
          | '^'     difference
    atom := hostname | tag | macro

Examples:
    intel+e450          hosts tagged intel or e450
    prod^intel          prod hosts that are not intel
    sunprod             whatever the macro ``sunprod`` expands to
"""

import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ghosts.directory.host import Host
from ghosts.directory.model import AtomKind, Directory
from ghosts.engine.errors import BadExpression, CyclicMacro


UNION = '+'
DIFFERENCE = '^'

# Nested macro expansions allowed before an expression is rejected
MAX_MACRO_DEPTH = 200

# Operators are kept in the split result as odd-indexed items
OPERATOR_PATTERN = re.compile(r'([+^])')


def tokenize(expression: str, macro: Optional[str] = None) -> Tuple[List[str], List[str]]:
    """
    Split an expression into atoms and the operators between them.

    Args:
        expression: Expression text
        macro: Name of the macro the text belongs to, for error messages

    Returns:
        Tuple of (atoms, operators) with ``len(atoms) == len(operators) + 1``
    """
    if not expression.strip():
        raise BadExpression(expression, "empty expression", macro)

    parts = OPERATOR_PATTERN.split(expression)
    atoms = [part.strip() for part in parts[0::2]]
    operators = parts[1::2]

    for index, atom in enumerate(atoms):
        if not atom:
            if index == 0:
                problem = f"leading operator '{operators[0]}'"
            elif index == len(atoms) - 1:
                problem = f"trailing operator '{operators[-1]}'"
            else:
                problem = f"consecutive operators '{operators[index - 1]}{operators[index]}'"
            raise BadExpression(expression, problem, macro)
        if len(atom.split()) > 1:
            raise BadExpression(expression, f"missing operator in {atom!r}", macro)

    return atoms, operators


class ExpressionEvaluator:
    """
    Evaluate host expressions against one Directory.

    Macros are expanded on demand and each macro's hosts are cached by
    name, since the directory does not change after loading. The names
    being expanded on the current path travel down each call, so a macro
    that reaches itself raises CyclicMacro instead of recursing forever.
    """

    def __init__(self, directory: Directory):
        self.directory = directory
        self._macro_hosts: Dict[str, Dict[str, Host]] = {}

    def evaluate(self, expression: str) -> List[Host]:
        """
        Evaluate one expression.

        Returns:
            Matching hosts in declaration order; empty when nothing matches
        """
        return self.directory.ordered(self._evaluate(expression, ()).values())

    def evaluate_many(self, expressions: Iterable[str]) -> List[Host]:
        """
        Evaluate several independent expressions and concatenate the results.

        Hosts appear once, at their first occurrence. The first failing
        expression raises.
        """
        result: Dict[str, Host] = {}
        for expression in expressions:
            for host in self.evaluate(expression):
                result.setdefault(host.name, host)
        return list(result.values())

    def _evaluate(self, expression: str, expanding: Sequence[str]) -> Dict[str, Host]:
        macro = expanding[-1] if expanding else None
        atoms, operators = tokenize(expression, macro)

        accumulator = self._resolve(atoms[0], expression, expanding)
        for op, atom in zip(operators, atoms[1:]):
            operand = self._resolve(atom, expression, expanding)
            if op == UNION:
                for name, host in operand.items():
                    accumulator.setdefault(name, host)
            elif op == DIFFERENCE:
                for name in operand:
                    accumulator.pop(name, None)

        return accumulator

    def _resolve(self, atom: str, expression: str, expanding: Sequence[str]) -> Dict[str, Host]:
        resolution = self.directory.resolve_atom(atom)

        if resolution.kind is AtomKind.MACRO:
            if atom in expanding:
                cycle = list(expanding[expanding.index(atom):]) + [atom]
                raise CyclicMacro(expression, cycle)
            cached = self._macro_hosts.get(atom)
            if cached is None:
                if len(expanding) >= MAX_MACRO_DEPTH:
                    raise BadExpression(
                        expression,
                        f"macros nested deeper than {MAX_MACRO_DEPTH} levels",
                        expanding[-1],
                    )
                cached = self._evaluate(resolution.expression, tuple(expanding) + (atom,))
                self._macro_hosts[atom] = cached
            # The caller mutates what it gets back
            return dict(cached)

        return {host.name: host for host in resolution.hosts}
