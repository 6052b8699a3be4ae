from minigo.evaluation.evaluator import Evaluator
from minigo.evaluation.expressions import EXPRESSIONS, BINARY_OPS
from minigo.evaluation.statements import STATEMENTS

__all__ = ["Evaluator", "EXPRESSIONS", "BINARY_OPS", "STATEMENTS"]
