import numpy as np
import pytest
import sympy as sp

from evolutionary_regression.expression_tree import (
    Expression, VariableNode, ConstantNode, BinaryOpNode, UnaryOpNode,
    DIVISION_BY_ZERO_VALUE, DOMAIN_ERROR_VALUE,
)
from evolutionary_regression.expression_tree.utils.tree_utils import (
    get_all_nodes, get_nodes_with_levels, get_subtree, replace_subtree,
)
from evolutionary_regression.generator import ExpressionGenerator
from evolutionary_regression.expression_tree.core.operators import ALL_OPERATORS


def x():
    return VariableNode()


def c(value):
    return ConstantNode(value)


def test_evaluate_basic_operators():
    expr = Expression(BinaryOpNode('+', BinaryOpNode('*', x(), c(2.0)), c(1.0)))
    assert expr.evaluate(3.0) == pytest.approx(7.0)
    assert Expression(UnaryOpNode('neg', x())).evaluate(4.0) == -4.0
    assert Expression(BinaryOpNode('^', x(), c(2.0))).evaluate(-3.0) == pytest.approx(9.0)
    assert Expression(UnaryOpNode('sin', x())).evaluate(0.5) == pytest.approx(np.sin(0.5))


def test_division_by_zero_is_protected():
    assert Expression(BinaryOpNode('/', x(), c(0.0))).evaluate(5.0) == DIVISION_BY_ZERO_VALUE
    assert Expression(BinaryOpNode('/', x(), x())).evaluate(0.0) == DIVISION_BY_ZERO_VALUE
    assert Expression(BinaryOpNode('/', x(), c(4.0))).evaluate(2.0) == pytest.approx(0.5)


@pytest.mark.parametrize("root", [
    UnaryOpNode('log', c(-1.0)),
    UnaryOpNode('sqrt', c(-4.0)),
    BinaryOpNode('^', c(-8.0), c(0.5)),
    BinaryOpNode('logb', c(-2.0), c(3.0)),
    BinaryOpNode('-', UnaryOpNode('exp', c(1000.0)), UnaryOpNode('exp', c(1000.0))),
])
def test_domain_errors_yield_sentinel(root):
    assert Expression(root).evaluate(1.0) == DOMAIN_ERROR_VALUE


def test_overflow_propagates_as_infinity():
    value = Expression(UnaryOpNode('exp', x())).evaluate(1000.0)
    assert np.isinf(value) and value > 0


def test_evaluate_many_matches_pointwise():
    expr = Expression(BinaryOpNode('/', UnaryOpNode('cos', x()), BinaryOpNode('+', x(), c(2.0))))
    xs = np.linspace(-5, 5, 21)
    values = expr.evaluate_many(xs)
    assert values.shape == xs.shape
    for xv, yv in zip(xs, values):
        assert expr.evaluate(xv) == pytest.approx(yv)


def test_render_format():
    assert Expression(BinaryOpNode('+', x(), c(2.0))).render() == "(x + 2.0)"
    assert Expression(BinaryOpNode('-', x(), c(-1.5))).render() == "(x - (-1.5))"
    assert Expression(BinaryOpNode('^', x(), c(2.0))).render() == "(x ^ 2.0)"
    assert Expression(BinaryOpNode('logb', x(), c(2.0))).render() == "log(x, 2.0)"
    assert Expression(UnaryOpNode('neg', x())).render() == "(-x)"
    assert Expression(UnaryOpNode('cos', c(0.1))).render() == "cos(0.1)"
    assert Expression(x()).render() == "x"


@pytest.mark.parametrize("root, value", [
    (c(2.5), 1.0),
    (c(-0.125), 1.0),
    (x(), -3.25),
    (BinaryOpNode('+', x(), c(-1.5)), 2.0),
    (BinaryOpNode('-', c(3.0), x()), 0.7),
    (BinaryOpNode('*', x(), c(3.0)), -1.1),
    (BinaryOpNode('/', x(), BinaryOpNode('+', x(), c(1.0))), 2.5),
    (BinaryOpNode('^', x(), c(2.0)), 1.7),
    (BinaryOpNode('^', c(2.0), x()), -0.3),
    (BinaryOpNode('logb', x(), c(2.0)), 8.0),
    (UnaryOpNode('sin', x()), 0.9),
    (UnaryOpNode('cos', BinaryOpNode('*', x(), x())), 1.3),
    (UnaryOpNode('neg', UnaryOpNode('neg', x())), 4.0),
    (UnaryOpNode('exp', UnaryOpNode('neg', x())), 0.5),
    (UnaryOpNode('log', x()), 3.0),
    (UnaryOpNode('sqrt', x()), 2.0),
    (UnaryOpNode('abs', x()), -6.0),
])
def test_render_evaluates_externally(root, value):
    expr = Expression(root)
    external = float(sp.sympify(expr.render()).subs(sp.Symbol('x'), value))
    assert external == pytest.approx(expr.evaluate(value), rel=1e-9, abs=1e-12)


def test_size_and_depth():
    leaf = Expression(x())
    assert leaf.size() == 1
    assert leaf.depth() == 1

    expr = Expression(UnaryOpNode('sin', BinaryOpNode('+', x(), c(2.0))))
    assert expr.size() == 4
    assert expr.depth() == 3


def test_simplify_folds_constants_and_identities():
    folded = Expression(BinaryOpNode('*', BinaryOpNode('+', c(2.0), c(3.0)), x())).simplify()
    assert folded.render() == "(5.0 * x)"

    assert Expression(BinaryOpNode('+', x(), c(0.0))).simplify().render() == "x"
    assert Expression(BinaryOpNode('*', c(1.0), x())).simplify().render() == "x"
    assert Expression(BinaryOpNode('/', x(), c(1.0))).simplify().render() == "x"
    assert Expression(BinaryOpNode('^', UnaryOpNode('sin', x()), c(0.0))).simplify().render() == "1.0"



def test_simplify_keeps_overflowing_subtrees_symbolic():
    expr = Expression(BinaryOpNode('+', x(), UnaryOpNode('exp', c(1000.0))))
    simplified = expr.simplify()
    rendered = simplified.render()
    assert "inf" not in rendered
    assert rendered == "(x + exp(1000.0))"
    assert sp.sympify(rendered).free_symbols == {sp.Symbol('x')}


def test_simplify_keeps_domain_errors_unfolded():
    bad = Expression(BinaryOpNode('^', c(-2.0), c(0.5)))
    simplified = bad.simplify()
    assert simplified.render() == "((-2.0) ^ 0.5)"
    assert simplified.evaluate(1.0) == DOMAIN_ERROR_VALUE

def test_simplify_preserves_evaluation_on_random_trees():
    generator = ExpressionGenerator(np.random.default_rng(3), max_depth=6, operator_set=ALL_OPERATORS)
    xs = np.linspace(-5, 5, 41)
    for expr in generator.generate_population(200):
        simplified = expr.simplify()
        assert simplified.depth() <= expr.depth()
        np.testing.assert_allclose(simplified.evaluate_many(xs), expr.evaluate_many(xs),
                                   rtol=1e-12, atol=0.0)


def test_copy_is_independent_and_equal():
    expr = Expression(BinaryOpNode('+', x(), c(2.0)))
    clone = expr.copy()
    assert clone == expr
    assert hash(clone) == hash(expr)
    assert clone.root is not expr.root
    assert clone.root.right is not expr.root.right


def test_unknown_operator_is_rejected():
    with pytest.raises(ValueError):
        BinaryOpNode('%', x(), x())
    with pytest.raises(ValueError):
        UnaryOpNode('tan', x())


def test_sympy_export():
    expr = Expression(BinaryOpNode('+', x(), x()))
    assert sp.simplify(expr.sympy_simplified() - 2 * sp.Symbol('x')) == 0


def test_pre_order_traversal_and_levels():
    root = BinaryOpNode('+', UnaryOpNode('sin', x()), c(1.0))
    nodes = get_all_nodes(root)
    assert [type(n).__name__ for n in nodes] == [
        'BinaryOpNode', 'UnaryOpNode', 'VariableNode', 'ConstantNode']
    assert [level for _, level in get_nodes_with_levels(root)] == [1, 2, 3, 2]
    assert get_subtree(root, 2).to_string() == "x"


def test_replace_subtree_leaves_original_untouched():
    root = BinaryOpNode('+', UnaryOpNode('sin', x()), c(1.0))
    before = root.to_string()

    new_root = replace_subtree(root, 2, c(4.0))
    assert new_root.to_string() == "(sin(4.0) + 1.0)"
    assert root.to_string() == before
    assert all(a is not b for a in get_all_nodes(new_root) for b in get_all_nodes(root))

    with pytest.raises(IndexError):
        replace_subtree(root, 4, c(0.0))
