import itertools
import random
import sys

import pytest

from sop_reduction import (
    MAX_VARIABLES,
    Implicant,
    InvalidArgumentError,
    ReductionError,
    ReductionMemoryError,
    SumOfProducts,
    TermCounters,
    TooFewVariablesError,
    TooManyVariablesError,
    TriLogic,
    evaluate,
    reduce_logic,
    render_equation,
)
from sop_reduction.verify import check_coverage


def assert_sound(table, sop):
    for m, expected in enumerate(table):
        if expected != TriLogic.DONT_CARE:
            assert evaluate(sop, m) == expected, f"minterm {m} of {table}"
    assert check_coverage(table, sop) == []


class TestBoundaries:
    def test_zero_function(self):
        sop = reduce_logic([0, 0], 1)
        assert len(sop) == 0
        assert sop.equation == "0"
        assert evaluate(sop, 0) == TriLogic.FALSE
        assert evaluate(sop, 1) == TriLogic.FALSE

    def test_tautology(self):
        sop = reduce_logic([1, 1], 1)
        assert sop.equation == "1"
        assert sop.implicants == (Implicant(value=0, dont_cares=1),)

    def test_complemented_literal(self):
        assert reduce_logic([1, 0], 1).equation == "A'"

    def test_true_literal(self):
        assert reduce_logic([0, 1], 1).equation == "A"

    def test_worked_example(self):
        sop = reduce_logic([0, 0, 0, 1, 1, 1, 0, 1], 3)
        assert sop.implicants == (
            Implicant(value=0b100, dont_cares=0b001),
            Implicant(value=0b011, dont_cares=0b100),
        )
        assert sop.equation == "AB' + BC"
        assert str(sop) == "AB' + BC"

    def test_str_of_hand_built_result(self):
        assert str(SumOfProducts(n_vars=3, implicants=())) == "0"
        sop = SumOfProducts(n_vars=3, implicants=(Implicant(0b100, 0b001),))
        assert str(sop) == "AB'"

    def test_redundant_term_removed(self):
        sop = reduce_logic([1, 1, 0, 1, 0, 0, 0, 1], 3)
        assert sop.equation == "A'B' + BC"
        assert sop.stats.kept == 2
        assert sop.stats.removed == 1

    def test_string_table(self):
        assert reduce_logic("0001 1101", 3).equation == "AB' + BC"

    def test_dont_care_only_table(self):
        sop = reduce_logic([2, 2, 2, 2], 2)
        assert sop.equation == "0"


class TestErrors:
    def test_too_few_variables(self):
        with pytest.raises(TooFewVariablesError):
            reduce_logic([0], 0)

    def test_too_many_variables(self):
        with pytest.raises(TooManyVariablesError):
            reduce_logic([0, 1], MAX_VARIABLES + 1)

    def test_max_variables_is_word_width(self):
        assert MAX_VARIABLES == sys.maxsize.bit_length() + 1

    def test_max_variables_passes_variable_check(self):
        # Accepted as a variable count; only the table length is then wrong
        with pytest.raises(InvalidArgumentError):
            reduce_logic([0, 1], MAX_VARIABLES)

    def test_none_table(self):
        with pytest.raises(InvalidArgumentError):
            reduce_logic(None, 2)

    def test_empty_table(self):
        with pytest.raises(InvalidArgumentError):
            reduce_logic([], 1)

    def test_length_mismatch(self):
        with pytest.raises(InvalidArgumentError):
            reduce_logic([0, 1, 1], 2)

    def test_bad_value(self):
        with pytest.raises(InvalidArgumentError):
            reduce_logic([0, 3, 1, 1], 2)

    def test_non_int_vars(self):
        with pytest.raises(InvalidArgumentError):
            reduce_logic([0, 1], "1")

    def test_errors_are_value_errors(self):
        assert issubclass(ReductionError, ValueError)
        with pytest.raises(ValueError):
            reduce_logic([0, 1], 0)

    def test_out_of_memory_during_expansion(self, monkeypatch):
        def exhausted(truth_table, n_vars):
            raise MemoryError

        monkeypatch.setattr("sop_reduction.reducer.expand_implicants", exhausted)

        with pytest.raises(ReductionMemoryError) as excinfo:
            reduce_logic([0, 1], 1)
        assert isinstance(excinfo.value, MemoryError)
        assert isinstance(excinfo.value, ReductionError)
        assert type(excinfo.value.__cause__) is MemoryError

    def test_out_of_memory_during_rendering(self, monkeypatch):
        def exhausted(impl, n_vars):
            raise MemoryError

        monkeypatch.setattr("sop_reduction.export._literals", exhausted)
        sop = SumOfProducts(n_vars=3, implicants=(Implicant(0b100, 0b001),))

        with pytest.raises(ReductionMemoryError) as excinfo:
            render_equation(sop)
        assert type(excinfo.value.__cause__) is MemoryError


class TestEvaluate:
    def test_masks_high_bits(self):
        sop = reduce_logic([0, 0, 0, 1, 1, 1, 0, 1], 3)
        assert evaluate(sop, 0b1011) == TriLogic.TRUE
        assert evaluate(sop, 0b11110) == TriLogic.FALSE

    def test_never_returns_dont_care(self):
        sop = reduce_logic([1, 2, 0, 2], 2)
        assert {evaluate(sop, m) for m in range(4)} <= {TriLogic.TRUE, TriLogic.FALSE}

    def test_callable(self):
        sop = reduce_logic([0, 1], 1)
        assert sop(1) == TriLogic.TRUE
        assert not sop(0)

    def test_empty_sop(self):
        sop = SumOfProducts(n_vars=2, implicants=())
        assert evaluate(sop, 3) == TriLogic.FALSE


class TestSoundness:
    @pytest.mark.parametrize("n_vars", [1, 2, 3])
    def test_all_truth_tables(self, n_vars):
        size = 1 << n_vars
        for table in itertools.product([0, 1], repeat=size):
            assert_sound(table, reduce_logic(table, n_vars))

    def test_all_four_variable_tables(self):
        for table in itertools.product([0, 1], repeat=16):
            assert_sound(table, reduce_logic(table, 4))

    def test_all_three_variable_tables_with_dont_cares(self):
        for table in itertools.product([0, 1, 2], repeat=8):
            assert_sound(table, reduce_logic(table, 3))

    @pytest.mark.parametrize("n_vars", range(1, 7))
    def test_one_false(self, n_vars):
        size = 1 << n_vars
        for i in range(size):
            table = [1] * size
            table[i] = 0
            assert_sound(table, reduce_logic(table, n_vars))

    @pytest.mark.parametrize("n_vars", range(1, 7))
    def test_one_true(self, n_vars):
        size = 1 << n_vars
        for i in range(size):
            table = [0] * size
            table[i] = 1
            sop = reduce_logic(table, n_vars)
            assert len(sop) == 1
            assert_sound(table, sop)

    @pytest.mark.parametrize("seed", range(5))
    def test_random_tables_with_dont_cares(self, seed):
        rng = random.Random(seed)
        for n_vars in range(1, 9):
            table = [rng.choice([0, 1, 2]) for _ in range(1 << n_vars)]
            assert_sound(table, reduce_logic(table, n_vars))


class TestDeterminism:
    def test_identical_results(self):
        rng = random.Random(99)
        table = [rng.choice([0, 1, 2]) for _ in range(64)]
        first = reduce_logic(table, 6)
        second = reduce_logic(list(table), 6)
        assert first.implicants == second.implicants
        assert first.equation == second.equation

    def test_table_not_mutated(self):
        table = [1, 2, 0, 1, 2, 0, 1, 1]
        reduce_logic(table, 3)
        assert table == [1, 2, 0, 1, 2, 0, 1, 1]


class TestTermCounters:
    def test_accumulates_and_resets(self):
        counters = TermCounters()
        reduce_logic([1, 1, 0, 1, 0, 0, 0, 1], 3, counters=counters)
        reduce_logic([0, 0, 0, 1, 1, 1, 0, 1], 3, counters=counters)
        assert counters.kept == 4
        assert counters.removed == 1

        counters.reset()
        assert (counters.kept, counters.removed) == (0, 0)

    def test_independent_without_counters(self):
        a = reduce_logic([1, 1, 0, 1, 0, 0, 0, 1], 3)
        b = reduce_logic([1, 1, 0, 1, 0, 0, 0, 1], 3)
        assert a.stats == b.stats
