"""
Tests for star schema integrity rules.
"""

import pandas as pd
import pytest

from siga_star.quality.rules import (
    AllowedValuesRule,
    ContiguousDateRule,
    DenseKeyRule,
    ReferentialIntegrityRule,
    RuleSet,
    UniquenessRule,
)


@pytest.fixture
def tables():
    return {
        'dim_geracao': pd.DataFrame({'ID_Geracao': [1, 2, 3], 'SigTipoGeracao': ['UHE', 'EOL', 'UFV']}),
        'dim_tempo': pd.DataFrame({
            'ChaveData': [20200228, 20200229, 20200301],
            'DataCompleta': ['2020-02-28', '2020-02-29', '2020-03-01'],
        }),
        'fato_geracao': pd.DataFrame({
            'ID_Geracao': [1, 3, 3, -1],
            'FK_DataOperacao': [20200229, 0, 20200301, 20200228],
        }),
    }


class TestUniquenessRule:

    def test_unique_keys_pass(self, tables):
        result = UniquenessRule('dim_geracao', ['ID_Geracao']).evaluate(tables)
        assert result.passed is True
        assert result.details['duplicate_rows'] == 0

    def test_duplicates_detected(self, tables):
        result = UniquenessRule('fato_geracao', ['ID_Geracao']).evaluate(tables)
        assert result.passed is False
        assert result.details['duplicate_rows'] == 2

    def test_missing_table(self, tables):
        result = UniquenessRule('dim_status', ['ID_Status']).evaluate(tables)
        assert result.passed is False
        assert 'not found' in result.details['error']


class TestDenseKeyRule:

    def test_dense_ids_pass(self, tables):
        assert DenseKeyRule('dim_geracao', 'ID_Geracao').evaluate(tables).passed is True

    def test_gap_detected(self, tables):
        tables['dim_geracao'] = pd.DataFrame({'ID_Geracao': [1, 3]})
        result = DenseKeyRule('dim_geracao', 'ID_Geracao').evaluate(tables)
        assert result.passed is False
        assert result.details['out_of_place'] == 1


class TestReferentialIntegrityRule:

    def test_sentinel_not_counted_as_orphan(self, tables):
        rule = ReferentialIntegrityRule('fato_geracao', 'ID_Geracao', 'dim_geracao', sentinels=(-1,))
        result = rule.evaluate(tables)
        assert result.passed is True
        assert result.details['sentinel_rows'] == 1

    def test_orphans_detected(self, tables):
        tables['fato_geracao'].loc[0, 'ID_Geracao'] = 9
        rule = ReferentialIntegrityRule('fato_geracao', 'ID_Geracao', 'dim_geracao', sentinels=(-1,))
        result = rule.evaluate(tables)
        assert result.passed is False
        assert result.details['orphan_rows'] == 1
        assert result.details['orphan_keys'] == ['9']

    def test_date_key_against_calendar(self, tables):
        rule = ReferentialIntegrityRule(
            'fato_geracao', 'FK_DataOperacao', 'dim_tempo',
            dimension_column='ChaveData', sentinels=(0,),
        )
        assert rule.evaluate(tables).passed is True

    def test_missing_dimension_column(self, tables):
        rule = ReferentialIntegrityRule('fato_geracao', 'ID_Geracao', 'dim_tempo')
        assert rule.evaluate(tables).passed is False


class TestAllowedValuesRule:

    def test_only_reserved_key_passes(self):
        tables = {'fato_geracao': pd.DataFrame({'FK_DataOperacao': [0, 0, 0]})}
        result = AllowedValuesRule('fato_geracao', 'FK_DataOperacao', [0]).evaluate(tables)
        assert result.passed is True
        assert result.details['unexpected_rows'] == 0

    def test_unexpected_values_listed(self, tables):
        result = AllowedValuesRule('fato_geracao', 'FK_DataOperacao', [0]).evaluate(tables)
        assert result.passed is False
        assert result.details['unexpected_rows'] == 3
        assert result.details['unexpected_values'] == ['20200228', '20200229', '20200301']


class TestContiguousDateRule:

    def test_contiguous_across_leap_day(self, tables):
        result = ContiguousDateRule('dim_tempo', 'DataCompleta').evaluate(tables)
        assert result.passed is True
        assert result.details['expected_rows'] == 3

    def test_gap_and_duplicate_detected(self):
        tables = {'dim_tempo': pd.DataFrame({
            'DataCompleta': ['2020-01-01', '2020-01-01', '2020-01-03'],
        })}
        result = ContiguousDateRule('dim_tempo', 'DataCompleta').evaluate(tables)
        assert result.passed is False
        assert result.details['duplicates'] == 1
        assert result.details['gaps'] == 1

    def test_empty_calendar_passes(self):
        tables = {'dim_tempo': pd.DataFrame({'DataCompleta': []})}
        assert ContiguousDateRule('dim_tempo', 'DataCompleta').evaluate(tables).passed is True


class TestRuleSet:

    def test_partial_failure(self, tables):
        rs = RuleSet('checks')
        rs.add(UniquenessRule('dim_geracao', ['ID_Geracao']))   # passes
        rs.add(UniquenessRule('fato_geracao', ['ID_Geracao']))  # fails
        results = rs.evaluate(tables)
        assert results[0].passed is True
        assert results[1].passed is False

    def test_chaining(self):
        rs = RuleSet('chain')
        rs.add(DenseKeyRule('a', 'id')).add(DenseKeyRule('b', 'id'))
        assert len(rs) == 2
