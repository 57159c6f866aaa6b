"""Tests for composite dimension keys."""

from siga_star.transformers.keys import (
    facility_key,
    generation_key,
    location_key,
    qualification,
    status_key,
)


def record(**fields):
    base = {
        'SigTipoGeracao': 'UHE',
        'DscOrigemCombustivel': 'Hídrica',
        'DscFonteCombustivel': 'Potencial hidráulico',
        'DscFaseUsina': 'Operação',
        'DscTipoOutorga': 'Concessão',
        'IdcGeracaoQualificada': 'Sim',
        'SigUFPrincipal': 'SP',
        'DscMuninicpios': 'Ilha Solteira - SP',
        'CodCEG': 'UHE.PH.SP.000001-1.01',
    }
    base.update(fields)
    return base


class TestKeys:

    def test_generation_key_joins_fields(self):
        assert generation_key(record()) == 'UHE;Hídrica;Potencial hidráulico'

    def test_location_key(self):
        assert location_key(record()) == 'SP;Ilha Solteira - SP'

    def test_facility_key_is_natural_key(self):
        assert facility_key(record()) == 'UHE.PH.SP.000001-1.01'

    def test_status_key_keeps_explicit_indicator(self):
        assert status_key(record()) == 'Operação;Concessão;Sim'


class TestQualificationPlaceholder:

    def test_blank_becomes_placeholder(self):
        assert qualification(record(IdcGeracaoQualificada='')) == 'N/A'

    def test_missing_becomes_placeholder(self):
        r = record()
        del r['IdcGeracaoQualificada']
        assert qualification(r) == 'N/A'

    def test_blank_missing_and_explicit_collapse(self):
        missing = record()
        del missing['IdcGeracaoQualificada']
        keys = {
            status_key(record(IdcGeracaoQualificada='')),
            status_key(record(IdcGeracaoQualificada='N/A')),
            status_key(missing),
        }
        assert keys == {'Operação;Concessão;N/A'}
