"""Shared test fixtures and path setup."""
import sys
from pathlib import Path

# Add src/ to sys.path so tests can import siga_star without installing
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

import pytest

from siga_star.config import EtlConfig


HEADER = [
    'DatGeracaoConjuntoDados', 'NomEmpreendimento', 'IdeNucleoCEG', 'CodCEG',
    'SigUFPrincipal', 'SigTipoGeracao', 'DscFaseUsina', 'DscOrigemCombustivel',
    'DscFonteCombustivel', 'DscTipoOutorga', 'NomFonteCombustivel',
    'DatEntradaOperacao', 'MdaPotenciaOutorgadaKw', 'MdaPotenciaFiscalizadaKw',
    'MdaGarantiaFisicaKw', 'IdcGeracaoQualificada', 'DscPropriRegimePariticipacao',
    'DscMuninicpios',
]


def make_row(**overrides):
    """One SIGA source row as a list in HEADER order."""
    row = {
        'DatGeracaoConjuntoDados': '2024-05-01',
        'NomEmpreendimento': 'UHE Exemplo',
        'IdeNucleoCEG': '1',
        'CodCEG': 'UHE.PH.SP.000001-1.01',
        'SigUFPrincipal': 'SP',
        'SigTipoGeracao': 'UHE',
        'DscFaseUsina': 'Operação',
        'DscOrigemCombustivel': 'Hídrica',
        'DscFonteCombustivel': 'Potencial hidráulico',
        'DscTipoOutorga': 'Concessão',
        'NomFonteCombustivel': 'Potencial hidráulico',
        'DatEntradaOperacao': '2020-06-15T00:00:00',
        'MdaPotenciaOutorgadaKw': '1.234,56',
        'MdaPotenciaFiscalizadaKw': '1.200,00',
        'MdaGarantiaFisicaKw': '800,5',
        'IdcGeracaoQualificada': '',
        'DscPropriRegimePariticipacao': 'Produção Independente',
        'DscMuninicpios': 'Ilha Solteira - SP',
    }
    row.update(overrides)
    return [row[name] for name in HEADER]


def write_source(path, rows, header=HEADER):
    lines = [';'.join(header)] + [';'.join(row) for row in rows]
    path.write_bytes(('\r\n'.join(lines) + '\r\n').encode('latin-1'))
    return path


@pytest.fixture
def siga_rows():
    """Five facilities with repeated generation, status and location values."""
    return [
        make_row(),
        make_row(CodCEG='UHE.PH.SP.000002-9.01', NomEmpreendimento='UHE Outra',
                 DatEntradaOperacao='2020-06-13'),
        make_row(CodCEG='EOL.CV.BA.000003-7.01', SigTipoGeracao='EOL',
                 DscOrigemCombustivel='Eólica', DscFonteCombustivel='Cinética do vento',
                 SigUFPrincipal='BA', DscMuninicpios='Caetité - BA',
                 IdcGeracaoQualificada='N/A', DatEntradaOperacao='2020-06-18 10:30:00',
                 MdaGarantiaFisicaKw=''),
        make_row(CodCEG='UFV.RS.MG.000004-5.01', SigTipoGeracao='UFV',
                 DscOrigemCombustivel='Solar', DscFonteCombustivel='Radiação solar',
                 DscFaseUsina='Construção', IdcGeracaoQualificada='Sim',
                 SigUFPrincipal='MG', DscMuninicpios='Pirapora - MG',
                 DatEntradaOperacao='', MdaPotenciaOutorgadaKw='abc'),
        make_row(CodCEG='UHE.PH.SP.000001-1.01', DatEntradaOperacao='2020-6-1'),
    ]


@pytest.fixture
def source_file(tmp_path, siga_rows):
    return write_source(tmp_path / 'siga-empreendimentos-geracao.csv', siga_rows)


@pytest.fixture
def config(tmp_path, source_file):
    return EtlConfig(source_path=str(source_file), output_dir=str(tmp_path / 'out'))
