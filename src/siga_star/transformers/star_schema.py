"""
Star schema catalog for the SIGA generation register.

Declares every output table with its column headers, surrogate/natural
keys and measures, following Kimball conventions:
- dim_geracao, dim_status, dim_localizacao: discovered, surrogate keys
- dim_empreendimento: discovered, natural key (CodCEG)
- dim_tempo: generated calendar, integer YYYYMMDD key
- fato_geracao: one row per source record
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..config import EtlConfig


@dataclass
class SchemaDefinition:
    """Definition for a star schema table."""
    name: str
    table_type: str  # 'dimension' or 'fact'
    natural_keys: List[str]
    columns: List[str]
    file_attr: str
    measures: Optional[List[str]] = None
    dimension_keys: Optional[Dict[str, str]] = None  # fact column -> dimension name

    @property
    def key_column(self) -> str:
        return self.columns[0]

    def file_name(self, config: EtlConfig) -> str:
        return getattr(config, self.file_attr)


DIM_GENERATION = SchemaDefinition(
    name='dim_geracao', table_type='dimension',
    natural_keys=['SigTipoGeracao', 'DscOrigemCombustivel', 'DscFonteCombustivel'],
    columns=['ID_Geracao', 'SigTipoGeracao', 'DscOrigemCombustivel', 'DscFonteCombustivel'],
    file_attr='dim_generation_file',
)

DIM_STATUS = SchemaDefinition(
    name='dim_status', table_type='dimension',
    natural_keys=['DscFaseUsina', 'DscTipoOutorga', 'IdcGeracaoQualificada'],
    columns=['ID_Status', 'DscFaseUsina', 'DscTipoOutorga', 'IdcGeracaoQualificada'],
    file_attr='dim_status_file',
)

DIM_LOCATION = SchemaDefinition(
    name='dim_localizacao', table_type='dimension',
    natural_keys=['SigUFPrincipal', 'DscMuninicpios'],
    columns=['ID_Localizacao', 'SigUFPrincipal', 'DscMuninicpios'],
    file_attr='dim_location_file',
)

DIM_FACILITY = SchemaDefinition(
    name='dim_empreendimento', table_type='dimension',
    natural_keys=['CodCEG'],
    columns=['CodCEG', 'NomEmpreendimento', 'DscPropriRegimePariticipacao'],
    file_attr='dim_facility_file',
)

DIM_CALENDAR = SchemaDefinition(
    name='dim_tempo', table_type='dimension',
    natural_keys=['DataCompleta'],
    columns=['ChaveData', 'DataCompleta', 'Ano', 'MesNumero', 'NomeMes',
             'Dia', 'DiaDaSemana', 'Trimestre'],
    file_attr='dim_calendar_file',
)

FACT_GENERATION = SchemaDefinition(
    name='fato_geracao', table_type='fact',
    natural_keys=[],
    columns=['ID_Geracao', 'ID_Status', 'ID_Localizacao', 'CodCEG', 'FK_DataOperacao',
             'MdaPotenciaOutorgadaKw', 'MdaPotenciaFiscalizadaKw', 'MdaGarantiaFisicaKw',
             'QtdEmpreendimentos'],
    file_attr='fact_file',
    measures=['MdaPotenciaOutorgadaKw', 'MdaPotenciaFiscalizadaKw', 'MdaGarantiaFisicaKw',
              'QtdEmpreendimentos'],
    dimension_keys={
        'ID_Geracao': 'dim_geracao',
        'ID_Status': 'dim_status',
        'ID_Localizacao': 'dim_localizacao',
        'CodCEG': 'dim_empreendimento',
        'FK_DataOperacao': 'dim_tempo',
    },
)

DISCOVERED_DIMENSIONS = [DIM_GENERATION, DIM_STATUS, DIM_LOCATION, DIM_FACILITY]
ALL_TABLES = DISCOVERED_DIMENSIONS + [DIM_CALENDAR, FACT_GENERATION]
