"""
Run configuration for the SIGA star schema ETL.

All values are fixed constants exposed as dataclass defaults. The
formatting conventions (pt-BR calendar names, comma decimals) are
injected from here instead of being read from the host locale, so the
output is identical on every machine.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class CalendarLocale:
    """Month and weekday display names for the calendar dimension."""
    name: str
    month_names: Tuple[str, ...]
    weekday_names: Tuple[str, ...]  # Monday first, matches date.weekday()

    def month_name(self, month: int) -> str:
        return self.month_names[month - 1]

    def weekday_name(self, weekday: int) -> str:
        return self.weekday_names[weekday]


PT_BR = CalendarLocale(
    name='pt_BR',
    month_names=(
        'janeiro', 'fevereiro', 'março', 'abril', 'maio', 'junho',
        'julho', 'agosto', 'setembro', 'outubro', 'novembro', 'dezembro',
    ),
    weekday_names=(
        'segunda-feira', 'terça-feira', 'quarta-feira', 'quinta-feira',
        'sexta-feira', 'sábado', 'domingo',
    ),
)

QUALIFICATION_PLACEHOLDER = 'N/A'
KEY_SEPARATOR = ';'
UNRESOLVED_KEY = -1


@dataclass(frozen=True)
class EtlConfig:
    """
    Paths and CSV conventions for one ETL run.

    Defaults reproduce the production layout: the source extract lives in
    ``dados/`` and every output table is written to the working directory.
    """
    source_path: str = 'dados/siga-empreendimentos-geracao.csv'
    output_dir: str = '.'
    encoding: str = 'latin-1'
    delimiter: str = ';'
    line_terminator: str = '\r\n'
    calendar_locale: CalendarLocale = field(default=PT_BR)
    export_parquet: bool = False

    dim_generation_file: str = 'dim_geracao.csv'
    dim_status_file: str = 'dim_status.csv'
    dim_location_file: str = 'dim_localizacao.csv'
    dim_facility_file: str = 'dim_empreendimento.csv'
    dim_calendar_file: str = 'dim_tempo.csv'
    fact_file: str = 'fato_geracao.csv'
