"""
Composite dedup keys for the discovered dimensions.

Each builder joins the identifying fields of a source record with a fixed
separator. Values containing the separator can collide; the SIGA extract
does not use ``;`` inside these fields.
"""

from typing import Dict

from ..config import KEY_SEPARATOR, QUALIFICATION_PLACEHOLDER

Record = Dict[str, str]

GENERATION_FIELDS = ('SigTipoGeracao', 'DscOrigemCombustivel', 'DscFonteCombustivel')
STATUS_FIELDS = ('DscFaseUsina', 'DscTipoOutorga', 'IdcGeracaoQualificada')
LOCATION_FIELDS = ('SigUFPrincipal', 'DscMuninicpios')
FACILITY_FIELD = 'CodCEG'


def qualification(record: Record) -> str:
    """Qualified-generation indicator, or the placeholder when blank."""
    value = record.get('IdcGeracaoQualificada')
    return value if value else QUALIFICATION_PLACEHOLDER


def _join(*values: str) -> str:
    return KEY_SEPARATOR.join(values)


def generation_key(record: Record) -> str:
    return _join(*(record.get(f, '') for f in GENERATION_FIELDS))


def status_key(record: Record) -> str:
    return _join(
        record.get('DscFaseUsina', ''),
        record.get('DscTipoOutorga', ''),
        qualification(record),
    )


def location_key(record: Record) -> str:
    return _join(*(record.get(f, '') for f in LOCATION_FIELDS))


def facility_key(record: Record) -> str:
    # Natural key, reused as the dimension identifier
    return record.get(FACILITY_FIELD, '')
