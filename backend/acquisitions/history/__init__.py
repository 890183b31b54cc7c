"""
Year 5 history indicators, cross-subject analysis and narrative text
"""
from .history_definitions import YEAR5_HISTORY_DEF, METRIC_DEFINITIONS, ANALYSIS_SECTIONS
from .history_data import (
    load_config_from_args,
    load_config_file,
    resolve_config,
    select_history_records,
    filter_scope_records,
    scope_context_name,
    get_scopes,
)
from .history_indicators import compute_history_indicators, criterion_table
from .history_analysis import (
    AnalysisOverrideStore,
    analysis_context_id,
    default_analysis,
    resolve_analysis,
)

__all__ = [
    'YEAR5_HISTORY_DEF',
    'METRIC_DEFINITIONS',
    'ANALYSIS_SECTIONS',
    'load_config_from_args',
    'load_config_file',
    'resolve_config',
    'select_history_records',
    'filter_scope_records',
    'scope_context_name',
    'get_scopes',
    'compute_history_indicators',
    'criterion_table',
    'AnalysisOverrideStore',
    'analysis_context_id',
    'default_analysis',
    'resolve_analysis',
]
